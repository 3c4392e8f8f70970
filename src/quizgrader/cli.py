"""CLI entry point for QuizGrader."""

import json
from pathlib import Path

import click

from quizgrader.config.logging import configure_logging
from quizgrader.config.settings import Settings
from quizgrader.engine.errors import QuizGraderError


@click.group()
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None,
              help="Path to a config.yaml (defaults to ~/.quizgrader/config.yaml)")
@click.option("--data-dir", type=click.Path(path_type=Path), default=None,
              help="Override the data directory holding the quiz database")
@click.pass_context
def main(ctx: click.Context, config_path, data_dir) -> None:
    """QuizGrader: grade generated quizzes and track submissions."""
    settings = Settings.load(config_path)
    if data_dir is not None:
        settings.data_dir = data_dir
    configure_logging(settings.get_log_level())
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


def _store(ctx: click.Context):
    from quizgrader.state.store import QuizStore

    return QuizStore(db_path=ctx.obj["settings"].db_path)


@main.command()
@click.argument("quiz_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("answers_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Print the full result as JSON")
@click.pass_context
def grade(ctx: click.Context, quiz_file: Path, answers_file: Path, as_json: bool) -> None:
    """Grade ANSWERS_FILE against QUIZ_FILE (YAML or JSON)."""
    from quizgrader.engine.content import load_answers_file, load_quiz_file
    from quizgrader.engine.submission import grade as grade_quiz

    settings = ctx.obj["settings"]
    try:
        content = load_quiz_file(quiz_file)
        answers = load_answers_file(answers_file)
        result = grade_quiz(quiz_file.stem, answers, content, settings.dont_know_sentinel)
    except QuizGraderError as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        return

    for verdict in result.verdicts:
        mark = "O" if verdict.is_correct else "X"
        click.echo(f"  [{mark}] {verdict.question_id}. {verdict.question_text}")
        if not verdict.is_correct:
            click.echo(f"        your answer: {verdict.submitted_answer}")
            click.echo(f"        correct:     {verdict.correct_answer}")
    click.echo(
        f"Score: {result.score_percent} "
        f"({result.correct_count}/{result.total_count} correct)"
    )


@main.command()
@click.argument("user_id")
@click.pass_context
def history(ctx: click.Context, user_id: str) -> None:
    """List USER_ID's submissions, newest first."""
    items = _store(ctx).get_history(user_id)
    if not items:
        click.echo("No submissions yet.")
        return
    for item in items:
        title = item.title or "(untitled)"
        click.echo(
            f"  {item.created_at}  {title}: {item.score} "
            f"({item.correct_count}/{item.total_count})"
        )


@main.command()
@click.argument("quiz_id")
@click.option("--off", is_flag=True, help="Stop sharing the quiz")
@click.pass_context
def share(ctx: click.Context, quiz_id: str, off: bool) -> None:
    """Share QUIZ_ID publicly and print its token."""
    try:
        token = _store(ctx).update_sharing(quiz_id, not off)
    except QuizGraderError as e:
        raise click.ClickException(str(e)) from e
    if token is None:
        click.echo(f"Sharing disabled for {quiz_id}")
    else:
        click.echo(f"Shared token: {token}")
