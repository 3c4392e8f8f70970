"""QuizGrader JSON-lines server entry point.

Usage: python -m quizgrader.server

Reads JSON requests from stdin (one per line), writes JSON responses to stdout.
All logging goes to stderr to keep the protocol clean.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys

from quizgrader.config.logging import configure_logging
from quizgrader.config.settings import Settings

from .handler import ServerHandler
from .protocol import Request, Response

logger = logging.getLogger("quizgrader.server")


async def handle_line(handler: ServerHandler, line_str: str) -> Response:
    """Decode one request line and produce its response."""
    try:
        msg = json.loads(line_str)
    except json.JSONDecodeError as e:
        return Response(id=0, error=f"Invalid JSON: {e}", error_type="InvalidJSON")

    req_id = msg.get("id", 0) if isinstance(msg, dict) else 0
    try:
        if not isinstance(msg, dict):
            raise ValueError("Request must be a JSON object")
        result = await handler.dispatch(Request.from_dict(msg))
        return Response(id=req_id, result=result)
    except KeyError as e:
        logger.warning("Request %s missing parameter %s", req_id, e)
        return Response(id=req_id, error=f"Missing parameter: {e}", error_type="KeyError")
    except Exception as e:
        logger.error("Request %s failed: %s", req_id, e)
        return Response(id=req_id, error=str(e), error_type=type(e).__name__)


async def main() -> None:
    settings = Settings.load()
    configure_logging(settings.get_log_level())
    loop = asyncio.get_running_loop()

    def write_line(text: str) -> None:
        sys.stdout.write(text)
        sys.stdout.flush()

    handler = ServerHandler(settings=settings)
    logger.info("quizgrader-server: ready")

    reader = asyncio.StreamReader()
    protocol = asyncio.StreamReaderProtocol(reader)
    await loop.connect_read_pipe(lambda: protocol, sys.stdin)

    while True:
        line = await reader.readline()
        if not line:
            break  # stdin closed

        line_str = line.decode("utf-8", errors="replace").strip()
        if not line_str:
            continue

        resp = await handle_line(handler, line_str)
        write_line(resp.to_json_line())


if __name__ == "__main__":
    asyncio.run(main())
