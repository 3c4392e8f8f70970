"""QuizGrader: answer grading and result aggregation for generated quizzes."""

__version__ = "0.1.0"
