from .session import (
    SKIP_SENTINEL,
    DEFAULT_LANGUAGE,
    SessionPhase,
    InvalidTransitionError,
    EmptyPoolError,
    MissRecord,
    AnswerResult,
    SessionState,
    QuizSession,
)

__all__ = [
    "SKIP_SENTINEL",
    "DEFAULT_LANGUAGE",
    "SessionPhase",
    "InvalidTransitionError",
    "EmptyPoolError",
    "MissRecord",
    "AnswerResult",
    "SessionState",
    "QuizSession",
]
