"""pokequiz: a name-guessing self-quiz engine.

Present creatures one at a time from a shuffled pool, judge free-text guesses
against every localized name, keep score, and remember misses for review.
"""

from __future__ import annotations

from .catalog import Entity, Partition, display_name, filter_by_partitions, load_catalog, load_partitions, review_pool
from .names import is_correct, normalize
from .quiz import (
    AnswerResult,
    EmptyPoolError,
    InvalidTransitionError,
    MissRecord,
    QuizSession,
    SessionPhase,
)
from .storage import QuizStore, Settings

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Entity",
    "Partition",
    "display_name",
    "filter_by_partitions",
    "load_catalog",
    "load_partitions",
    "review_pool",
    "is_correct",
    "normalize",
    "AnswerResult",
    "EmptyPoolError",
    "InvalidTransitionError",
    "MissRecord",
    "QuizSession",
    "SessionPhase",
    "QuizStore",
    "Settings",
]
