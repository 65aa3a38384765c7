from __future__ import annotations

"""Quiz session state machine.

Phases: NOT_STARTED -> AWAITING_ANSWER <-> ANSWERED -> COMPLETED.

A session owns its queue, position, counters and miss list. Callers drive it
with explicit method calls and read results from return values; nothing here
touches a UI or storage. Persisting the miss list on completion is the
caller's job (see QuizManager).
"""

import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..app.explain import trace as xtrace
from ..catalog.entity import Entity, display_name, image_ref
from ..names.matcher import is_correct
from ..util.randomness import fisher_yates

SKIP_SENTINEL = "(スキップ)"
DEFAULT_LANGUAGE = "japanese"


class SessionPhase(str, Enum):
    NOT_STARTED = "not_started"
    AWAITING_ANSWER = "awaiting_answer"
    ANSWERED = "answered"
    COMPLETED = "completed"


IN_PROGRESS = (SessionPhase.AWAITING_ANSWER, SessionPhase.ANSWERED)


class InvalidTransitionError(RuntimeError):
    """Operation not allowed in the current phase."""


class EmptyPoolError(ValueError):
    """start() called with nothing to ask."""


@dataclass(frozen=True)
class MissRecord:
    id: int
    primary_name: str
    secondary_name: str
    image_ref: str
    your_answer: str

    @classmethod
    def from_entity(cls, entity: Entity, your_answer: str, image_template: Optional[str] = None) -> "MissRecord":
        return cls(
            id=entity.id,
            primary_name=entity.names.get("japanese", ""),
            secondary_name=entity.names.get("english", ""),
            image_ref=image_ref(entity, image_template),
            your_answer=your_answer,
        )

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": {"japanese": self.primary_name, "english": self.secondary_name},
            "image": self.image_ref,
            "yourAnswer": self.your_answer,
        }

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "MissRecord":
        name = data.get("name", {}) or {}
        return cls(
            id=int(data["id"]),
            primary_name=str(name.get("japanese", "")),
            secondary_name=str(name.get("english", "")),
            image_ref=str(data.get("image", "")),
            your_answer=str(data.get("yourAnswer", "")),
        )


@dataclass(frozen=True)
class AnswerResult:
    """Verdict for one question, for the caller to render."""

    entity: Entity
    correct: bool
    skipped: bool
    your_answer: str
    display_name: str


@dataclass
class SessionState:
    queue: Tuple[Entity, ...] = ()
    position: int = 0
    correct_count: int = 0
    wrong_count: int = 0
    miss_list: List[MissRecord] = field(default_factory=list)
    display_language: str = DEFAULT_LANGUAGE
    answered_current: bool = False
    phase: SessionPhase = SessionPhase.NOT_STARTED


class QuizSession:
    def __init__(
        self,
        *,
        rng: Optional[random.Random] = None,
        skip_sentinel: str = SKIP_SENTINEL,
        image_template: Optional[str] = None,
    ) -> None:
        self._rng = rng
        self.skip_sentinel = skip_sentinel
        self.image_template = image_template
        self._state = SessionState()

    # --- transitions ---

    def start(self, pool: Iterable[Entity], display_language: str = DEFAULT_LANGUAGE) -> Entity:
        """Shuffle pool into a fresh queue and present the first question.

        Allowed before the first session and after completion (retry). Raises
        EmptyPoolError for an empty pool and ValueError for duplicate ids,
        both before any state changes.
        """
        if self._state.phase in IN_PROGRESS:
            raise InvalidTransitionError("Session already in progress; quit() it first")
        items = list(pool)
        if not items:
            raise EmptyPoolError("Cannot start a quiz on an empty pool")
        ids = [e.id for e in items]
        if len(set(ids)) != len(ids):
            raise ValueError("Pool contains duplicate entity ids")

        queue = tuple(fisher_yates(items, self._rng))
        self._state = SessionState(
            queue=queue,
            display_language=display_language,
            phase=SessionPhase.AWAITING_ANSWER,
        )
        xtrace("session_started", {"questions": len(queue), "lang": display_language})
        return queue[0]

    def submit_answer(self, raw_text: Optional[str]) -> Optional[AnswerResult]:
        """Judge raw_text for the current question.

        Returns None (and changes nothing) if the question was already
        answered, so duplicate key presses are harmless.
        """
        return self._resolve(raw_text or "", skipped=False)

    def skip(self) -> Optional[AnswerResult]:
        """Give up on the current question; always counted as wrong."""
        return self._resolve("", skipped=True)

    def advance(self) -> SessionPhase:
        st = self._state
        if st.phase is not SessionPhase.ANSWERED:
            raise InvalidTransitionError(f"advance() requires an answered question (phase={st.phase.value})")
        st.position += 1
        st.answered_current = False
        if st.position >= len(st.queue):
            st.phase = SessionPhase.COMPLETED
            xtrace("session_completed", self._counts())
        else:
            st.phase = SessionPhase.AWAITING_ANSWER
            xtrace("advanced", {"position": st.position})
        return st.phase

    def quit(self) -> SessionPhase:
        """End the session now; remaining questions are dropped, not counted."""
        st = self._state
        if st.phase not in IN_PROGRESS:
            raise InvalidTransitionError(f"quit() requires a session in progress (phase={st.phase.value})")
        if st.phase is SessionPhase.ANSWERED:
            # the resolved question counts as visited
            st.position += 1
        st.answered_current = False
        st.phase = SessionPhase.COMPLETED
        xtrace("session_quit", self._counts())
        return st.phase

    def _resolve(self, raw_text: str, *, skipped: bool) -> Optional[AnswerResult]:
        st = self._state
        if st.phase is SessionPhase.ANSWERED:
            xtrace("duplicate_answer_ignored", {"position": st.position})
            return None
        if st.phase is not SessionPhase.AWAITING_ANSWER:
            raise InvalidTransitionError(f"No question awaiting an answer (phase={st.phase.value})")

        entity = st.queue[st.position]
        correct = (not skipped) and is_correct(raw_text, entity)
        your_answer = self.skip_sentinel if skipped else raw_text
        if correct:
            st.correct_count += 1
        else:
            st.wrong_count += 1
            st.miss_list.append(MissRecord.from_entity(entity, your_answer, self.image_template))
        st.answered_current = True
        st.phase = SessionPhase.ANSWERED

        result = AnswerResult(
            entity=entity,
            correct=correct,
            skipped=skipped,
            your_answer=your_answer,
            display_name=display_name(entity, st.display_language),
        )
        xtrace(
            "skipped" if skipped else "graded",
            {"position": st.position, "id": entity.id, "answer": raw_text, "correct": correct},
        )
        return result

    # --- read-only accessors ---

    @property
    def phase(self) -> SessionPhase:
        return self._state.phase

    @property
    def in_progress(self) -> bool:
        return self._state.phase in IN_PROGRESS

    @property
    def is_complete(self) -> bool:
        return self._state.phase is SessionPhase.COMPLETED

    @property
    def current(self) -> Optional[Entity]:
        st = self._state
        if st.phase in IN_PROGRESS:
            return st.queue[st.position]
        return None

    @property
    def queue(self) -> Tuple[Entity, ...]:
        return self._state.queue

    @property
    def total(self) -> int:
        return len(self._state.queue)

    @property
    def position(self) -> int:
        return self._state.position

    @property
    def correct_count(self) -> int:
        return self._state.correct_count

    @property
    def wrong_count(self) -> int:
        return self._state.wrong_count

    @property
    def miss_list(self) -> Tuple[MissRecord, ...]:
        return tuple(self._state.miss_list)

    @property
    def display_language(self) -> str:
        return self._state.display_language

    @property
    def answered_current(self) -> bool:
        return self._state.answered_current

    @property
    def state(self) -> SessionState:
        """Detached copy of the session state."""
        return replace(self._state, miss_list=list(self._state.miss_list))

    def _counts(self) -> Dict[str, int]:
        st = self._state
        return {"position": st.position, "correct": st.correct_count, "wrong": st.wrong_count}
