from __future__ import annotations

"""Quiz Manager: orchestrates catalog, settings, sessions and persistence.

Front-end agnostic. Views subscribe to the event bus or read return values;
the terminal CLI drives it through `run()` with ask/inform callbacks.
"""

import random
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from ..catalog.entity import LANGUAGES, Entity, image_ref, load_catalog
from ..catalog.partitions import Partition, filter_by_partitions, get_partition, load_partitions, review_pool
from ..quiz.session import DEFAULT_LANGUAGE, SKIP_SENTINEL, AnswerResult, QuizSession, SessionPhase
from ..stats.stats import summarize
from ..storage.schema import Settings
from ..storage.store import QuizStore, open_store
from .events import EventBus
from .explain import trace as xtrace

SKIP_COMMAND = ":skip"
QUIT_COMMAND = ":quit"


@dataclass(frozen=True)
class QuizContext:
    started_at: datetime
    mode: str
    display_language: str
    regions: Tuple[str, ...]


class QuizManager:
    def __init__(
        self,
        cfg: Dict[str, Any],
        *,
        catalog: Optional[List[Entity]] = None,
        partitions: Optional[Dict[str, Partition]] = None,
        store: Optional[QuizStore] = None,
        bus: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.cfg = cfg
        quiz_cfg = cfg.get("quiz", {})
        self.catalog = catalog if catalog is not None else load_catalog(cfg.get("catalog", {}).get("path"))
        self.partitions = partitions if partitions is not None else load_partitions(cfg.get("partitions", {}).get("path"))
        self.store = store if store is not None else QuizStore(open_store(cfg.get("storage", {}).get("path")))
        self.bus = bus if bus is not None else EventBus()
        self.image_template = quiz_cfg.get("image_path_template")
        self.session = QuizSession(
            rng=rng,
            skip_sentinel=quiz_cfg.get("skip_sentinel", SKIP_SENTINEL),
            image_template=self.image_template,
        )
        self.ctx: Optional[QuizContext] = None
        self._committed = False

        saved = self.store.load_settings()
        if saved is not None:
            self.settings = saved
        else:
            self.settings = Settings(
                display_language=quiz_cfg.get("display_language", DEFAULT_LANGUAGE),
                selected_partition_keys=frozenset(quiz_cfg.get("regions", [])),
            )

    # --- settings ---

    def set_language(self, lang: str) -> Settings:
        if lang not in LANGUAGES:
            raise ValueError(f"Unsupported display language: {lang}")
        return self._update_settings(Settings(lang, self.settings.selected_partition_keys))

    def set_regions(self, keys: Iterable[str]) -> Settings:
        selected = frozenset(keys)
        for k in selected:
            get_partition(k, self.partitions)
        return self._update_settings(Settings(self.settings.display_language, selected))

    def _update_settings(self, settings: Settings) -> Settings:
        self.settings = settings
        self.store.save_settings(settings)
        self.bus.emit("settings_changed", settings)
        return settings

    # --- pools ---

    def eligible_pool(self) -> List[Entity]:
        return filter_by_partitions(self.catalog, self.settings.selected_partition_keys, self.partitions)

    def pending_review_count(self) -> int:
        saved = self.store.load_miss_list()
        return len(saved) if saved else 0

    # --- session lifecycle ---

    def start_quiz(self) -> Entity:
        """Start on every entity of the selected regions (EmptyPoolError if none)."""
        return self._start(self.eligible_pool(), "all")

    def retry_all(self) -> Entity:
        return self.start_quiz()

    def start_review(self) -> Optional[Entity]:
        """Start on the stored review list; None when there is nothing to review."""
        saved = self.store.load_miss_list()
        if not saved:
            return None
        pool = review_pool(self.catalog, saved)
        if not pool:
            return None
        return self._start(pool, "review")

    def retry_wrong(self) -> Optional[Entity]:
        """Start on the misses of the session that just finished."""
        if not self.session.is_complete or not self.session.miss_list:
            return None
        pool = review_pool(self.catalog, self.session.miss_list)
        if not pool:
            return None
        return self._start(pool, "retry_wrong")

    def _start(self, pool: List[Entity], mode: str) -> Entity:
        first = self.session.start(pool, self.settings.display_language)
        self.ctx = QuizContext(
            started_at=datetime.now(timezone.utc),
            mode=mode,
            display_language=self.settings.display_language,
            regions=tuple(sorted(self.settings.selected_partition_keys)),
        )
        self._committed = False
        xtrace("quiz_started", {"mode": mode, "pool": len(pool)})
        self._announce_question()
        return first

    def submit(self, text: str) -> Optional[AnswerResult]:
        result = self.session.submit_answer(text)
        if result is not None:
            self.bus.emit("answered", result)
        return result

    def skip(self) -> Optional[AnswerResult]:
        result = self.session.skip()
        if result is not None:
            self.bus.emit("answered", result)
        return result

    def advance(self) -> SessionPhase:
        phase = self.session.advance()
        if phase is SessionPhase.COMPLETED:
            self._finish()
        else:
            self._announce_question()
        return phase

    def quit(self) -> Dict[str, Any]:
        self.session.quit()
        return self._finish()

    def _announce_question(self) -> None:
        ent = self.session.current
        if ent is None:
            return
        self.bus.emit(
            "question",
            {
                "entity": ent,
                "number": self.session.position + 1,
                "total": self.session.total,
                "image": image_ref(ent, self.image_template),
                "correct": self.session.correct_count,
                "wrong": self.session.wrong_count,
            },
        )

    def _finish(self) -> Dict[str, Any]:
        summary = self.summary()
        if not self._committed:
            self.store.commit_miss_list(self.session.miss_list)
            self._committed = True
            xtrace("quiz_finished", {k: v for k, v in summary.items() if k != "misses"})
            self.bus.emit("completed", summary)
        return summary

    def summary(self) -> Dict[str, Any]:
        summary: Dict[str, Any] = dict(summarize(self.session))
        summary["misses"] = list(self.session.miss_list)
        return summary

    # --- terminal loop ---

    def run(self, ui: Dict[str, Callable[..., Any]]) -> Dict[str, Any]:
        """Drive the started session to completion with ask/inform callbacks.

        Typing SKIP_COMMAND skips, QUIT_COMMAND ends the session early; after
        feedback any input (usually Enter) moves on.
        """
        ask = ui["ask"]
        inform = ui["inform"]
        while self.session.in_progress:
            ent = self.session.current
            assert ent is not None
            inform(
                f"Q{self.session.position + 1}/{self.session.total}: No.{ent.id} "
                f"[{image_ref(ent, self.image_template)}]  "
                f"(○ {self.session.correct_count}  × {self.session.wrong_count})"
            )
            ans = ask("Name? ")
            cmd = ans.strip().lower()
            if cmd == QUIT_COMMAND:
                return self.quit()
            result = self.skip() if cmd == SKIP_COMMAND else self.submit(ans)
            if result is not None:
                inform(_feedback(result))
            nxt = ask("[Enter] next, :quit to stop: ")
            if nxt.strip().lower() == QUIT_COMMAND:
                return self.quit()
            self.advance()
        return self.summary()


def _feedback(result: AnswerResult) -> str:
    if result.correct:
        return f"○ Correct! {result.display_name}\n"
    if result.skipped:
        return f"× Answer: {result.display_name}\n"
    return f"× Answer: {result.display_name}  (you said: {result.your_answer})\n"
