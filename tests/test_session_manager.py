import unittest

from pokequiz.app.events import EventBus
from pokequiz.app.session_manager import QUIT_COMMAND, SKIP_COMMAND, QuizManager
from pokequiz.catalog.partitions import Partition
from pokequiz.config.config import validate_config
from pokequiz.quiz.session import EmptyPoolError, MissRecord, SessionPhase
from pokequiz.storage import MemoryStore, QuizStore, Settings

from .helpers import BULBASAUR, CHARMANDER, PIKACHU, IdentityRandom, make_entity

CATALOG = [PIKACHU, BULBASAUR, CHARMANDER, make_entity(4, "Squirtle", "ゼニガメ")]
PARTS = {"early": Partition("early", 1, 3), "late": Partition("late", 4, 4), "empty": Partition("empty", 50, 60)}


def make_manager(store=None, bus=None, regions=("early",), lang="english"):
    cfg = validate_config({"quiz": {"display_language": lang, "regions": list(regions)}, "storage": {"path": None}})
    return QuizManager(
        cfg,
        catalog=CATALOG,
        partitions=PARTS,
        store=store if store is not None else QuizStore(MemoryStore()),
        bus=bus,
        rng=IdentityRandom(),
    )


def play(manager, answers):
    for ans in answers:
        if ans is None:
            manager.skip()
        else:
            manager.submit(ans)
        manager.advance()


class SettingsFlowTests(unittest.TestCase):
    def test_defaults_from_config(self) -> None:
        m = make_manager()
        self.assertEqual(m.settings, Settings("english", frozenset({"early"})))

    def test_changes_are_saved_and_reloaded(self) -> None:
        store = QuizStore(MemoryStore())
        m = make_manager(store=store)
        m.set_language("french")
        m.set_regions(["early", "late"])
        again = make_manager(store=store, regions=(), lang="japanese")
        self.assertEqual(again.settings, Settings("french", frozenset({"early", "late"})))

    def test_invalid_changes_are_rejected(self) -> None:
        m = make_manager()
        with self.assertRaises(ValueError):
            m.set_language("klingon")
        with self.assertRaises(KeyError):
            m.set_regions(["nowhere"])
        self.assertEqual(m.settings, Settings("english", frozenset({"early"})))

    def test_settings_event(self) -> None:
        bus = EventBus()
        seen = []
        bus.subscribe("settings_changed", seen.append)
        make_manager(bus=bus).set_language("chinese")
        self.assertEqual(seen[0].display_language, "chinese")


class QuizFlowTests(unittest.TestCase):
    def test_empty_region_selection(self) -> None:
        m = make_manager(regions=())
        self.assertEqual(m.eligible_pool(), [])
        with self.assertRaises(EmptyPoolError):
            m.start_quiz()
        m.set_regions(["empty"])
        with self.assertRaises(EmptyPoolError):
            m.start_quiz()

    def test_misses_are_committed_on_completion(self) -> None:
        store = QuizStore(MemoryStore())
        m = make_manager(store=store)
        m.start_quiz()
        self.assertEqual([e.id for e in m.session.queue], [1, 2, 3])
        play(m, ["Pikachu", "Charmander", None])
        self.assertTrue(m.session.is_complete)
        self.assertEqual([r.id for r in store.load_miss_list()], [2, 3])
        self.assertEqual(m.pending_review_count(), 2)
        summary = m.summary()
        self.assertEqual((summary["total"], summary["correct"], summary["wrong"], summary["rate"]), (3, 1, 2, 33))

    def test_clean_run_clears_pending_review(self) -> None:
        store = QuizStore(MemoryStore())
        store.save_miss_list([MissRecord(2, "", "Bulbasaur", "x", "y")])
        m = make_manager(store=store)
        m.start_quiz()
        play(m, ["Pikachu", "Bulbasaur", "Charmander"])
        self.assertIsNone(store.load_miss_list())
        self.assertEqual(m.pending_review_count(), 0)

    def test_quit_commits_partial_session(self) -> None:
        store = QuizStore(MemoryStore())
        m = make_manager(store=store)
        m.start_quiz()
        m.submit("wrong")
        summary = m.quit()
        self.assertEqual((summary["total"], summary["wrong"]), (1, 1))
        self.assertEqual([r.id for r in store.load_miss_list()], [1])

    def test_start_review_uses_stored_list(self) -> None:
        store = QuizStore(MemoryStore())
        store.save_miss_list([MissRecord(4, "", "Squirtle", "x", "y"), MissRecord(2, "", "Bulbasaur", "x", "y")])
        m = make_manager(store=store)
        first = m.start_review()
        self.assertEqual(first.id, 2)
        self.assertEqual([e.id for e in m.session.queue], [2, 4])
        self.assertEqual(m.ctx.mode, "review")

    def test_start_review_with_nothing_stored(self) -> None:
        m = make_manager()
        self.assertIsNone(m.start_review())
        self.assertIs(m.session.phase, SessionPhase.NOT_STARTED)

    def test_retry_wrong(self) -> None:
        m = make_manager()
        self.assertIsNone(m.retry_wrong())
        m.start_quiz()
        play(m, ["Pikachu", None, "Charmander"])
        first = m.retry_wrong()
        self.assertEqual(first.id, 2)
        self.assertEqual(m.session.total, 1)

    def test_retry_all_reshuffles_the_selected_regions(self) -> None:
        m = make_manager()
        m.start_quiz()
        play(m, ["Pikachu", "Bulbasaur", "Charmander"])
        first = m.retry_all()
        self.assertEqual(first.id, 1)
        self.assertEqual(m.session.total, 3)
        self.assertEqual(m.session.correct_count, 0)
        self.assertEqual(m.ctx.mode, "all")

    def test_events(self) -> None:
        bus = EventBus()
        log = []
        bus.subscribe("question", lambda p: log.append(("question", p["entity"].id, p["number"], p["total"])))
        bus.subscribe("answered", lambda r: log.append(("answered", r.entity.id, r.correct)))
        bus.subscribe("completed", lambda s: log.append(("completed", s["correct"], s["wrong"])))
        m = make_manager(bus=bus)
        m.start_quiz()
        m.submit("Pikachu")
        m.submit("Pikachu")
        m.advance()
        m.skip()
        m.quit()
        self.assertEqual(
            log,
            [
                ("question", 1, 1, 3),
                ("answered", 1, True),
                ("question", 2, 2, 3),
                ("answered", 2, False),
                ("completed", 1, 1),
            ],
        )

    def test_failing_subscriber_does_not_break_the_quiz(self) -> None:
        bus = EventBus()

        def boom(_payload):
            raise RuntimeError("view crashed")

        bus.subscribe("answered", boom)
        m = make_manager(bus=bus)
        m.start_quiz()
        self.assertTrue(m.submit("Pikachu").correct)
        self.assertIs(m.advance(), SessionPhase.AWAITING_ANSWER)


class RunLoopTests(unittest.TestCase):
    def _ui(self, inputs):
        it = iter(inputs)
        out = []
        return {"ask": lambda _prompt: next(it), "inform": out.append}, out

    def test_scripted_run(self) -> None:
        m = make_manager(lang="japanese")
        m.start_quiz()
        ui, out = self._ui(["ぴかちゅう", "", "Charmander", "", SKIP_COMMAND, ""])
        summary = m.run(ui)
        self.assertEqual((summary["correct"], summary["wrong"]), (1, 2))
        self.assertEqual([r.id for r in summary["misses"]], [2, 3])
        self.assertTrue(any("ピカチュウ" in line for line in out))

    def test_quit_command(self) -> None:
        m = make_manager()
        m.start_quiz()
        ui, _ = self._ui(["Pikachu", "", QUIT_COMMAND])
        summary = m.run(ui)
        self.assertEqual((summary["total"], summary["correct"]), (1, 1))
        self.assertTrue(m.session.is_complete)


if __name__ == "__main__":
    unittest.main()
