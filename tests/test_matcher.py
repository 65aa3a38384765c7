import unittest

from pokequiz.catalog.entity import Entity
from pokequiz.names.matcher import accepted_variants, is_correct

from .helpers import PIKACHU, CHARMANDER


class MatcherTests(unittest.TestCase):
    def test_accepts_every_language(self) -> None:
        for guess in ("Pikachu", "pikachu", "ピカチュウ", "皮卡丘"):
            with self.subTest(guess=guess):
                self.assertTrue(is_correct(guess, PIKACHU))

    def test_hiragana_guess_matches_katakana_name(self) -> None:
        self.assertTrue(is_correct("ぴかちゅう", PIKACHU))
        self.assertTrue(is_correct(" ひと かげ ", CHARMANDER))

    def test_wrong_name(self) -> None:
        self.assertFalse(is_correct("Raichu", PIKACHU))
        self.assertFalse(is_correct("Charmander", PIKACHU))

    def test_empty_guess_is_never_correct(self) -> None:
        self.assertFalse(is_correct("", PIKACHU))
        self.assertFalse(is_correct("   ", PIKACHU))
        blank = Entity(id=9, names={"english": ""})
        self.assertFalse(is_correct("", blank))

    def test_entity_without_names(self) -> None:
        self.assertFalse(is_correct("anything", Entity(id=10, names={})))

    def test_accepted_variants_are_deduplicated(self) -> None:
        # english and french are both "Pikachu"
        self.assertEqual(sorted(accepted_variants(PIKACHU)), sorted(["pikachu", "ぴかちゅう", "皮卡丘"]))


if __name__ == "__main__":
    unittest.main()
