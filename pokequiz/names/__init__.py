from .normalize import normalize, katakana_to_hiragana
from .matcher import is_correct, accepted_variants

__all__ = ["normalize", "katakana_to_hiragana", "is_correct", "accepted_variants"]
