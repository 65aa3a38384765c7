from __future__ import annotations

"""Canonical form of free-text name guesses.

Steps, in order:
- trim surrounding whitespace
- lowercase
- drop every whitespace character, ideographic space included
- fold halfwidth katakana to fullwidth, then katakana to hiragana
"""

import re
import unicodedata

# ァ (U+30A1) .. ン (U+30F3); hiragana sits exactly 0x60 below.
KATAKANA_START = 0x30A1
KATAKANA_END = 0x30F3
KANA_OFFSET = 0x60

_WHITESPACE = re.compile(r"[\s\u3000]+")
_HALFWIDTH_KATAKANA = re.compile(r"[\uff61-\uff9f]+")


def _widen(match: re.Match) -> str:
    # NFKC composes ｶﾞ into ガ
    return unicodedata.normalize("NFKC", match.group(0))


def katakana_to_hiragana(text: str) -> str:
    chars = []
    for ch in text:
        code = ord(ch)
        if KATAKANA_START <= code <= KATAKANA_END:
            ch = chr(code - KANA_OFFSET)
        chars.append(ch)
    return "".join(chars)


def normalize(text: str | None) -> str:
    """Return the canonical comparison form of text. Never raises on str/None."""
    if not text:
        return ""
    s = text.strip().lower()
    s = _WHITESPACE.sub("", s)
    s = _HALFWIDTH_KATAKANA.sub(_widen, s)
    return katakana_to_hiragana(s)
