from __future__ import annotations

"""Answer matching against every localized name of an entity."""

from typing import List

from ..catalog.entity import Entity
from .normalize import normalize


def accepted_variants(entity: Entity) -> List[str]:
    """Normalized, non-empty name variants in every language the entity carries."""
    out: List[str] = []
    for value in entity.names.values():
        if not isinstance(value, str) or not value:
            continue
        n = normalize(value)
        if n and n not in out:
            out.append(n)
    return out


def is_correct(guess: str, entity: Entity) -> bool:
    """True iff the normalized guess equals a normalized name of entity.

    An empty (or whitespace-only) guess is never correct, and an entity
    without usable names matches nothing.
    """
    g = normalize(guess)
    if not g:
        return False
    return g in accepted_variants(entity)
