from __future__ import annotations

"""Randomness helpers for seeding and queue shuffling."""

import os
import random
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


def seed_if_needed() -> None:
    """Seed the RNG if SEED env var is set."""
    seed = os.environ.get("SEED")
    if seed is not None:
        try:
            s = int(seed)
        except ValueError:
            return
        random.seed(s)


def fisher_yates(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """Return a uniformly shuffled copy of items.

    Walks i from the last index down to 1, picks j uniformly in [0, i] and
    swaps positions i and j. The input sequence is left untouched.
    """
    r = rng if rng is not None else random
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = r.randint(0, i)
        out[i], out[j] = out[j], out[i]
    return out
