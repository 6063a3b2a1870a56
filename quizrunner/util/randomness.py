from __future__ import annotations

"""Randomness helpers for question order and seeding."""

import os
import random
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


def seed_if_needed() -> Optional[int]:
    """Seed the global RNG if the SEED env var is set.

    Returns the seed that was applied, or None.
    """
    seed = os.environ.get("SEED")
    if seed is None:
        return None
    try:
        s = int(seed)
    except ValueError:
        return None
    random.seed(s)
    return s


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Independent generator; unseeded draws from system entropy."""
    return random.Random(seed)


def shuffle(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """Return a uniformly random permutation of `items` as a new list.

    Fisher-Yates: walk down from the last slot and swap each slot with a
    uniformly chosen slot at or below it. `items` is left untouched.
    """
    r = rng if rng is not None else random
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = r.randrange(i + 1)
        out[i], out[j] = out[j], out[i]
    return out
