"""Randomized card order."""

import random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


def shuffle_items(items: Sequence[T], rng: Optional[random.Random] = None) -> list[T]:
    """Return a uniformly shuffled copy of items (Fisher-Yates).

    The input sequence is never modified.
    """
    randint = rng.randint if rng is not None else random.randint
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result
