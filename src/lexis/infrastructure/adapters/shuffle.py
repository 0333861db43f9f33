"""Shuffler adapters."""

import random
from typing import TypeVar

from lexis.domain.review.ports import Shuffler

T = TypeVar("T")


class RandomShuffler(Shuffler):
    """Uniform random shuffle. Pass a seed for a reproducible order."""

    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)

    def shuffle(self, items: list[T]) -> list[T]:
        shuffled = list(items)
        self._rng.shuffle(shuffled)
        return shuffled


class IdentityShuffler(Shuffler):
    """Keeps selection order (due cards first, then new)."""

    def shuffle(self, items: list[T]) -> list[T]:
        return list(items)
