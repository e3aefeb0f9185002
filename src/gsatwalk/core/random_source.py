"""
Random selection primitives used by the search.

The engine never calls the ``random`` module directly; it asks a
RandomSource, so a run is reproducible from a seed and independent
problems never share generator state.
"""

import random
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


class RandomSource(ABC):
    """
    Interface for the two random decisions the search needs.
    """

    @abstractmethod
    def choice(self, items: Sequence[T]) -> T:
        """
        Choose an element uniformly at random.

        Args:
            items: A non-empty sequence

        Returns:
            One element of ``items``
        """

    @abstractmethod
    def percent(self, probability: int) -> bool:
        """
        Return True with the given probability, expressed in percent.

        ``percent(0)`` is always False and ``percent(100)`` is always True.
        """


class SeededRandomSource(RandomSource):
    """RandomSource backed by a private ``random.Random`` instance."""

    def __init__(self, seed: int | None = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise IndexError("Cannot choose from an empty sequence")
        return items[self._rng.randrange(len(items))]

    def percent(self, probability: int) -> bool:
        return self._rng.randrange(100) < probability

    def __repr__(self) -> str:
        return f"SeededRandomSource(seed={self.seed!r})"
