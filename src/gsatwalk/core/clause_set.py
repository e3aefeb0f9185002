"""
A clause set supporting constant-time membership updates and uniform
random selection.
"""

from collections.abc import Iterable, Iterator

from gsatwalk.core.clause import Clause
from gsatwalk.core.random_source import RandomSource


class UnsatisfiedClauseSet:
    """
    Set of clauses stored as a dense list plus a clause-index -> slot map.

    Removal swaps the last element into the freed slot, so add, remove and
    random choice are all O(1).
    """

    __slots__ = ("_items", "_slots")

    def __init__(self, clauses: Iterable[Clause] = ()):
        self._items: list[Clause] = []
        self._slots: dict[int, int] = {}
        for clause in clauses:
            self.add(clause)

    def add(self, clause: Clause) -> None:
        if clause.index in self._slots:
            return
        self._slots[clause.index] = len(self._items)
        self._items.append(clause)

    def remove(self, clause: Clause) -> None:
        slot = self._slots.pop(clause.index)
        last = self._items.pop()
        if last.index != clause.index:
            self._items[slot] = last
            self._slots[last.index] = slot

    def discard(self, clause: Clause) -> None:
        if clause.index in self._slots:
            self.remove(clause)

    def choose(self, random_source: RandomSource) -> Clause:
        """Uniformly random member; the set must not be empty."""
        return random_source.choice(self._items)

    def indices(self) -> frozenset[int]:
        return frozenset(self._slots)

    def __contains__(self, clause: object) -> bool:
        return isinstance(clause, Clause) and clause.index in self._slots

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __iter__(self) -> Iterator[Clause]:
        return iter(list(self._items))

    def __repr__(self) -> str:
        return f"UnsatisfiedClauseSet({sorted(self._slots)})"
