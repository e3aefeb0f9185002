"""
Truth assignments over the propositions of a problem.
"""

from collections.abc import Iterable, Mapping, Sequence

from gsatwalk.core.clause import Clause
from gsatwalk.core.proposition import Proposition
from gsatwalk.core.random_source import RandomSource


class TruthAssignment:
    """
    Current candidate value of every proposition, indexed by Proposition.index.

    Flipping here changes only the stored value. Keeping clause bookkeeping in
    step is the owning Problem's job.
    """

    __slots__ = ("_propositions", "_values")

    def __init__(self, propositions: Sequence[Proposition], values: Iterable[bool]):
        self._propositions = list(propositions)
        self._values = [bool(v) for v in values]
        if len(self._values) != len(self._propositions):
            raise ValueError(
                f"Expected {len(self._propositions)} values, got {len(self._values)}"
            )

    @classmethod
    def random(
        cls, propositions: Sequence[Proposition], random_source: RandomSource
    ) -> "TruthAssignment":
        """Assign each proposition an independent, unbiased random value."""
        return cls(
            propositions, [random_source.choice((True, False)) for _ in propositions]
        )

    @classmethod
    def from_values(
        cls,
        propositions: Sequence[Proposition],
        values: Mapping[str, bool],
        random_source: RandomSource | None = None,
    ) -> "TruthAssignment":
        """
        Build an assignment from explicit values keyed by proposition name.

        Args:
            propositions: All propositions of the problem, in index order
            values: Mapping from proposition name to value
            random_source: Used for propositions missing from ``values``

        Raises:
            KeyError: If a proposition has no value and no random source is given
        """
        result = []
        for p in propositions:
            if p.name in values:
                result.append(values[p.name])
            elif random_source is not None:
                result.append(random_source.choice((True, False)))
            else:
                raise KeyError(f"No value given for proposition {p.name!r}")
        return cls(propositions, result)

    def _slot(self, p: Proposition) -> int:
        index = p.index
        if index >= len(self._propositions) or self._propositions[index] is not p:
            raise KeyError(f"Unknown proposition {p.name!r}")
        return index

    def value_of(self, p: Proposition) -> bool:
        return self._values[self._slot(p)]

    __getitem__ = value_of

    def flip(self, p: Proposition) -> None:
        slot = self._slot(p)
        self._values[slot] = not self._values[slot]

    def true_literal_count(self, clause: Clause) -> int:
        """
        Number of disjuncts of ``clause`` that are true under this assignment.

        This is a full scan of the clause; the search itself relies on the
        counts maintained by Problem instead.
        """
        return sum(
            1
            for literal in clause.disjuncts
            if literal.is_positive == self.value_of(literal.proposition)
        )

    def values(self) -> tuple[bool, ...]:
        return tuple(self._values)

    def as_dict(self) -> dict[str, bool]:
        return {p.name: v for p, v in zip(self._propositions, self._values)}

    def copy(self) -> "TruthAssignment":
        return TruthAssignment(self._propositions, self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TruthAssignment):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __repr__(self) -> str:
        shown = ", ".join(f"{k}={v}" for k, v in self.as_dict().items())
        return f"TruthAssignment({shown})"
