"""
Propositions and literals.

A Proposition is a named Boolean variable with a stable index. It keeps the
indices of the clauses that mention it, split by polarity, so that a flip
only has to visit the clauses it can actually change.
"""

from dataclasses import dataclass


class Proposition:
    """
    A named Boolean variable within one Problem.

    Attributes:
        name: Unique name of the proposition
        index: Registry slot, assigned on first sight and never reused
        positive_clauses: Indices of clauses where it appears unnegated
        negative_clauses: Indices of clauses where it appears negated
        complementary_clauses: Indices of clauses where it appears with both
            polarities; flipping it can never change their satisfaction
    """

    __slots__ = (
        "name",
        "index",
        "positive_clauses",
        "negative_clauses",
        "complementary_clauses",
    )

    def __init__(self, name: str, index: int):
        self.name = name
        self.index = index
        self.positive_clauses: list[int] = []
        self.negative_clauses: list[int] = []
        self.complementary_clauses: list[int] = []

    @property
    def occurrence_count(self) -> int:
        """Number of clauses this proposition appears in, counted per polarity."""
        return len(self.positive_clauses) + len(self.negative_clauses)

    def _register(self, clause_index: int, is_positive: bool) -> None:
        # Only called from Clause construction
        if is_positive:
            self.positive_clauses.append(clause_index)
            other = self.negative_clauses
        else:
            self.negative_clauses.append(clause_index)
            other = self.positive_clauses
        if other and other[-1] == clause_index:
            self.complementary_clauses.append(clause_index)

    def __repr__(self) -> str:
        return f"Proposition({self.name!r}, {self.index})"

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Literal:
    """A proposition together with a polarity."""

    proposition: Proposition
    is_positive: bool = True

    @property
    def name(self) -> str:
        return self.proposition.name

    def negated(self) -> "Literal":
        return Literal(self.proposition, not self.is_positive)

    def __str__(self) -> str:
        return self.proposition.name if self.is_positive else f"!{self.proposition.name}"
