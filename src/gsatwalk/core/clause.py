"""
Clause representation: an immutable disjunction of literals.
"""

from collections.abc import Sequence

from gsatwalk.core.proposition import Literal, Proposition
from gsatwalk.utils.exceptions import InvalidClauseError


class Clause:
    """
    A disjunction of literals with a stable index into problem-wide arrays.

    Building a clause registers its index with every proposition it mentions,
    under the literal's polarity. A literal repeated verbatim is kept once.
    """

    __slots__ = ("disjuncts", "index", "text")

    def __init__(self, disjuncts: Sequence[Literal], index: int):
        """
        Make a new clause containing the specified literals.

        Args:
            disjuncts: Literals of the clause, in source order
            index: Position of this clause within the problem's clause table

        Raises:
            InvalidClauseError: If no literals are given
        """
        if not disjuncts:
            raise InvalidClauseError("Clause has no literals", clause=index)

        unique: list[Literal] = []
        seen: set[tuple[int, bool]] = set()
        for literal in disjuncts:
            key = (id(literal.proposition), literal.is_positive)
            if key in seen:
                continue
            seen.add(key)
            unique.append(literal)

        self.disjuncts: tuple[Literal, ...] = tuple(unique)
        self.index = index

        for literal in self.disjuncts:
            literal.proposition._register(index, literal.is_positive)

        # Reconstructed from the literals, not copied from the source line
        self.text = " | ".join(str(literal) for literal in self.disjuncts)

    @property
    def propositions(self) -> list[Proposition]:
        """Distinct propositions of this clause, in disjunct order."""
        result: list[Proposition] = []
        for literal in self.disjuncts:
            if literal.proposition not in result:
                result.append(literal.proposition)
        return result

    def __len__(self) -> int:
        return len(self.disjuncts)

    def __iter__(self):
        return iter(self.disjuncts)

    def __repr__(self) -> str:
        return f"Clause({self.index}: {self.text})"

    def __str__(self) -> str:
        return self.text
