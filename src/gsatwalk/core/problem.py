"""
SAT problem state and the GSAT-with-noise search step.

A Problem owns its clauses, its proposition registry, the per-clause
true-literal counts and the set of currently unsatisfied clauses. After a
single full scan at construction time, every change goes through
``flip_proposition``, which touches only the clauses that mention the
flipped proposition.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence

import numpy as np

from gsatwalk.core.assignment import TruthAssignment
from gsatwalk.core.clause import Clause
from gsatwalk.core.clause_set import UnsatisfiedClauseSet
from gsatwalk.core.proposition import Literal, Proposition
from gsatwalk.core.random_source import RandomSource, SeededRandomSource
from gsatwalk.utils import cnf
from gsatwalk.utils.exceptions import ConfigurationError, ConsistencyError

# Set up logging
logger = logging.getLogger(__name__)

DEFAULT_NOISE_LEVEL = 10


class Problem:
    """
    A SAT problem together with the truth assignment being repaired.

    Attributes:
        clauses: Clauses of the problem, indexed by Clause.index
        true_literal_counts: Number of true literals per clause
        unsatisfied_clauses: Clauses whose true-literal count is zero
        solution: The assignment being turned into a solution
        random: Source of the random decisions made by ``step_one``
        flip_count: Number of flips applied since construction
    """

    def __init__(
        self,
        clause_specs: Iterable[Sequence[tuple[str, bool]]],
        noise_level: int = DEFAULT_NOISE_LEVEL,
        random_source: RandomSource | None = None,
        initial_values: Mapping[str, bool] | None = None,
    ):
        """
        Build a problem from clause specifications.

        Args:
            clause_specs: For each clause, ordered (proposition_name, is_negated) pairs
            noise_level: Percent of steps that are random-walk steps
            random_source: Random decisions; a fresh unseeded source if omitted
            initial_values: Starting values by proposition name; propositions
                not listed start at random

        Raises:
            InvalidClauseError: If a clause has no literals
            ConfigurationError: If noise_level is not in [0, 100]
        """
        self.random = random_source if random_source is not None else SeededRandomSource()
        self.noise_level = noise_level
        self._proposition_table: dict[str, Proposition] = {}

        self.clauses: list[Clause] = []
        for spec in clause_specs:
            literals = [Literal(self.proposition(name), not negated) for name, negated in spec]
            self.clauses.append(Clause(literals, len(self.clauses)))

        if initial_values is None:
            self.solution = TruthAssignment.random(self.propositions, self.random)
        else:
            self.solution = TruthAssignment.from_values(
                self.propositions, initial_values, self.random
            )

        # The one full scan; everything after this is incremental
        self.true_literal_counts = np.array(
            [self.solution.true_literal_count(c) for c in self.clauses], dtype=np.int64
        )
        self.unsatisfied_clauses = UnsatisfiedClauseSet(
            c for c in self.clauses if self.unsatisfied(c)
        )
        self.flip_count = 0

        logger.debug(
            f"Built problem with {len(self.clauses)} clauses over "
            f"{self.proposition_count} propositions, "
            f"{len(self.unsatisfied_clauses)} initially unsatisfied"
        )

    @classmethod
    def from_lines(cls, lines: Iterable[str], **kwargs) -> "Problem":
        """Make a problem from clauses in the line format, e.g. ``"a | !b"``."""
        return cls(cnf.parse_clause_lines(lines), **kwargs)

    @classmethod
    def from_file(cls, path: str, **kwargs) -> "Problem":
        """Make a problem from a file with one clause per line."""
        return cls(cnf.load_clause_file(path), **kwargs)

    @classmethod
    def from_dimacs(cls, path: str, **kwargs) -> "Problem":
        """Make a problem from a DIMACS CNF file."""
        specs, _ = cnf.load_dimacs_file(path)
        return cls(specs, **kwargs)

    # Proposition registry

    def proposition(self, name: str) -> Proposition:
        """
        The proposition with the given name, created if it doesn't exist yet.
        A new proposition takes the next free index.
        """
        result = self._proposition_table.get(name)
        if result is None:
            result = Proposition(name, len(self._proposition_table))
            self._proposition_table[name] = result
        return result

    def __getitem__(self, name: str) -> Proposition:
        return self._proposition_table[name]

    def __contains__(self, name: str) -> bool:
        return name in self._proposition_table

    @property
    def propositions(self) -> list[Proposition]:
        """All propositions, in index order."""
        return list(self._proposition_table.values())

    @property
    def proposition_count(self) -> int:
        """Number of distinct propositions, not the number of disjuncts."""
        return len(self._proposition_table)

    # Clause state

    @property
    def noise_level(self) -> int:
        return self._noise_level

    @noise_level.setter
    def noise_level(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise ConfigurationError(f"Noise level must be an integer, got {value!r}")
        if not 0 <= value <= 100:
            raise ConfigurationError(f"Noise level must be in [0, 100], got {value}")
        self._noise_level = int(value)

    def satisfied(self, clause: Clause) -> bool:
        return self.true_literal_counts[clause.index] > 0

    def unsatisfied(self, clause: Clause) -> bool:
        return self.true_literal_counts[clause.index] == 0

    @property
    def satisfied_clause_count(self) -> int:
        return len(self.clauses) - len(self.unsatisfied_clauses)

    @property
    def is_solved(self) -> bool:
        """True if every clause is satisfied by the current solution."""
        return not self.unsatisfied_clauses

    def snapshot(self) -> tuple[tuple[bool, ...], tuple[int, ...], frozenset[int]]:
        """Values, counts and unsatisfied clause indices, for comparing states."""
        return (
            self.solution.values(),
            tuple(int(n) for n in self.true_literal_counts),
            self.unsatisfied_clauses.indices(),
        )

    def check_consistency(self) -> None:
        """
        Verify the incremental state against a from-scratch recomputation.

        This is O(total literals) and is meant for tests and debugging.

        Raises:
            ConsistencyError: Naming the first clause whose count or
                unsatisfied-set membership is wrong
        """
        counts = self.true_literal_counts
        expected = np.fromiter(
            (self.solution.true_literal_count(c) for c in self.clauses),
            dtype=np.int64,
            count=len(self.clauses),
        )
        wrong = np.flatnonzero(counts != expected)
        if wrong.size:
            i = int(wrong[0])
            raise ConsistencyError(
                f"True literal count incorrect for clause {i}: "
                f"stored {counts[i]}, actual {expected[i]}",
                clause_index=i,
                kind=ConsistencyError.COUNT,
            )

        members = np.zeros(len(self.clauses), dtype=bool)
        members[np.fromiter(self.unsatisfied_clauses.indices(), dtype=np.intp)] = True
        wrong = np.flatnonzero(members != (counts == 0))
        if wrong.size:
            i = int(wrong[0])
            if members[i]:
                message = f"Clause {i} appears in unsatisfied clauses but is satisfied"
            else:
                message = f"Clause {i} is unsatisfied but missing from unsatisfied clauses"
            raise ConsistencyError(message, clause_index=i, kind=ConsistencyError.MEMBERSHIP)

    # Search

    def flip_proposition(self, target: Literal | Proposition) -> None:
        """
        Flip the value of a proposition and update the clause state.

        Only the clauses that mention the proposition are visited. This is
        the only place where counts and unsatisfied clauses change.
        """
        p = target.proposition if isinstance(target, Literal) else target
        self.solution.flip(p)

        # Literals matching the new value became true, the others became false
        if self.solution.value_of(p):
            now_true, now_false = p.positive_clauses, p.negative_clauses
        else:
            now_true, now_false = p.negative_clauses, p.positive_clauses

        counts = self.true_literal_counts
        for i in now_true:
            counts[i] += 1
            if counts[i] == 1:
                self.unsatisfied_clauses.remove(self.clauses[i])
        for i in now_false:
            counts[i] -= 1
            if counts[i] == 0:
                self.unsatisfied_clauses.add(self.clauses[i])

        self.flip_count += 1

    def satisfied_clause_delta(self, p: Proposition) -> int:
        """
        Net change in the number of satisfied clauses if ``p`` were flipped.

        Computed from the current counts without flipping.
        """
        counts = self.true_literal_counts
        if self.solution.value_of(p):
            losing, gaining = p.positive_clauses, p.negative_clauses
        else:
            losing, gaining = p.negative_clauses, p.positive_clauses

        newly_satisfied = 0
        for i in gaining:
            if counts[i] == 0:
                newly_satisfied += 1
        newly_unsatisfied = 0
        for i in losing:
            if counts[i] == 1:
                newly_unsatisfied += 1
        # A clause holding both p and !p stays satisfied whatever p is
        for i in p.complementary_clauses:
            if counts[i] == 1:
                newly_unsatisfied -= 1

        return newly_satisfied - newly_unsatisfied

    def greedy_literal(self, clause: Clause) -> Literal:
        """The first literal of ``clause`` whose flip has the largest delta."""
        best = clause.disjuncts[0]
        best_delta = self.satisfied_clause_delta(best.proposition)
        for literal in clause.disjuncts[1:]:
            delta = self.satisfied_clause_delta(literal.proposition)
            if delta > best_delta:
                best, best_delta = literal, delta
        return best

    def step_one(self) -> bool:
        """
        Pick one proposition from a random unsatisfied clause and flip it.

        With probability ``noise_level`` percent the literal is chosen at
        random, otherwise greedily. Stepping a solved problem does nothing.

        Returns:
            True if all clauses are satisfied afterwards
        """
        if not self.unsatisfied_clauses:
            return True

        clause = self.unsatisfied_clauses.choose(self.random)
        if self.random.percent(self._noise_level):
            literal = self.random.choice(clause.disjuncts)
        else:
            literal = self.greedy_literal(clause)

        self.flip_proposition(literal)
        return self.is_solved

    def __repr__(self) -> str:
        return (
            f"Problem(clauses={len(self.clauses)}, propositions={self.proposition_count}, "
            f"unsatisfied={len(self.unsatisfied_clauses)}, noise_level={self._noise_level})"
        )
