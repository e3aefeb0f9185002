"""
Incremental satisfaction tracking and the GSAT-with-noise search step.
"""

from gsatwalk.core.assignment import TruthAssignment
from gsatwalk.core.clause import Clause
from gsatwalk.core.clause_set import UnsatisfiedClauseSet
from gsatwalk.core.problem import DEFAULT_NOISE_LEVEL, Problem
from gsatwalk.core.proposition import Literal, Proposition
from gsatwalk.core.random_source import RandomSource, SeededRandomSource

__all__ = [
    "Clause",
    "DEFAULT_NOISE_LEVEL",
    "Literal",
    "Problem",
    "Proposition",
    "RandomSource",
    "SeededRandomSource",
    "TruthAssignment",
    "UnsatisfiedClauseSet",
]
