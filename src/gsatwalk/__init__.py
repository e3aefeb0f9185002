"""
gsatwalk: a WalkSAT-style local-search SAT solver over named propositions.
"""

from gsatwalk.core import (
    Clause,
    Literal,
    Problem,
    Proposition,
    RandomSource,
    SeededRandomSource,
    TruthAssignment,
)
from gsatwalk.solvers import SolverResult, SolverStatus, WalkSATSolver
from gsatwalk.utils.exceptions import ConsistencyError, ParseError

__version__ = "0.1.0"

__all__ = [
    "Clause",
    "ConsistencyError",
    "Literal",
    "ParseError",
    "Problem",
    "Proposition",
    "RandomSource",
    "SeededRandomSource",
    "SolverResult",
    "SolverStatus",
    "TruthAssignment",
    "WalkSATSolver",
]
