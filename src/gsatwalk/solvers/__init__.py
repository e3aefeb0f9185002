"""
Solver drivers built on the incremental search engine.
"""

from gsatwalk.solvers.base import SolverResult, SolverStatus
from gsatwalk.solvers.config import SolverConfig, get_config, load_config
from gsatwalk.solvers.walksat_solver import WalkSATSolver

__all__ = [
    "SolverResult",
    "SolverStatus",
    "SolverConfig",
    "WalkSATSolver",
    "get_config",
    "load_config",
]
