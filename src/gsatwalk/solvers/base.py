"""
Result types shared by the solver drivers.
"""

from enum import Enum
from typing import Any


class SolverStatus(Enum):
    """Enum representing the status of a solver run."""

    UNKNOWN = "unknown"
    SATISFIABLE = "satisfiable"
    TIMEOUT = "timeout"
    INTERRUPTED = "interrupted"


class SolverResult:
    """
    Outcome of a solver run.

    A local-search run can only ever prove satisfiability. When it gives up,
    ``assignment`` holds the best assignment seen, by satisfied clause count.
    """

    def __init__(
        self,
        status: SolverStatus = SolverStatus.UNKNOWN,
        assignment: dict[str, bool] | None = None,
        flips: int = 0,
        tries: int = 0,
        runtime: float = 0.0,
        satisfied_clauses: int = 0,
        total_clauses: int = 0,
        statistics: dict[str, Any] | None = None,
        error_message: str | None = None,
    ):
        self.status = status
        self.assignment = assignment
        self.flips = flips
        self.tries = tries
        self.runtime = runtime
        self.satisfied_clauses = satisfied_clauses
        self.total_clauses = total_clauses
        self.statistics = statistics or {}
        self.error_message = error_message

    @property
    def is_sat(self) -> bool:
        """Returns True if a satisfying assignment was found."""
        return self.status == SolverStatus.SATISFIABLE

    @property
    def satisfaction_ratio(self) -> float:
        """Returns the ratio of satisfied clauses."""
        if self.total_clauses == 0:
            return 1.0
        return self.satisfied_clauses / self.total_clauses

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "assignment": self.assignment,
            "flips": self.flips,
            "tries": self.tries,
            "runtime": self.runtime,
            "satisfied_clauses": self.satisfied_clauses,
            "total_clauses": self.total_clauses,
            "statistics": self.statistics,
            "error_message": self.error_message,
        }

    def __str__(self) -> str:
        """String representation of the result."""
        status_str = str(self.status.value).upper()
        progress = f"{self.satisfied_clauses}/{self.total_clauses} clauses"
        if self.status == SolverStatus.SATISFIABLE:
            return f"SAT Result: {status_str} ({progress}, {self.flips} flips, {self.runtime:.4f}s)"
        return (
            f"SAT Result: {status_str} ({progress}, {self.flips} flips, "
            f"{self.tries} tries, {self.runtime:.4f}s)"
        )
