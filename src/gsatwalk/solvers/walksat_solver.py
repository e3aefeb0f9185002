"""
WalkSAT driver: runs the GSAT-with-noise step under flip, try and time budgets.
"""

import logging
import time
import traceback
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import omegaconf
from omegaconf import OmegaConf

from gsatwalk.core.problem import DEFAULT_NOISE_LEVEL, Problem
from gsatwalk.core.random_source import RandomSource, SeededRandomSource
from gsatwalk.solvers.base import SolverResult, SolverStatus
from gsatwalk.solvers.config import SolverConfig, get_config
from gsatwalk.utils import cnf
from gsatwalk.utils.exceptions import ConfigurationError, SolverTimeoutError
from gsatwalk.utils.logging_utils import SearchTraceLogger

# Set up logging
logger = logging.getLogger(__name__)


class WalkSATSolver:
    """
    Repeatedly steps a Problem until it is solved or a budget runs out.

    Every try builds a fresh Problem from the clause specifications, so tries
    share no clause state and are compared only by their results.
    """

    solver_name = "walksat"

    # Keys of the ``solver`` config section that keyword arguments may override
    PARAMETERS = (
        "noise_level",
        "noise_start",
        "anneal_flips",
        "max_flips",
        "max_tries",
        "timeout",
        "progress_interval",
        "check_consistency",
    )

    def __init__(
        self,
        clause_specs: Iterable[Sequence[tuple[str, bool]]],
        config: SolverConfig | None = None,
        random_source: RandomSource | None = None,
        trace_logger: SearchTraceLogger | None = None,
        initial_values: Mapping[str, bool] | None = None,
        **kwargs,
    ):
        """
        Initialize the solver.

        Args:
            clause_specs: For each clause, ordered (proposition_name, is_negated) pairs
            config: Configuration; the global configuration if omitted
            random_source: Random decisions; seeded from ``problem.seed`` if omitted
            trace_logger: Optional structured trace of progress and results
            initial_values: Starting values for the first try
            **kwargs: Overrides for solver parameters, e.g. ``max_flips=500``

        Raises:
            ConfigurationError: If an override names an unknown parameter or
                has an invalid value
        """
        config = config or get_config()

        self.noise_level = config.get("solver.noise_level", DEFAULT_NOISE_LEVEL)
        self.noise_start = config.get("solver.noise_start")
        self.anneal_flips = config.get("solver.anneal_flips", 0)
        self.max_flips = config.get("solver.max_flips", 100000)
        self.max_tries = config.get("solver.max_tries", 1)
        self.timeout = config.get("solver.timeout")
        self.progress_interval = config.get("solver.progress_interval", 1000)
        self.check_consistency = config.get("solver.check_consistency", False)

        for key in kwargs:
            if key not in self.PARAMETERS:
                raise ConfigurationError(f"Unknown solver parameter: {key}")
        if kwargs:
            try:
                candidate = OmegaConf.merge(config.config, {"solver": kwargs})
            except omegaconf.errors.OmegaConfBaseException as e:
                raise ConfigurationError(f"Invalid solver parameters: {e}")
            SolverConfig.validate(candidate)
        for key, value in kwargs.items():
            setattr(self, key, value)

        self.clause_specs = [list(spec) for spec in clause_specs]
        self.random = random_source or SeededRandomSource(config.get("problem.seed"))
        self.trace_logger = trace_logger
        self.initial_values = initial_values

        self.problem: Problem | None = None
        self.interrupted = False
        self.stats: dict[str, Any] = {
            "flips": 0,
            "tries": 0,
            "satisfied_clauses": 0,
            "total_clauses": len(self.clause_specs),
            "solver_name": self.solver_name,
        }

    @classmethod
    def from_file(cls, path: str, dimacs: bool = False, **kwargs) -> "WalkSATSolver":
        """Make a solver for a clause file in the line format or DIMACS."""
        if dimacs:
            specs, _ = cnf.load_dimacs_file(path)
        else:
            specs = cnf.load_clause_file(path)
        return cls(specs, **kwargs)

    def noise_at(self, flips: int) -> int:
        """
        Noise level for the given flip of a try.

        Without annealing this is ``noise_level``. With ``noise_start`` and
        ``anneal_flips`` set, noise moves linearly from ``noise_start`` to
        ``noise_level`` over the first ``anneal_flips`` flips.
        """
        if self.noise_start is None or not self.anneal_flips:
            return self.noise_level
        progress = min(flips, self.anneal_flips) / self.anneal_flips
        return round(self.noise_start + (self.noise_level - self.noise_start) * progress)

    def _run_try(self, try_index: int, deadline: float | None, best: dict[str, Any]) -> str:
        """
        Run one try, updating ``best`` in place.

        Returns:
            "solved", "timeout", "interrupted" or "exhausted"
        """
        problem = Problem(
            self.clause_specs,
            noise_level=self.noise_at(0),
            random_source=self.random,
            initial_values=self.initial_values if try_index == 1 else None,
        )
        self.problem = problem
        total = len(problem.clauses)
        annealing = self.noise_start is not None and self.anneal_flips > 0

        logger.info(
            f"Try {try_index}/{self.max_tries}: {len(problem.unsatisfied_clauses)} of "
            f"{total} clauses unsatisfied at start"
        )

        def record_best():
            if problem.satisfied_clause_count > best["satisfied"]:
                best["satisfied"] = problem.satisfied_clause_count
                best["assignment"] = problem.solution.as_dict()

        record_best()
        flips = 0
        outcome = "solved" if problem.is_solved else "exhausted"

        while not problem.is_solved and flips < self.max_flips:
            if self.interrupted:
                outcome = "interrupted"
                break
            if deadline is not None and time.perf_counter() >= deadline:
                outcome = "timeout"
                break

            if annealing:
                problem.noise_level = self.noise_at(flips)
            solved = problem.step_one()
            flips += 1

            if self.check_consistency:
                problem.check_consistency()
            record_best()

            if self.progress_interval and flips % self.progress_interval == 0:
                logger.debug(
                    f"Try {try_index}: {flips} flips, "
                    f"{len(problem.unsatisfied_clauses)} unsatisfied"
                )
                if self.trace_logger is not None:
                    self.trace_logger.log_progress(
                        try_index,
                        flips,
                        len(problem.unsatisfied_clauses),
                        total,
                        problem.noise_level,
                    )

            if solved:
                outcome = "solved"

        best["flips"] += flips
        return outcome

    def solve(self, timeout: float | None = None) -> SolverResult:
        """
        Search for a satisfying assignment.

        Args:
            timeout: Wall-clock budget in seconds; the configured timeout if omitted

        Returns:
            SolverResult with the satisfying assignment, or the best one seen

        Raises:
            ConfigurationError: If timeout is not positive
        """
        if timeout is not None and (isinstance(timeout, bool) or timeout <= 0):
            raise ConfigurationError(f"Timeout must be positive, got {timeout!r}")
        timeout = timeout if timeout is not None else self.timeout
        start_time = time.perf_counter()
        deadline = start_time + timeout if timeout else None

        self.interrupted = False
        best = {"satisfied": -1, "assignment": None, "flips": 0}
        status = SolverStatus.UNKNOWN
        error_message = "Maximum tries reached without finding a solution"
        tries = 0

        for try_index in range(1, self.max_tries + 1):
            tries = try_index
            try_start = time.perf_counter()
            flips_before = best["flips"]
            try:
                outcome = self._run_try(try_index, deadline, best)
            except Exception as e:
                if self.trace_logger is not None:
                    self.trace_logger.log_exception(
                        try_index, type(e).__name__, str(e), traceback.format_exc()
                    )
                raise

            try_flips = best["flips"] - flips_before
            logger.info(f"Try {try_index} finished: {outcome} after {try_flips} flips")
            if self.trace_logger is not None:
                self.trace_logger.log_try_result(
                    try_index,
                    try_flips,
                    outcome == "solved",
                    self.problem.satisfied_clause_count,
                    time.perf_counter() - try_start,
                )

            if outcome == "solved":
                status = SolverStatus.SATISFIABLE
                error_message = None
                best["assignment"] = self.problem.solution.as_dict()
                best["satisfied"] = self.problem.satisfied_clause_count
                break
            if outcome == "timeout":
                status = SolverStatus.TIMEOUT
                error_message = f"Timeout reached ({timeout}s)"
                break
            if outcome == "interrupted":
                status = SolverStatus.INTERRUPTED
                error_message = "Solving was interrupted"
                break

        runtime = time.perf_counter() - start_time
        satisfied = max(best["satisfied"], 0)

        self.stats["flips"] = best["flips"]
        self.stats["tries"] = tries
        self.stats["satisfied_clauses"] = satisfied
        self.stats["runtime"] = runtime
        if self.problem is not None:
            self.stats["propositions"] = self.problem.proposition_count

        return SolverResult(
            status=status,
            assignment=best["assignment"],
            flips=best["flips"],
            tries=tries,
            runtime=runtime,
            satisfied_clauses=satisfied,
            total_clauses=len(self.clause_specs),
            statistics=dict(self.stats),
            error_message=error_message,
        )

    def solve_or_raise(self, timeout: float | None = None) -> SolverResult:
        """
        Like ``solve``, but failing to find a solution is an error.

        Raises:
            SolverTimeoutError: If the budget ran out without a solution
        """
        result = self.solve(timeout=timeout)
        if not result.is_sat:
            raise SolverTimeoutError(
                result.error_message or "No solution found",
                time_spent=result.runtime,
                satisfied_clauses=result.satisfied_clauses,
                partial_assignment=result.assignment,
            )
        return result

    def get_statistics(self) -> dict[str, Any]:
        return self.stats

    def interrupt(self) -> None:
        """
        Ask a running ``solve`` to stop after the current flip.
        """
        logger.debug("Interrupting WalkSAT solver")
        self.interrupted = True
