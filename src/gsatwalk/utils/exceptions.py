"""
Custom exception classes for local-search SAT solving.

This module defines specialized exceptions for the failure modes of
clause parsing, problem construction and the incremental search engine
so callers can tell them apart from ordinary Python errors.
"""


class SATBaseException(Exception):
    """Base exception class for all gsatwalk exceptions."""

    pass


class ParseError(SATBaseException):
    """
    Raised when clause text cannot be parsed.

    Attributes:
        line_number: 1-based line of the offending clause, if known
        subexpression: The disjunct text that failed to parse
    """

    def __init__(self, message="Malformed clause", line_number=None, subexpression=None):
        self.line_number = line_number
        self.subexpression = subexpression
        self.message = message
        super().__init__(self.message)

    def __str__(self):
        details = []
        if self.line_number is not None:
            details.append(f"line {self.line_number}")
        if self.subexpression is not None:
            details.append(f"near {self.subexpression!r}")

        detail_str = ", ".join(details)
        return f"{self.message} ({detail_str})" if details else self.message


class InvalidClauseError(SATBaseException):
    """
    Raised when an invalid clause is detected (e.g., a clause with no literals).
    """

    def __init__(self, message="Invalid clause detected", clause=None):
        self.clause = clause
        self.message = message
        if clause is not None:
            self.message = f"{message}: {clause}"
        super().__init__(self.message)


class ConsistencyError(SATBaseException):
    """
    Raised when the incrementally maintained clause state disagrees with a
    from-scratch recomputation.

    Attributes:
        clause_index: Index of the clause whose state is wrong
        kind: "count" for a true-literal count mismatch, "membership" for an
            unsatisfied-set membership mismatch
    """

    COUNT = "count"
    MEMBERSHIP = "membership"

    def __init__(self, message="Inconsistent clause state", clause_index=None, kind=None):
        self.clause_index = clause_index
        self.kind = kind
        self.message = message
        super().__init__(self.message)


class SolverTimeoutError(SATBaseException):
    """
    Raised when a solver exhausts its flip or time budget without a solution.

    Attributes:
        time_spent: Time spent before giving up, in seconds
        satisfied_clauses: Clauses satisfied by the best assignment found
        partial_assignment: Best assignment found, as a name -> bool mapping
    """

    def __init__(self, message="Solver exceeded its budget", time_spent=None,
                 satisfied_clauses=None, partial_assignment=None):
        self.time_spent = time_spent
        self.satisfied_clauses = satisfied_clauses
        self.partial_assignment = partial_assignment
        self.message = message
        super().__init__(self.message)

    def __str__(self):
        details = []
        if self.time_spent is not None:
            details.append(f"time_spent={self.time_spent:.2f}s")
        if self.satisfied_clauses is not None:
            details.append(f"satisfied_clauses={self.satisfied_clauses}")

        detail_str = ", ".join(details)
        return f"{self.message} ({detail_str})" if details else self.message


class ConfigurationError(SATBaseException):
    """
    Raised when there's a problem with solver configuration.
    """

    pass
