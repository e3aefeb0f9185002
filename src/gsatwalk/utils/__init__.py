"""
Utilities for the gsatwalk package.
"""

from gsatwalk.utils import cnf, exceptions, logging_utils
from gsatwalk.utils.cnf import (
    format_clause_lines,
    load_clause_file,
    load_dimacs_file,
    parse_clause_expression,
    parse_clause_lines,
    parse_dimacs,
)

__all__ = [
    "cnf",
    "exceptions",
    "logging_utils",
    "format_clause_lines",
    "load_clause_file",
    "load_dimacs_file",
    "parse_clause_expression",
    "parse_clause_lines",
    "parse_dimacs",
]
