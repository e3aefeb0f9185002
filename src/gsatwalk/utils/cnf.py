"""
Clause file handling utilities.

Two input formats are supported:

- The line format: one clause per line, ``|`` separates disjuncts and a
  leading ``!`` negates a literal, e.g. ``rain | !umbrella | wet``.
- DIMACS CNF, whose integer variables are named ``x<number>``.

Both produce clause specifications: for each clause, an ordered list of
``(proposition_name, is_negated)`` pairs.
"""

import os
from collections.abc import Iterable
from typing import Any, TextIO

from gsatwalk.utils.exceptions import ParseError

ClauseSpec = list[tuple[str, bool]]

DISJUNCTION = "|"
NEGATION = "!"


def parse_literal(text: str, line_number: int | None = None) -> tuple[str, bool]:
    """
    Parse one disjunct into a ``(name, is_negated)`` pair.

    Raises:
        ParseError: If the disjunct or the name after ``!`` is empty, or the
            name itself contains ``!``
    """
    text = text.strip()
    if not text:
        raise ParseError("Empty disjunct", line_number, text)

    is_negated = text.startswith(NEGATION)
    name = text[1:].strip() if is_negated else text
    if not name:
        raise ParseError("Negation without a proposition name", line_number, text)
    if NEGATION in name:
        raise ParseError("Proposition name contains '!'", line_number, text)
    return name, is_negated


def parse_clause_expression(expression: str, line_number: int | None = None) -> ClauseSpec:
    """
    Parse a clause such as ``"a | !b | c"``.

    Args:
        expression: Text of a single clause
        line_number: 1-based source line, reported in errors

    Returns:
        Ordered list of (proposition_name, is_negated) pairs
    """
    return [parse_literal(part, line_number) for part in expression.split(DISJUNCTION)]


def parse_clause_lines(lines: Iterable[str]) -> list[ClauseSpec]:
    """
    Parse clauses in the line format, one clause per line.

    Clause ``i`` comes from line ``i + 1``. Blank lines at the end are
    ignored; a blank line anywhere else is an empty clause.

    Raises:
        ParseError: On the first malformed clause
    """
    lines = list(lines)
    while lines and not lines[-1].strip():
        lines.pop()
    return [
        parse_clause_expression(line, line_number)
        for line_number, line in enumerate(lines, start=1)
    ]


def _read_text(file_path: str) -> str:
    try:
        with open(file_path, encoding="utf-8") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise ParseError(f"{file_path} is not valid UTF-8 text: {e.reason}")


def load_clause_file(file_path: str) -> list[ClauseSpec]:
    """
    Load clauses from a file in the line format.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ParseError: If a clause is malformed or the file is not UTF-8 text
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Clause file not found: {file_path}")

    return parse_clause_lines(_read_text(file_path).splitlines())


def format_clause_lines(specs: Iterable[ClauseSpec]) -> list[str]:
    """Render clause specifications back into the line format."""
    return [
        " | ".join(f"{NEGATION}{name}" if negated else name for name, negated in spec)
        for spec in specs
    ]


def dimacs_name(variable: int) -> str:
    return f"x{abs(variable)}"


def parse_dimacs(source: str | TextIO) -> tuple[list[ClauseSpec], dict[str, Any]]:
    """
    Parse a CNF formula in DIMACS format.

    Args:
        source: DIMACS content as a string or file-like object

    Returns:
        Tuple of (clause_specs, metadata)
        - clause_specs: One spec per clause, variables named ``x<n>``
        - metadata: Dictionary with comments, num_variables and num_clauses

    Raises:
        ParseError: If the format is invalid
    """
    if isinstance(source, str):
        lines = source.strip().split("\n")
    else:
        lines = source.readlines()

    specs: list[ClauseSpec] = []
    metadata = {"comments": [], "num_variables": 0, "num_clauses": 0}

    found_problem_line = False
    current: ClauseSpec = []

    for line_number, line in enumerate(lines, start=1):
        line = line.strip()

        if not line:
            continue

        if line.startswith("c"):
            metadata["comments"].append(line[1:].strip())
            continue

        # Some generators terminate the file with a '%' line
        if line.startswith("%"):
            break

        if line.startswith("p"):
            if found_problem_line:
                raise ParseError("Multiple problem lines", line_number, line)

            parts = line.split()
            if len(parts) < 4 or parts[1] != "cnf":
                raise ParseError("Invalid problem line", line_number, line)

            try:
                metadata["num_variables"] = int(parts[2])
                metadata["num_clauses"] = int(parts[3])
            except ValueError:
                raise ParseError("Invalid numbers in problem line", line_number, line)

            found_problem_line = True
            continue

        for token in line.split():
            try:
                value = int(token)
            except ValueError:
                raise ParseError("Invalid literal", line_number, token)
            if value == 0:
                if current:
                    specs.append(current)
                    current = []
            else:
                current.append((dimacs_name(value), value < 0))

    if current:
        specs.append(current)

    if not found_problem_line:
        raise ParseError("No problem line found")

    if len(specs) != metadata["num_clauses"]:
        raise ParseError(
            f"Expected {metadata['num_clauses']} clauses, but found {len(specs)}"
        )

    return specs, metadata


def load_dimacs_file(file_path: str) -> tuple[list[ClauseSpec], dict[str, Any]]:
    """
    Load a CNF formula from a DIMACS file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ParseError: If the file format is invalid or not UTF-8 text
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"CNF file not found: {file_path}")

    return parse_dimacs(_read_text(file_path))
