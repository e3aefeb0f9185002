"""
Unit tests for clause file parsing.

Tests the line format (``a | !b | c``) and DIMACS CNF readers, and the
errors they raise for malformed input.
"""

import io
import os
import shutil
import tempfile
import unittest

from gsatwalk.core import Problem, SeededRandomSource
from gsatwalk.utils.cnf import (
    format_clause_lines,
    load_clause_file,
    load_dimacs_file,
    parse_clause_expression,
    parse_clause_lines,
    parse_dimacs,
)
from gsatwalk.utils.exceptions import ParseError


class TestLineFormat(unittest.TestCase):
    """Test the one-clause-per-line format."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        """Tear down test fixtures."""
        shutil.rmtree(self.test_dir)

    def test_parse_expression(self):
        """Disjuncts are split on '|', trimmed, and '!' marks negation."""
        self.assertEqual(
            parse_clause_expression("a | !b |c"),
            [("a", False), ("b", True), ("c", False)],
        )
        self.assertEqual(parse_clause_expression("  it rains  "), [("it rains", False)])
        self.assertEqual(parse_clause_expression("! wet"), [("wet", True)])

    def test_empty_disjunct(self):
        """An empty side of '|' is a parse error naming the line."""
        with self.assertRaises(ParseError) as ctx:
            parse_clause_lines(["a | b", "c ||d"])
        self.assertEqual(ctx.exception.line_number, 2)
        self.assertEqual(ctx.exception.subexpression, "")
        self.assertIn("line 2", str(ctx.exception))

        with self.assertRaises(ParseError):
            parse_clause_expression("a |")

    def test_bad_negation(self):
        """A bare '!' or a name containing '!' is rejected."""
        with self.assertRaises(ParseError) as ctx:
            parse_clause_expression("a | !", line_number=7)
        self.assertEqual(ctx.exception.subexpression, "!")
        self.assertEqual(ctx.exception.line_number, 7)

        with self.assertRaises(ParseError):
            parse_clause_expression("!!a")

    def test_trailing_blank_lines_are_ignored(self):
        """Blank lines after the last clause produce no clause."""
        specs = parse_clause_lines(["a", "!a | b", "", "   "])
        self.assertEqual(specs, [[("a", False)], [("a", True), ("b", False)]])

    def test_interior_blank_line_is_an_error(self):
        """A blank line between clauses is an empty clause, not a gap."""
        with self.assertRaises(ParseError) as ctx:
            parse_clause_lines(["a", "   ", "b"])
        self.assertEqual(ctx.exception.line_number, 2)
        self.assertEqual(ctx.exception.subexpression, "")

    def test_format_clause_lines(self):
        """Specs render back into the line format."""
        specs = [[("a", False), ("b", True)], [("c", True)]]
        self.assertEqual(format_clause_lines(specs), ["a | !b", "!c"])
        self.assertEqual(parse_clause_lines(format_clause_lines(specs)), specs)

    def test_load_clause_file(self):
        """Clauses load from a file in file order."""
        path = os.path.join(self.test_dir, "weather.txt")
        with open(path, "w") as f:
            f.write("rain | sprinkler\n!rain | wet\n!sprinkler | wet\n\n")

        specs = load_clause_file(path)
        self.assertEqual(len(specs), 3)
        self.assertEqual(specs[1], [("rain", True), ("wet", False)])

        problem = Problem.from_file(path, random_source=SeededRandomSource(0))
        self.assertEqual([c.index for c in problem.clauses], [0, 1, 2])
        self.assertEqual(problem.clauses[2].text, "!sprinkler | wet")

    def test_missing_file(self):
        """Loading a missing file raises FileNotFoundError."""
        with self.assertRaises(FileNotFoundError):
            load_clause_file(os.path.join(self.test_dir, "nope.txt"))

    def test_file_not_utf8(self):
        """Undecodable bytes are reported as a ParseError naming the file."""
        path = os.path.join(self.test_dir, "binary.txt")
        with open(path, "wb") as f:
            f.write(b"a | b\n\xff\xfe | c\n")

        with self.assertRaises(ParseError) as ctx:
            load_clause_file(path)
        self.assertIn("binary.txt", str(ctx.exception))

        with self.assertRaises(ParseError):
            load_dimacs_file(path)


class TestDimacs(unittest.TestCase):
    """Test the DIMACS CNF reader."""

    SAMPLE = """c a small example
c with two comment lines
p cnf 3 2
1 -2 0
2 3
0
"""

    def test_parse_dimacs(self):
        """Clauses may span lines; variables become x<n>."""
        specs, metadata = parse_dimacs(self.SAMPLE)
        self.assertEqual(
            specs,
            [[("x1", False), ("x2", True)], [("x2", False), ("x3", False)]],
        )
        self.assertEqual(metadata["num_variables"], 3)
        self.assertEqual(metadata["num_clauses"], 2)
        self.assertEqual(metadata["comments"], ["a small example", "with two comment lines"])

    def test_parse_dimacs_file_object(self):
        """A file-like object is accepted."""
        specs, _ = parse_dimacs(io.StringIO(self.SAMPLE))
        self.assertEqual(len(specs), 2)

    def test_invalid_dimacs(self):
        """Malformed DIMACS input raises ParseError."""
        with self.assertRaises(ParseError):
            parse_dimacs("1 2 0\n")
        with self.assertRaises(ParseError):
            parse_dimacs("p cnf 2 2\n1 2 0\n")
        with self.assertRaises(ParseError):
            parse_dimacs("p cnf 2 1\n1 two 0\n")
        with self.assertRaises(ParseError):
            parse_dimacs("p sat 2 1\n1 2 0\n")
        with self.assertRaises(ParseError):
            parse_dimacs("p cnf 2 1\np cnf 2 1\n1 2 0\n")

    def test_load_dimacs_file(self):
        """A DIMACS file builds a problem."""
        test_dir = tempfile.mkdtemp()
        try:
            path = os.path.join(test_dir, "sample.cnf")
            with open(path, "w") as f:
                f.write(self.SAMPLE)
            specs, _ = load_dimacs_file(path)
            self.assertEqual(len(specs), 2)

            problem = Problem.from_dimacs(path, random_source=SeededRandomSource(1))
            self.assertEqual(problem.proposition_count, 3)
            self.assertEqual(problem.clauses[0].text, "x1 | !x2")

            with self.assertRaises(FileNotFoundError):
                load_dimacs_file(os.path.join(test_dir, "missing.cnf"))
        finally:
            shutil.rmtree(test_dir)


if __name__ == "__main__":
    unittest.main()
