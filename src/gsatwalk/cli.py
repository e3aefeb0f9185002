"""
gsatwalk command-line interface for solving and checking clause files.
"""

import argparse
import json
import sys

import yaml

from gsatwalk.core.problem import Problem
from gsatwalk.solvers.config import SolverConfig
from gsatwalk.solvers.walksat_solver import WalkSATSolver
from gsatwalk.utils.exceptions import ConfigurationError, InvalidClauseError, ParseError
from gsatwalk.utils.logging_utils import configure_logging, create_trace_logger

EXIT_SOLVED = 0
EXIT_UNSOLVED = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gsatwalk", description="WalkSAT-style local search over named propositions"
    )
    subparsers = parser.add_subparsers(dest="command")

    solve_parser = subparsers.add_parser("solve", help="search for a satisfying assignment")
    solve_parser.add_argument("file", help="clause file, one clause per line")
    solve_parser.add_argument("--dimacs", action="store_true", help="input is DIMACS CNF")
    solve_parser.add_argument("--config", type=str, help="YAML configuration file")
    solve_parser.add_argument("--noise", type=int, help="random-walk percentage, 0-100")
    solve_parser.add_argument("--max-flips", type=int)
    solve_parser.add_argument("--max-tries", type=int)
    solve_parser.add_argument("--timeout", type=float, help="seconds")
    solve_parser.add_argument("--seed", type=int)
    solve_parser.add_argument(
        "--set",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="override a configuration value, e.g. solver.anneal_flips=5000",
    )
    solve_parser.add_argument("--trace-dir", type=str, help="write a structured search trace")
    solve_parser.add_argument("--json", action="store_true", help="print the result as JSON")
    solve_parser.add_argument("--debug", action="store_true")

    check_parser = subparsers.add_parser(
        "check", help="parse a clause file and print the clauses as understood"
    )
    check_parser.add_argument("file")
    check_parser.add_argument("--dimacs", action="store_true")

    return parser


def build_config(args: argparse.Namespace) -> SolverConfig:
    """
    Combine the configuration file, ``--set`` overrides and explicit flags.

    Raises:
        ConfigurationError: If any value is invalid
    """
    config = SolverConfig(args.config)

    for item in args.set:
        key, sep, raw = item.partition("=")
        if not sep or not key:
            raise ConfigurationError(f"Expected KEY=VALUE, got {item!r}")
        try:
            value = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Cannot parse value for {key.strip()}: {e}")
        config.set(key.strip(), value)

    flags = {
        "solver.noise_level": args.noise,
        "solver.max_flips": args.max_flips,
        "solver.max_tries": args.max_tries,
        "solver.timeout": args.timeout,
        "problem.seed": args.seed,
        "logging.trace_dir": args.trace_dir,
    }
    for key, value in flags.items():
        if value is not None:
            config.set(key, value)
    if args.dimacs:
        config.set("problem.format", "dimacs")
    return config


def run_solve(args: argparse.Namespace) -> int:
    try:
        config = build_config(args)
    except ConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE

    configure_logging(
        "DEBUG" if args.debug else config.get("logging.level", "INFO"),
        config.get("logging.format"),
        config.get("logging.file"),
    )

    trace_logger = None
    if config.get("logging.trace_dir"):
        trace_logger = create_trace_logger(
            "gsatwalk",
            output_dir=config.get("logging.trace_dir"),
            format_type=config.get("logging.trace_format", "json"),
        )

    try:
        solver = WalkSATSolver.from_file(
            args.file,
            dimacs=config.get("problem.format") == "dimacs",
            config=config,
            trace_logger=trace_logger,
        )
        result = solver.solve()
    except (ParseError, InvalidClauseError, FileNotFoundError, ConfigurationError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE
    finally:
        if trace_logger is not None:
            trace_logger.finalize()

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(result)
        if result.is_sat:
            for name, value in result.assignment.items():
                print(f"{name} = {str(value).lower()}")

    return EXIT_SOLVED if result.is_sat else EXIT_UNSOLVED


def run_check(args: argparse.Namespace) -> int:
    try:
        if args.dimacs:
            problem = Problem.from_dimacs(args.file)
        else:
            problem = Problem.from_file(args.file)
    except (ParseError, InvalidClauseError, FileNotFoundError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE

    for clause in problem.clauses:
        print(clause.text)
    print(f"{len(problem.clauses)} clauses, {problem.proposition_count} propositions")
    return EXIT_SOLVED


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "solve":
        return run_solve(args)
    elif args.command == "check":
        return run_check(args)
    parser.print_help()
    return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
