"""Decide satisfiability of a DIMACS CNF formula.

Reads the formula from FILE (or standard input), prints exactly one line,
``s SATISFIABLE`` or ``s UNSATISFIABLE``, and exits 0. Input errors go to
stderr with exit status 1 and nothing on stdout.
"""
import argparse
import logging
import sys

from solvers.dpll import DpllSolver
from utils.config import Config
from utils.log import setup_logging
from utils.parser import DimacsError, parse_dimacs
from utils.timer import Timer

logger = logging.getLogger("sat")


def build_parser():
    parser = argparse.ArgumentParser(prog="dpll-sat", description=__doc__.splitlines()[0])
    parser.add_argument("file", nargs="?", help="DIMACS CNF file (default: standard input)")
    parser.add_argument("--iterative", action="store_true",
                        help="search from an explicit work stack instead of recursing")
    parser.add_argument("--stats", action="store_true",
                        help="log decision and propagation counts to stderr")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="more logging (-v info, -vv debug)")
    return parser


def _read_input(path):
    if path is None:
        return sys.stdin.read()
    with open(path) as f:
        return f.read()


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        config = Config.from_env()
        level = config.log_level
        if args.verbose == 1 or args.stats:
            level = "INFO"
        if args.verbose >= 2:
            level = "DEBUG"
        setup_logging(level)
    except ValueError as e:
        setup_logging("WARNING")
        logger.error("invalid configuration: %s", e)
        return 1

    try:
        text = _read_input(args.file)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("failed to read input: %s", e)
        return 1

    try:
        formula = parse_dimacs(text)
    except DimacsError as e:
        logger.error("failed to parse dimacs file: %s", e)
        return 1

    solver = DpllSolver(formula, iterative=args.iterative)
    with Timer() as timer:
        outcome = solver.solve()

    if args.stats:
        logger.info("variables=%d clauses=%d decisions=%d propagations=%d time=%.6fs",
                    formula.num_variables, len(formula), solver.branching_decisions,
                    solver.propagations, timer.elapsed)

    print(outcome.status_line())
    return 0


if __name__ == "__main__":
    sys.exit(main())
