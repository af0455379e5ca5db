import logging
import re
from typing import List

from solvers.cnf import Clause, Formula, Literal

logger = logging.getLogger(__name__)

# Variable ids, literals and declared counts all share one signed 32-bit width.
MAX_INT = 2 ** 31 - 1
INTEGER = re.compile(r"[+-]?[0-9]+")


class DimacsError(ValueError):
    """Malformed DIMACS CNF input."""


def _parse_count(token: str, what: str) -> int:
    if not INTEGER.fullmatch(token):
        raise DimacsError(f"failed to parse {what} in problem line: {token!r}")
    value = int(token)
    if value < 0 or value > MAX_INT:
        raise DimacsError(f"{what} in problem line out of range (0..{MAX_INT}): {value}")
    return value


def parse_dimacs(text: str) -> Formula:
    lines = (line for line in text.splitlines() if line.strip())
    lines = (line for line in lines if not line.startswith('c'))

    problem = next(lines, None)
    if problem is None:
        raise DimacsError("no problem line found")

    parts = problem.split()
    if parts[0] != 'p':
        raise DimacsError("no problem line found")
    if len(parts) < 2:
        raise DimacsError("missing format in problem line")
    if parts[1] != 'cnf':
        raise DimacsError(f"unsupported format {parts[1]}")
    if len(parts) < 3:
        raise DimacsError("missing variable count in problem line")
    num_variables = _parse_count(parts[2], "variable count")
    if len(parts) < 4:
        raise DimacsError("missing clause count in problem line")
    num_clauses = _parse_count(parts[3], "clause count")
    if len(parts) > 4:
        raise DimacsError("problem line contains additional characters")

    clauses: List[Clause] = []
    current: List[Literal] = []
    for line in lines:
        for token in line.split():
            if not INTEGER.fullmatch(token):
                raise DimacsError(f"failed to parse literal: {token!r}")
            value = int(token)

            if value == 0:
                # A bare terminator with nothing pending is not a clause.
                if current:
                    clauses.append(Clause(current))
                    current = []
                continue
            if abs(value) > MAX_INT:
                raise DimacsError(f"literal out of range: {value}")
            if abs(value) > num_variables:
                raise DimacsError(
                    f"literal {value} refers to a variable above the declared count {num_variables}"
                )
            current.append(Literal(value))

    if current:
        clauses.append(Clause(current))

    if num_clauses != len(clauses):
        raise DimacsError(
            f"invalid number of clauses. the problem line specified {num_clauses} "
            f"but {len(clauses)} clauses were found"
        )

    logger.debug("parsed %d variables, %d clauses", num_variables, len(clauses))
    return Formula(num_variables, clauses)


def read_cnf(path) -> Formula:
    with open(path) as f:
        return parse_dimacs(f.read())
