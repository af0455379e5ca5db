import pytest

from solvers.dpll import solve
from solvers.outcome import Outcome
from utils.parser import DimacsError, parse_dimacs, read_cnf


@pytest.mark.parametrize("text, expected", [
    ("p cnf 1 1\n1 0\n", Outcome.SATISFIABLE),
    ("p cnf 1 2\n1 0\n-1 0\n", Outcome.UNSATISFIABLE),
    ("p cnf 2 2\n1 2 0\n-1 -2 0\n", Outcome.SATISFIABLE),
    ("p cnf 3 0\n", Outcome.SATISFIABLE),
])
def test_parse_then_solve(text, expected):
    assert solve(parse_dimacs(text)) is expected


def test_unsupported_format_is_named():
    with pytest.raises(DimacsError, match="unsupported format dnf"):
        parse_dimacs("p dnf 1 1\n1 0\n")


def test_clause_count_mismatch_reports_both_counts():
    with pytest.raises(DimacsError) as excinfo:
        parse_dimacs("p cnf 1 2\n1 0\n")
    message = str(excinfo.value)
    assert "specified 2" in message
    assert "1 clauses were found" in message


def test_comments_blank_lines_and_layout():
    text = "c a comment\n\nc another\np cnf 4 3\n1 -2\n 0 3 0 -4\n2 0\n"
    formula = parse_dimacs(text)
    assert formula.num_variables == 4
    assert formula.to_lists() == [[1, -2], [3], [-4, 2]]


def test_trailing_clause_without_terminator():
    formula = parse_dimacs("p cnf 3 2\n1 2 0\n-3")
    assert formula.to_lists() == [[1, 2], [-3]]


def test_lone_zero_is_not_a_clause():
    formula = parse_dimacs("p cnf 2 1\n0\n1 2 0\n0\n")
    assert formula.to_lists() == [[1, 2]]


@pytest.mark.parametrize("text, message", [
    ("", "no problem line"),
    ("c only comments\n", "no problem line"),
    ("1 2 0\n", "no problem line"),
    ("p\n", "missing format"),
    ("p cnf\n", "missing variable count"),
    ("p cnf 3\n", "missing clause count"),
    ("p cnf x 1\n", "failed to parse variable count"),
    ("p cnf 3 y\n", "failed to parse clause count"),
    ("p cnf -3 1\n", "out of range"),
    ("p cnf 99999999999 1\n", "out of range"),
    ("p cnf 3 1 extra\n1 0\n", "additional characters"),
    ("p cnf 3 1\n1 a 0\n", "failed to parse literal"),
    ("p cnf 3 1\n1 4 0\n", "above the declared count"),
    ("p cnf 3 1\n1 9999999999 0\n", "out of range"),
    ("p cnf 10 1\n1_0 0\n", "failed to parse literal"),
    ("p cnf 3 1\n\u0661 0\n", "failed to parse literal"),
    ("p cnf 3 1\n\uff11 0\n", "failed to parse literal"),
    ("p cnf 1_0 1\n1 0\n", "failed to parse variable count"),
    ("p cnf 3 \uff11\n1 0\n", "failed to parse clause count"),
])
def test_malformed_input(text, message):
    with pytest.raises(DimacsError, match=message):
        parse_dimacs(text)


def test_dimacs_error_is_a_value_error():
    assert issubclass(DimacsError, ValueError)


def test_read_cnf(tmp_path):
    path = tmp_path / "f.cnf"
    path.write_text("c x\np cnf 2 1\n-1 2 0\n")
    assert read_cnf(path).to_lists() == [[-1, 2]]
