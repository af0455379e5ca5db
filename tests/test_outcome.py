import pytest

from solvers.outcome import Outcome, combine

SAT = Outcome.SATISFIABLE
UNSAT = Outcome.UNSATISFIABLE


@pytest.mark.parametrize("first, second, expected", [
    (SAT, SAT, SAT),
    (SAT, UNSAT, SAT),
    (UNSAT, SAT, SAT),
    (UNSAT, UNSAT, UNSAT),
])
def test_combine(first, second, expected):
    assert combine(first, second) is expected


def test_status_lines():
    assert SAT.status_line() == "s SATISFIABLE"
    assert UNSAT.status_line() == "s UNSATISFIABLE"


def test_truthiness():
    assert SAT
    assert not UNSAT


def test_from_answer():
    assert Outcome.from_answer("SATISFIABLE\n") is SAT
    assert Outcome.from_answer("  UNSATISFIABLE ") is UNSAT
    with pytest.raises(ValueError, match="Invalid answer"):
        Outcome.from_answer("SAT")
