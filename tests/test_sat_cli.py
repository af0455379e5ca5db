import io
import logging

import pytest

import sat


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("SAT_LOG_LEVEL", raising=False)
    yield
    root = logging.getLogger()
    for handler in [h for h in root.handlers if getattr(h, "_sat_handler", False)]:
        root.removeHandler(handler)


def run(monkeypatch, capsys, text, *args):
    monkeypatch.setattr("sys.stdin", io.StringIO(text))
    code = sat.main(list(args))
    captured = capsys.readouterr()
    return code, captured.out, captured.err


@pytest.mark.parametrize("text, line", [
    ("p cnf 1 1\n1 0\n", "s SATISFIABLE\n"),
    ("p cnf 1 2\n1 0\n-1 0\n", "s UNSATISFIABLE\n"),
    ("p cnf 3 0\n", "s SATISFIABLE\n"),
])
def test_prints_exactly_one_status_line(monkeypatch, capsys, text, line):
    code, out, _ = run(monkeypatch, capsys, text)
    assert code == 0
    assert out == line


def test_iterative_flag(monkeypatch, capsys):
    code, out, _ = run(monkeypatch, capsys, "p cnf 2 4\n1 2 0\n1 -2 0\n-1 2 0\n-1 -2 0\n", "--iterative")
    assert code == 0
    assert out == "s UNSATISFIABLE\n"


def test_parse_failure_prints_nothing_on_stdout(monkeypatch, capsys):
    code, out, err = run(monkeypatch, capsys, "p dnf 1 1\n1 0\n")
    assert code == 1
    assert out == ""
    assert "unsupported format dnf" in err


def test_missing_file(capsys, tmp_path):
    code = sat.main([str(tmp_path / "missing.cnf")])
    captured = capsys.readouterr()
    assert code == 1
    assert captured.out == ""
    assert "failed to read input" in captured.err


def test_reads_file_argument(capsys, tmp_path):
    path = tmp_path / "f.dimacs"
    path.write_text("p cnf 2 2\n1 2 0\n-1 -2 0\n")
    assert sat.main([str(path)]) == 0
    assert capsys.readouterr().out == "s SATISFIABLE\n"


def test_stats_go_to_stderr(monkeypatch, capsys):
    code, out, err = run(monkeypatch, capsys, "p cnf 2 2\n1 2 0\n-1 -2 0\n", "--stats")
    assert code == 0
    assert out == "s SATISFIABLE\n"
    assert "decisions=" in err


@pytest.mark.parametrize("name, value", [
    ("SOLVER_TIMEOUT", "soon"),
    ("SAT_LOG_LEVEL", "chatty"),
])
def test_bad_environment_is_reported_not_raised(monkeypatch, capsys, name, value):
    monkeypatch.setenv(name, value)
    code, out, err = run(monkeypatch, capsys, "p cnf 1 1\n1 0\n")
    assert code == 1
    assert out == ""
    assert "invalid configuration" in err
    assert name in err or value.upper() in err
