"""Run the solver over paired ``.dimacs`` / ``.ans`` fixtures.

Every case runs in a worker process under a timeout. A timed-out worker is
killed and replaced; the solver itself is never asked to stop. Per-case rows
go to a CSV in the results directory and a pass/fail summary is printed.
"""
import argparse
import concurrent.futures
import csv
import logging
import os
import sys
from concurrent.futures.process import BrokenProcessPool
from dataclasses import dataclass
from pathlib import Path
from statistics import mean

import psutil

from solvers.dpll import DpllSolver
from solvers.outcome import Outcome
from utils.config import Config
from utils.log import setup_logging
from utils.memory import MemoryTracker
from utils.parser import read_cnf
from utils.timer import Timer

logger = logging.getLogger("benchmark")

OK = "OK"
MISMATCH = "MISMATCH"
TIMEOUT = "TIMEOUT"
ERROR = "ERROR"

CSV_HEADER = ["folder", "file", "expected", "actual", "status",
              "time", "min_mem", "avg_mem", "max_mem", "decisions"]


@dataclass
class CaseResult:
    path: Path
    expected: Outcome
    status: str
    actual: Outcome = None
    time: float = 0.0
    min_mem: float = 0.0
    avg_mem: float = 0.0
    max_mem: float = 0.0
    decisions: int = 0
    message: str = ""

    @property
    def passed(self):
        return self.status == OK

    def describe(self):
        if self.status == MISMATCH:
            return f"{self.path} - Mismatched outcomes (expected {self.expected.value}, got {self.actual.value})"
        if self.status == TIMEOUT:
            return f"{self.path} - Solver timeout"
        return f"{self.path} - {self.message}"


def discover_cases(root):
    """Find ``*.dimacs`` files under ``root`` with the outcome from their ``.ans`` file."""
    if not Path(root).is_dir():
        raise ValueError(f"testcase directory not found: {root}")
    cases = []
    for path in sorted(Path(root).rglob("*.dimacs")):
        answer_path = path.with_suffix(".ans")
        try:
            answer = answer_path.read_text()
        except OSError as e:
            raise ValueError(f"failed to read answer file {answer_path}: {e}") from e
        try:
            cases.append((path, Outcome.from_answer(answer)))
        except ValueError as e:
            raise ValueError(f"{answer_path}: {e}") from None
    return cases


def group_by_folder(cases):
    groups = {}
    for path, expected in cases:
        groups.setdefault(path.parent.name, []).append((path, expected))
    return groups


def get_next_csv_path(base_path):
    if not os.path.exists(base_path):
        return base_path
    index = 1
    while True:
        new_path = base_path.replace(".csv", f" ({index}).csv")
        if not os.path.exists(new_path):
            return new_path
        index += 1


def _run_instance(formula, iterative=False):
    with MemoryTracker() as mem, Timer() as timer:
        solver = DpllSolver(formula, iterative=iterative)
        result = solver.solve()

    return (result, timer.elapsed, mem.min_usage, mem.avg_usage, mem.max_usage,
            solver.branching_decisions)


class Runner:
    """Owns a single-worker process pool and replaces it after a timeout."""

    def __init__(self, timeout, iterative=False, worker=_run_instance):
        self.timeout = timeout
        self.iterative = iterative
        self.worker = worker
        self._executor = None
        self._worker_pid = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _start(self):
        self._executor = concurrent.futures.ProcessPoolExecutor(max_workers=1)
        self._worker_pid = self._executor.submit(os.getpid).result()

    def _abandon(self):
        try:
            psutil.Process(self._worker_pid).kill()
        except psutil.NoSuchProcess:
            pass
        self._executor.shutdown(wait=False, cancel_futures=True)
        self._executor = None
        self._worker_pid = None

    def close(self):
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def run_case(self, path, expected):
        try:
            formula = read_cnf(path)
        except (OSError, ValueError) as e:
            return CaseResult(path, expected, ERROR, message=str(e))

        if self._executor is None:
            self._start()

        future = self._executor.submit(self.worker, formula, self.iterative)
        try:
            actual, elapsed, min_mem, avg_mem, max_mem, decisions = future.result(timeout=self.timeout)
        except concurrent.futures.TimeoutError:
            logger.warning("%s: no outcome after %ss, abandoning worker", path, self.timeout)
            self._abandon()
            return CaseResult(path, expected, TIMEOUT, time=self.timeout)
        except BrokenProcessPool as e:
            self._executor.shutdown(wait=False)
            self._executor = None
            return CaseResult(path, expected, ERROR, message=f"worker died: {e}")

        status = OK if actual is expected else MISMATCH
        return CaseResult(path, expected, status, actual=actual, time=elapsed,
                          min_mem=min_mem, avg_mem=avg_mem, max_mem=max_mem,
                          decisions=decisions)


def write_row(writer, result):
    writer.writerow([
        result.path.parent.name,
        result.path.name,
        result.expected.value,
        result.actual.value if result.actual else "-",
        result.status,
        f"{result.time:.6f}",
        f"{result.min_mem:.2f}",
        f"{result.avg_mem:.2f}",
        f"{result.max_mem:.2f}",
        result.decisions,
    ])


def benchmark_all(config, iterative=False):
    cases = discover_cases(config.testcases_dir)
    os.makedirs(config.results_dir, exist_ok=True)
    csv_path = get_next_csv_path(os.path.join(config.results_dir, "conformance.csv"))
    print(f">> Results will be written to: {csv_path}")

    results = []
    with open(csv_path, "w", newline="") as csvfile, Runner(config.solver_timeout, iterative) as runner:
        writer = csv.writer(csvfile)
        writer.writerow(CSV_HEADER)

        for folder, folder_cases in group_by_folder(cases).items():
            print(f"\n=== {folder.upper()} ===")
            for path, expected in folder_cases:
                result = runner.run_case(path, expected)
                results.append(result)
                write_row(writer, result)
                csvfile.flush()

                print(f"{folder:10} {path.name:25} {result.status:<9} "
                      f"Time: {result.time:9.6f}s Mem(avg): {result.avg_mem:9.2f}KB "
                      f"Decisions: {result.decisions}")

    return results, csv_path


def print_summary(results):
    passed = [r for r in results if r.passed]
    print(f"\nPASSED: {len(passed)} / {len(results)}")
    if passed:
        print(f"avg time {mean(r.time for r in passed):.6f}s, "
              f"avg mem {mean(r.avg_mem for r in passed):.2f}KB")

    failed = [r for r in results if not r.passed]
    if failed:
        print("FAILED TESTS:")
        for result in failed:
            print(f"- {result.describe()}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run the DIMACS conformance suite.")
    parser.add_argument("testcases", nargs="?", help="fixture directory (default: $SAT_TESTCASES)")
    parser.add_argument("--timeout", type=float, help="seconds per case (default: $SOLVER_TIMEOUT)")
    parser.add_argument("--results", help="output directory (default: $SAT_RESULTS)")
    parser.add_argument("--iterative", action="store_true", help="use the work-stack search")
    args = parser.parse_args(argv)

    try:
        config = Config.from_env()
        if args.testcases:
            config.testcases_dir = args.testcases
        if args.timeout is not None:
            config.solver_timeout = args.timeout
        if args.results:
            config.results_dir = args.results
        setup_logging(config.log_level)
    except ValueError as e:
        setup_logging("WARNING")
        logger.error("invalid configuration: %s", e)
        return 1

    try:
        results, _ = benchmark_all(config, iterative=args.iterative)
    except ValueError as e:
        logger.error("%s", e)
        return 1

    print_summary(results)
    return 0 if all(r.passed for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
