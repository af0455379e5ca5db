import logging
import sys
from typing import List, Tuple

from solvers.assignment import Assignment
from solvers.cnf import Formula, Literal
from solvers.outcome import Outcome
from solvers.partial import PartialFormula

logger = logging.getLogger(__name__)

# Python frames per level of branching, plus headroom for the caller.
_FRAMES_PER_LEVEL = 2
_STACK_HEADROOM = 200
# Past this many variables the recursive search could outgrow the C stack
# on interpreters that still recurse in C, so the work stack is used.
MAX_RECURSIVE_VARIABLES = 2000


class DpllSolver:
    """DPLL search over a read-only formula.

    Every call simplifies (pure literals once, then unit propagation to a
    fixpoint), stops if the view is satisfied or contradicting, and otherwise
    branches on the lowest-numbered undecided variable: the positive branch
    runs on a fork, the negative branch reuses the current view.

    Recursion depth is bounded by the variable count. ``iterative=True``
    runs the same search from an explicit work stack instead, and so do
    formulas with more than ``MAX_RECURSIVE_VARIABLES`` variables.
    """

    def __init__(self, formula: Formula, iterative: bool = False):
        self.formula = formula
        self.iterative = iterative
        self.branching_decisions = 0
        self.propagations = 0

    def solve(self) -> Outcome:
        self.branching_decisions = 0
        self.propagations = 0
        view = PartialFormula.new(self.formula)

        if self.iterative or self.formula.num_variables > MAX_RECURSIVE_VARIABLES:
            outcome = self._search(view, Assignment())
        else:
            _ensure_recursion_limit(self.formula.num_variables)
            outcome = self._dpll(view, Assignment())

        logger.debug("%s after %d decisions, %d propagations",
                     outcome.value, self.branching_decisions, self.propagations)
        return outcome

    def _simplify(self, view: PartialFormula, trail: Assignment) -> None:
        # One pass only; new pure literals are picked up by the next call.
        for lit in view.pure_literals():
            trail.add(lit)
            view.assign(lit)

        units = view.unit_clauses()
        while units:
            for lit in units:
                trail.add(lit)
                view.assign(lit)
                self.propagations += 1
            units = view.unit_clauses()

    def _next_literal(self, view: PartialFormula, trail: Assignment) -> Literal:
        for var in view.variables():
            if not trail.contains_variable(var):
                self.branching_decisions += 1
                return Literal.from_variable(var)
        raise AssertionError(
            "every variable is decided but the formula is neither satisfied nor contradicting"
        )

    def _dpll(self, view: PartialFormula, trail: Assignment) -> Outcome:
        self._simplify(view, trail)

        outcome = _terminal(view)
        if outcome is not None:
            return outcome

        lit = self._next_literal(view, trail)
        logger.debug("branch on %d at depth %d", lit, len(trail))

        positive_view = view.fork()
        positive_trail = trail.copy()
        positive_trail.add(lit)
        positive_view.assign(lit)
        if self._dpll(positive_view, positive_trail) is Outcome.SATISFIABLE:
            return Outcome.SATISFIABLE

        # The positive branch failed, so the negative branch decides alone.
        trail.add(~lit)
        view.assign(~lit)
        return self._dpll(view, trail)

    def _search(self, view: PartialFormula, trail: Assignment) -> Outcome:
        stack: List[Tuple[PartialFormula, Assignment]] = [(view, trail)]
        while stack:
            view, trail = stack.pop()
            self._simplify(view, trail)

            outcome = _terminal(view)
            if outcome is Outcome.SATISFIABLE:
                return outcome
            if outcome is Outcome.UNSATISFIABLE:
                continue

            lit = self._next_literal(view, trail)
            logger.debug("branch on %d at depth %d", lit, len(trail))

            positive_view = view.fork()
            positive_trail = trail.copy()
            positive_trail.add(lit)
            positive_view.assign(lit)

            trail.add(~lit)
            view.assign(~lit)

            # Positive branch on top so it is explored first.
            stack.append((view, trail))
            stack.append((positive_view, positive_trail))

        return Outcome.UNSATISFIABLE


def _terminal(view: PartialFormula):
    if view.is_satisfied():
        return Outcome.SATISFIABLE
    if view.is_contradicting():
        return Outcome.UNSATISFIABLE
    return None


def _ensure_recursion_limit(num_variables: int) -> None:
    needed = num_variables * _FRAMES_PER_LEVEL + _STACK_HEADROOM
    if sys.getrecursionlimit() < needed:
        logger.debug("raising recursion limit to %d", needed)
        sys.setrecursionlimit(needed)


def solve(formula: Formula) -> Outcome:
    return DpllSolver(formula).solve()


def solve_iterative(formula: Formula) -> Outcome:
    return DpllSolver(formula, iterative=True).solve()
