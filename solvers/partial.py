"""Branch-local view of a formula under a partial assignment.

Each clause is in exactly one of three states: still undetermined (and
carrying whatever literals remain), already satisfied, or already
falsified. Clause payloads are immutable, so forking a view only copies
the list of states; the clause objects themselves are shared until a
branch shrinks one, at which point that branch gets its own copy.
"""

from enum import Enum
from typing import Dict, Iterator, List, Tuple, Union

from solvers.cnf import Clause, Formula, Literal, Variable


class Resolved(Enum):
    TAUTOLOGY = "tautology"
    CONTRADICTION = "contradiction"


TAUTOLOGY = Resolved.TAUTOLOGY
CONTRADICTION = Resolved.CONTRADICTION


class Undetermined:
    __slots__ = ("clause",)

    def __init__(self, clause: Clause):
        self.clause = clause

    def __eq__(self, other):
        if not isinstance(other, Undetermined):
            return NotImplemented
        return self.clause == other.clause

    def __repr__(self):
        return f"Undetermined({self.clause!r})"


ClauseState = Union[Undetermined, Resolved]


class PartialFormula:
    __slots__ = ("num_variables", "_states")

    def __init__(self, num_variables: int, states: List[ClauseState]):
        self.num_variables = num_variables
        self._states = states

    @classmethod
    def new(cls, formula: Formula) -> "PartialFormula":
        # An empty input clause can never be satisfied.
        states: List[ClauseState] = [
            CONTRADICTION if clause.is_empty() else Undetermined(clause)
            for clause in formula.clauses
        ]
        return cls(formula.num_variables, states)

    def fork(self) -> "PartialFormula":
        return PartialFormula(self.num_variables, list(self._states))

    @property
    def states(self) -> Tuple[ClauseState, ...]:
        return tuple(self._states)

    def assign(self, literal: Literal) -> None:
        """Make ``literal`` true in this view.

        Clauses containing it become satisfied; its negation is dropped from
        every other undetermined clause, and a clause left with nothing
        becomes a contradiction.
        """
        negated = Literal(-literal)
        states = self._states
        for idx, state in enumerate(states):
            if not isinstance(state, Undetermined):
                continue
            clause = state.clause
            if clause.contains(literal):
                states[idx] = TAUTOLOGY
            elif clause.contains(negated):
                shrunk = clause.remove(negated)
                states[idx] = CONTRADICTION if shrunk.is_empty() else Undetermined(shrunk)

    def is_satisfied(self) -> bool:
        return all(state is TAUTOLOGY for state in self._states)

    def is_contradicting(self) -> bool:
        return any(state is CONTRADICTION for state in self._states)

    def undetermined(self) -> Iterator[Clause]:
        for state in self._states:
            if isinstance(state, Undetermined):
                yield state.clause

    def unit_clauses(self) -> List[Literal]:
        units = []
        for clause in self.undetermined():
            unit = clause.as_unit_clause()
            if unit is not None:
                units.append(unit)
        return units

    def pure_literals(self) -> List[Literal]:
        # variable -> (seen positive, seen negative), first occurrence order
        polarity: Dict[int, Tuple[bool, bool]] = {}
        for clause in self.undetermined():
            for lit in clause.literals:
                var = abs(lit)
                pos, neg = polarity.get(var, (False, False))
                if lit < 0:
                    neg = True
                else:
                    pos = True
                polarity[var] = (pos, neg)

        pure = []
        for var, (pos, neg) in polarity.items():
            if pos and not neg:
                pure.append(Literal(var))
            elif neg and not pos:
                pure.append(Literal(-var))
        return pure

    def variables(self) -> Iterator[Variable]:
        return (Variable(idx) for idx in range(1, self.num_variables + 1))

    def __len__(self):
        return len(self._states)

    def __repr__(self):
        undetermined = sum(1 for _ in self.undetermined())
        return (f"PartialFormula(num_variables={self.num_variables}, "
                f"clauses={len(self._states)}, undetermined={undetermined})")
