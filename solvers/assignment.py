from typing import Iterable, Iterator, List

from solvers.cnf import Literal, Variable


class Assignment:
    """Literals decided true along one search branch, in decision order.

    At most one literal per variable: the first decision for a variable wins
    and later ones are ignored. Branches never share a trail, they copy it.
    """

    __slots__ = ("_literals",)

    def __init__(self, literals: Iterable[Literal] = ()):
        self._literals: List[Literal] = []
        for lit in literals:
            self.add(lit)

    def add(self, literal: Literal) -> None:
        if not self.contains_variable(abs(literal)):
            self._literals.append(literal)

    def contains_variable(self, variable: Variable) -> bool:
        # Linear scan; the trail never grows past the variable count.
        return any(abs(lit) == variable for lit in self._literals)

    def iter_literals(self) -> Iterator[Literal]:
        return iter(self._literals)

    def copy(self) -> "Assignment":
        clone = Assignment()
        clone._literals = list(self._literals)
        return clone

    def __len__(self):
        return len(self._literals)

    def __repr__(self):
        return f"Assignment({[int(lit) for lit in self._literals]})"
