from typing import Iterable, Iterator, List, Optional, Sequence, Tuple


class Variable(int):
    """A boolean unknown, identified by a positive integer."""

    def __new__(cls, value: int):
        if value <= 0:
            raise ValueError(f"Variable identifier must be positive, got {value}")
        return super().__new__(cls, value)

    def __repr__(self):
        return f"Variable({int(self)})"


class Literal(int):
    """A variable or its negation, encoded as a signed non-zero integer.

    The magnitude is the variable identifier and the sign is the polarity.
    Use ``~lit`` (or ``lit.negate()``) to flip the polarity; unary minus
    on a literal returns a plain ``int``.
    """

    def __new__(cls, value: int):
        if value == 0:
            raise ValueError("0 is not a valid literal")
        return super().__new__(cls, value)

    @classmethod
    def from_variable(cls, variable: Variable, negated: bool = False) -> "Literal":
        return cls(-variable if negated else variable)

    def negate(self) -> "Literal":
        return Literal(-int(self))

    __invert__ = negate

    def into_variable(self) -> Variable:
        return Variable(abs(int(self)))

    def is_negative(self) -> bool:
        return int(self) < 0

    def __repr__(self):
        return f"Literal({int(self)})"


class Clause:
    """An immutable disjunction of literals.

    Order only matters for reproducible unit-clause detection.
    """

    __slots__ = ("literals",)

    def __init__(self, literals: Iterable[int] = ()):
        self.literals: Tuple[Literal, ...] = tuple(
            lit if isinstance(lit, Literal) else Literal(lit) for lit in literals
        )

    def iter_literals(self) -> Iterator[Literal]:
        return iter(self.literals)

    def contains(self, literal: Literal) -> bool:
        return literal in self.literals

    def remove(self, literal: Literal) -> "Clause":
        # Every occurrence of exactly this literal goes; the opposite
        # polarity of the same variable stays.
        shrunk = Clause.__new__(Clause)
        shrunk.literals = tuple(lit for lit in self.literals if lit != literal)
        return shrunk

    def is_empty(self) -> bool:
        return not self.literals

    def as_unit_clause(self) -> Optional[Literal]:
        if len(self.literals) == 1:
            return self.literals[0]
        return None

    def __len__(self):
        return len(self.literals)

    def __eq__(self, other):
        if not isinstance(other, Clause):
            return NotImplemented
        return self.literals == other.literals

    def __hash__(self):
        return hash(self.literals)

    def __repr__(self):
        return f"Clause({[int(lit) for lit in self.literals]})"


class Formula:
    """A conjunction of clauses over variables 1..num_variables.

    Built once and never mutated; solvers only ever read it.
    """

    __slots__ = ("num_variables", "clauses")

    def __init__(self, num_variables: int, clauses: Iterable[Clause] = ()):
        if num_variables < 0:
            raise ValueError(f"Variable count must not be negative, got {num_variables}")
        self.num_variables = num_variables
        self.clauses: Tuple[Clause, ...] = tuple(clauses)

        for clause in self.clauses:
            for lit in clause.literals:
                if abs(lit) > num_variables:
                    raise ValueError(
                        f"Literal {int(lit)} refers to a variable outside 1..{num_variables}"
                    )

    @classmethod
    def from_lists(cls, num_variables: int, clauses: Iterable[Sequence[int]]) -> "Formula":
        return cls(num_variables, [Clause(clause) for clause in clauses])

    def to_lists(self) -> List[List[int]]:
        return [[int(lit) for lit in clause.literals] for clause in self.clauses]

    def __len__(self):
        return len(self.clauses)

    def __repr__(self):
        return f"Formula(num_variables={self.num_variables}, clauses={len(self.clauses)})"
