from enum import Enum


class Outcome(Enum):
    SATISFIABLE = "SATISFIABLE"
    UNSATISFIABLE = "UNSATISFIABLE"

    def __bool__(self):
        return self is Outcome.SATISFIABLE

    def status_line(self) -> str:
        return f"s {self.value}"

    @classmethod
    def from_answer(cls, text: str) -> "Outcome":
        answer = text.strip()
        try:
            return cls(answer)
        except ValueError:
            raise ValueError(f"Invalid answer: {answer!r}") from None


def combine(first: Outcome, second: Outcome) -> Outcome:
    """Merge the outcomes of the two branches on one variable.

    Unsatisfiable only if both branches are. Callers evaluate the positive
    branch first and may skip the negative one once it comes back
    satisfiable.
    """
    if first is Outcome.UNSATISFIABLE and second is Outcome.UNSATISFIABLE:
        return Outcome.UNSATISFIABLE
    return Outcome.SATISFIABLE
