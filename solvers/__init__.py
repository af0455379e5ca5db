from solvers.cnf import Clause, Formula, Literal, Variable
from solvers.dpll import DpllSolver, solve, solve_iterative
from solvers.outcome import Outcome, combine
