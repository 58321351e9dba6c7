"""Linear and integer programming models written to LP files and solved by external solvers."""

from lpbridge.exceptions import (
    LpBridgeError,
    SolutionFormatError,
    SolverError,
    SolverNotFoundError,
    SolverProcessError,
)
from lpbridge.exprs import (
    BinaryVar,
    Comparison,
    Constraint,
    ContinuousVar,
    IntegerVar,
    lp_sum,
    var,
)
from lpbridge.problem import ObjectiveSense, Problem
from lpbridge.solvers import GurobiSolver, Solution, Status
from lpbridge.types import VarType

__all__ = [
    "BinaryVar",
    "Comparison",
    "Constraint",
    "ContinuousVar",
    "GurobiSolver",
    "IntegerVar",
    "LpBridgeError",
    "ObjectiveSense",
    "Problem",
    "Solution",
    "SolutionFormatError",
    "SolverError",
    "SolverNotFoundError",
    "SolverProcessError",
    "Status",
    "VarType",
    "lp_sum",
    "var",
]
