"""Lpbridge solver backends."""

from lpbridge.solvers.base import CommandLineSolver, Solver, SolverWithSolutionParsing
from lpbridge.solvers.gurobi import GurobiSolver
from lpbridge.solvers.parsing import read_solution_file
from lpbridge.solvers.solution import Solution, Status
from lpbridge.solvers.status import GUROBI_PATTERNS, StatusPatterns

__all__ = [
    "GUROBI_PATTERNS",
    "CommandLineSolver",
    "GurobiSolver",
    "Solution",
    "Solver",
    "SolverWithSolutionParsing",
    "Status",
    "StatusPatterns",
    "read_solution_file",
]
