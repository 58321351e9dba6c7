from __future__ import annotations

import operator
import weakref
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING

import polars as pl

from lpbridge._utils import parse_into_expr
from lpbridge.exprs.expr import Add, Expr, Literal, Mul, Sub
from lpbridge.exprs.var import Variable
from lpbridge.types import cast_to_dtypes

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from lpbridge.problem import Problem
    from lpbridge.typing import Operand


class Status(Enum):
    """How conclusively a solve completed."""

    OPTIMAL = "Optimal"
    SUB_OPTIMAL = "SubOptimal"
    INFEASIBLE = "Infeasible"


@dataclass(frozen=True, eq=False)
class Solution:
    """The outcome of a solve: a status and the value of each variable.

    The originating problem is only weakly referenced: a solution does not keep
    its problem alive, `problem` returns None once it has been garbage collected.

    Attributes
    ----------
    status : Status
        The solve status.
    results : dict[str, float]
        Variable values indexed by variable name.

    """

    status: Status
    results: dict[str, float]
    _problem_ref: weakref.ReferenceType[Problem] | None = field(
        default=None, repr=False, compare=False
    )

    @classmethod
    def from_results(
        cls, status: Status, results: dict[str, float], problem: Problem | None = None
    ) -> Solution:
        """Create a solution, bound to `problem` when given."""
        return cls(status, results, None if problem is None else weakref.ref(problem))

    @property
    def problem(self) -> Problem | None:
        """The problem this solution was computed for, if still alive."""
        return None if self._problem_ref is None else self._problem_ref()

    def with_status(self, status: Status) -> Solution:
        """Return a copy of the solution with another status."""
        return replace(self, status=status)

    def get_variable_value(self, name: str) -> float:
        """Return the value of the variable `name`.

        Raises
        ------
        KeyError
            If the solver reported no value for `name`.

        """
        return self.results[name]

    def eval(self, expr: Operand) -> float:
        """Evaluate an expression with the values of this solution.

        Variables without a reported value count as 0, as some solvers only
        write non-zero values.
        """
        return self._eval(parse_into_expr(expr))

    def _eval(self, expr: Expr) -> float:
        # Post-order walk: operands are evaluated onto `values`, then combined.
        values: list[float] = []
        stack: list[Expr | Callable[[float, float], float]] = [expr]
        while stack:
            item = stack.pop()
            match item:
                case Literal(value=value):
                    values.append(value)
                case Variable(name=name):
                    values.append(self.results.get(name, 0.0))
                case Add(left=left, right=right):
                    stack.extend((operator.add, right, left))
                case Sub(left=left, right=right):
                    stack.extend((operator.sub, right, left))
                case Mul(left=left, right=right):
                    stack.extend((operator.mul, right, left))
                case Expr():
                    msg = f"Cannot evaluate {type(item).__name__}: {item!r}"
                    raise TypeError(msg)
                case _:
                    right_value = values.pop()
                    values.append(item(values.pop(), right_value))
        return values.pop()

    def get_objective_value(self) -> float:
        """Return the objective value, computed from the problem objective.

        Raises
        ------
        Exception
            If the solution is not bound to a problem anymore, or if the
            problem has no objective.

        """
        problem = self.problem
        if problem is None:
            msg = "The solution is not bound to a problem."
            raise Exception(msg)
        if problem.objective.expr is None:
            msg = f"The problem {problem.name!r} has no objective."
            raise Exception(msg)
        return self.eval(problem.objective.expr)

    def to_frame(self) -> pl.DataFrame:
        """Return the variable values as a DataFrame.

        Columns are ``name``, ``vtype`` (null when the solution is not bound to a
        problem or the variable is unknown to it) and ``value``.

        Examples
        --------
        >>> solution.to_frame()
        shape: (2, 3)
        ┌──────┬────────────┬───────┐
        │ name ┆ vtype      ┆ value │
        │ ---  ┆ ---        ┆ ---   │
        │ str  ┆ str        ┆ f64   │
        ╞══════╪════════════╪═══════╡
        │ x    ┆ CONTINUOUS ┆ 1.5   │
        │ n    ┆ INTEGER    ┆ 2.0   │
        └──────┴────────────┴───────┘

        """
        problem = self.problem
        variables = {} if problem is None else problem.variables()
        return pl.DataFrame(
            {
                "name": list(self.results),
                "vtype": [
                    str(variables[name].vtype) if name in variables else None
                    for name in self.results
                ],
                "value": list(self.results.values()),
            },
            schema={"name": pl.String, "vtype": pl.String, "value": pl.Float64},
        )

    def get_variable_values(self, names: Sequence[str], *, alias: str = "value") -> pl.Series:
        """Read the values of several variables as a Series.

        When all the variables share the same type, the Series is cast to the
        matching dtype (Float64 for continuous, Int32 for integer, Boolean for
        binary), otherwise it stays Float64.

        Parameters
        ----------
        names : Sequence[str]
            Names of the variables, the order is kept.
        alias : str, default "value"
            Name of the returned Series.

        """
        values = pl.Series(alias, [self.get_variable_value(n) for n in names], dtype=pl.Float64)
        problem = self.problem
        if problem is None:
            return values
        variables = problem.variables()
        vtypes = {variables[n].vtype for n in names if n in variables}
        if len(vtypes) == 1 and all(n in variables for n in names):
            return cast_to_dtypes(values, vtypes.pop())
        return values
