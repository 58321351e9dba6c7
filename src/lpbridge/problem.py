from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Self

from lpbridge import lp_format
from lpbridge._utils import parse_into_expr
from lpbridge.exprs.constr import Constraint

if TYPE_CHECKING:
    from pathlib import Path

    from lpbridge.exprs.expr import Expr
    from lpbridge.exprs.var import Variable
    from lpbridge.typing import Operand

_UNSAFE_FILENAME_CHARS = re.compile(r"[^\w.-]")


class ObjectiveSense(StrEnum):
    """Direction of the optimization, valued by its LP section header."""

    MINIMIZE = "Minimize"
    MAXIMIZE = "Maximize"


@dataclass(frozen=True, eq=False)
class Objective:
    """The objective of a problem. Without expression, no objective is written."""

    sense: ObjectiveSense = ObjectiveSense.MINIMIZE
    expr: Expr | None = None


class Problem:
    """A named optimization problem: an objective and an ordered list of constraints.

    Constraints are labelled ``c1``, ``c2``, ... by their position when the
    problem is written, so the order in which they are added matters.

    Attributes
    ----------
    name : str
        The problem name, written as a comment on the first line of the LP file.
    unique_name : str
        Identifier used to name the files exchanged with the solver
        (``<unique_name>.lp``, ``<unique_name>.sol``, ...). Defaults to the name,
        with the characters not allowed in a file name replaced by ``_``,
        followed by a uuid4.
    objective : Objective
        The optimization direction and expression.
    constraints : list[Constraint]
        The constraints, in insertion order.

    Examples
    --------
    >>> x, y = ContinuousVar("x"), ContinuousVar("y")
    >>> problem = Problem("p").minimize(2 * x + y).add_constr(x + y <= 10)
    >>> list(problem.variables())
    ['x', 'y']

    """

    def __init__(
        self,
        name: str,
        sense: ObjectiveSense = ObjectiveSense.MINIMIZE,
        *,
        unique_name: str | None = None,
    ) -> None:
        self.name = name
        if unique_name is None:
            safe_name = _UNSAFE_FILENAME_CHARS.sub("_", name)
            unique_name = f"{safe_name}_{uuid.uuid4()}"
        self.unique_name = unique_name
        self.objective = Objective(sense)
        self.constraints: list[Constraint] = []

    def __repr__(self) -> str:
        return (
            f"Problem(name={self.name!r}, sense={self.objective.sense.value}, "
            f"constraints={len(self.constraints)})"
        )

    def set_objective(self, expr: Operand | None, sense: ObjectiveSense | None = None) -> Self:
        """Replace the objective expression, and the direction when `sense` is given."""
        self.objective = Objective(
            self.objective.sense if sense is None else sense,
            None if expr is None else parse_into_expr(expr),
        )
        return self

    def minimize(self, expr: Operand) -> Self:
        """Minimize `expr`."""
        return self.set_objective(expr, ObjectiveSense.MINIMIZE)

    def maximize(self, expr: Operand) -> Self:
        """Maximize `expr`."""
        return self.set_objective(expr, ObjectiveSense.MAXIMIZE)

    def add_constr(self, *constraints: Constraint) -> Self:
        """Append constraints at the end of the constraint list."""
        for constraint in constraints:
            if not isinstance(constraint, Constraint):
                msg = f"Expected a Constraint, got {type(constraint).__name__}"
                raise TypeError(msg)
            self.constraints.append(constraint)
        return self

    def __iadd__(self, other: Constraint | Operand) -> Self:
        """``problem += constraint`` adds a constraint, ``problem += expr`` sets the objective."""
        if isinstance(other, Constraint):
            return self.add_constr(other)
        return self.set_objective(other)

    def expressions(self) -> list[Expr]:
        """Return every expression of the problem: the objective, then each constraint side."""
        exprs: list[Expr] = [] if self.objective.expr is None else [self.objective.expr]
        for constraint in self.constraints:
            exprs.extend((constraint.left, constraint.right))
        return exprs

    def variables(self) -> dict[str, Variable]:
        """Return the variables of the problem indexed by name.

        The objective is walked first, then each constraint in order, so the
        result is stable between calls.

        Raises
        ------
        ValueError
            If the same name is used with two different types or bounds.

        """
        variables: dict[str, Variable] = {}
        for expr in self.expressions():
            for variable in expr.iter_variables():
                known = variables.setdefault(variable.name, variable)
                if known is not variable and known.definition() != variable.definition():
                    msg = (
                        f"Variable {variable.name!r} is defined twice: "
                        f"{known!r} and {variable!r}"
                    )
                    raise ValueError(msg)
        return variables

    def to_lp(self) -> str:
        """Return the problem in the LP file format."""
        return lp_format.to_lp(self)

    def write_lp(self, path: str | Path) -> Path:
        """Write the problem to `path` in the LP file format."""
        return lp_format.write_lp(self, path)
