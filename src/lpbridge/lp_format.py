"""Writer for the LP file format.

The LP format is the plain-text model format read by most MIP solvers
(Gurobi, CPLEX, CBC, ...). A problem is written as::

    \\ <problem name>

    Minimize
      obj: 2 x + y

    Subject To
      c1: x + y <= 10

    Bounds
      x free

    Generals
      n

    Binary
      b

    End

Every section header is written even when the section is empty.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from lpbridge._utils import format_number
from lpbridge.exprs.expr import Add, Expr, Literal, Mul, Sub
from lpbridge.exprs.var import BinaryVar, ContinuousVar, IntegerVar, Variable

if TYPE_CHECKING:
    from collections.abc import Iterable

    from lpbridge.exprs.constr import Constraint
    from lpbridge.problem import Problem

logger = logging.getLogger(__name__)


def format_expr(expr: Expr, *, parenthesis: bool = False) -> str:
    """Render an expression as an LP fragment.

    Parameters
    ----------
    expr : Expr
        The expression to render.
    parenthesis : bool, default False
        Wrap every compound sub-expression in parentheses and write products
        with an explicit ``*``. By default products use the implicit LP
        notation (``2 x``) and no parentheses are written.

    Notes
    -----
    A product whose left operand is the literal ``1`` is written as its right
    operand alone (``x``, not ``1 x``) and one whose left operand is ``-1`` as a
    negation (``-x``). No other simplification is performed.

    """
    open_, close = ("(", ")") if parenthesis else ("", "")
    separator = " * " if parenthesis else " "

    # Pieces are pushed in reverse order, left operands are popped first.
    parts: list[str] = []
    stack: list[Expr | str] = [expr]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue
        match item:
            case Literal(value=value):
                parts.append(format_number(value))
            case Variable(name=name):
                parts.append(name)
            case Add(left=left, right=right):
                stack.extend((close, right, " + ", left, open_))
            case Sub(left=left, right=right):
                stack.extend((close, right, " - ", left, open_))
            case Mul(left=Literal(value=1.0), right=right):
                stack.append(right)
            case Mul(left=Literal(value=-1.0), right=right):
                stack.extend((right, "-"))
            case Mul(left=left, right=right):
                stack.extend((close, right, separator, left, open_))
            case _:
                msg = f"Cannot write {type(item).__name__} in the LP format: {item!r}"
                raise TypeError(msg)
    return "".join(parts)


def format_constraint(constraint: Constraint) -> str:
    """Render a constraint as ``<left> <op> <right>``."""
    return (
        f"{format_expr(constraint.left)} {constraint.comparison.value} "
        f"{format_expr(constraint.right)}"
    )


def _format_bound(variable: IntegerVar | ContinuousVar) -> str | None:
    lower, upper = variable.lower_bound, variable.upper_bound
    if lower is not None:
        line = f"{format_number(lower)} <= {variable.name}"
        if upper is not None:
            line += f" <= {format_number(upper)}"
        return line
    elif upper is not None:
        return f"{variable.name} <= {format_number(upper)}"
    elif isinstance(variable, ContinuousVar):
        return f"{variable.name} free"
    # Integer variables without bounds keep the solver default.
    return None


def _lp_lines(problem: Problem) -> Iterable[str]:
    variables = list(problem.variables().values())

    yield f"\\ {problem.name}"
    yield ""
    yield problem.objective.sense.value
    if problem.objective.expr is not None:
        yield f"  obj: {format_expr(problem.objective.expr)}"

    yield ""
    yield "Subject To"
    for index, constraint in enumerate(problem.constraints, start=1):
        yield f"  c{index}: {format_constraint(constraint)}"

    yield ""
    yield "Bounds"
    for variable in variables:
        if isinstance(variable, IntegerVar | ContinuousVar):
            bound = _format_bound(variable)
            if bound is not None:
                yield f"  {bound}"

    yield ""
    yield "Generals"
    yield "  " + " ".join(v.name for v in variables if isinstance(v, IntegerVar))

    yield ""
    yield "Binary"
    yield "  " + " ".join(v.name for v in variables if isinstance(v, BinaryVar))

    yield ""
    yield "End"


def to_lp(problem: Problem) -> str:
    """Return `problem` written in the LP file format.

    Sections are written in a fixed order: comment with the problem name,
    objective, ``Subject To``, ``Bounds``, ``Generals``, ``Binary`` and ``End``.
    Constraints are labelled ``c1``, ``c2``, ... by position, variables are
    listed in first-seen order (see `Problem.variables`).
    """
    return "\n".join(_lp_lines(problem)) + "\n"


def write_lp(problem: Problem, path: str | Path) -> Path:
    """Write `problem` to `path` in the LP file format and return the path.

    I/O errors are propagated.
    """
    path = Path(path)
    path.write_text(to_lp(problem), encoding="utf-8")
    logger.debug("Wrote problem %r to %s", problem.name, path)
    return path
