from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lpbridge.exprs.expr import Expr


class Comparison(StrEnum):
    """Comparison operator of a constraint, valued by its LP file symbol."""

    LE = "<="
    GE = ">="
    EQ = "="


@dataclass(frozen=True, eq=False)
class Constraint:
    """A ``left <op> right`` relation between two expressions.

    Constraints are only rendered, never evaluated. They have no truth value:
    writing ``if x == y:`` is almost always a mistake, so it raises.
    """

    left: Expr
    comparison: Comparison
    right: Expr

    def __bool__(self) -> bool:
        msg = (
            "The truth value of a constraint is ambiguous.\n"
            "Add it to a problem with `Problem.add_constr()` or compare variables with `same_as()`"
        )
        raise TypeError(msg)

    def __str__(self) -> str:
        from lpbridge.lp_format import format_constraint

        return format_constraint(self)
