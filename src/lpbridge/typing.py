from __future__ import annotations

from typing import TYPE_CHECKING, Literal, TypeAlias

if TYPE_CHECKING:
    from lpbridge.exprs.expr import Expr

VariableType: TypeAlias = Literal["CONTINUOUS", "INTEGER", "BINARY"]

# Anything accepted on either side of an arithmetic or comparison operator
Operand: TypeAlias = "Expr | float | int"
