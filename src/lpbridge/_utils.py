from __future__ import annotations

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lpbridge.exprs.expr import Expr
    from lpbridge.typing import Operand


def parse_into_expr(value: Operand) -> Expr:
    from lpbridge.exprs.expr import Expr, Literal

    if isinstance(value, Expr):
        return value
    elif isinstance(value, float | int) and not isinstance(value, bool):
        return Literal(float(value))
    msg = f"Impossible to convert to expression: {value!r}"
    raise TypeError(msg)


def format_number(value: float) -> str:
    """Render a number the way LP files expect it.

    Integral values are written without a decimal point (``2.0`` -> ``"2"``),
    everything else uses the shortest round-tripping representation.
    """
    if math.isfinite(value) and float(value).is_integer():
        return str(int(value))
    return repr(float(value))
