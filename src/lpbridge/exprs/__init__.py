"""Lpbridge Expressions."""

from lpbridge.exprs.constr import Comparison, Constraint
from lpbridge.exprs.expr import Add, BinaryExpr, Expr, Literal, Mul, Sub, lp_sum
from lpbridge.exprs.var import BinaryVar, ContinuousVar, IntegerVar, Variable, _ProxyVar

var = _ProxyVar()

__all__ = [
    "Add",
    "BinaryExpr",
    "BinaryVar",
    "Comparison",
    "Constraint",
    "ContinuousVar",
    "Expr",
    "IntegerVar",
    "Literal",
    "Mul",
    "Sub",
    "Variable",
    "lp_sum",
    "var",
]
