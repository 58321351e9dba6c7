from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from lpbridge._utils import parse_into_expr

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from lpbridge.exprs.constr import Constraint
    from lpbridge.exprs.var import Variable
    from lpbridge.typing import Operand


class Expr:
    """Base class of the expression tree.

    Expressions are immutable. Arithmetic operators never modify their operands,
    they return a new node owning both of them. No simplification happens here:
    ``1 * x`` stays a ``Mul(Literal(1.0), x)`` node, the LP writer decides how
    to render it.

    Comparison operators (``<=``, ``>=``, ``==``) build a `Constraint`.

    Examples
    --------
    >>> x, y = ContinuousVar("x"), ContinuousVar("y")
    >>> expr = 2 * x + y
    >>> str(expr)
    '2 x + y'
    >>> str(expr <= 10)
    '2 x + y <= 10'

    """

    __hash__ = object.__hash__

    def __add__(self, other: Operand) -> Add:
        return Add(self, parse_into_expr(other))

    def __radd__(self, other: Operand) -> Add:
        return Add(parse_into_expr(other), self)

    def __sub__(self, other: Operand) -> Sub:
        return Sub(self, parse_into_expr(other))

    def __rsub__(self, other: Operand) -> Sub:
        return Sub(parse_into_expr(other), self)

    def __mul__(self, other: Operand) -> Mul:
        return Mul(self, parse_into_expr(other))

    def __rmul__(self, other: Operand) -> Mul:
        return Mul(parse_into_expr(other), self)

    def __neg__(self) -> Mul:
        return Mul(Literal(-1.0), self)

    def __le__(self, other: Operand) -> Constraint:
        from lpbridge.exprs.constr import Comparison, Constraint

        return Constraint(self, Comparison.LE, parse_into_expr(other))

    def __ge__(self, other: Operand) -> Constraint:
        from lpbridge.exprs.constr import Comparison, Constraint

        return Constraint(self, Comparison.GE, parse_into_expr(other))

    def __eq__(self, other: Operand) -> Constraint:  # type: ignore[override]
        from lpbridge.exprs.constr import Comparison, Constraint

        return Constraint(self, Comparison.EQ, parse_into_expr(other))

    def __str__(self) -> str:
        from lpbridge.lp_format import format_expr

        return format_expr(self)

    def iter_variables(self) -> Iterator[Variable]:
        """Yield every variable reference, depth-first and left to right.

        Duplicates are yielded as many times as they appear in the tree.
        """
        from lpbridge.exprs.var import Variable

        stack: list[Expr] = [self]
        while stack:
            node = stack.pop()
            if isinstance(node, Variable):
                yield node
            elif isinstance(node, BinaryExpr):
                stack.append(node.right)
                stack.append(node.left)


@dataclass(frozen=True, eq=False)
class Literal(Expr):
    """A numeric constant."""

    value: float


@dataclass(frozen=True, eq=False)
class BinaryExpr(Expr):
    left: Expr
    right: Expr


@dataclass(frozen=True, eq=False)
class Add(BinaryExpr):
    """``left + right``."""


@dataclass(frozen=True, eq=False)
class Sub(BinaryExpr):
    """``left - right``."""


@dataclass(frozen=True, eq=False)
class Mul(BinaryExpr):
    """``left * right``."""


def lp_sum(terms: Iterable[Operand]) -> Expr:
    """Sum `terms` into a single expression.

    The additions are nested as a balanced tree so that summing many terms does
    not produce a deeply nested expression. Once rendered, a balanced sum reads
    exactly like a left-folded one (``a + b + c + d``).

    An empty iterable sums to ``Literal(0.0)``.

    Examples
    --------
    >>> xs = [ContinuousVar(f"x{i}") for i in range(4)]
    >>> str(lp_sum(xs))
    'x0 + x1 + x2 + x3'

    """
    exprs = [parse_into_expr(term) for term in terms]
    if not exprs:
        return Literal(0.0)
    while len(exprs) > 1:
        paired: list[Expr] = [Add(a, b) for a, b in zip(exprs[0::2], exprs[1::2], strict=False)]
        if len(exprs) % 2:
            paired.append(exprs[-1])
        exprs = paired
    return exprs[0]
