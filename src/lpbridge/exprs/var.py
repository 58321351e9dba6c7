from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from lpbridge.exprs.expr import Expr
from lpbridge.types import VarType


@dataclass(frozen=True, eq=False)
class Variable(Expr):
    """A reference to a named decision variable.

    Two variables are the same variable when they share a name, the bounds and
    the type only matter when the LP file is written.

    `==` is reserved for building equality constraints, use `same_as` to
    compare two variables.
    """

    vtype: ClassVar[VarType]

    name: str

    def same_as(self, other: Variable) -> bool:
        """Return True if `other` refers to the same variable."""
        return isinstance(other, Variable) and other.name == self.name

    def definition(self) -> tuple[VarType, float | None, float | None]:
        """Return the type and the bounds of the variable."""
        return (self.vtype, None, None)


@dataclass(frozen=True, eq=False)
class BinaryVar(Variable):
    """A 0/1 variable, written in the ``Binary`` section."""

    vtype: ClassVar[VarType] = VarType.BINARY


@dataclass(frozen=True, eq=False)
class _BoundedVar(Variable):
    lower_bound: float | None = None
    upper_bound: float | None = None

    def definition(self) -> tuple[VarType, float | None, float | None]:
        return (self.vtype, self.lower_bound, self.upper_bound)


@dataclass(frozen=True, eq=False)
class IntegerVar(_BoundedVar):
    """An integer variable, written in the ``Generals`` section.

    Without bounds the solver default applies (usually ``[0, +inf)``).
    """

    vtype: ClassVar[VarType] = VarType.INTEGER


@dataclass(frozen=True, eq=False)
class ContinuousVar(_BoundedVar):
    """A continuous variable. Without bounds it is declared ``free``."""

    vtype: ClassVar[VarType] = VarType.CONTINUOUS


class _ProxyVar:
    """The entry point for creating continuous variables by name.

    Examples
    --------
    >>> import lpbridge
    >>> x = lpbridge.var.x
    >>> y = lpbridge.var("y[1,2]", lower_bound=0)
    >>> str(x + y)
    'x + y[1,2]'

    """

    def __call__(
        self, name: str, /, *, lower_bound: float | None = None, upper_bound: float | None = None
    ) -> ContinuousVar:
        """Create a continuous variable using the call syntax: `var("name")`.

        This is needed when the name is not a valid Python identifier, or to set bounds.
        """
        return ContinuousVar(name, lower_bound=lower_bound, upper_bound=upper_bound)

    def __getattr__(self, name: str) -> ContinuousVar:
        """Create an unbounded continuous variable using attribute access: `var.name`."""
        if name.startswith("__"):
            raise AttributeError(name)
        return ContinuousVar(name)
