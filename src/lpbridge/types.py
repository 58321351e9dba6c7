from __future__ import annotations

from enum import StrEnum

import polars as pl

from lpbridge.typing import VariableType


class VarType(StrEnum):
    """Type of a decision variable."""

    CONTINUOUS = "CONTINUOUS"
    INTEGER = "INTEGER"
    BINARY = "BINARY"


def cast_to_dtypes(series: pl.Series, variable_type: VarType | VariableType) -> pl.Series:
    """Cast a series of solution values to the data type matching `variable_type`.

    Solvers report integer and binary values as floats that may carry some
    numerical noise (``0.9999999``), they are rounded before the cast.
    """
    if variable_type == "INTEGER":
        return series.round(0).cast(pl.Int32)
    elif variable_type == "BINARY":
        return series.round(0).cast(pl.Int8).cast(pl.Boolean)
    else:
        return series.cast(pl.Float64)
