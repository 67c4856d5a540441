"""
Schema validation utilities for dexviz.io.

Purpose
- Validate Polars DataFrames against the canonical creatures descriptor from dexviz.core.tables.
- Apply pragmatic checks with safe casting for scalar dtypes.

Checks performed
- Required columns present.
- When strict=True: no columns outside (required ∪ nullable).
- Scalar types ("i64", "str", "bool") are cast non-strictly; a required column that
  gains nulls from the cast (e.g., "abc" in an integer column) fails validation.
"""

from __future__ import annotations

from collections.abc import Iterable

import polars as pl

from dexviz.core.tables import CREATURES_DESC, TableDescriptor

from .errors import IoSchemaError

# Note: Polars exposes dtype singletons/classes (e.g., pl.Int64). To keep the type checker happy
# across versions, keep this mapping loosely typed.
_DTYPE_MAP: dict[str, object] = {
    "i64": pl.Int64,
    "str": pl.Utf8,
    "bool": pl.Boolean,
}


def _safe_cast(df: pl.DataFrame, col: str, target: object) -> pl.DataFrame:
    try:
        return df.with_columns(pl.col(col).cast(target, strict=False))  # type: ignore[arg-type]
    except pl.exceptions.PolarsError as exc:  # pragma: no cover - defensive
        raise IoSchemaError(f"failed to cast column {col!r} to {target}: {exc}") from exc


def _ensure_columns_present(df: pl.DataFrame, needed: Iterable[str]) -> None:
    missing = [c for c in needed if c not in df.columns]
    if missing:
        raise IoSchemaError(f"missing required columns: {missing!r}")


def _ensure_no_extra_columns(df: pl.DataFrame, allowed: set[str]) -> None:
    extras = [c for c in df.columns if c not in allowed]
    if extras:
        raise IoSchemaError(f"unexpected columns present: {extras!r} (allowed={sorted(allowed)!r})")


def _ensure_no_nulls(df: pl.DataFrame, cols: Iterable[str]) -> None:
    for col in cols:
        n_null = df.get_column(col).null_count()
        if n_null:
            raise IoSchemaError(f"column {col!r} has {n_null} null or unparseable value(s)")


def _ensure_non_negative(df: pl.DataFrame, cols: Iterable[str]) -> None:
    for col in cols:
        if df.height and (df.get_column(col).min() or 0) < 0:  # type: ignore[operator]
            raise IoSchemaError(f"column {col!r} contains negative values")


def validate_frame_against_descriptor(
    df: pl.DataFrame,
    desc: TableDescriptor = CREATURES_DESC,
    *,
    strict: bool = True,
) -> pl.DataFrame:
    """
    Validate a Polars DataFrame against a TableDescriptor.

    Args:
        df (pl.DataFrame): Frame to validate.
        desc (TableDescriptor): Canonical descriptor (defaults to the creatures table).
        strict (bool): Enforce exact column set (no extras) when True.

    Returns:
        pl.DataFrame: With safe casts applied and columns in descriptor order.

    Raises:
        IoSchemaError: If required columns are missing, extras are present under strict
            mode, or required values are null after casting.
    """
    required = set(desc.required)
    nullable = set(desc.nullable)
    _ensure_columns_present(df, desc.required)
    if strict:
        _ensure_no_extra_columns(df, required | nullable)

    for col, dtype_name in desc.columns.items():
        if col not in df.columns:
            if col in required:  # pragma: no cover - guarded above
                raise IoSchemaError(f"column {col!r} is required by schema")
            df = df.with_columns(pl.lit(None, dtype=_DTYPE_MAP[dtype_name]).alias(col))  # type: ignore[arg-type]
            continue
        expected = _DTYPE_MAP.get(dtype_name)
        if expected is None:  # pragma: no cover - defensive
            raise IoSchemaError(f"unknown descriptor dtype {dtype_name!r} for column {col!r}")
        if df.schema[col] != expected:
            df = _safe_cast(df, col, expected)

    _ensure_no_nulls(df, desc.required)
    _ensure_non_negative(df, [c for c, t in desc.columns.items() if t == "i64"])
    return df.select(list(desc.columns))
