"""
Read utilities for the creature CSV.

Overview
- read_creatures(): CSV -> validated Polars DataFrame with canonical lower_snake columns.
- normalize_frame(): header aliasing, type/legendary coercion, and validation for a frame
  that is already in memory.
- frame_to_records(): materialize typed CreatureRecord rows.

Parsing rules
- Every cell is read as a string first, then cast per dexviz.core.tables.CREATURES_DESC,
  so malformed numbers surface as IoSchemaError instead of silent float inference.
- Headers are matched after grammar.normalize_token ("Sp. Atk" == "Sp_Atk" == "sp_atk").
- Empty secondary types become null; type labels match case-insensitively and are
  rewritten to their canonical spelling ("water" -> "Water"). Unknown labels are rejected.
- The legendary marker is true only for the string "True" (or a native boolean true).

Import DAG discipline
- Depends on stdlib, polars, pydantic, and dexviz.core; does not import viz or app.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import polars as pl
from pydantic import ValidationError

from dexviz.core.grammar import CreatureType, normalize_token
from dexviz.core.schema import CreatureRecord
from dexviz.core.tables import CREATURES_DESC, HEADER_ALIASES

from .errors import IoSchemaError
from .validate import validate_frame_against_descriptor

logger = logging.getLogger(__name__)


def _rename_headers(df: pl.DataFrame) -> pl.DataFrame:
    renames: dict[str, str] = {}
    taken: set[str] = set()
    for col in df.columns:
        canonical = HEADER_ALIASES.get(normalize_token(col))
        if canonical is None or canonical in taken:
            continue
        taken.add(canonical)
        if canonical != col:
            renames[col] = canonical
    df = df.rename(renames)
    return df.select([c for c in df.columns if c in CREATURES_DESC.columns])


def _coerce_legendary(df: pl.DataFrame) -> pl.DataFrame:
    if "is_legendary" not in df.columns or df.schema["is_legendary"] == pl.Boolean:
        return df
    return df.with_columns(
        (pl.col("is_legendary").cast(pl.Utf8).str.strip_chars() == "True")
        .fill_null(False)
        .alias("is_legendary")
    )


def _coerce_types(df: pl.DataFrame) -> pl.DataFrame:
    exprs: list[pl.Expr] = []
    for col in ("name", "type_1", "type_2"):
        if col not in df.columns:
            continue
        stripped = pl.col(col).cast(pl.Utf8).str.strip_chars()
        exprs.append(pl.when(stripped == "").then(None).otherwise(stripped).alias(col))
    return df.with_columns(exprs) if exprs else df


_TYPE_LABELS: dict[str, str] = {t.value.lower(): t.value for t in CreatureType}


def _canonicalize_type_labels(df: pl.DataFrame) -> pl.DataFrame:
    exprs: list[pl.Expr] = []
    for col in ("type_1", "type_2"):
        if col not in df.columns:
            continue
        lowered = df.get_column(col).cast(pl.Utf8).str.to_lowercase()
        unknown = df.get_column(col).filter(
            lowered.is_not_null() & ~lowered.is_in(list(_TYPE_LABELS))
        )
        if unknown.len():
            labels = sorted(set(unknown.cast(pl.Utf8).to_list()))
            raise IoSchemaError(f"{col}: unknown creature type(s) {labels}")
        exprs.append(
            pl.col(col)
            .cast(pl.Utf8)
            .str.to_lowercase()
            .replace_strict(_TYPE_LABELS, default=None, return_dtype=pl.Utf8)
            .alias(col)
        )
    return df.with_columns(exprs) if exprs else df


def normalize_frame(df: pl.DataFrame) -> pl.DataFrame:
    """
    Canonicalize and validate an in-memory creature frame.

    Args:
        df (pl.DataFrame): Raw frame with dataset headers (any accepted spelling).

    Returns:
        pl.DataFrame: Columns and dtypes per CREATURES_DESC, in descriptor order.

    Raises:
        IoSchemaError: If required columns are missing, values cannot be cast, or a
            type label is not a known creature type.
    """
    df = _rename_headers(df)
    df = _coerce_types(df)
    df = _canonicalize_type_labels(df)
    df = _coerce_legendary(df)
    df = validate_frame_against_descriptor(df, CREATURES_DESC, strict=True)

    n_dupes = df.height - df.get_column("name").n_unique()
    if n_dupes:
        logger.warning("%d duplicate creature name(s); lookups return the first match", n_dupes)
    return df


def read_creatures(path: str | os.PathLike[str]) -> pl.DataFrame:
    """
    Read the creature CSV into a validated DataFrame.

    Args:
        path: CSV file path.

    Returns:
        pl.DataFrame: Canonical frame (see normalize_frame).

    Raises:
        FileNotFoundError: If the file does not exist.
        IoSchemaError: If the contents fail validation.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Required file not found: {p}")
    try:
        raw = pl.read_csv(p, infer_schema_length=0)
    except pl.exceptions.PolarsError as exc:
        raise IoSchemaError(f"failed to parse {p}: {exc}") from exc
    df = normalize_frame(raw)
    logger.info("loaded %d creatures from %s", df.height, p)
    return df


def frame_to_records(df: pl.DataFrame) -> list[CreatureRecord]:
    """
    Materialize typed records from a canonical frame, preserving row order.

    Raises:
        IoSchemaError: If a row violates the CreatureRecord model (e.g., unknown type label).
    """
    cols = [c for c in CREATURES_DESC.columns if c in df.columns]
    records: list[CreatureRecord] = []
    for row in df.select(cols).iter_rows(named=True):
        try:
            records.append(CreatureRecord(**row))
        except ValidationError as exc:
            raise IoSchemaError(f"invalid creature row {row.get('name')!r}: {exc}") from exc
    return records
