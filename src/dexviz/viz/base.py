"""
Shared input coercion for the viz transforms.

Every transform accepts the dataset facade, a canonical Polars frame, or a sequence
of CreatureRecord rows, and works on a canonical frame internally.
"""

from __future__ import annotations

from collections.abc import Sequence

import polars as pl

from dexviz.core.schema import CreatureRecord
from dexviz.core.tables import CREATURES_DESC
from dexviz.io.dataset import CreatureDataset

CreatureData = CreatureDataset | pl.DataFrame | Sequence[CreatureRecord]

_SCHEMA: dict[str, type[pl.DataType]] = {
    col: {"i64": pl.Int64, "str": pl.Utf8, "bool": pl.Boolean}[dtype]
    for col, dtype in CREATURES_DESC.columns.items()
}


def records_to_frame(records: Sequence[CreatureRecord]) -> pl.DataFrame:
    """Canonical frame from typed records, preserving order."""
    rows = [r.model_dump(mode="json") for r in records]
    return pl.from_dicts(rows, schema=_SCHEMA) if rows else pl.DataFrame(schema=_SCHEMA)


def as_frame(data: CreatureData) -> pl.DataFrame:
    if isinstance(data, CreatureDataset):
        return data.frame
    if isinstance(data, pl.DataFrame):
        return data
    return records_to_frame(list(data))
