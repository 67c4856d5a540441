"""
CreatureDataset facade: one immutable creature table held in memory.

Wraps the validated Polars frame and offers the lookups the viz layer and UI need
(records by name, sorted names, typed rows). The frame is never mutated after
construction; every derived chart structure is recomputed from it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

import polars as pl

from dexviz.core.errors import RecordNotFound
from dexviz.core.schema import CreatureRecord

from .read import frame_to_records, normalize_frame, read_creatures


@dataclass(frozen=True, eq=False)
class CreatureDataset:
    """
    Read-only creature table.

    Compared by identity; use `same_rows` to compare contents.

    Attributes:
        frame (pl.DataFrame): Canonical frame (columns per CREATURES_DESC).
        source (str | None): Path the frame was loaded from, if any.

    Examples:
        >>> import polars as pl
        >>> from dexviz.io.dataset import CreatureDataset
        >>> ds = CreatureDataset.from_frame(pl.DataFrame({
        ...     "Name": ["Pikachu"], "Type_1": ["Electric"], "Type_2": [None],
        ...     "Total": [320], "HP": [35], "Attack": [55], "Defense": [40],
        ...     "Sp_Atk": [50], "Sp_Def": [50], "Speed": [90],
        ...     "Generation": [1], "isLegendary": ["False"],
        ... }))
        >>> ds.find("Pikachu").speed
        90
    """

    frame: pl.DataFrame
    source: str | None = None
    _by_name: dict[str, CreatureRecord] = field(default_factory=dict, init=False, repr=False)

    @classmethod
    def from_csv(cls, path: str | os.PathLike[str]) -> CreatureDataset:
        return cls(read_creatures(path), source=str(path))

    @classmethod
    def from_frame(cls, df: pl.DataFrame) -> CreatureDataset:
        """Build from an in-memory frame with dataset headers (validated like a CSV)."""
        return cls(normalize_frame(df))

    @property
    def height(self) -> int:
        return self.frame.height

    def is_empty(self) -> bool:
        return self.frame.is_empty()

    def records(self) -> list[CreatureRecord]:
        return frame_to_records(self.frame)

    def names(self) -> list[str]:
        """Sorted distinct creature names."""
        return sorted(set(self.frame.get_column("name").to_list()))

    def find(self, name: str) -> CreatureRecord:
        """
        Look up a creature by exact name (first match in dataset order).

        Raises:
            RecordNotFound: If no row carries that name.
        """
        if name in self._by_name:
            return self._by_name[name]
        rows = self.frame.filter(pl.col("name") == name).head(1)
        if rows.is_empty():
            raise RecordNotFound(name)
        record = frame_to_records(rows)[0]
        self._by_name[name] = record
        return record

    def same_rows(self, other: CreatureDataset) -> bool:
        """True when both datasets hold equal frames (source is ignored)."""
        return self.frame.equals(other.frame)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return not self.frame.filter(pl.col("name") == name).is_empty()
