"""
dexviz.io — Loading layer for the creature dataset.

## Responsibilities
- Read the delimited creature file with Polars and normalize headers to canonical columns.
- Validate frames against dexviz.core.tables.CREATURES_DESC with safe casts.
- Hold the single immutable dataset behind the CreatureDataset facade.
- Provide DexSettings (env > TOML > defaults).

## Public API
- DexSettings — Runtime configuration.
- CreatureDataset — Read-only dataset facade (find/names/records).
- read_creatures — CSV -> canonical DataFrame.

## Import DAG discipline
- Depends only on stdlib, polars, pydantic, and dexviz.core.*.
- MUST NOT import higher layers: viz or app.

## Examples
```python
from dexviz.io import CreatureDataset, DexSettings

settings = DexSettings.load()  # doctest: +SKIP
ds = CreatureDataset.from_csv(settings.data_path)  # doctest: +SKIP
ds.find("Abomasnow").type_pair  # doctest: +SKIP
```
"""

from __future__ import annotations

from .config import DexSettings
from .dataset import CreatureDataset
from .read import read_creatures

__all__ = [
    "DexSettings",
    "CreatureDataset",
    "read_creatures",
]
