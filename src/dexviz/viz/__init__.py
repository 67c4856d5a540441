"""
dexviz.viz — Read-only transforms from the creature table to chart-ready data.

## Responsibilities
- aggregate — per-generation averages under a top-fraction or highest-only policy.
- matrix — symmetric type co-occurrence matrix and its chord layout.
- radial — dataset-wide radar scale and per-creature radial projection.
- search — case-insensitive name filtering for the comparison pickers.
- state — mutable selection, immutable snapshots, full view recomputation.

## Import DAG discipline
- Depends on: dexviz.core, dexviz.io (dataset facade), polars (and stdlib).
- Never mutates the dataset.

## Examples
```python
from dexviz.io import CreatureDataset  # doctest: +SKIP
from dexviz.viz import build_type_matrix, group_by_generation
ds = CreatureDataset.from_csv("pokemon_alopez247.csv")  # doctest: +SKIP
group_by_generation(ds, "attack", "highest")  # doctest: +SKIP
build_type_matrix(ds).count("Water", "Ground")  # doctest: +SKIP
```
"""

from __future__ import annotations

from .aggregate import group_by_generation
from .matrix import build_type_matrix, chord_layout
from .radial import compare_entities, dataset_stat_max, project_to_radial
from .search import filter_names, resolve_selection
from .state import SelectionState, ViewSnapshot, build_views

__all__ = [
    "group_by_generation",
    "build_type_matrix",
    "chord_layout",
    "compare_entities",
    "dataset_stat_max",
    "project_to_radial",
    "filter_names",
    "resolve_selection",
    "SelectionState",
    "ViewSnapshot",
    "build_views",
]
