"""
dexviz — exploratory charts over a static table of creature statistics.

## Packages
- core — Enums, selection policy, pydantic models, table descriptor, errors (zero-IO).
- io — CSV loading, frame validation, dataset facade, runtime settings.
- viz — Aggregation engine (generation trends, type matrix, radial projection),
  name search and selection state.

The Streamlit presentation layer lives in the separate ``app`` package.

## Import DAG discipline
- core <- io <- viz <- app. Lower layers never import higher ones.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
