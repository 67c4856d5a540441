"""
dexviz core defaults.

Defines selection defaults, the percentile menu, and the type color palette
consumed by the viz and app layers. This module is zero-IO and uses only the
Python standard library.

Notes:
    - Selection defaults mirror the initial state of the dashboard: total stat,
      top 10%, legendaries included, Abomasnow compared against itself.
    - Palette colors are the conventional type colors; unknown labels fall back
      to a categorical scheme in the presentation layer.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_STAT",
    "DEFAULT_POLICY",
    "DEFAULT_ENTITY",
    "HIGHEST_ONLY",
    "PERCENTILE_CHOICES",
    "CHART_RADIUS",
    "RADAR_LEVELS",
    "PAD_ANGLE",
    "TYPE_COLORS",
    "FALLBACK_COLORS",
]

DEFAULT_STAT: str = "total"

DEFAULT_POLICY: str = "0.1"

DEFAULT_ENTITY: str = "Abomasnow"

# Sentinel policy value: keep only the top record of each generation.
HIGHEST_ONLY: str = "highest"

# (policy value, menu label) in display order.
PERCENTILE_CHOICES: tuple[tuple[str, str], ...] = (
    ("1", "All"),
    ("0.5", "Top 50%"),
    ("0.25", "Top 25%"),
    ("0.1", "Top 10%"),
    ("0.05", "Top 5%"),
    (HIGHEST_ONLY, "Highest only"),
)

CHART_RADIUS: float = 150.0

# Dashed reference rings drawn behind the radar polygons.
RADAR_LEVELS: int = 5

# Gap between neighbouring chord groups, in radians.
PAD_ANGLE: float = 0.05

TYPE_COLORS: dict[str, str] = {
    "Fire": "#F08030",
    "Water": "#6890F0",
    "Grass": "#78C850",
    "Electric": "#F8D030",
    "Ice": "#98D8D8",
    "Fighting": "#C03028",
    "Poison": "#A040A0",
    "Ground": "#E0C068",
    "Flying": "#A890F0",
    "Psychic": "#F85888",
    "Bug": "#A8B820",
    "Rock": "#B8A038",
    "Ghost": "#705898",
    "Dragon": "#7038F8",
    "Dark": "#705848",
    "Steel": "#B8B8D0",
    "Fairy": "#EE99AC",
    "Normal": "#A8A878",
}

# category10, used when a label has no palette entry.
FALLBACK_COLORS: tuple[str, ...] = (
    "#1f77b4",
    "#ff7f0e",
    "#2ca02c",
    "#d62728",
    "#9467bd",
    "#8c564b",
    "#e377c2",
    "#7f7f7f",
    "#bcbd22",
    "#17becf",
)
