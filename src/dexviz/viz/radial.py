"""
Radial (radar/star) projection of creature stats.

All creatures and all axes share one linear scale whose upper bound is the largest
base stat anywhere in the dataset, so polygons are directly comparable.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import polars as pl

from dexviz.core.constants import CHART_RADIUS, RADAR_LEVELS
from dexviz.core.grammar import RADAR_STATS, StatKey, stat_key_from_value
from dexviz.core.schema import STAT_ACCESSORS, CreatureRecord, RadialVector
from dexviz.io.dataset import CreatureDataset

from .base import CreatureData, as_frame

__all__ = [
    "dataset_stat_max",
    "project_to_radial",
    "compare_entities",
    "axis_angle",
    "radial_points",
    "reference_levels",
]


def dataset_stat_max(data: CreatureData, stat_keys: Sequence[StatKey | str] = RADAR_STATS) -> int:
    """Largest value of any of `stat_keys` across every record (0 when empty)."""
    df = as_frame(data)
    keys = [stat_key_from_value(k).value for k in stat_keys]
    if df.is_empty() or not keys:
        return 0
    out = df.select(pl.max_horizontal([pl.col(k).max() for k in keys]).alias("_m")).item()
    return int(out or 0)


def project_to_radial(
    record: CreatureRecord,
    stat_keys: Sequence[StatKey | str],
    scale_max: float,
    radius: float = CHART_RADIUS,
) -> RadialVector:
    """Map a record's stats through the linear scale [0, scale_max] -> [0, radius].

    Args:
        record (CreatureRecord): Creature to project.
        stat_keys (Sequence[StatKey | str]): Axis order.
        scale_max (float): Shared domain upper bound (see dataset_stat_max).
        radius (float): Range upper bound.

    Returns:
        RadialVector: Raw values and radii in axis order. A non-positive scale_max
        yields zero radii.

    Raises:
        InvalidSelection: If a stat key is not recognized.
    """
    keys = tuple(stat_key_from_value(k) for k in stat_keys)
    values = tuple(STAT_ACCESSORS[k](record) for k in keys)
    if scale_max > 0:
        radii = tuple(radius * v / scale_max for v in values)
    else:
        radii = tuple(0.0 for _ in values)
    return RadialVector(
        name=record.name,
        stat_keys=keys,
        values=values,
        radii=radii,
        scale_max=float(scale_max),
        radius=float(radius),
    )


def compare_entities(
    dataset: CreatureDataset,
    name_a: str,
    name_b: str,
    *,
    radius: float = CHART_RADIUS,
    stat_keys: Sequence[StatKey | str] = RADAR_STATS,
) -> tuple[RadialVector, RadialVector]:
    """Project two named creatures onto the dataset-wide scale.

    Raises:
        RecordNotFound: If either name is absent from the dataset.
    """
    first = dataset.find(name_a)
    second = dataset.find(name_b)
    scale_max = dataset_stat_max(dataset, stat_keys)
    return (
        project_to_radial(first, stat_keys, scale_max, radius),
        project_to_radial(second, stat_keys, scale_max, radius),
    )


def axis_angle(i: int, n_axes: int) -> float:
    """Angle of axis i in radians; axis 0 points straight up."""
    return 2 * math.pi * i / n_axes - math.pi / 2


def radial_points(vector: RadialVector) -> list[tuple[float, float]]:
    """Cartesian polygon vertices (y up), one per axis."""
    n = len(vector.radii)
    points: list[tuple[float, float]] = []
    for i, r in enumerate(vector.radii):
        a = axis_angle(i, n)
        points.append((r * math.cos(a), -r * math.sin(a)))
    return points


def reference_levels(scale_max: float, levels: int = RADAR_LEVELS) -> list[tuple[float, int]]:
    """(fraction of radius, rounded stat label) for each dashed reference ring, outermost first."""
    return [(lvl / levels, round(scale_max * lvl / levels)) for lvl in range(levels, 0, -1)]
