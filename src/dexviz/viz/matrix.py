"""
Type co-occurrence matrix and chord layout.

build_type_matrix() counts how often each pair of types appears together. A
creature without a secondary type is paired with itself. chord_layout() turns the
matrix into angular spans (groups around the circle, ribbons between them) that
the presentation layer draws as arcs and ribbons.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import polars as pl

from dexviz.core.constants import PAD_ANGLE
from dexviz.core.schema import TypeMatrix

from .base import CreatureData, as_frame

logger = logging.getLogger(__name__)

__all__ = [
    "build_type_matrix",
    "chord_layout",
    "ChordGroup",
    "ChordEnd",
    "Chord",
    "ChordLayout",
]


def build_type_matrix(data: CreatureData) -> TypeMatrix:
    """Build the symmetric type pairing matrix.

    Args:
        data (CreatureData): Dataset facade, canonical frame, or CreatureRecord rows.

    Returns:
        TypeMatrix: Types sorted alphabetically; counts[i][j] is the number of records
        whose {primary, secondary} set equals {types[i], types[j]}.

    Notes:
        Rows without a primary type are skipped.
    """
    df = as_frame(data)
    primaries = df.get_column("type_1").drop_nulls().to_list()
    secondaries = df.get_column("type_2").drop_nulls().to_list()
    types = sorted(set(primaries) | set(secondaries))
    index = {t: i for i, t in enumerate(types)}
    counts = [[0] * len(types) for _ in types]

    n_skipped = df.get_column("type_1").null_count()
    if n_skipped:
        logger.debug("skipping %d record(s) without a primary type", n_skipped)

    pairs = (
        df.filter(pl.col("type_1").is_not_null())
        .select(
            pl.col("type_1").alias("t1"),
            pl.coalesce("type_2", "type_1").alias("t2"),
        )
        .group_by(["t1", "t2"])
        .agg(pl.len().alias("n"))
    )
    for t1, t2, n in pairs.iter_rows():
        i, j = index[t1], index[t2]
        counts[i][j] += n
        if i != j:
            counts[j][i] += n

    return TypeMatrix(types=types, counts=counts)


@dataclass(frozen=True)
class ChordGroup:
    """Arc for one type; value is the type's row total."""

    index: int
    type_label: str
    value: int
    start_angle: float
    end_angle: float


@dataclass(frozen=True)
class ChordEnd:
    """Sub-span of group `index` devoted to its pairing with `other`."""

    index: int
    other: int
    value: int
    start_angle: float
    end_angle: float


@dataclass(frozen=True)
class Chord:
    source: ChordEnd
    target: ChordEnd


@dataclass(frozen=True)
class ChordLayout:
    groups: list[ChordGroup]
    chords: list[Chord]


def chord_layout(matrix: TypeMatrix, pad_angle: float = PAD_ANGLE) -> ChordLayout:
    """Lay the matrix out around a circle.

    Angles are radians, clockwise from 12 o'clock. Groups follow type order and are
    separated by pad_angle; inside a group, sub-spans are ordered by count descending.
    One chord is emitted per unordered pair with a non-zero count, largest first.
    """
    n = len(matrix.types)
    totals = [sum(row) for row in matrix.counts]
    grand = sum(totals)
    k = max(0.0, 2 * math.pi - pad_angle * n) / grand if grand else 0.0

    groups: list[ChordGroup] = []
    ends: dict[tuple[int, int], ChordEnd] = {}
    x = 0.0
    for i in range(n):
        x0 = x
        row = matrix.counts[i]
        for j in sorted(range(n), key=lambda j: -row[j]):
            a0 = x
            x += row[j] * k
            ends[(i, j)] = ChordEnd(index=i, other=j, value=row[j], start_angle=a0, end_angle=x)
        groups.append(
            ChordGroup(
                index=i,
                type_label=matrix.types[i],
                value=totals[i],
                start_angle=x0,
                end_angle=x,
            )
        )
        x += pad_angle

    chords = [
        Chord(source=ends[(i, j)], target=ends[(j, i)])
        for i in range(n)
        for j in range(i, n)
        if matrix.counts[i][j]
    ]
    chords.sort(key=lambda c: c.source.value, reverse=True)
    return ChordLayout(groups=groups, chords=chords)
