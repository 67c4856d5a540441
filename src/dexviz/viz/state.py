"""
Selection state and full view recomputation.

SelectionState is the single mutable selection owned by the UI (one per session).
Every change is followed by build_views() on a fresh immutable SelectionParams
snapshot; nothing derived is cached or patched incrementally.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from dexviz.core.constants import (
    CHART_RADIUS,
    DEFAULT_ENTITY,
    DEFAULT_POLICY,
    DEFAULT_STAT,
    PAD_ANGLE,
)
from dexviz.core.errors import RecordNotFound
from dexviz.core.grammar import SelectionPolicy, StatKey, parse_policy, stat_key_from_value
from dexviz.core.schema import GroupAggregate, RadialVector, SelectionParams, TypeMatrix
from dexviz.io.dataset import CreatureDataset

from .aggregate import group_by_generation_for
from .matrix import ChordLayout, build_type_matrix, chord_layout
from .radial import compare_entities

__all__ = ["SelectionState", "ViewSnapshot", "build_views"]


@dataclass
class SelectionState:
    """
    Mutable dashboard selection.

    Setters validate their input and raise InvalidSelection on unknown stat keys or
    policies, leaving the previous value in place.
    """

    stat_key: StatKey = field(default_factory=lambda: stat_key_from_value(DEFAULT_STAT))
    policy: SelectionPolicy = field(default_factory=lambda: parse_policy(DEFAULT_POLICY))
    exclude_legendary: bool = False
    entity_a: str | None = DEFAULT_ENTITY
    entity_b: str | None = DEFAULT_ENTITY

    def set_stat(self, value: StatKey | str) -> None:
        self.stat_key = stat_key_from_value(value)

    def set_policy(self, value: SelectionPolicy | float | str) -> None:
        self.policy = parse_policy(value)

    def set_exclude_legendary(self, value: bool) -> None:
        self.exclude_legendary = bool(value)

    def set_entities(self, entity_a: str | None, entity_b: str | None) -> None:
        self.entity_a = entity_a
        self.entity_b = entity_b

    def snapshot(self) -> SelectionParams:
        return SelectionParams(
            stat_key=self.stat_key,
            policy=self.policy,
            exclude_legendary=self.exclude_legendary,
            entity_a=self.entity_a,
            entity_b=self.entity_b,
        )


@dataclass(frozen=True)
class ViewSnapshot:
    """Everything the three charts draw for one selection snapshot.

    Attributes:
        params (SelectionParams): Snapshot the views were computed from.
        aggregates (list[GroupAggregate]): Generation trend, by generation ascending.
        matrix (TypeMatrix): Type co-occurrence counts.
        chords (ChordLayout): Arc/ribbon spans for the chord diagram.
        comparison (tuple[RadialVector, RadialVector] | None): Radar polygons, or None
            when an entity is missing or unselected.
        comparison_error (str | None): User-facing reason the comparison is absent.
    """

    params: SelectionParams
    aggregates: list[GroupAggregate]
    matrix: TypeMatrix
    chords: ChordLayout
    comparison: tuple[RadialVector, RadialVector] | None
    comparison_error: str | None = None


def build_views(
    dataset: CreatureDataset,
    params: SelectionParams,
    *,
    radius: float = CHART_RADIUS,
    pad_angle: float = PAD_ANGLE,
) -> ViewSnapshot:
    """Recompute all derived chart data from scratch.

    Raises:
        EmptyDataset: If the dataset has no rows.

    Notes:
        A missing comparison entity does not raise; its RecordNotFound message is
        returned in comparison_error for the UI to display.
    """
    aggregates = group_by_generation_for(dataset, params)
    matrix = build_type_matrix(dataset)
    chords = chord_layout(matrix, pad_angle=pad_angle)

    comparison: tuple[RadialVector, RadialVector] | None = None
    error: str | None = None
    if params.entity_a is None or params.entity_b is None:
        error = "Select two creatures to compare."
    else:
        try:
            comparison = compare_entities(dataset, params.entity_a, params.entity_b, radius=radius)
        except RecordNotFound as exc:
            error = str(exc)

    return ViewSnapshot(
        params=params,
        aggregates=aggregates,
        matrix=matrix,
        chords=chords,
        comparison=comparison,
        comparison_error=error,
    )
