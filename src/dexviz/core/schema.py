"""
Pydantic v2 models for creature rows, selection snapshots, and derived chart data.

Validators normalize enum-like strings through the grammar helpers so that every
model carries canonical StatKey / CreatureType / SelectionPolicy values.

Responsibilities
- CreatureRecord: one immutable dataset row, with an exhaustive stat accessor map.
- SelectionParams: immutable snapshot of the UI selection threaded through the
  aggregation calls.
- GroupAggregate, TypeMatrix, RadialVector: derived, never persisted.

Style
- Zero-IO (stdlib + pydantic only).
- Models are frozen; derived structures are rebuilt rather than mutated.

References
- grammar: src/dexviz/core/grammar.py (enums and normalization helpers)
- errors: src/dexviz/core/errors.py
- tests: tests/core/*
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .errors import InvalidSelection
from .grammar import (
    CreatureType,
    SelectionPolicy,
    StatKey,
    creature_type_from_value,
    parse_policy,
    stat_key_from_value,
)

__all__ = [
    "CreatureRecord",
    "STAT_ACCESSORS",
    "SelectionParams",
    "GroupAggregate",
    "TypeMatrix",
    "RadialVector",
]


class CreatureRecord(BaseModel):
    """
    One creature row.

    Attributes:
        name (str): Unique display name.
        type_1 (CreatureType): Primary type.
        type_2 (CreatureType | None): Optional secondary type.
        hp, attack, defense, sp_atk, sp_def, speed (int): Base stats, non-negative.
        total (int): Sum of the base stats as provided by the dataset.
        generation (int): Release generation, starting at 1.
        is_legendary (bool): Legendary marker.

    Examples:
        >>> from dexviz.core.schema import CreatureRecord
        >>> r = CreatureRecord(
        ...     name="Quagsire", type_1="water", type_2="Ground",
        ...     hp=95, attack=85, defense=85, sp_atk=65, sp_def=65, speed=35,
        ...     total=430, generation=2, is_legendary=False,
        ... )
        >>> r.type_pair
        (<CreatureType.WATER: 'Water'>, <CreatureType.GROUND: 'Ground'>)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1)
    type_1: CreatureType
    type_2: CreatureType | None = None
    hp: int = Field(..., ge=0)
    attack: int = Field(..., ge=0)
    defense: int = Field(..., ge=0)
    sp_atk: int = Field(..., ge=0)
    sp_def: int = Field(..., ge=0)
    speed: int = Field(..., ge=0)
    total: int = Field(..., ge=0)
    generation: int = Field(..., ge=1)
    is_legendary: bool = False

    @field_validator("type_1", mode="before")
    @classmethod
    def _normalize_type_1(cls, v: Any) -> CreatureType:
        return creature_type_from_value(v)

    @field_validator("type_2", mode="before")
    @classmethod
    def _normalize_type_2(cls, v: Any) -> CreatureType | None:
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return creature_type_from_value(v)

    @property
    def type_pair(self) -> tuple[CreatureType, CreatureType]:
        """(primary, secondary) with the secondary defaulting to the primary."""
        return (self.type_1, self.type_2 or self.type_1)

    def stat(self, key: StatKey | str) -> int:
        """Value of a stat by key (any spelling accepted by stat_key_from_value)."""
        return STAT_ACCESSORS[stat_key_from_value(key)](self)


STAT_ACCESSORS: Final[dict[StatKey, Callable[[CreatureRecord], int]]] = {
    StatKey.HP: lambda r: r.hp,
    StatKey.ATTACK: lambda r: r.attack,
    StatKey.DEFENSE: lambda r: r.defense,
    StatKey.SP_ATK: lambda r: r.sp_atk,
    StatKey.SP_DEF: lambda r: r.sp_def,
    StatKey.SPEED: lambda r: r.speed,
    StatKey.TOTAL: lambda r: r.total,
}

if set(STAT_ACCESSORS) != set(StatKey):  # pragma: no cover - import-time guard
    raise RuntimeError("STAT_ACCESSORS must cover every StatKey")


class SelectionParams(BaseModel):
    """
    Immutable snapshot of the dashboard selection.

    Attributes:
        stat_key (StatKey): Stat driving the generation trend.
        policy (SelectionPolicy): Top-fraction or highest-only rule.
        exclude_legendary (bool): Drop legendary records before grouping.
        entity_a (str | None): First compared creature name.
        entity_b (str | None): Second compared creature name.

    Raises:
        pydantic.ValidationError: If stat_key or policy is not recognized.

    Examples:
        >>> from dexviz.core.schema import SelectionParams
        >>> p = SelectionParams(stat_key="Attack", policy="0.5")
        >>> (p.stat_key.value, p.policy.fraction)
        ('attack', 0.5)
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    stat_key: StatKey = StatKey.TOTAL
    policy: SelectionPolicy = Field(default_factory=lambda: SelectionPolicy(0.1))
    exclude_legendary: bool = False
    entity_a: str | None = None
    entity_b: str | None = None

    @field_validator("stat_key", mode="before")
    @classmethod
    def _normalize_stat(cls, v: Any) -> StatKey:
        return stat_key_from_value(v)

    @field_validator("policy", mode="before")
    @classmethod
    def _normalize_policy(cls, v: Any) -> SelectionPolicy:
        return parse_policy(v)


class GroupAggregate(BaseModel):
    """
    Average of the selected stat for one generation.

    Attributes:
        generation (int): Generation number.
        value (float): Mean of the stat over the selected subset.
        label (str | None): Name of the top record under the highest-only policy.
        subset_size (int): Records averaged.
        partition_size (int): Records in the generation after filtering.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    generation: int
    value: float
    label: str | None = None
    subset_size: int = Field(..., ge=1)
    partition_size: int = Field(..., ge=1)

    @model_validator(mode="after")
    def _subset_within_partition(self) -> GroupAggregate:
        if self.subset_size > self.partition_size:
            raise ValueError("subset_size cannot exceed partition_size")
        return self


class TypeMatrix(BaseModel):
    """
    Symmetric co-occurrence counts of primary/secondary type pairings.

    Attributes:
        types (list[str]): Sorted distinct type labels; row/column order.
        counts (list[list[int]]): Square matrix; counts[i][j] == counts[j][i].

    Notes:
        A record paired with itself (no secondary type) adds 1 on the diagonal;
        a dual-type record adds 1 to both mirrored off-diagonal cells.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    types: list[str]
    counts: list[list[int]]

    @model_validator(mode="after")
    def _square(self) -> TypeMatrix:
        n = len(self.types)
        if len(self.counts) != n or any(len(row) != n for row in self.counts):
            raise ValueError(f"counts must be a {n}x{n} matrix")
        return self

    def index(self, type_label: str) -> int:
        try:
            return self.types.index(type_label)
        except ValueError as exc:
            raise InvalidSelection(f"type {type_label!r} not present in matrix") from exc

    def count(self, a: str, b: str) -> int:
        return self.counts[self.index(a)][self.index(b)]

    def row_total(self, type_label: str) -> int:
        """Appearances of a type as primary or secondary (self-pairs counted once)."""
        return sum(self.counts[self.index(type_label)])

    def total(self) -> int:
        return sum(sum(row) for row in self.counts)

    def is_symmetric(self) -> bool:
        n = len(self.types)
        return all(self.counts[i][j] == self.counts[j][i] for i in range(n) for j in range(i))


class RadialVector(BaseModel):
    """
    One creature's stats projected onto the shared radar scale.

    Attributes:
        name (str): Creature name.
        stat_keys (tuple[StatKey, ...]): Axis order.
        values (tuple[int, ...]): Raw stat values in axis order.
        radii (tuple[float, ...]): values scaled from [0, scale_max] to [0, radius].
        scale_max (float): Dataset-wide maximum across all radar stats.
        radius (float): Outer radius of the chart.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    stat_keys: tuple[StatKey, ...]
    values: tuple[int, ...]
    radii: tuple[float, ...]
    scale_max: float
    radius: float
