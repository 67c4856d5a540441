"""
Canonical dexviz grammar and helpers.

Defines the closed set of stat keys, the creature type palette, and the
per-generation selection policy. Includes zero-IO normalization helpers used by
the schema models, the loader, and the aggregation engine.

Responsibilities
- Define enums for stat keys and creature types.
- Normalize user- or file-supplied spellings ("Sp. Atk", "Sp_Atk", "sp_atk") to
  a single StatKey.
- Parse selection policies (a fraction in (0, 1] or the "highest" sentinel).

Naming
------
- Enum classes: PascalCase; members: UPPER_SNAKE.
- StatKey values are the lower_snake column names used by the loaded frame.
- CreatureType values are the labels as they appear in the dataset ("Water").

Examples
--------
>>> from dexviz.core.grammar import StatKey, stat_key_from_value, parse_policy
>>> stat_key_from_value("Sp. Atk") is StatKey.SP_ATK
True
>>> parse_policy("0.25").subset_size(10)
3
>>> parse_policy("highest").highest_only
True
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Final

from .constants import HIGHEST_ONLY
from .errors import InvalidSelection

__all__ = [
    "StatKey",
    "CreatureType",
    "RADAR_STATS",
    "SelectionPolicy",
    "normalize_token",
    "stat_key_from_value",
    "stat_label",
    "creature_type_from_value",
    "parse_policy",
]


class StatKey(Enum):
    """
    Numeric stat columns that can drive the trend chart.

    The six base stats feed the radar comparison; TOTAL is the derived sum and is
    only used for generation trends.
    """

    HP = "hp"
    ATTACK = "attack"
    DEFENSE = "defense"
    SP_ATK = "sp_atk"
    SP_DEF = "sp_def"
    SPEED = "speed"
    TOTAL = "total"


# Radar axes, clockwise from the top.
RADAR_STATS: Final[tuple[StatKey, ...]] = (
    StatKey.HP,
    StatKey.ATTACK,
    StatKey.DEFENSE,
    StatKey.SP_ATK,
    StatKey.SP_DEF,
    StatKey.SPEED,
)

_STAT_LABELS: Final[dict[StatKey, str]] = {
    StatKey.HP: "HP",
    StatKey.ATTACK: "Attack",
    StatKey.DEFENSE: "Defense",
    StatKey.SP_ATK: "Sp. Atk",
    StatKey.SP_DEF: "Sp. Def",
    StatKey.SPEED: "Speed",
    StatKey.TOTAL: "Total",
}


class CreatureType(Enum):
    """
    Elemental type labels assigned as primary and optional secondary type.
    """

    BUG = "Bug"
    DARK = "Dark"
    DRAGON = "Dragon"
    ELECTRIC = "Electric"
    FAIRY = "Fairy"
    FIGHTING = "Fighting"
    FIRE = "Fire"
    FLYING = "Flying"
    GHOST = "Ghost"
    GRASS = "Grass"
    GROUND = "Ground"
    ICE = "Ice"
    NORMAL = "Normal"
    POISON = "Poison"
    PSYCHIC = "Psychic"
    ROCK = "Rock"
    STEEL = "Steel"
    WATER = "Water"


_NON_ALNUM_RE: Final[re.Pattern[str]] = re.compile(r"[^a-z0-9]+")

_TYPES_BY_LOWER: Final[dict[str, CreatureType]] = {t.value.lower(): t for t in CreatureType}


def normalize_token(value: str) -> str:
    """
    Fold a free-form label to lower_snake.

    Args:
      value (str): Raw label, e.g. "Sp. Atk" or "Type 1".

    Returns:
      str: Lowercased label with runs of non-alphanumerics collapsed to "_".

    Examples:
      >>> normalize_token("Sp. Atk")
      'sp_atk'
      >>> normalize_token("  Type 2 ")
      'type_2'
    """
    return _NON_ALNUM_RE.sub("_", value.strip().lower()).strip("_")


def stat_key_from_value(value: StatKey | str) -> StatKey:
    """
    Resolve a stat key from an enum member or any accepted spelling.

    Args:
      value (StatKey | str): Enum member, column name, or display label.

    Returns:
      StatKey: The matching member.

    Raises:
      InvalidSelection: If the value does not name a stat.
    """
    if isinstance(value, StatKey):
        return value
    if not isinstance(value, str):
        raise InvalidSelection(f"stat key must be a string (got: {value!r})")
    try:
        return StatKey(normalize_token(value))
    except ValueError as exc:
        allowed = ", ".join(k.value for k in StatKey)
        raise InvalidSelection(f"unknown stat key {value!r} (expected one of: {allowed})") from exc


def stat_label(key: StatKey | str) -> str:
    """Display label for a stat key ("sp_atk" -> "Sp. Atk")."""
    return _STAT_LABELS[stat_key_from_value(key)]


def creature_type_from_value(value: CreatureType | str) -> CreatureType:
    """
    Resolve a creature type from an enum member or a case-insensitive label.

    Raises:
      InvalidSelection: If the label is not a known type.
    """
    if isinstance(value, CreatureType):
        return value
    found = _TYPES_BY_LOWER.get(str(value).strip().lower())
    if found is None:
        raise InvalidSelection(f"unknown creature type {value!r}")
    return found


@dataclass(slots=True, frozen=True)
class SelectionPolicy:
    """
    Rule selecting which records of a generation feed its average.

    Attributes:
        fraction (float | None): Share of the top-ranked records to keep, in (0, 1].
            None means "highest only": keep exactly the single top record.
    """

    fraction: float | None = None

    @property
    def highest_only(self) -> bool:
        return self.fraction is None

    @property
    def value(self) -> str:
        """Serialized form accepted by parse_policy."""
        if self.fraction is None:
            return HIGHEST_ONLY
        return format(self.fraction, "g")

    def subset_size(self, partition_size: int) -> int:
        """
        Number of top-ranked records kept from a partition.

        Returns ceil(fraction * partition_size), never less than 1. The product is
        rounded before ceil so that 0.7 * 10 keeps 7 rather than 8.
        """
        if self.fraction is None:
            return 1
        return max(1, math.ceil(round(self.fraction * partition_size, 9)))


def parse_policy(value: SelectionPolicy | float | str) -> SelectionPolicy:
    """
    Parse a selection policy.

    Args:
      value: A SelectionPolicy, a fraction in (0, 1], a numeric string such as "0.1",
        or the sentinel "highest" ("highest-only" / "highest_only" also accepted).

    Returns:
      SelectionPolicy

    Raises:
      InvalidSelection: If the value is not a recognized policy.

    Examples:
      >>> parse_policy(0.5).fraction
      0.5
      >>> parse_policy("Highest-Only").highest_only
      True
    """
    if isinstance(value, SelectionPolicy):
        return value
    if isinstance(value, bool):
        raise InvalidSelection(f"unrecognized selection policy {value!r}")
    if isinstance(value, str):
        token = normalize_token(value)
        if token in (HIGHEST_ONLY, "highest_only"):
            return SelectionPolicy(None)
        try:
            fraction = float(value)
        except ValueError as exc:
            raise InvalidSelection(f"unrecognized selection policy {value!r}") from exc
    elif isinstance(value, (int, float)):
        fraction = float(value)
    else:
        raise InvalidSelection(f"unrecognized selection policy {value!r}")
    if math.isnan(fraction) or not 0.0 < fraction <= 1.0:
        raise InvalidSelection(f"selection fraction must be in (0, 1] (got: {value!r})")
    return SelectionPolicy(fraction)
