from __future__ import annotations

import math

import pytest

from dexviz.core.errors import InvalidSelection
from dexviz.core.grammar import (
    RADAR_STATS,
    CreatureType,
    SelectionPolicy,
    StatKey,
    creature_type_from_value,
    normalize_token,
    parse_policy,
    stat_key_from_value,
    stat_label,
)


def test_normalize_token_folds_punctuation_and_case() -> None:
    assert normalize_token("Sp. Atk") == "sp_atk"
    assert normalize_token("  Type 2 ") == "type_2"
    assert normalize_token("isLegendary") == "islegendary"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("total", StatKey.TOTAL),
        ("Attack", StatKey.ATTACK),
        ("Sp. Atk", StatKey.SP_ATK),
        ("Sp_Def", StatKey.SP_DEF),
        ("HP", StatKey.HP),
        (StatKey.SPEED, StatKey.SPEED),
    ],
)
def test_stat_key_from_value_accepts_spellings(raw, expected) -> None:
    assert stat_key_from_value(raw) is expected


def test_stat_key_from_value_rejects_unknown() -> None:
    with pytest.raises(InvalidSelection):
        stat_key_from_value("luck")
    with pytest.raises(InvalidSelection):
        stat_key_from_value(3)  # type: ignore[arg-type]


def test_stat_labels_and_radar_axes() -> None:
    assert stat_label("sp_atk") == "Sp. Atk"
    assert stat_label(StatKey.TOTAL) == "Total"
    # Radar uses the six base stats only, HP first
    assert RADAR_STATS[0] is StatKey.HP
    assert StatKey.TOTAL not in RADAR_STATS
    assert len(RADAR_STATS) == 6


def test_creature_type_case_insensitive() -> None:
    assert creature_type_from_value("water") is CreatureType.WATER
    assert creature_type_from_value(" Ground ") is CreatureType.GROUND
    with pytest.raises(InvalidSelection):
        creature_type_from_value("Sound")


def test_parse_policy_fractions_and_sentinel() -> None:
    assert parse_policy("0.1").fraction == pytest.approx(0.1)
    assert parse_policy(1).fraction == 1.0
    assert parse_policy(0.5) == SelectionPolicy(0.5)
    for token in ("highest", "Highest-Only", "highest_only"):
        assert parse_policy(token).highest_only
    assert parse_policy("highest").value == "highest"
    assert parse_policy("0.25").value == "0.25"


@pytest.mark.parametrize("bad", [0, 0.0, -0.1, 1.5, "abc", "", math.nan, True, None])
def test_parse_policy_rejects_out_of_range(bad) -> None:
    with pytest.raises(InvalidSelection):
        parse_policy(bad)  # type: ignore[arg-type]


def test_subset_size_is_ceil_and_at_least_one() -> None:
    assert SelectionPolicy(0.5).subset_size(3) == 2
    assert SelectionPolicy(0.1).subset_size(3) == 1
    assert SelectionPolicy(0.25).subset_size(10) == 3
    assert SelectionPolicy(1.0).subset_size(7) == 7
    # 0.7 * 10 is not exactly 7 in floating point
    assert SelectionPolicy(0.7).subset_size(10) == 7
    assert SelectionPolicy(None).subset_size(50) == 1
