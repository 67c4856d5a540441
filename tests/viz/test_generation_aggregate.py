from __future__ import annotations

import logging

import polars as pl
import pytest

from dexviz.core.errors import EmptyDataset, InvalidSelection
from dexviz.core.schema import CreatureRecord, SelectionParams
from dexviz.io.dataset import CreatureDataset
from dexviz.viz.aggregate import group_by_generation, group_by_generation_for


def _rec(name: str, gen: int, attack: int, *, legendary: bool = False) -> CreatureRecord:
    return CreatureRecord(
        name=name,
        type_1="Normal",
        hp=50,
        attack=attack,
        defense=50,
        sp_atk=50,
        sp_def=50,
        speed=50,
        total=250 + attack,
        generation=gen,
        is_legendary=legendary,
    )


def test_half_policy_keeps_the_stronger_of_two() -> None:
    rows = [_rec("Weak", 1, 50), _rec("Strong", 1, 100)]
    (agg,) = group_by_generation(rows, "attack", 0.5)
    assert agg.generation == 1
    assert agg.value == 100.0
    assert (agg.subset_size, agg.partition_size) == (1, 2)
    assert agg.label is None


def test_highest_only_labels_the_top_record() -> None:
    rows = [_rec("A", 1, 70), _rec("B", 1, 90), _rec("C", 2, 40)]
    out = group_by_generation(rows, "attack", "highest")
    assert [(a.generation, a.value, a.label) for a in out] == [(1, 90.0, "B"), (2, 40.0, "C")]


def test_ties_broken_by_dataset_order() -> None:
    rows = [_rec("First", 1, 80), _rec("Second", 1, 80)]
    (agg,) = group_by_generation(rows, "attack", "highest")
    assert agg.label == "First"


def test_subset_sizes_use_ceil() -> None:
    rows = [_rec(f"g1_{i}", 1, 10 * (i + 1)) for i in range(3)]
    rows += [_rec(f"g2_{i}", 2, 10 * (i + 1)) for i in range(10)]
    out = group_by_generation(rows, "attack", 0.5)
    # ceil(0.5 * 3) = 2 -> mean(30, 20); ceil(0.5 * 10) = 5 -> mean(100..60)
    assert [a.subset_size for a in out] == [2, 5]
    assert out[0].value == pytest.approx(25.0)
    assert out[1].value == pytest.approx(80.0)

    small = group_by_generation(rows, "attack", 0.1)
    assert [a.subset_size for a in small] == [1, 1]
    assert group_by_generation(rows, "attack", 0.7)[1].subset_size == 7


def test_single_record_generation_keeps_its_value_under_any_policy() -> None:
    rows = [_rec("Many_0", 1, 10), _rec("Many_1", 1, 20), _rec("Lonely", 2, 77)]
    for policy in (0.05, 0.5, "highest", 1.0):
        out = group_by_generation(rows, "attack", policy)
        assert out[-1].generation == 2
        assert out[-1].value == 77.0
        assert (out[-1].subset_size, out[-1].partition_size) == (1, 1)


def test_full_fraction_is_plain_mean_and_order_by_generation() -> None:
    rows = [_rec("x", 3, 30), _rec("y", 1, 10), _rec("z", 1, 20)]
    out = group_by_generation(rows, "attack", 1)
    assert [a.generation for a in out] == [1, 3]
    assert out[0].value == pytest.approx(15.0)


def test_exclude_legendary_drops_records_and_empty_generations(caplog) -> None:
    rows = [
        _rec("Common", 1, 50),
        _rec("Legend", 1, 150, legendary=True),
        _rec("OnlyLegend", 2, 120, legendary=True),
    ]
    with caplog.at_level(logging.INFO, logger="dexviz.viz.aggregate"):
        out = group_by_generation(rows, "attack", "highest", exclude_legendary=True)
    assert [(a.generation, a.label) for a in out] == [(1, "Common")]
    assert "[2]" in caplog.text

    kept = group_by_generation(rows, "attack", "highest", exclude_legendary=False)
    assert [a.label for a in kept] == ["Legend", "OnlyLegend"]


def test_all_legendary_excluded_yields_empty_list() -> None:
    rows = [_rec("L1", 1, 100, legendary=True), _rec("L2", 2, 90, legendary=True)]
    assert group_by_generation(rows, "attack", 0.5, exclude_legendary=True) == []


def test_empty_input_and_bad_selection_raise() -> None:
    with pytest.raises(EmptyDataset):
        group_by_generation([], "attack", 0.5)
    rows = [_rec("A", 1, 10)]
    with pytest.raises(InvalidSelection):
        group_by_generation(rows, "luck", 0.5)
    with pytest.raises(InvalidSelection):
        group_by_generation(rows, "attack", 0)


def test_accepts_dataset_and_frame_inputs_without_mutation() -> None:
    raw = pl.DataFrame(
        {
            "Name": ["A", "B", "C"],
            "Type_1": ["Fire", "Water", "Grass"],
            "Type_2": [None, None, None],
            "Total": [300, 400, 500],
            "HP": [50, 60, 70],
            "Attack": [50, 60, 70],
            "Defense": [50, 70, 90],
            "Sp_Atk": [50, 70, 90],
            "Sp_Def": [50, 70, 90],
            "Speed": [50, 70, 90],
            "Generation": [1, 1, 2],
            "isLegendary": ["False", "False", "False"],
        }
    )
    ds = CreatureDataset.from_frame(raw)
    before = ds.frame.clone()
    via_ds = group_by_generation(ds, "total", 0.5)
    via_frame = group_by_generation(ds.frame, "total", 0.5)
    assert via_ds == via_frame
    assert [a.value for a in via_ds] == [400.0, 500.0]
    assert ds.frame.equals(before)

    params = SelectionParams(stat_key="total", policy="highest")
    assert [a.label for a in group_by_generation_for(ds, params)] == ["B", "C"]
