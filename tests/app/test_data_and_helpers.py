from __future__ import annotations

from pathlib import Path

import pytest

from app.data import DEMO_ROWS, CacheConfig, create_demo_dataset, load_dataset
from app.ui.helpers import (
    aggregate_rows,
    percentile_label,
    percentile_options,
    policy_option,
    stat_options,
)
from dexviz.core.grammar import SelectionPolicy
from dexviz.core.schema import GroupAggregate
from dexviz.io.dataset import CreatureDataset


def test_create_demo_dataset_is_loadable(tmp_path: Path) -> None:
    p = tmp_path / "nested" / "demo.csv"
    create_demo_dataset(p)
    ds = CreatureDataset.from_csv(p)
    assert ds.height == len(DEMO_ROWS)
    # default comparison creature is present
    abom = ds.find("Abomasnow")
    assert abom.generation == 4
    assert abom.total == 494
    legendary = set(ds.frame.filter(ds.frame["is_legendary"])["name"].to_list())
    assert legendary == {"Mewtwo", "Lugia", "Groudon", "Reshiram", "Xerneas"}
    for rec in ds.records():
        assert rec.total == rec.hp + rec.attack + rec.defense + rec.sp_atk + rec.sp_def + rec.speed


def test_load_dataset_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_dataset(str(tmp_path / "missing.csv"), cfg=CacheConfig())


def test_cache_config_is_hashable() -> None:
    assert hash(CacheConfig(ttl=60, persist=True)) == hash(CacheConfig(ttl=60, persist=True))
    assert CacheConfig() != CacheConfig(ttl=1)


def test_percentile_options_and_labels() -> None:
    assert percentile_options() == ["1", "0.5", "0.25", "0.1", "0.05", "highest"]
    assert percentile_label("0.1") == "Top 10%"
    assert percentile_label("highest") == "Highest only"
    assert percentile_label("0.3") == "0.3"
    assert policy_option(SelectionPolicy(None)) == "highest"
    assert policy_option(SelectionPolicy(0.25)) == "0.25"
    assert policy_option(SelectionPolicy(0.3)) == "0.3"
    assert stat_options()[-1] == "total"


def test_aggregate_rows_for_table() -> None:
    aggs = [GroupAggregate(generation=1, value=81.25, label="B", subset_size=1, partition_size=4)]
    assert aggregate_rows(aggs, "sp_atk") == [
        {"Generation": 1, "Avg Sp. Atk": 81.2, "Kept": 1, "Of": 4, "Top creature": "B"}
    ]
