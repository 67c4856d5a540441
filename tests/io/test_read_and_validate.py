from __future__ import annotations

from pathlib import Path

import polars as pl
import pytest

from dexviz.core.tables import CREATURES_DESC
from dexviz.io.errors import IoSchemaError
from dexviz.io.read import frame_to_records, normalize_frame, read_creatures
from dexviz.io.validate import validate_frame_against_descriptor

_HEADER = (
    "Number,Name,Type_1,Type_2,Total,HP,Attack,Defense,Sp_Atk,Sp_Def,Speed,Generation,isLegendary"
)


def _write_csv(tmp: Path, rows: list[str], header: str = _HEADER) -> Path:
    p = tmp / "creatures.csv"
    p.write_text("\n".join([header, *rows]) + "\n")
    return p


def test_read_creatures_canonicalizes_columns(tmp_path: Path) -> None:
    p = _write_csv(
        tmp_path,
        [
            "195,Quagsire,Water,Ground,430,95,85,85,65,65,35,2,False",
            "25,Pikachu,Electric,,320,35,55,40,50,50,90,1,False",
            "150,Mewtwo,Psychic,,680,106,110,90,154,90,130,1,True",
        ],
    )
    df = read_creatures(p)
    assert df.columns == list(CREATURES_DESC.columns)
    assert df.schema["hp"] == pl.Int64
    assert df.schema["is_legendary"] == pl.Boolean
    assert df.get_column("type_2").to_list() == ["Ground", None, None]
    assert df.get_column("is_legendary").to_list() == [False, False, True]


def test_legendary_only_true_for_exact_true_string(tmp_path: Path) -> None:
    p = _write_csv(
        tmp_path,
        [
            "1,A,Fire,,100,10,10,20,20,20,20,1,true",
            "2,B,Fire,,100,10,10,20,20,20,20,1,True",
            "3,C,Fire,,100,10,10,20,20,20,20,1,",
        ],
    )
    df = read_creatures(p)
    assert df.get_column("is_legendary").to_list() == [False, True, False]


def test_read_creatures_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_creatures(tmp_path / "nope.csv")


def test_read_creatures_rejects_malformed_numbers(tmp_path: Path) -> None:
    p = _write_csv(tmp_path, ["1,A,Fire,,100,abc,10,20,20,20,20,1,False"])
    with pytest.raises(IoSchemaError, match="hp"):
        read_creatures(p)


def test_read_creatures_rejects_missing_required_column(tmp_path: Path) -> None:
    header = "Name,Type_1,Type_2,Total,HP,Attack,Defense,Sp_Atk,Sp_Def,Generation,isLegendary"
    p = _write_csv(tmp_path, ["A,Fire,,80,10,10,20,20,20,1,False"], header=header)
    with pytest.raises(IoSchemaError, match="speed"):
        read_creatures(p)


def test_normalize_frame_accepts_display_headers_and_adds_type_2() -> None:
    raw = pl.DataFrame(
        {
            "Name": ["Pikachu"],
            "Type 1": ["Electric"],
            "Total": ["320"],
            "HP": ["35"],
            "Attack": ["55"],
            "Defense": ["40"],
            "Sp. Atk": ["50"],
            "Sp. Def": ["50"],
            "Speed": ["90"],
            "Generation": ["1"],
            "Legendary": [False],
        }
    )
    df = normalize_frame(raw)
    assert df.columns == list(CREATURES_DESC.columns)
    assert df.get_column("type_2").to_list() == [None]
    assert df.get_column("sp_atk").to_list() == [50]


def test_validate_rejects_negative_and_extra_columns() -> None:
    ok = normalize_frame(
        pl.DataFrame(
            {
                "name": ["A"],
                "type_1": ["Fire"],
                "type_2": [None],
                "total": [60],
                "hp": [10],
                "attack": [10],
                "defense": [10],
                "sp_atk": [10],
                "sp_def": [10],
                "speed": [10],
                "generation": [1],
                "is_legendary": [False],
            }
        )
    )
    with pytest.raises(IoSchemaError, match="negative"):
        validate_frame_against_descriptor(ok.with_columns(pl.lit(-1).alias("hp")))
    with pytest.raises(IoSchemaError, match="unexpected"):
        validate_frame_against_descriptor(ok.with_columns(pl.lit(1).alias("extra")))
    # Non-strict tolerates extras but drops them from the output
    out = validate_frame_against_descriptor(
        ok.with_columns(pl.lit(1).alias("extra")), strict=False
    )
    assert "extra" not in out.columns


def test_read_creatures_canonicalizes_type_case(tmp_path: Path) -> None:
    p = _write_csv(
        tmp_path,
        [
            "1,A,Water,,60,10,10,10,10,10,10,1,False",
            "2,B,water,FLYING,60,10,10,10,10,10,10,1,False",
        ],
    )
    df = read_creatures(p)
    assert df.get_column("type_1").to_list() == ["Water", "Water"]
    assert df.get_column("type_2").to_list() == [None, "Flying"]


def test_read_creatures_rejects_unknown_type(tmp_path: Path) -> None:
    p = _write_csv(tmp_path, ["1,A,Sound,,60,10,10,10,10,10,10,1,False"])
    with pytest.raises(IoSchemaError, match="Sound"):
        read_creatures(p)


def test_frame_to_records_wraps_unknown_type() -> None:
    df = pl.DataFrame(
        {
            "name": ["A"],
            "type_1": ["Sound"],
            "type_2": [None],
            "total": [60],
            "hp": [10],
            "attack": [10],
            "defense": [10],
            "sp_atk": [10],
            "sp_def": [10],
            "speed": [10],
            "generation": [1],
            "is_legendary": [False],
        }
    )
    with pytest.raises(IoSchemaError, match="'A'"):
        frame_to_records(df)
