from __future__ import annotations

import json

import pytest

from app.charts import (
    chord_diagram_chart,
    creature_caption,
    radar_chart,
    trend_domain,
    trend_line_chart,
    type_color,
)
from dexviz.core.constants import FALLBACK_COLORS, TYPE_COLORS
from dexviz.core.grammar import RADAR_STATS
from dexviz.core.schema import CreatureRecord, GroupAggregate, TypeMatrix
from dexviz.viz.matrix import chord_layout
from dexviz.viz.radial import project_to_radial


def _rec(name: str, t1: str, t2: str | None, stats: tuple[int, ...]) -> CreatureRecord:
    hp, attack, defense, sp_atk, sp_def, speed = stats
    return CreatureRecord(
        name=name,
        type_1=t1,
        type_2=t2,
        hp=hp,
        attack=attack,
        defense=defense,
        sp_atk=sp_atk,
        sp_def=sp_def,
        speed=speed,
        total=sum(stats),
        generation=1,
    )


def _values(spec: dict, layer: dict | None = None) -> list[dict]:
    # Inline data is consolidated into top-level named datasets
    data = (layer or {}).get("data") or spec["data"]
    return data["values"] if "values" in data else spec["datasets"][data["name"]]


def _mark_type(spec: dict) -> str:
    mark = spec["mark"]
    return mark if isinstance(mark, str) else mark["type"]


def test_trend_domain_pads_ten_percent() -> None:
    aggs = [
        GroupAggregate(generation=1, value=100.0, subset_size=1, partition_size=1),
        GroupAggregate(generation=2, value=200.0, subset_size=1, partition_size=1),
    ]
    assert trend_domain(aggs) == pytest.approx((90.0, 210.0))
    assert trend_domain(aggs[:1]) is None
    assert trend_domain([]) is None


def test_trend_line_chart_encodes_generation_and_top_name() -> None:
    aggs = [
        GroupAggregate(generation=1, value=90.4, label="B", subset_size=1, partition_size=2),
        GroupAggregate(generation=2, value=40.0, label="C", subset_size=1, partition_size=1),
    ]
    spec = trend_line_chart(aggs, "attack").to_dict()
    line, points = spec["layer"]
    assert _mark_type(line) == "line"
    assert _mark_type(points) == "circle"
    assert line["encoding"]["x"]["field"] == "generation"
    assert line["encoding"]["x"]["axis"]["format"] == "d"
    assert line["encoding"]["y"]["scale"]["domain"] == pytest.approx([34.96, 95.44])
    tooltip_fields = [t["field"] for t in points["encoding"]["tooltip"]]
    assert tooltip_fields == ["summary", "top"]
    rows = _values(spec, line)
    assert [r["summary"] for r in rows] == ["Gen 1: Attack = 90", "Gen 2: Attack = 40"]


def test_trend_line_chart_without_labels_and_empty() -> None:
    aggs = [GroupAggregate(generation=1, value=10.0, subset_size=1, partition_size=1)]
    spec = trend_line_chart(aggs, "total").to_dict()
    tooltip_fields = [t["field"] for t in spec["layer"][1]["encoding"]["tooltip"]]
    assert "top" not in tooltip_fields
    placeholder = trend_line_chart([], "total").to_dict()
    assert _mark_type(placeholder) == "text"


def test_chord_diagram_tooltips_and_projection() -> None:
    m = TypeMatrix(types=["Electric", "Ground", "Water"], counts=[[0, 1, 0], [1, 0, 1], [0, 1, 0]])
    spec = chord_diagram_chart(chord_layout(m)).to_dict()
    assert spec["projection"] == {"type": "identity", "reflectY": True}
    ribbons, arcs, left, right = spec["layer"]
    arc_tips = [f["properties"]["tooltip"] for f in _values(spec, arcs)]
    assert arc_tips == ["Electric: 1 appearances", "Ground: 2 appearances", "Water: 1 appearances"]
    ribbon_tips = sorted(f["properties"]["tooltip"] for f in _values(spec, ribbons))
    assert ribbon_tips == ["Electric ⇄ Ground: 1 pairings", "Ground ⇄ Water: 1 pairings"]
    assert ribbons["mark"]["fillOpacity"] == 0.7
    # polygons are closed rings
    for f in _values(spec, arcs) + _values(spec, ribbons):
        ring = f["geometry"]["coordinates"][0]
        assert ring[0] == ring[-1]
    assert _values(spec, arcs)[2]["properties"]["color"] == TYPE_COLORS["Water"]
    assert left["mark"]["align"] == "left" and right["mark"]["align"] == "right"
    json.dumps(spec)


def test_chord_diagram_empty_placeholder() -> None:
    spec = chord_diagram_chart(chord_layout(TypeMatrix(types=[], counts=[]))).to_dict()
    assert _mark_type(spec) == "text"


def test_radar_chart_layers_and_legend() -> None:
    a = _rec("Abomasnow", "Grass", "Ice", (90, 92, 75, 92, 85, 60))
    b = _rec("Garchomp", "Dragon", "Ground", (108, 130, 95, 80, 85, 102))
    vectors = [project_to_radial(r, RADAR_STATS, 130, radius=150) for r in (a, b)]
    spec = radar_chart(vectors, [a, b], levels=5).to_dict()

    assert spec["projection"]["type"] == "identity"
    rings, spokes, polys, dots, axis_text, level_text = spec["layer"]
    assert len(_values(spec, rings)) == 5
    assert rings["mark"]["strokeDash"] == [4, 4]
    assert len(_values(spec, spokes)) == 6
    assert polys["mark"]["fillOpacity"] == 0.4
    assert len(_values(spec, polys)) == 2
    assert len(_values(spec, dots)) == 12
    assert [t["label"] for t in _values(spec, axis_text)] == [
        "HP",
        "Attack",
        "Defense",
        "Sp. Atk",
        "Sp. Def",
        "Speed",
    ]
    assert [t["label"] for t in _values(spec, level_text)] == ["130", "104", "78", "52", "26"]
    assert spec["title"]["subtitle"] == ["Abomasnow (Grass/Ice)", "Garchomp (Dragon/Ground)"]


def test_creature_caption_and_colors() -> None:
    solo = _rec("Pikachu", "Electric", None, (35, 55, 40, 50, 50, 90))
    assert creature_caption(solo) == "Pikachu (Electric)"
    assert type_color("Fire") == TYPE_COLORS["Fire"]
    assert type_color("Unknown", 1) == FALLBACK_COLORS[1]
    assert type_color(None, len(FALLBACK_COLORS)) == FALLBACK_COLORS[0]
