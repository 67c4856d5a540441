from __future__ import annotations

import math
from typing import Any

import altair as alt

from dexviz.core.constants import FALLBACK_COLORS, RADAR_LEVELS, TYPE_COLORS
from dexviz.core.grammar import StatKey, stat_label
from dexviz.core.schema import CreatureRecord, GroupAggregate, RadialVector
from dexviz.viz.matrix import ChordLayout
from dexviz.viz.radial import axis_angle, radial_points, reference_levels

# Samples per radian when approximating arcs with polylines
_ARC_DENSITY = 24
_BEZIER_STEPS = 16


# Uniform chart defaults for a professional look
def _apply_chart_defaults(ch: alt.TopLevelMixin) -> alt.TopLevelMixin:
    try:
        return (
            ch.configure_axis(labelFontSize=12, titleFontSize=12, grid=True)
            .configure_legend(labelFontSize=12, titleFontSize=12)
            .configure_title(fontSize=14)
            .configure_view(strokeOpacity=0)
        )
    except Exception:
        # If configuration fails (e.g., non-top-level), return chart as-is
        return ch


def _placeholder(text: str) -> alt.TopLevelMixin:
    return _apply_chart_defaults(
        alt.Chart(alt.Data(values=[{"text": text}])).mark_text().encode(text="text:N")
    )


def type_color(type_label: str | None, index: int = 0) -> str:
    """Palette color for a type label, falling back to category10 by index."""
    if type_label and type_label in TYPE_COLORS:
        return TYPE_COLORS[type_label]
    return FALLBACK_COLORS[index % len(FALLBACK_COLORS)]


# ----------------------------
# Generation trend (line + points)
# ----------------------------


def trend_domain(aggregates: list[GroupAggregate]) -> tuple[float, float] | None:
    """Y domain padded by 10% of the value spread; None when the spread is zero."""
    if not aggregates:
        return None
    lo = min(a.value for a in aggregates)
    hi = max(a.value for a in aggregates)
    if hi == lo:
        return None
    buffer = (hi - lo) * 0.1
    return (lo - buffer, hi + buffer)


def trend_line_chart(
    aggregates: list[GroupAggregate],
    stat_key: StatKey | str,
    *,
    width: int = 600,
    height: int = 300,
) -> alt.TopLevelMixin:
    """Line of per-generation averages with hoverable points.

    Under the highest-only policy the tooltip also names the top creature.
    """
    if not aggregates:
        return _placeholder("No generations to chart")
    label = stat_label(stat_key)
    values = [
        {
            "generation": a.generation,
            "value": a.value,
            "summary": f"Gen {a.generation}: {label} = {round(a.value)}",
            "top": a.label or "",
        }
        for a in aggregates
    ]
    gens = [a.generation for a in aggregates]
    domain = trend_domain(aggregates)
    y_scale = alt.Scale(domain=list(domain)) if domain else alt.Scale(zero=False)

    base = alt.Chart(alt.Data(values=values)).encode(
        x=alt.X(
            "generation:Q",
            title="Generation",
            scale=alt.Scale(domain=[min(gens), max(gens)]),
            axis=alt.Axis(format="d", tickCount=6),
        ),
        y=alt.Y("value:Q", title=f"Avg {label}", scale=y_scale),
    )
    tooltip = [alt.Tooltip("summary:N", title=None)]
    if any(a.label for a in aggregates):
        tooltip.append(alt.Tooltip("top:N", title="Top creature"))

    line = base.mark_line(color="steelblue", strokeWidth=2.5)
    points = base.mark_circle(color="darkorange", size=60, opacity=1).encode(tooltip=tooltip)
    return _apply_chart_defaults(
        alt.layer(line, points).properties(
            width=width, height=height, title=f"Average {label} by generation"
        )
    )


# ----------------------------
# Geometry helpers (identity-projected geoshapes, y up)
# ----------------------------


def _polar(r: float, a: float) -> list[float]:
    # a: radians clockwise from 12 o'clock
    return [r * math.sin(a), r * math.cos(a)]


def _arc(r: float, a0: float, a1: float) -> list[list[float]]:
    steps = max(2, math.ceil(abs(a1 - a0) * _ARC_DENSITY))
    return [_polar(r, a0 + (a1 - a0) * s / steps) for s in range(steps + 1)]


def _bezier_via_center(p0: list[float], p1: list[float]) -> list[list[float]]:
    # Quadratic curve with the control point at the origin
    out: list[list[float]] = []
    for s in range(1, _BEZIER_STEPS):
        t = s / _BEZIER_STEPS
        w0, w2 = (1 - t) ** 2, t**2
        out.append([w0 * p0[0] + w2 * p1[0], w0 * p0[1] + w2 * p1[1]])
    return out


def _close(ring: list[list[float]]) -> list[list[float]]:
    return ring + [ring[0]] if ring and ring[0] != ring[-1] else ring


def _feature(geom_type: str, coordinates: Any, **props: Any) -> dict[str, Any]:
    return {
        "type": "Feature",
        "geometry": {"type": geom_type, "coordinates": coordinates},
        "properties": props,
    }


def _geo_layer(features: list[dict[str, Any]]) -> alt.Chart:
    return alt.Chart(alt.Data(values=features))


# ----------------------------
# Type chord diagram
# ----------------------------


def chord_diagram_chart(
    layout: ChordLayout,
    *,
    radius: float = 200.0,
    thickness: float = 20.0,
    size: int = 560,
) -> alt.TopLevelMixin:
    """Arcs per type (sized by appearances) with ribbons for each type pairing."""
    if not layout.groups or all(g.value == 0 for g in layout.groups):
        return _placeholder("No type data")
    outer, inner = radius, radius - thickness

    arcs = []
    for g in layout.groups:
        ring = _arc(outer, g.start_angle, g.end_angle) + _arc(inner, g.end_angle, g.start_angle)
        arcs.append(
            _feature(
                "Polygon",
                [_close(ring)],
                color=type_color(g.type_label, g.index),
                tooltip=f"{g.type_label}: {g.value} appearances",
            )
        )

    labels_by_index = {g.index: g.type_label for g in layout.groups}
    ribbons = []
    for c in layout.chords:
        s, t = c.source, c.target
        ring = _arc(inner, s.start_angle, s.end_angle)
        ring += _bezier_via_center(_polar(inner, s.end_angle), _polar(inner, t.start_angle))
        ring += _arc(inner, t.start_angle, t.end_angle)
        ring += _bezier_via_center(_polar(inner, t.end_angle), _polar(inner, s.start_angle))
        a, b = labels_by_index[s.index], labels_by_index[t.index]
        ribbons.append(
            _feature(
                "Polygon",
                [_close(ring)],
                color=type_color(a, s.index),
                tooltip=f"{a} ⇄ {b}: {s.value} pairings",
            )
        )

    text_rows = []
    for g in layout.groups:
        mid = (g.start_angle + g.end_angle) / 2
        x, y = _polar(outer + 10, mid)
        text_rows.append({"x": x, "y": y, "label": g.type_label, "right": mid <= math.pi})

    color = alt.Color("properties.color:N", scale=None)
    tip = alt.Tooltip("properties.tooltip:N", title=None)
    arc_layer = _geo_layer(arcs).mark_geoshape(stroke="#000").encode(color=color, tooltip=tip)
    ribbon_layer = (
        _geo_layer(ribbons)
        .mark_geoshape(stroke="#000", strokeWidth=0.5, fillOpacity=0.7)
        .encode(color=color, tooltip=tip)
    )
    text_base = alt.Chart(alt.Data(values=text_rows)).encode(
        longitude="x:Q", latitude="y:Q", text="label:N"
    )
    left = text_base.transform_filter("datum.right").mark_text(
        align="left", baseline="middle", fontSize=10, color="#333"
    )
    right = text_base.transform_filter("!datum.right").mark_text(
        align="right", baseline="middle", fontSize=10, color="#333"
    )
    ch = (
        alt.layer(ribbon_layer, arc_layer, left, right)
        .project(type="identity", reflectY=True)
        .properties(width=size, height=size, title="Type pairings")
    )
    return _apply_chart_defaults(ch)


# ----------------------------
# Radar comparison
# ----------------------------


def creature_caption(record: CreatureRecord) -> str:
    """'Name (Type1/Type2)' legend text."""
    types = record.type_1.value + (f"/{record.type_2.value}" if record.type_2 else "")
    return f"{record.name} ({types})"


def radar_colors(records: list[CreatureRecord]) -> list[str]:
    fallback = ("steelblue", "darkorange")
    return [
        TYPE_COLORS.get(r.type_1.value, fallback[i % 2]) for i, r in enumerate(records)
    ]


def radar_chart(
    vectors: tuple[RadialVector, RadialVector] | list[RadialVector],
    records: list[CreatureRecord],
    *,
    levels: int = RADAR_LEVELS,
    size: int = 520,
) -> alt.TopLevelMixin:
    """Star chart comparing creatures on a shared stat scale.

    Args:
        vectors: Radial projections (same stat_keys, scale_max and radius).
        records: Records matching `vectors`, used for colors and legend captions.
        levels (int): Number of dashed reference rings.
        size (int): Chart width/height in pixels.
    """
    if not vectors:
        return _placeholder("Select creatures to compare")
    first = vectors[0]
    radius, scale_max = first.radius, first.scale_max
    keys = first.stat_keys
    n = len(keys)
    colors = radar_colors(records)

    rings = [
        _feature(
            "LineString",
            _arc(radius * frac, 0.0, 2 * math.pi),
            tooltip=str(value),
        )
        for frac, value in reference_levels(scale_max, levels)
    ]
    spokes = []
    axis_text = []
    for i, key in enumerate(keys):
        a = axis_angle(i, n)
        end = [radius * math.cos(a), -radius * math.sin(a)]
        spokes.append(_feature("LineString", [[0.0, 0.0], end], tooltip=stat_label(key)))
        axis_text.append(
            {
                "x": (radius + 20) * math.cos(a),
                "y": -(radius + 20) * math.sin(a),
                "label": stat_label(key),
            }
        )
    level_text = [
        {"x": 5.0, "y": radius * frac, "label": str(value)}
        for frac, value in reference_levels(scale_max, levels)
    ]

    polygons = []
    dots = []
    for i, vec in enumerate(vectors):
        pts = [list(p) for p in radial_points(vec)]
        caption = creature_caption(records[i]) if i < len(records) else vec.name
        polygons.append(
            _feature("Polygon", [_close(pts)], color=colors[i % len(colors)], tooltip=caption)
        )
        for (x, y), key, value in zip(radial_points(vec), vec.stat_keys, vec.values, strict=True):
            dots.append(
                {
                    "x": x,
                    "y": y,
                    "color": colors[i % len(colors)],
                    "name": vec.name,
                    "stat": stat_label(key),
                    "value": value,
                }
            )

    color = alt.Color("properties.color:N", scale=None)
    ring_layer = _geo_layer(rings).mark_geoshape(
        filled=False, stroke="#ccc", strokeDash=[4, 4]
    )
    spoke_layer = _geo_layer(spokes).mark_geoshape(filled=False, stroke="#ccc", strokeWidth=1)
    poly_layer = (
        _geo_layer(polygons)
        .mark_geoshape(fillOpacity=0.4, strokeWidth=2)
        .encode(
            color=color,
            stroke=alt.Stroke("properties.color:N", scale=None),
            tooltip=alt.Tooltip("properties.tooltip:N", title=None),
        )
    )
    dot_layer = (
        alt.Chart(alt.Data(values=dots))
        .mark_circle(size=40, opacity=1)
        .encode(
            longitude="x:Q",
            latitude="y:Q",
            color=alt.Color("color:N", scale=None),
            tooltip=[
                alt.Tooltip("name:N", title="Creature"),
                alt.Tooltip("stat:N", title="Stat"),
                alt.Tooltip("value:Q", title="Value"),
            ],
        )
    )
    axis_layer = (
        alt.Chart(alt.Data(values=axis_text))
        .mark_text(fontSize=11, fontWeight="bold", align="center", baseline="middle")
        .encode(longitude="x:Q", latitude="y:Q", text="label:N")
    )
    level_layer = (
        alt.Chart(alt.Data(values=level_text))
        .mark_text(fontSize=9, color="#999", align="left")
        .encode(longitude="x:Q", latitude="y:Q", text="label:N")
    )

    subtitle = [
        creature_caption(r) for r in records[: len(vectors)]
    ] or [v.name for v in vectors]
    ch = (
        alt.layer(ring_layer, spoke_layer, poly_layer, dot_layer, axis_layer, level_layer)
        .project(type="identity", reflectY=True)
        .properties(
            width=size,
            height=size,
            title=alt.TitleParams(text="Stat comparison", subtitle=subtitle),
        )
    )
    return _apply_chart_defaults(ch)
