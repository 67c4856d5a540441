"""
Streamlit application orchestrator for dexviz.

Composes the global header, the sidebar selection controls, and the three linked
views (generation trend, type chord diagram, stat radar) while delegating data
work to dexviz.viz and drawing to app.charts.

Responsibilities:
    - Configure the Streamlit page.
    - Load DexSettings and the creature dataset (cached via app.data).
    - Push sidebar input into the session's SelectionState.
    - Recompute every view from a fresh snapshot on each rerun.

Notes:
    - Invalid data files surface as st.error; a missing comparison creature
      surfaces as st.warning while the other views still render.
"""

from __future__ import annotations

import logging
from typing import Any, cast

import streamlit as st

from app import charts as app_charts
from app.data import load_dataset
from dexviz.core.errors import DexvizError, EmptyDataset
from dexviz.core.grammar import stat_label
from dexviz.io.config import DexSettings
from dexviz.io.dataset import CreatureDataset
from dexviz.io.errors import IoError
from dexviz.viz.search import filter_names, resolve_selection
from dexviz.viz.state import SelectionState, build_views

from .header import render_header
from .helpers import (
    aggregate_rows,
    get_selection_state,
    percentile_label,
    percentile_options,
    policy_option,
    stat_options,
)

logger = logging.getLogger(__name__)


def _entity_picker(
    label: str, key: str, names: list[str], current: str | None
) -> str | None:
    """Search box plus select box for one comparison slot."""
    term = st.text_input(f"Search {label}", value="", key=f"{key}_search")
    candidates = filter_names(names, term)
    if not candidates:
        st.caption("No creature matches.")
        return current if current in names else None
    chosen = resolve_selection(current, candidates)
    index = candidates.index(chosen) if chosen in candidates else 0
    return st.selectbox(label, options=candidates, index=index, key=f"{key}_select")


def _render_sidebar(state: SelectionState, dataset: CreatureDataset) -> None:
    with st.sidebar.expander("Generation trend", expanded=True):
        stats = stat_options()
        stat = st.selectbox(
            "Stat",
            options=stats,
            index=stats.index(state.stat_key.value),
            format_func=stat_label,
            key="stat_select",
        )
        percentiles = percentile_options()
        current = policy_option(state.policy)
        policy = st.selectbox(
            "Creatures per generation",
            options=percentiles,
            index=percentiles.index(current) if current in percentiles else 0,
            format_func=percentile_label,
            key="policy_select",
        )
        exclude = st.checkbox(
            "Exclude legendary", value=state.exclude_legendary, key="exclude_legendary"
        )
    state.set_stat(stat)
    state.set_policy(policy)
    state.set_exclude_legendary(exclude)

    with st.sidebar.expander("Compare creatures", expanded=True):
        names = dataset.names()
        entity_a = _entity_picker("Creature A", "entity_a", names, state.entity_a)
        entity_b = _entity_picker("Creature B", "entity_b", names, state.entity_b)
    state.set_entities(entity_a, entity_b)


def streamlit_app(default_data: str | None = None) -> None:
    """Render the dexviz Streamlit application.

    Args:
        default_data (str | None): Optional CSV path; overrides DexSettings.data_path.

    Returns:
        None
    """
    st.set_page_config(page_title="Creature Stats Explorer", layout="wide")

    try:
        settings = DexSettings.load().validate()
    except IoError as e:
        st.error(f"Invalid configuration: {e}")
        return

    data_path, cache_cfg = render_header(default_data=default_data or settings.data_path)
    if not data_path:
        st.error("Enter the path of a creature CSV file in the header.")
        return

    try:
        with st.spinner("Loading creatures ..."):
            dataset = load_dataset(data_path, cfg=cache_cfg)
    except FileNotFoundError as e:
        st.error(str(e))
        return
    except IoError as e:
        logger.warning("failed to load %s: %s", data_path, e)
        st.error(f"Failed to load {data_path}: {e}")
        return

    state = get_selection_state(settings)
    _render_sidebar(state, dataset)
    params = state.snapshot()

    try:
        views = build_views(
            dataset, params, radius=settings.chart_radius, pad_angle=settings.pad_angle
        )
    except EmptyDataset:
        st.info("The data file has no creatures.")
        return
    except (DexvizError, IoError) as e:
        st.error(str(e))
        return

    # ----------------------------
    # Generation trend
    # ----------------------------
    st.subheader(f"Average {stat_label(params.stat_key)} by generation")
    if not views.aggregates:
        st.info("No creatures left after excluding legendaries.")
    trend = app_charts.trend_line_chart(views.aggregates, params.stat_key)
    st.altair_chart(cast(Any, trend), theme=None, use_container_width=True)
    with st.expander("Per-generation table", expanded=False):
        st.dataframe(aggregate_rows(views.aggregates, params.stat_key), hide_index=True)

    col_chord, col_radar = st.columns(2)

    # ----------------------------
    # Type chord diagram
    # ----------------------------
    with col_chord:
        st.subheader("Type pairings")
        chord = app_charts.chord_diagram_chart(views.chords)
        st.altair_chart(cast(Any, chord), theme=None, use_container_width=False)

    # ----------------------------
    # Stat radar comparison
    # ----------------------------
    with col_radar:
        st.subheader("Stat comparison")
        if views.comparison is None:
            st.warning(views.comparison_error or "Select two creatures to compare.")
        else:
            records = [dataset.find(v.name) for v in views.comparison]
            radar = app_charts.radar_chart(
                views.comparison, records, levels=settings.radar_levels
            )
            st.altair_chart(cast(Any, radar), theme=None, use_container_width=False)
