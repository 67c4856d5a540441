"""
Shared UI helpers for the dexviz Streamlit application.

Small pieces used by both the header and the page body: session-scoped selection
state, option labels for the sidebar, and table rows for the aggregate preview.

Notes:
    - Only get_selection_state touches st.session_state; everything else is pure.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import streamlit as st

from dexviz.core.constants import PERCENTILE_CHOICES
from dexviz.core.grammar import SelectionPolicy, StatKey, stat_label
from dexviz.core.schema import GroupAggregate
from dexviz.io.config import DexSettings
from dexviz.viz.state import SelectionState

_STATE_KEY = "dexviz_selection"


def get_selection_state(settings: DexSettings | None = None) -> SelectionState:
    """Return the session's SelectionState, creating it from settings on first use.

    Args:
        settings (DexSettings | None): Source of the initial stat, policy and entity.

    Returns:
        SelectionState: The single mutable selection for this browser session.
    """
    state = st.session_state.get(_STATE_KEY)
    if state is None:
        cfg = settings or DexSettings()
        state = SelectionState()
        state.set_stat(cfg.default_stat)
        state.set_policy(cfg.default_policy)
        state.set_entities(cfg.default_entity, cfg.default_entity)
        st.session_state[_STATE_KEY] = state
    return state


def percentile_options() -> list[str]:
    return [value for value, _ in PERCENTILE_CHOICES]


def percentile_label(value: str) -> str:
    """Display label for a percentile option value ("0.1" -> "Top 10%")."""
    return dict(PERCENTILE_CHOICES).get(value, value)


def policy_option(policy: SelectionPolicy) -> str:
    """Sidebar option value matching a policy, or its plain numeric text."""
    if policy.highest_only:
        return "highest"
    for value, _ in PERCENTILE_CHOICES:
        if value != "highest" and float(value) == policy.fraction:
            return value
    return str(policy.fraction)


def stat_options() -> list[str]:
    return [k.value for k in StatKey]


def aggregate_rows(
    aggregates: list[GroupAggregate], stat_key: StatKey | str
) -> list[dict[str, Any]]:
    """Rows for the per-generation preview table.

    Returns:
        list[dict[str, Any]]: One row per generation with the rounded average, the
        subset/partition sizes, and the top creature under highest-only.
    """
    label = stat_label(stat_key)
    return [
        {
            "Generation": a.generation,
            f"Avg {label}": round(a.value, 1),
            "Kept": a.subset_size,
            "Of": a.partition_size,
            "Top creature": a.label or "",
        }
        for a in aggregates
    ]


def format_ts(ts: float) -> str:
    """Format a UNIX timestamp as local "YYYY-MM-DD HH:MM:SS"."""
    return datetime.fromtimestamp(ts).strftime("%Y-%m-%d %H:%M:%S")
