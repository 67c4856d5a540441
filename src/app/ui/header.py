"""
Header (global controls) for the dexviz Streamlit application.

Renders the top-of-page controls:
- Data file path, with its last-modified time.
- Demo dataset creation when the configured file does not exist.
- Cache preferences panel, turned into a CacheConfig for app.data loaders.
"""

from __future__ import annotations

import logging
from pathlib import Path

import streamlit as st

from app.data import CacheConfig, create_demo_dataset

from .helpers import format_ts

logger = logging.getLogger(__name__)

DEMO_PATH = Path("out") / "demo_creatures.csv"


def _use_demo_dataset() -> None:
    # Runs as a widget callback, before the path input is re-created
    create_demo_dataset(DEMO_PATH)
    st.session_state["data_path"] = str(DEMO_PATH)
    st.session_state["data_path_header"] = str(DEMO_PATH)
    logger.info("switched to demo dataset at %s", DEMO_PATH)


def render_header(*, default_data: str) -> tuple[str, CacheConfig]:
    """Render the global header and return the data path and cache config.

    Args:
        default_data (str): Initial CSV path (from --data or DexSettings.data_path).

    Returns:
        tuple[str, CacheConfig]: (data_path_or_empty, cache_config)

    Notes:
        - When the chosen file is missing, the user can write a small demo dataset
          to out/demo_creatures.csv and switch to it.
    """
    st.markdown("### Creature Stats Explorer")

    if "data_path" not in st.session_state:
        st.session_state["data_path"] = default_data
    if "data_path_header" not in st.session_state:
        st.session_state["data_path_header"] = str(st.session_state["data_path"])
    if "cache_ttl" not in st.session_state:
        st.session_state["cache_ttl"] = 600
    if "cache_persist" not in st.session_state:
        st.session_state["cache_persist"] = False

    c1, c2 = st.columns([0.75, 0.25])

    with c1:
        data_path = st.text_input("Data file (CSV)", key="data_path_header")
        path = Path(data_path) if data_path else None
        if path is not None and path.exists():
            st.caption(f"Updated: {format_ts(path.stat().st_mtime)}")
        else:
            st.caption("File not found.")
            st.button("Create demo dataset", on_click=_use_demo_dataset)
        st.session_state["data_path"] = data_path

    with c2:
        with st.expander("Cache", expanded=False):
            ttl = st.number_input(
                "Cache TTL (seconds)",
                min_value=0,
                value=int(st.session_state["cache_ttl"]),
                step=60,
                help="0 disables TTL",
                key="cache_ttl_header",
            )
            persist = st.checkbox(
                "Persist to disk",
                value=bool(st.session_state["cache_persist"]),
                key="cache_persist_header",
            )
            st.session_state["cache_ttl"] = int(ttl)
            st.session_state["cache_persist"] = bool(persist)

    cache_cfg = CacheConfig(
        ttl=int(st.session_state["cache_ttl"]) if int(st.session_state["cache_ttl"]) > 0 else None,
        persist=bool(st.session_state["cache_persist"]),
    )
    return (st.session_state["data_path"] or "", cache_cfg)
