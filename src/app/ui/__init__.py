"""
dexviz App UI package.

Streamlit UI split by concern: the page orchestrator, the global header, and small
shared helpers.

Modules:
    - app: Streamlit application orchestrator (streamlit_app).
    - header: Global header (data file, demo dataset, cache prefs).
    - helpers: Session selection state and sidebar/table helpers.

Usage:
    from app.ui import streamlit_app
    streamlit_app(default_data="pokemon_alopez247.csv")
"""

from __future__ import annotations

from .app import streamlit_app
from .header import render_header

__all__ = [
    "streamlit_app",
    "render_header",
]
