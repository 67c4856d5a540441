"""
Top-level Streamlit app package.

Hosts the interactive creature stats dashboard (Streamlit + Altair), kept apart from
the dexviz.* library modules. Chart-ready data comes from dexviz.viz; the UI shell
and chart drawing live here.

CLI entrypoint (configured in pyproject.toml):
    dexviz-app = app.main:main
"""

from __future__ import annotations
