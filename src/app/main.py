"""
dexviz App entrypoint.

CLI entrypoint that launches the Streamlit UI. All UI composition lives in the
app.ui package; this module only configures logging and starts Streamlit
programmatically, or renders directly when already running under Streamlit.

Usage:
    - Console script (hands process to Streamlit):
        dexviz-app --data pokemon_alopez247.csv --log-level INFO

    - Streamlit direct:
        streamlit run src/app/main.py -- --data pokemon_alopez247.csv
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from app.ui import streamlit_app
from dexviz.io.config import DexSettings

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _build_parser(add_help: bool = True) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="dexviz Streamlit App", add_help=add_help)
    parser.add_argument("--data", default=None, help="Creature CSV file to load")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (defaults to the configured log_level, then WARNING)",
    )
    return parser


def configure_logging(level: str | None) -> None:
    """Configure root logging once.

    Without an explicit level, DexSettings.log_level decides (DEXVIZ_LOG_LEVEL, then
    dexviz.toml or [tool.dexviz], then WARNING).
    """
    name = (level or DexSettings.load().log_level).upper()
    logging.basicConfig(level=getattr(logging, name, logging.WARNING), format=_LOG_FORMAT)


def main(argv: list[str] | None = None) -> None:
    """Console entrypoint that launches Streamlit with the dexviz UI.

    If already executing within a Streamlit server (environment variable
    STREAMLIT_SERVER_PORT is set), this function renders the app directly.
    Otherwise, it execs "python -m streamlit run <this_module>" and passes the
    supported options through after "--".

    Args:
        argv (list[str] | None): Optional list of CLI arguments. If None,
            sys.argv[1:] is used.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    ns = _build_parser().parse_args(args)
    configure_logging(ns.log_level)

    # If invoked within Streamlit, just render
    if os.environ.get("STREAMLIT_SERVER_PORT"):
        streamlit_app(default_data=ns.data)
        return

    app_path = Path(__file__).resolve()
    cmd = [sys.executable, "-m", "streamlit", "run", str(app_path)]

    passthrough: list[str] = []
    if ns.data:
        passthrough += ["--data", ns.data]
    if ns.log_level:
        passthrough += ["--log-level", ns.log_level]
    if passthrough:
        cmd += ["--"] + passthrough

    logging.getLogger(__name__).info("launching: %s", " ".join(cmd))
    os.execv(sys.executable, cmd)


if __name__ == "__main__":
    # Support: --data, --log-level after '--' when using `streamlit run`
    ns, _ = _build_parser(add_help=False).parse_known_args(sys.argv[1:])
    configure_logging(ns.log_level)
    streamlit_app(default_data=ns.data)
