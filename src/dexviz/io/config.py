"""
Configuration for dexviz.

Defines DexSettings, a frozen dataclass carrying runtime configuration for loading
and charting. Defaults are sourced from dexviz.core.constants.

Source of truth
- dexviz.core.constants: DEFAULT_STAT, DEFAULT_POLICY, DEFAULT_ENTITY, CHART_RADIUS,
  RADAR_LEVELS, PAD_ANGLE

Import DAG discipline
- Depends only on stdlib and dexviz.core.
- Does not import higher layers (viz, app).

Notes
- Precedence when loading: environment > TOML > defaults.
- Unparseable values are skipped field-by-field while loading; validate() is the
  strict gate.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from dexviz.core.constants import CHART_RADIUS as CORE_CHART_RADIUS
from dexviz.core.constants import DEFAULT_ENTITY as CORE_DEFAULT_ENTITY
from dexviz.core.constants import DEFAULT_POLICY as CORE_DEFAULT_POLICY
from dexviz.core.constants import DEFAULT_STAT as CORE_DEFAULT_STAT
from dexviz.core.constants import PAD_ANGLE as CORE_PAD_ANGLE
from dexviz.core.constants import RADAR_LEVELS as CORE_RADAR_LEVELS
from dexviz.core.errors import InvalidSelection
from dexviz.core.grammar import parse_policy, stat_key_from_value

from .errors import IoConfigError

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class DexSettings:
    """
    Runtime settings for dexviz.

    Attributes:
        data_path (str): CSV file holding the creature table.
        chart_radius (float): Outer radius of the radar chart, in chart units.
        radar_levels (int): Number of dashed reference rings on the radar chart.
        pad_angle (float): Gap between chord groups, in radians.
        default_stat (str): Initial stat key for the trend chart.
        default_policy (str): Initial selection policy ("0.1", "highest", ...).
        default_entity (str): Initial name for both compared creatures.
        log_level (str): Level passed to logging.basicConfig by the CLI.

    Examples:
        >>> from dexviz.io.config import DexSettings
        >>> DexSettings(data_path="data/pokemon.csv").chart_radius
        150.0
    """

    data_path: str = "pokemon_alopez247.csv"
    chart_radius: float = CORE_CHART_RADIUS
    radar_levels: int = CORE_RADAR_LEVELS
    pad_angle: float = CORE_PAD_ANGLE
    default_stat: str = CORE_DEFAULT_STAT
    default_policy: str = CORE_DEFAULT_POLICY
    default_entity: str = CORE_DEFAULT_ENTITY
    log_level: str = "WARNING"

    @classmethod
    def _apply_mapping(cls, base: DexSettings, cfg: dict[str, Any] | None) -> DexSettings:
        """Apply a loose config mapping onto DexSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        for key in ("data_path", "default_entity"):
            if key in cfg and isinstance(cfg[key], str) and cfg[key]:
                s = replace(s, **{key: cfg[key]})

        if "chart_radius" in cfg:
            try:
                s = replace(s, chart_radius=float(cfg["chart_radius"]))
            except (TypeError, ValueError):
                pass

        if "radar_levels" in cfg:
            try:
                s = replace(s, radar_levels=int(cfg["radar_levels"]))
            except (TypeError, ValueError):
                pass

        if "pad_angle" in cfg:
            try:
                s = replace(s, pad_angle=float(cfg["pad_angle"]))
            except (TypeError, ValueError):
                pass

        if "default_stat" in cfg:
            try:
                s = replace(s, default_stat=stat_key_from_value(str(cfg["default_stat"])).value)
            except InvalidSelection:
                pass

        if "default_policy" in cfg:
            try:
                s = replace(s, default_policy=parse_policy(str(cfg["default_policy"])).value)
            except InvalidSelection:
                pass

        if "log_level" in cfg and isinstance(cfg["log_level"], str):
            level = cfg["log_level"].strip().upper()
            if level in _LOG_LEVELS:
                s = replace(s, log_level=level)

        return s

    @classmethod
    def from_env(cls, base: DexSettings | None = None, prefix: str = "DEXVIZ_") -> DexSettings:
        """
        Build DexSettings from environment variables. Precedence is env > base (if provided) > defaults.

        Recognized variables:
            - DEXVIZ_DATA_PATH
            - DEXVIZ_CHART_RADIUS
            - DEXVIZ_RADAR_LEVELS
            - DEXVIZ_PAD_ANGLE
            - DEXVIZ_DEFAULT_STAT
            - DEXVIZ_DEFAULT_POLICY
            - DEXVIZ_DEFAULT_ENTITY
            - DEXVIZ_LOG_LEVEL
        """
        s = base or cls()
        mapping: dict[str, Any] = {}
        for key in (
            "data_path",
            "chart_radius",
            "radar_levels",
            "pad_angle",
            "default_stat",
            "default_policy",
            "default_entity",
            "log_level",
        ):
            v = os.getenv(prefix + key.upper())
            if v:
                mapping[key] = v
        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> DexSettings:
        """
        Build DexSettings from a TOML file.

        Search order when `path` is None:
            1) ./dexviz.toml (with either a [dexviz] table or direct keys)
            2) ./pyproject.toml under [tool.dexviz]

        Returns defaults if no file is present or none parses.
        """
        s = cls()

        def _load_toml(p: Path) -> dict[str, Any] | None:
            try:
                with p.open("rb") as fh:
                    return tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError):
                return None

        cfg: dict[str, Any] | None = None

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "dexviz.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        for p in cand:
            if not p.exists():
                continue
            data = _load_toml(p)
            if not isinstance(data, dict):
                continue
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("dexviz") if isinstance(tool, dict) else None
            elif isinstance(data.get("dexviz"), dict):
                cfg = data["dexviz"]
            else:
                cfg = data
            if cfg:
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> DexSettings:
        """
        Load DexSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults (dexviz.toml, pyproject.toml).

        Returns:
            DexSettings
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s

    def validate(self) -> DexSettings:
        """
        Check value ranges and return self.

        Raises:
            IoConfigError: If any field is out of range or not recognized.
        """
        if self.chart_radius <= 0:
            raise IoConfigError(f"chart_radius must be positive (got: {self.chart_radius})")
        if self.radar_levels < 1:
            raise IoConfigError(f"radar_levels must be >= 1 (got: {self.radar_levels})")
        if self.pad_angle < 0:
            raise IoConfigError(f"pad_angle must be >= 0 (got: {self.pad_angle})")
        if self.log_level not in _LOG_LEVELS:
            raise IoConfigError(f"unknown log_level {self.log_level!r}")
        try:
            stat_key_from_value(self.default_stat)
            parse_policy(self.default_policy)
        except InvalidSelection as exc:
            raise IoConfigError(str(exc)) from exc
        return self
