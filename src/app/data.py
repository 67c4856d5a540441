from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import polars as pl
import streamlit as st

from dexviz.io.dataset import CreatureDataset
from dexviz.io.read import read_creatures

logger = logging.getLogger(__name__)

__all__ = [
    "CacheConfig",
    "load_dataset",
    "create_demo_dataset",
    "DEMO_ROWS",
]

# ---------- Cache configuration (factory of cached callables) ----------


@dataclass(frozen=True)
class CacheConfig:
    """Hashable cache configuration for Streamlit @st.cache_data.

    Note: Streamlit's decorator parameters (ttl, persist) are fixed at decoration
    time. We build and memoize decorated callables per (name, ttl, persist) so the
    app can switch these at runtime while still benefiting from caching.
    """

    ttl: int | None = None
    persist: bool = False


# Registry of decorated functions by (loader_name, CacheConfig)
_CACHE_REGISTRY: dict[tuple[str, CacheConfig], Callable[..., Any]] = {}


def _get_cached(loader_name: str, cfg: CacheConfig, fn: Callable[..., Any]) -> Callable[..., Any]:
    key = (loader_name, cfg)
    if key in _CACHE_REGISTRY:
        return _CACHE_REGISTRY[key]
    if cfg.persist:
        wrapped = st.cache_data(persist="disk", ttl=cfg.ttl)(fn)
    else:
        wrapped = st.cache_data(ttl=cfg.ttl)(fn)
    _CACHE_REGISTRY[key] = wrapped
    return wrapped


# ---------- Loaders ----------


def _load_creatures_impl(data_path: str, mtime: float) -> pl.DataFrame:
    # mtime only participates in the cache key so edits to the file reload it.
    del mtime
    return read_creatures(data_path)


def load_dataset(data_path: str, *, cfg: CacheConfig = CacheConfig()) -> CreatureDataset:
    """Load the creature CSV through the Streamlit cache.

    Raises:
        FileNotFoundError: If the file does not exist.
        dexviz.io.errors.IoSchemaError: If the file fails validation.
    """
    path = Path(data_path)
    if not path.exists():
        raise FileNotFoundError(f"Required file not found: {path}")
    fn = _get_cached("load_creatures", cfg, _load_creatures_impl)
    frame = fn(str(path), path.stat().st_mtime)
    return CreatureDataset(frame, source=str(path))


# ---------- Demo dataset ----------

# (Name, Type_1, Type_2, HP, Attack, Defense, Sp_Atk, Sp_Def, Speed, Generation, isLegendary)
DEMO_ROWS: tuple[tuple[Any, ...], ...] = (
    ("Bulbasaur", "Grass", "Poison", 45, 49, 49, 65, 65, 45, 1, "False"),
    ("Charizard", "Fire", "Flying", 78, 84, 78, 109, 85, 100, 1, "False"),
    ("Blastoise", "Water", None, 79, 83, 100, 85, 105, 78, 1, "False"),
    ("Pikachu", "Electric", None, 35, 55, 40, 50, 50, 90, 1, "False"),
    ("Mewtwo", "Psychic", None, 106, 110, 90, 154, 90, 130, 1, "True"),
    ("Quagsire", "Water", "Ground", 95, 85, 85, 65, 65, 35, 2, "False"),
    ("Ampharos", "Electric", None, 90, 75, 85, 115, 90, 55, 2, "False"),
    ("Lugia", "Psychic", "Flying", 106, 90, 130, 90, 154, 110, 2, "True"),
    ("Swampert", "Water", "Ground", 100, 110, 90, 85, 90, 60, 3, "False"),
    ("Gardevoir", "Psychic", "Fairy", 68, 65, 65, 125, 115, 80, 3, "False"),
    ("Groudon", "Ground", None, 100, 150, 140, 100, 90, 90, 3, "True"),
    ("Abomasnow", "Grass", "Ice", 90, 92, 75, 92, 85, 60, 4, "False"),
    ("Garchomp", "Dragon", "Ground", 108, 130, 95, 80, 85, 102, 4, "False"),
    ("Rotom", "Electric", "Ghost", 50, 50, 77, 95, 77, 91, 4, "False"),
    ("Excadrill", "Ground", "Steel", 110, 135, 60, 50, 65, 88, 5, "False"),
    ("Stunfisk", "Ground", "Electric", 109, 66, 84, 81, 99, 32, 5, "False"),
    ("Reshiram", "Dragon", "Fire", 100, 120, 100, 150, 120, 90, 5, "True"),
    ("Greninja", "Water", "Dark", 72, 95, 67, 103, 71, 122, 6, "False"),
    ("Sylveon", "Fairy", None, 95, 65, 65, 110, 130, 60, 6, "False"),
    ("Xerneas", "Fairy", None, 126, 131, 95, 131, 98, 99, 6, "True"),
)


def create_demo_dataset(path: Path) -> None:
    """Write a small creature CSV with the published column layout.

    Args:
        path (Path): Target CSV file; parent directories are created.

    Notes:
        - Headers follow the "Pokémon with stats" export (Type_1, Sp_Atk, isLegendary, ...).
        - Total is derived from the six base stats.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    stats = ("HP", "Attack", "Defense", "Sp_Atk", "Sp_Def", "Speed")
    rows = []
    for number, row in enumerate(DEMO_ROWS, start=1):
        name, t1, t2, *values, generation, legendary = row
        rec: dict[str, Any] = {"Number": number, "Name": name, "Type_1": t1, "Type_2": t2}
        rec["Total"] = sum(values)
        rec.update(dict(zip(stats, values, strict=True)))
        rec["Generation"] = generation
        rec["isLegendary"] = legendary
        rows.append(rec)
    pl.DataFrame(rows).write_csv(path)
    logger.info("wrote demo dataset with %d creatures to %s", len(rows), path)
