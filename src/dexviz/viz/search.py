"""
Creature name search for the comparison pickers.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

__all__ = ["filter_names", "resolve_selection"]


def filter_names(names: Iterable[str], term: str | None) -> list[str]:
    """Sorted distinct names containing `term`, case-insensitively.

    An empty or whitespace-only term matches every name.

    Examples:
        >>> filter_names(["Pikachu", "Raichu", "Pichu", "Raichu"], "CHU")
        ['Pichu', 'Pikachu', 'Raichu']
        >>> filter_names(["Pikachu", "Raichu"], "rai")
        ['Raichu']
    """
    unique = sorted(set(names))
    needle = (term or "").strip().lower()
    if not needle:
        return unique
    return [n for n in unique if needle in n.lower()]


def resolve_selection(current: str | None, candidates: Sequence[str]) -> str | None:
    """Keep the current pick if still offered, else fall back to the first candidate."""
    if current is not None and current in candidates:
        return current
    return candidates[0] if candidates else None
