"""
Core exception types raised by selection parsing and the aggregation engine.

Provides typed exceptions for core-domain failures:
- InvalidSelection for unrecognized stat keys, type labels, or selection policies.
- EmptyDataset when an aggregation receives no records.
- RecordNotFound when a requested comparison entity is absent from the dataset.

Notes:
    - This module uses only the Python standard library and has no side effects.
    - Grammar helpers in dexviz.core.grammar raise InvalidSelection; pydantic
      validators that call them surface the failure as pydantic.ValidationError.

Examples:
    Catch a missing comparison entity.

    >>> from dexviz.core.errors import RecordNotFound
    >>> try:
    ...     raise RecordNotFound("Missingno")
    ... except RecordNotFound as e:
    ...     e.name
    'Missingno'
"""

from __future__ import annotations

__all__ = [
    "DexvizError",
    "InvalidSelection",
    "EmptyDataset",
    "RecordNotFound",
]


class DexvizError(Exception):
    """Base class for dexviz domain errors."""


class InvalidSelection(DexvizError, ValueError):
    """Unrecognized stat key, type label, or selection policy."""


class EmptyDataset(DexvizError, ValueError):
    """No records were supplied to an aggregation."""


class RecordNotFound(DexvizError, LookupError):
    """A requested entity name does not exist in the dataset.

    Attributes:
        name (str): The entity name that was looked up.
    """

    def __init__(self, name: str) -> None:
        super().__init__(f"No creature named {name!r} in the dataset")
        self.name = name
