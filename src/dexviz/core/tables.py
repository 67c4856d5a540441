"""
Frozen table descriptor for the creature dataset.

Notes:
    - The descriptor declares canonical lower_snake column names, dtypes, and
      required/nullable columns.
    - HEADER_ALIASES maps the spellings found in published CSV exports onto the
      canonical names; headers are compared after grammar.normalize_token.
    - Core is zero-IO (stdlib only); dexviz.io materializes and validates frames.
"""

from __future__ import annotations

from dataclasses import dataclass

from .grammar import StatKey

__all__ = [
    "TableDescriptor",
    "CREATURES_DESC",
    "HEADER_ALIASES",
]


@dataclass(frozen=True)
class TableDescriptor:
    """
    Frozen descriptor for a canonical table.

    Attributes:
        name (str): Table identifier.
        columns (dict[str, str]): Mapping of lower_snake column_name -> dtype
            where dtype is one of {"i64", "str", "bool"}.
        required (list[str]): Columns that must exist and be populated (non-null).
        nullable (list[str]): Columns permitted to contain nulls.

    Examples:
        >>> from dexviz.core.tables import CREATURES_DESC
        >>> "type_2" in CREATURES_DESC.nullable
        True
    """

    name: str
    columns: dict[str, str]
    required: list[str]
    nullable: list[str]


CREATURES_DESC = TableDescriptor(
    name="creatures",
    columns={
        "name": "str",
        "type_1": "str",
        "type_2": "str",
        StatKey.TOTAL.value: "i64",
        StatKey.HP.value: "i64",
        StatKey.ATTACK.value: "i64",
        StatKey.DEFENSE.value: "i64",
        StatKey.SP_ATK.value: "i64",
        StatKey.SP_DEF.value: "i64",
        StatKey.SPEED.value: "i64",
        "generation": "i64",
        "is_legendary": "bool",
    },
    required=[
        "name",
        "type_1",
        "total",
        "hp",
        "attack",
        "defense",
        "sp_atk",
        "sp_def",
        "speed",
        "generation",
        "is_legendary",
    ],
    nullable=["type_2"],
)

# normalize_token(header) -> canonical column
HEADER_ALIASES: dict[str, str] = {
    "name": "name",
    "type_1": "type_1",
    "type1": "type_1",
    "type_2": "type_2",
    "type2": "type_2",
    "total": "total",
    "hp": "hp",
    "attack": "attack",
    "defense": "defense",
    "sp_atk": "sp_atk",
    "sp_def": "sp_def",
    "speed": "speed",
    "generation": "generation",
    "islegendary": "is_legendary",
    "is_legendary": "is_legendary",
    "legendary": "is_legendary",
}
