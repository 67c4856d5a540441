"""
Generation trend aggregation.

group_by_generation() turns the creature table into one GroupAggregate per
generation: optionally drop legendaries, rank each generation by the selected
stat (descending, ties in dataset order), keep the top records dictated by the
selection policy, and average the stat over that subset.

All slicing/aggregation is done in Polars.
"""

from __future__ import annotations

import logging

import polars as pl

from dexviz.core.errors import EmptyDataset, InvalidSelection
from dexviz.core.grammar import SelectionPolicy, StatKey, parse_policy, stat_key_from_value
from dexviz.core.schema import GroupAggregate, SelectionParams

from .base import CreatureData, as_frame

logger = logging.getLogger(__name__)

__all__ = [
    "group_by_generation",
    "group_by_generation_for",
]


def _keep_expr(policy: SelectionPolicy) -> pl.Expr:
    if policy.fraction is None:
        return pl.lit(1, dtype=pl.Int64)
    # Rounded before ceil: 0.7 * 10 is 7.000000000000001 in floating point.
    return (
        (pl.col("_n").cast(pl.Float64) * policy.fraction)
        .round(9)
        .ceil()
        .cast(pl.Int64)
        .clip(lower_bound=1)
    )


def group_by_generation(
    data: CreatureData,
    stat_key: StatKey | str,
    policy: SelectionPolicy | float | str,
    exclude_legendary: bool = False,
) -> list[GroupAggregate]:
    """Average a stat per generation over each generation's top-ranked records.

    Args:
        data (CreatureData): Dataset facade, canonical frame, or CreatureRecord rows.
        stat_key (StatKey | str): One of the six base stats or "total".
        policy (SelectionPolicy | float | str): Fraction in (0, 1] or "highest".
        exclude_legendary (bool): Drop legendary records before grouping.

    Returns:
        list[GroupAggregate]: One entry per generation still populated after filtering,
        ordered by generation ascending. Under "highest" each entry carries the top
        record's name as its label.

    Raises:
        InvalidSelection: If stat_key or policy is not recognized.
        EmptyDataset: If no records are supplied.

    Notes:
        - Subset size is ceil(fraction * partition_size), never below 1.
        - Generations emptied by legendary exclusion are left out of the result.
    """
    key = stat_key_from_value(stat_key)
    pol = parse_policy(policy)
    df = as_frame(data)
    if df.is_empty():
        raise EmptyDataset("no records to aggregate")
    col = key.value
    if col not in df.columns:
        raise InvalidSelection(f"stat column {col!r} not present in data")

    generations = set(df.get_column("generation").unique().to_list())
    if exclude_legendary:
        df = df.filter(~pl.col("is_legendary"))
    if df.is_empty():
        logger.info("legendary exclusion removed every record; no generations to chart")
        return []

    ranked = (
        df.select(["name", "generation", col])
        .with_row_index("_row")
        .sort(["generation", col, "_row"], descending=[False, True, False])
        .with_columns(
            pl.int_range(pl.len()).over("generation").alias("_rank"),
            pl.len().over("generation").alias("_n"),
        )
    )
    subset = ranked.filter(pl.col("_rank") < _keep_expr(pol))
    agg = (
        subset.group_by("generation", maintain_order=True)
        .agg(
            pl.col(col).cast(pl.Float64).mean().alias("value"),
            pl.col("name").first().alias("label"),
            pl.len().alias("subset_size"),
            pl.col("_n").first().alias("partition_size"),
        )
        .sort("generation")
    )

    out = [
        GroupAggregate(
            generation=int(row["generation"]),
            value=float(row["value"]),
            label=row["label"] if pol.highest_only else None,
            subset_size=int(row["subset_size"]),
            partition_size=int(row["partition_size"]),
        )
        for row in agg.iter_rows(named=True)
    ]

    dropped = sorted(generations - {a.generation for a in out})
    if dropped:
        logger.info("generations %s have no records after legendary exclusion", dropped)
    return out


def group_by_generation_for(data: CreatureData, params: SelectionParams) -> list[GroupAggregate]:
    """group_by_generation driven by a selection snapshot."""
    return group_by_generation(
        data,
        params.stat_key,
        params.policy,
        exclude_legendary=params.exclude_legendary,
    )
