"""Grouped sums and counts that feed the charts and the year/borough join."""
from __future__ import annotations

import logging
from typing import Iterable, Sequence

import pandas as pd

from .data_cleaning import COUNT_COLUMNS, FACTOR_COLUMNS

logger = logging.getLogger(__name__)

COUNT_ALIASES = {
    "NUMBER OF PERSONS INJURED": "num.ppl.injured",
    "NUMBER OF PERSONS KILLED": "num.ppl.killed",
    "NUMBER OF PEDESTRIANS INJURED": "num.ped.injured",
    "NUMBER OF PEDESTRIANS KILLED": "num.ped.killed",
    "NUMBER OF CYCLIST INJURED": "num.cyc.injured",
    "NUMBER OF CYCLIST KILLED": "num.cyc.killed",
    "NUMBER OF MOTORIST INJURED": "num.mot.injured",
    "NUMBER OF MOTORIST KILLED": "num.mot.killed",
}

COLLISION_COUNT = "num.collisions"


def grouped_sum(
    df: pd.DataFrame,
    by: str | Sequence[str],
    sum_columns: Iterable[str] = (),
    count_column: str | None = None,
) -> pd.DataFrame:
    """Sum ``sum_columns`` within each group of ``by``.

    Missing numbers count as zero, so a group holding only missing values
    sums to zero. Rows with a missing key are left out of every group.
    ``count_column``, when given, receives the number of rows per group.
    """
    keys = [by] if isinstance(by, str) else list(by)
    sums = list(sum_columns)
    if not sums and count_column is None:
        raise ValueError("Nothing to aggregate: pass sum_columns or count_column")
    missing = [col for col in keys + sums if col not in df.columns]
    if missing:
        raise KeyError(f"Columns not found for aggregation: {missing}")

    null_keys = df[keys].isna().any(axis=1)
    if null_keys.any():
        logger.info("Leaving out %d rows with a missing %s", int(null_keys.sum()), "/".join(keys))
    frame = df.loc[~null_keys, keys + sums].copy()
    for col in sums:
        frame[col] = pd.to_numeric(frame[col], errors="coerce").fillna(0)

    grouped = frame.groupby(keys, sort=True)
    sizes = grouped.size()
    result = grouped[sums].sum() if sums else pd.DataFrame(index=sizes.index)
    if count_column is not None:
        result[count_column] = sizes
    return result.reset_index()


def _collision_totals(collisions: pd.DataFrame, by: str | Sequence[str]) -> pd.DataFrame:
    totals = grouped_sum(collisions, by, COUNT_COLUMNS, count_column=COLLISION_COUNT)
    return totals.rename(columns=COUNT_ALIASES)


def factor_totals(
    collisions: pd.DataFrame,
    top_n: int | None = None,
    exclude: Iterable[str] = ("Unspecified",),
) -> pd.DataFrame:
    """Collisions and persons hurt per contributing factor.

    A collision citing the same factor for several vehicles counts once for
    that factor.
    """
    factor_cols = [col for col in FACTOR_COLUMNS if col in collisions.columns]
    if not factor_cols:
        raise KeyError("No contributing factor columns found")
    value_cols = ["NUMBER OF PERSONS INJURED", "NUMBER OF PERSONS KILLED"]

    frame = collisions[factor_cols + value_cols].reset_index(drop=True)
    frame["_row"] = frame.index
    long = frame.melt(id_vars=["_row"] + value_cols, value_vars=factor_cols, value_name="factor")
    long["factor"] = long["factor"].fillna("").astype(str).str.strip()
    long = long[(long["factor"] != "") & ~long["factor"].isin(list(exclude))]
    long = long.drop_duplicates(subset=["_row", "factor"])

    totals = grouped_sum(long, "factor", value_cols, count_column=COLLISION_COUNT)
    totals = totals.rename(columns=COUNT_ALIASES)
    totals = totals.sort_values([COLLISION_COUNT, "factor"], ascending=[False, True])
    totals = totals.reset_index(drop=True)
    if top_n is not None:
        totals = totals.head(top_n)
    return totals


def hourly_totals(collisions: pd.DataFrame) -> pd.DataFrame:
    return _collision_totals(collisions, "CRASH_HOUR")


def monthly_totals(collisions: pd.DataFrame) -> pd.DataFrame:
    return _collision_totals(collisions, "CRASH_MONTH")


def yearly_totals(collisions: pd.DataFrame) -> pd.DataFrame:
    return _collision_totals(collisions, "CRASH_YEAR")


def collisions_by_year_borough(collisions: pd.DataFrame) -> pd.DataFrame:
    frame = collisions.rename(columns={"CRASH_YEAR": "Year"})
    return _collision_totals(frame, ["Year", "BOROUGH"])


def traffic_by_year_borough(traffic: pd.DataFrame) -> pd.DataFrame:
    totals = grouped_sum(traffic, ["Year", "BOROUGH"], ["Count", "Length"], count_column="num.stations")
    return totals.rename(columns={"Count": "traffic", "Length": "road.length"})
