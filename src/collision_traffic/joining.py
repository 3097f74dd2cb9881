from __future__ import annotations

import logging
from typing import Tuple

import pandas as pd
from pydantic import BaseModel, ConfigDict

from .aggregation import collisions_by_year_borough, traffic_by_year_borough

logger = logging.getLogger(__name__)

JOIN_KEYS = ["Year", "BOROUGH"]


class JoinReport(BaseModel):
    """Key counts on each side of the (year, borough) join."""

    model_config = ConfigDict(frozen=True)

    matched: int
    collisions_only: int
    traffic_only: int


def _check_keys(df: pd.DataFrame, name: str) -> None:
    missing = [col for col in JOIN_KEYS if col not in df.columns]
    if missing:
        raise KeyError(f"{name} aggregate is missing join columns: {missing}")


def join_report(collision_agg: pd.DataFrame, traffic_agg: pd.DataFrame) -> JoinReport:
    _check_keys(collision_agg, "Collision")
    _check_keys(traffic_agg, "Traffic")
    keys = collision_agg[JOIN_KEYS].drop_duplicates().merge(
        traffic_agg[JOIN_KEYS].drop_duplicates(), on=JOIN_KEYS, how="outer", indicator=True
    )
    counts = keys["_merge"].value_counts()
    return JoinReport(
        matched=int(counts.get("both", 0)),
        collisions_only=int(counts.get("left_only", 0)),
        traffic_only=int(counts.get("right_only", 0)),
    )


def join_year_borough(collision_agg: pd.DataFrame, traffic_agg: pd.DataFrame) -> Tuple[pd.DataFrame, JoinReport]:
    """Inner join of the two aggregates on (Year, BOROUGH).

    Pairs found on only one side are dropped, logged and counted in the
    returned report.
    """
    report = join_report(collision_agg, traffic_agg)
    if report.collisions_only:
        logger.warning(
            "Dropping %d year/borough pairs with collisions but no traffic counts",
            report.collisions_only,
        )
    if report.traffic_only:
        logger.warning(
            "Dropping %d year/borough pairs with traffic counts but no collisions",
            report.traffic_only,
        )

    joined = collision_agg.merge(traffic_agg, on=JOIN_KEYS, how="inner", validate="one_to_one")
    logger.info("Joined %d year/borough pairs", len(joined))
    return joined.sort_values(JOIN_KEYS).reset_index(drop=True), report


def build_year_borough_summary(
    collisions: pd.DataFrame, traffic: pd.DataFrame
) -> Tuple[pd.DataFrame, JoinReport]:
    return join_year_borough(collisions_by_year_borough(collisions), traffic_by_year_borough(traffic))
