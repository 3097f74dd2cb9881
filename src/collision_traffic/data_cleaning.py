from __future__ import annotations

import logging
from datetime import date

import pandas as pd

from .settings import ANALYSIS_SETTINGS

logger = logging.getLogger(__name__)

CRASH_DATE_FORMAT = "%m/%d/%Y"

COUNT_COLUMNS = [
    "NUMBER OF PERSONS INJURED",
    "NUMBER OF PERSONS KILLED",
    "NUMBER OF PEDESTRIANS INJURED",
    "NUMBER OF PEDESTRIANS KILLED",
    "NUMBER OF CYCLIST INJURED",
    "NUMBER OF CYCLIST KILLED",
    "NUMBER OF MOTORIST INJURED",
    "NUMBER OF MOTORIST KILLED",
]

FACTOR_COLUMNS = [f"CONTRIBUTING FACTOR VEHICLE {i}" for i in range(1, 6)]

COLLISION_COLUMNS = ["CRASH DATE", "CRASH TIME", "BOROUGH"] + COUNT_COLUMNS

TRAFFIC_COLUMNS = ["County", "Year", "Count", "Length"]

COUNTY_TO_BOROUGH = {
    "Bronx": "BRONX",
    "Kings": "BROOKLYN",
    "New York": "MANHATTAN",
    "Richmond": "STATEN ISLAND",
    "Queens": "QUEENS",
}

NYC_COUNTIES = tuple(COUNTY_TO_BOROUGH)


def parse_crash_dates(values: pd.Series) -> pd.Series:
    """Parse ``MM/DD/YYYY`` strings; anything else becomes ``NaT``."""
    return pd.to_datetime(values, format=CRASH_DATE_FORMAT, errors="coerce")


def derive_hour(times: pd.Series) -> pd.Series:
    """Hour of day taken from the text before the first colon of a time string.

    Values that are not an integer in 0-23 come back as ``<NA>``.
    """
    head = times.fillna("").astype(str).str.split(":", n=1).str[0].str.strip()
    hours = pd.to_numeric(head, errors="coerce")
    hours = hours.where(hours.between(0, 23) & (hours == hours.round()))
    return hours.astype("Int64")


def normalize_borough(series: pd.Series) -> pd.Series:
    boroughs = series.fillna("").astype(str).str.strip().str.upper()
    return boroughs.where(boroughs != "")


def coerce_counts(df: pd.DataFrame, columns: list[str]) -> pd.DataFrame:
    for col in columns:
        df[col] = pd.to_numeric(df[col], errors="coerce")
    return df


def clean_collisions(
    df: pd.DataFrame,
    start: date | None = None,
    end: date | None = None,
) -> pd.DataFrame:
    start = start or ANALYSIS_SETTINGS.start_date
    end = end or ANALYSIS_SETTINGS.end_date
    df = df.copy()

    df["CRASH_DATE"] = parse_crash_dates(df["CRASH DATE"])
    unparsed = int(df["CRASH_DATE"].isna().sum())
    if unparsed:
        logger.warning("Dropping %d collisions with an unparseable crash date", unparsed)
    df = df.dropna(subset=["CRASH_DATE"])

    df["CRASH_HOUR"] = derive_hour(df["CRASH TIME"])
    bad_hours = int(df["CRASH_HOUR"].isna().sum())
    if bad_hours:
        logger.warning("%d collisions have no usable crash hour", bad_hours)
    df["CRASH_MONTH"] = df["CRASH_DATE"].dt.month.astype("int64")
    df["CRASH_YEAR"] = df["CRASH_DATE"].dt.year.astype("int64")

    df["BOROUGH"] = normalize_borough(df["BOROUGH"])
    df = coerce_counts(df, COUNT_COLUMNS)
    if "COLLISION_ID" in df.columns:
        repeated = df["COLLISION_ID"].notna() & df.duplicated(subset=["COLLISION_ID"])
        df = df.loc[~repeated]

    in_window = df["CRASH_DATE"].between(pd.Timestamp(start), pd.Timestamp(end))
    logger.info(
        "Keeping %d of %d collisions between %s and %s",
        int(in_window.sum()), len(df), start, end,
    )
    return df.loc[in_window].reset_index(drop=True)


def borough_for_county(county: str) -> str:
    try:
        return COUNTY_TO_BOROUGH[county]
    except KeyError:
        raise KeyError(f"No borough mapping for county {county!r}") from None


def clean_traffic(df: pd.DataFrame, min_year: int | None = None) -> pd.DataFrame:
    min_year = ANALYSIS_SETTINGS.min_traffic_year if min_year is None else min_year
    df = df.copy()

    df["County"] = df["County"].fillna("").astype(str).str.strip()
    df["Year"] = pd.to_numeric(df["Year"], errors="coerce")
    bad_years = int(df["Year"].isna().sum())
    if bad_years:
        logger.warning("Dropping %d traffic rows with an unparseable year", bad_years)
    df = df.dropna(subset=["Year"])
    df["Year"] = df["Year"].astype("int64")
    df = coerce_counts(df, ["Count", "Length"])

    keep = (df["Year"] >= min_year) & df["County"].isin(NYC_COUNTIES)
    logger.info(
        "Keeping %d of %d traffic rows for NYC counties from %d on",
        int(keep.sum()), len(df), min_year,
    )
    df = df.loc[keep].reset_index(drop=True)
    df["BOROUGH"] = df["County"].map(borough_for_county).astype(object)
    return df
