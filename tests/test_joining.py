from __future__ import annotations

from datetime import date

import pandas as pd
import pytest
from pydantic import ValidationError

from collision_traffic.data_cleaning import clean_collisions, clean_traffic
from collision_traffic.joining import build_year_borough_summary, join_report, join_year_borough

from conftest import collision, station


def test_two_queens_collisions_join_to_one_row(make_collisions, make_traffic):
    collisions = clean_collisions(
        make_collisions(
            [
                collision(date(2019, 4, 2), borough="QUEENS", injured=1),
                collision(date(2019, 8, 14), borough="QUEENS", injured=1),
            ]
        )
    )
    traffic = clean_traffic(make_traffic([station("Queens", 2019, 500000)]))

    joined, report = build_year_borough_summary(collisions, traffic)

    assert len(joined) == 1
    assert report.matched == 1
    row = joined.iloc[0]
    assert row["Year"] == 2019
    assert row["BOROUGH"] == "QUEENS"
    assert row["num.ppl.injured"] == 2
    assert row["num.collisions"] == 2
    assert row["traffic"] == 500000


def _aggregates() -> tuple[pd.DataFrame, pd.DataFrame]:
    collision_agg = pd.DataFrame(
        {
            "Year": [2018, 2019, 2019, 2020],
            "BOROUGH": ["BRONX", "BRONX", "QUEENS", "QUEENS"],
            "num.ppl.injured": [10, 20, 30, 40],
        }
    )
    traffic_agg = pd.DataFrame(
        {
            "Year": [2019, 2019, 2020, 2021, 2021],
            "BOROUGH": ["BRONX", "QUEENS", "BRONX", "BRONX", "QUEENS"],
            "traffic": [100, 200, 300, 400, 500],
        }
    )
    return collision_agg, traffic_agg


def test_join_is_strictly_inner():
    collision_agg, traffic_agg = _aggregates()

    joined, report = join_year_borough(collision_agg, traffic_agg)

    assert list(zip(joined["Year"], joined["BOROUGH"])) == [(2019, "BRONX"), (2019, "QUEENS")]
    assert joined["traffic"].tolist() == [100, 200]
    assert len(joined) <= min(len(collision_agg), len(traffic_agg))

    left_keys = set(zip(collision_agg["Year"], collision_agg["BOROUGH"]))
    right_keys = set(zip(traffic_agg["Year"], traffic_agg["BOROUGH"]))
    assert set(zip(joined["Year"], joined["BOROUGH"])) <= left_keys & right_keys
    assert report.matched == len(joined)


def test_join_logs_dropped_pairs(caplog):
    collision_agg, traffic_agg = _aggregates()

    with caplog.at_level("WARNING"):
        join_year_borough(collision_agg, traffic_agg)

    assert "Dropping 2 year/borough pairs with collisions but no traffic counts" in caplog.text
    assert "Dropping 3 year/borough pairs with traffic counts but no collisions" in caplog.text


def test_join_report_counts_each_side():
    report = join_report(*_aggregates())

    assert report.matched == 2
    assert report.collisions_only == 2
    assert report.traffic_only == 3


def test_join_report_is_immutable():
    report = join_report(*_aggregates())

    with pytest.raises(ValidationError):
        report.matched = 0


def test_join_requires_keys():
    collision_agg, traffic_agg = _aggregates()

    with pytest.raises(KeyError, match="BOROUGH"):
        join_year_borough(collision_agg.drop(columns=["BOROUGH"]), traffic_agg)
