from __future__ import annotations

import itertools
from datetime import date, time

import matplotlib
import pandas as pd
import pytest

from collision_traffic.schemas import CollisionRecord, TrafficRecord, collisions_to_frame, traffic_to_frame

matplotlib.use("Agg")

_ids = itertools.count(1)


def collision(
    crash_date: date,
    borough: str | None = "QUEENS",
    injured: int = 0,
    killed: int = 0,
    crash_time: time = time(9, 5),
    **fields,
) -> CollisionRecord:
    return CollisionRecord(
        crash_date=crash_date,
        crash_time=crash_time,
        borough=borough,
        collision_id=next(_ids),
        number_of_persons_injured=injured,
        number_of_persons_killed=killed,
        **fields,
    )


def station(county: str, year: int, count: float, length: float = 1.0, station_id: str = "S1") -> TrafficRecord:
    return TrafficRecord(county=county, year=year, count=count, length=length, station_id=station_id)


@pytest.fixture
def make_collisions():
    def _make(records: list[CollisionRecord]) -> pd.DataFrame:
        return collisions_to_frame(records)

    return _make


@pytest.fixture
def make_traffic():
    def _make(records: list[TrafficRecord]) -> pd.DataFrame:
        return traffic_to_frame(records)

    return _make


@pytest.fixture
def study_inputs() -> tuple[pd.DataFrame, pd.DataFrame]:
    """Three years of Queens and Brooklyn collisions with matching traffic counts."""
    records = []
    traffic = []
    for offset, year in enumerate((2017, 2018, 2019)):
        for borough, county, base in (("QUEENS", "Queens", 1), ("BROOKLYN", "Kings", 2)):
            for n in range(base + offset):
                records.append(
                    collision(
                        date(year, 3 + n, 10),
                        borough=borough,
                        injured=n + 1,
                        killed=1 if n == 0 else 0,
                        crash_time=time(8 + n, 30),
                        contributing_factor_vehicle_1="Driver Inattention/Distraction",
                        contributing_factor_vehicle_2="Unspecified",
                    )
                )
            traffic.append(station(county, year, 100000 * (base + offset), 2.5, f"{county}-{year}"))
    records.append(collision(date(2012, 6, 1), borough="QUEENS", injured=5))
    records.append(collision(date(2019, 6, 1), borough="MANHATTAN", injured=3))
    traffic.append(station("Queens", 2012, 999999))
    traffic.append(station("Albany", 2019, 123456))
    return collisions_to_frame(records), traffic_to_frame(traffic)
