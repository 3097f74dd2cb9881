from __future__ import annotations

from datetime import date, time
from typing import Iterable, List, Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field

from .data_cleaning import CRASH_DATE_FORMAT


class CollisionRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    crash_date: date = Field(..., alias="CRASH DATE")
    crash_time: time = Field(..., alias="CRASH TIME")
    borough: Optional[str] = Field(None, alias="BOROUGH")
    collision_id: Optional[int] = Field(None, alias="COLLISION_ID")
    contributing_factor_vehicle_1: Optional[str] = Field(None, alias="CONTRIBUTING FACTOR VEHICLE 1")
    contributing_factor_vehicle_2: Optional[str] = Field(None, alias="CONTRIBUTING FACTOR VEHICLE 2")
    contributing_factor_vehicle_3: Optional[str] = Field(None, alias="CONTRIBUTING FACTOR VEHICLE 3")
    contributing_factor_vehicle_4: Optional[str] = Field(None, alias="CONTRIBUTING FACTOR VEHICLE 4")
    contributing_factor_vehicle_5: Optional[str] = Field(None, alias="CONTRIBUTING FACTOR VEHICLE 5")
    number_of_persons_injured: Optional[int] = Field(0, alias="NUMBER OF PERSONS INJURED")
    number_of_persons_killed: Optional[int] = Field(0, alias="NUMBER OF PERSONS KILLED")
    number_of_pedestrians_injured: Optional[int] = Field(0, alias="NUMBER OF PEDESTRIANS INJURED")
    number_of_pedestrians_killed: Optional[int] = Field(0, alias="NUMBER OF PEDESTRIANS KILLED")
    number_of_cyclist_injured: Optional[int] = Field(0, alias="NUMBER OF CYCLIST INJURED")
    number_of_cyclist_killed: Optional[int] = Field(0, alias="NUMBER OF CYCLIST KILLED")
    number_of_motorist_injured: Optional[int] = Field(0, alias="NUMBER OF MOTORIST INJURED")
    number_of_motorist_killed: Optional[int] = Field(0, alias="NUMBER OF MOTORIST KILLED")


class TrafficRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    county: str = Field(..., alias="County")
    year: int = Field(..., alias="Year")
    station_id: Optional[str] = Field(None, alias="Station ID")
    count: Optional[float] = Field(None, alias="Count")
    length: Optional[float] = Field(None, alias="Length")


class YearBoroughSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    year: int = Field(..., alias="Year")
    borough: str = Field(..., alias="BOROUGH")
    persons_injured: float = Field(0, alias="num.ppl.injured")
    persons_killed: float = Field(0, alias="num.ppl.killed")
    pedestrians_injured: float = Field(0, alias="num.ped.injured")
    pedestrians_killed: float = Field(0, alias="num.ped.killed")
    cyclists_injured: float = Field(0, alias="num.cyc.injured")
    cyclists_killed: float = Field(0, alias="num.cyc.killed")
    motorists_injured: float = Field(0, alias="num.mot.injured")
    motorists_killed: float = Field(0, alias="num.mot.killed")
    collisions: int = Field(0, alias="num.collisions")
    traffic: float = Field(0, alias="traffic")
    road_length: float = Field(0, alias="road.length")
    stations: int = Field(0, alias="num.stations")


class RegressionSummary(BaseModel):
    dependent: str
    independent: str
    n_obs: int
    intercept: float
    intercept_stderr: Optional[float]
    intercept_pvalue: Optional[float]
    slope: float
    slope_stderr: Optional[float]
    slope_tvalue: Optional[float]
    slope_pvalue: Optional[float]
    r_squared: Optional[float]
    rmse: float
    mae: float
    report: str


def collisions_to_frame(records: Iterable[CollisionRecord]) -> pd.DataFrame:
    rows = []
    for record in records:
        row = record.model_dump(by_alias=True)
        row["CRASH DATE"] = record.crash_date.strftime(CRASH_DATE_FORMAT)
        row["CRASH TIME"] = f"{record.crash_time.hour}:{record.crash_time.minute:02d}"
        rows.append(row)
    columns = [field.alias for field in CollisionRecord.model_fields.values()]
    return pd.DataFrame(rows, columns=columns)


def traffic_to_frame(records: Iterable[TrafficRecord]) -> pd.DataFrame:
    rows = [record.model_dump(by_alias=True) for record in records]
    columns = [field.alias for field in TrafficRecord.model_fields.values()]
    return pd.DataFrame(rows, columns=columns)


def summaries_from_frame(joined: pd.DataFrame) -> List[YearBoroughSummary]:
    return [YearBoroughSummary.model_validate(row) for row in joined.to_dict(orient="records")]
