from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnalysisSettings(BaseSettings):
    """Filtering windows and output switches for the analysis run."""

    start_date: date = Field(default=date(2013, 1, 1))
    end_date: date = Field(default=date(2020, 12, 31))
    min_traffic_year: int = Field(default=2013)
    top_factors: int = Field(default=15)
    save_figures: bool = Field(default=True)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")

    model_config = SettingsConfigDict(env_prefix="ANALYSIS_", env_file=".env")

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_case_level(cls, value):  # noqa: ANN001
        return value.strip().upper() if isinstance(value, str) else value


class Paths(BaseModel):
    """Project paths used across scripts."""

    collisions_csv: Path = Path("data/Motor_Vehicle_Collisions_-_Crashes.csv")
    traffic_csv: Path = Path("data/Annual_Average_Daily_Traffic.csv")
    figures_dir: Path = Path("artifacts/figures")


ANALYSIS_SETTINGS = AnalysisSettings()
PATHS = Paths()
