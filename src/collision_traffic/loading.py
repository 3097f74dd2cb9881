from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from .data_cleaning import COLLISION_COLUMNS, TRAFFIC_COLUMNS
from .settings import PATHS

logger = logging.getLogger(__name__)


def read_table(path: Path, required: list[str]) -> pd.DataFrame:
    path = Path(path)
    if not path.exists():
        logger.error("Input file %s does not exist", path)
        raise FileNotFoundError(f"Input file not found: {path}")

    logger.info("Reading %s", path)
    df = pd.read_csv(path, low_memory=False)
    df.columns = [str(c).strip() for c in df.columns]

    missing = [col for col in required if col not in df.columns]
    if missing:
        raise KeyError(f"{path.name} is missing required columns: {missing}")
    logger.info("Read %d rows from %s", len(df), path.name)
    return df


def read_collisions(path: Path = PATHS.collisions_csv) -> pd.DataFrame:
    return read_table(path, COLLISION_COLUMNS)


def read_traffic(path: Path = PATHS.traffic_csv) -> pd.DataFrame:
    return read_table(path, TRAFFIC_COLUMNS)
