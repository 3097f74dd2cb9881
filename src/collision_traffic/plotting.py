from __future__ import annotations

from pathlib import Path

import numpy as np
import pandas as pd
from matplotlib import pyplot as plt

from .aggregation import COLLISION_COUNT
from .schemas import RegressionSummary


def _save(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout()
    plt.savefig(path)
    plt.close()
    return path


def plot_factor_totals(factors: pd.DataFrame, output_dir: Path) -> Path:
    ordered = factors.iloc[::-1]
    plt.figure(figsize=(9, 7))
    plt.barh(ordered["factor"], ordered[COLLISION_COUNT])
    plt.xlabel("Collisions")
    plt.title("Collisions by contributing factor")
    return _save(output_dir / "factor_totals.png")


def plot_hourly_totals(hourly: pd.DataFrame, output_dir: Path) -> Path:
    plt.figure(figsize=(9, 5))
    plt.plot(hourly["CRASH_HOUR"].astype(int), hourly[COLLISION_COUNT], marker="o")
    plt.xticks(range(0, 24))
    plt.xlabel("Hour of day")
    plt.ylabel("Collisions")
    plt.title("Collisions by hour of day")
    return _save(output_dir / "hourly_totals.png")


def plot_monthly_totals(monthly: pd.DataFrame, output_dir: Path) -> Path:
    plt.figure(figsize=(9, 5))
    plt.bar(monthly["CRASH_MONTH"].astype(int), monthly[COLLISION_COUNT])
    plt.xticks(range(1, 13))
    plt.xlabel("Month")
    plt.ylabel("Collisions")
    plt.title("Collisions by month")
    return _save(output_dir / "monthly_totals.png")


def plot_year_borough(year_borough: pd.DataFrame, output_dir: Path, column: str = "num.ppl.injured") -> Path:
    plt.figure(figsize=(9, 5))
    for borough, group in year_borough.groupby("BOROUGH"):
        plt.plot(group["Year"], group[column], marker="o", label=borough)
    plt.xlabel("Year")
    plt.ylabel(column)
    plt.legend()
    plt.title(f"{column} by borough")
    return _save(output_dir / f"year_borough_{column.replace('.', '_')}.png")


def plot_regression(joined: pd.DataFrame, summary: RegressionSummary, output_dir: Path) -> Path:
    x = joined[summary.independent].astype(float)
    plt.figure(figsize=(8, 6))
    plt.scatter(x, joined[summary.dependent])
    xs = np.linspace(x.min(), x.max(), 50)
    plt.plot(xs, summary.intercept + summary.slope * xs, color="black")
    plt.xlabel(summary.independent)
    plt.ylabel(summary.dependent)
    plt.title(f"{summary.dependent} vs {summary.independent}")
    return _save(output_dir / f"regression_{summary.dependent.replace('.', '_')}.png")
