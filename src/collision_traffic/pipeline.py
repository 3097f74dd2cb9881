from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

import pandas as pd

from . import aggregation, plotting
from .data_cleaning import clean_collisions, clean_traffic
from .joining import JoinReport, build_year_borough_summary
from .loading import read_collisions, read_traffic
from .modeling import format_summary, run_regressions
from .schemas import RegressionSummary, YearBoroughSummary, summaries_from_frame
from .settings import ANALYSIS_SETTINGS, PATHS, AnalysisSettings, Paths

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    collisions: pd.DataFrame
    traffic: pd.DataFrame
    chart_tables: Dict[str, pd.DataFrame]
    joined: pd.DataFrame
    join_report: JoinReport
    summaries: List[YearBoroughSummary]
    regressions: Dict[str, RegressionSummary]
    figures: List[Path] = field(default_factory=list)


def build_chart_tables(collisions: pd.DataFrame, top_factors: int) -> Dict[str, pd.DataFrame]:
    return {
        "factors": aggregation.factor_totals(collisions, top_n=top_factors),
        "hourly": aggregation.hourly_totals(collisions),
        "monthly": aggregation.monthly_totals(collisions),
        "yearly": aggregation.yearly_totals(collisions),
        "year_borough": aggregation.collisions_by_year_borough(collisions),
    }


def render_figures(result: AnalysisResult, output_dir: Path) -> List[Path]:
    tables = result.chart_tables
    figures = [
        plotting.plot_factor_totals(tables["factors"], output_dir),
        plotting.plot_hourly_totals(tables["hourly"], output_dir),
        plotting.plot_monthly_totals(tables["monthly"], output_dir),
        plotting.plot_year_borough(tables["year_borough"], output_dir),
    ]
    for summary in result.regressions.values():
        figures.append(plotting.plot_regression(result.joined, summary, output_dir))
    logger.info("Saved %d figures to %s", len(figures), output_dir)
    return figures


def run_analysis(paths: Paths = PATHS, settings: AnalysisSettings = ANALYSIS_SETTINGS) -> AnalysisResult:
    collisions = clean_collisions(read_collisions(paths.collisions_csv), settings.start_date, settings.end_date)
    traffic = clean_traffic(read_traffic(paths.traffic_csv), settings.min_traffic_year)

    chart_tables = build_chart_tables(collisions, settings.top_factors)
    joined, report = build_year_borough_summary(collisions, traffic)

    result = AnalysisResult(
        collisions=collisions,
        traffic=traffic,
        chart_tables=chart_tables,
        joined=joined,
        join_report=report,
        summaries=summaries_from_frame(joined),
        regressions=run_regressions(joined),
    )
    if settings.save_figures:
        result.figures = render_figures(result, paths.figures_dir)
    return result


def main() -> None:
    logging.basicConfig(level=ANALYSIS_SETTINGS.log_level)
    result = run_analysis(PATHS, ANALYSIS_SETTINGS)
    print(result.joined.to_string(index=False))
    for summary in result.regressions.values():
        print()
        print(format_summary(summary))


if __name__ == "__main__":
    main()
