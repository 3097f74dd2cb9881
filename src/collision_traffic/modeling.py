from __future__ import annotations

import logging
from math import isfinite, sqrt
from typing import Dict, Optional

import numpy as np
import pandas as pd
import statsmodels.api as sm
from sklearn.metrics import mean_absolute_error, mean_squared_error

from .schemas import RegressionSummary

logger = logging.getLogger(__name__)

MIN_OBSERVATIONS = 3

DEPENDENT_VARIABLES = ("num.ppl.killed", "num.ppl.injured")


def _finite(value) -> Optional[float]:  # noqa: ANN001
    value = float(value)
    return value if isfinite(value) else None


def evaluate_fit(y, fitted) -> Dict[str, float]:  # noqa: ANN001
    rmse = sqrt(mean_squared_error(y, fitted))
    mae = mean_absolute_error(y, fitted)
    return {"rmse": float(rmse), "mae": float(mae)}


def fit_ols(df: pd.DataFrame, dependent: str, independent: str = "traffic") -> RegressionSummary:
    """Ordinary least squares of ``dependent`` on ``independent`` with an intercept.

    R-squared is ``None`` when the dependent variable has no variance.
    """
    missing = [col for col in (dependent, independent) if col not in df.columns]
    if missing:
        raise KeyError(f"Columns not found for regression: {missing}")

    data = df[[independent, dependent]].apply(pd.to_numeric, errors="coerce").dropna()
    if len(data) < MIN_OBSERVATIONS:
        raise ValueError(
            f"Need at least {MIN_OBSERVATIONS} observations to regress {dependent} on {independent}, "
            f"got {len(data)}"
        )

    y = data[dependent].astype(float)
    X = sm.add_constant(data[[independent]].astype(float), has_constant="add")
    result = sm.OLS(y, X).fit()

    constant_y = bool(np.ptp(y.to_numpy()) == 0)
    metrics = evaluate_fit(y, result.fittedvalues)
    summary = RegressionSummary(
        dependent=dependent,
        independent=independent,
        n_obs=int(result.nobs),
        intercept=float(result.params["const"]),
        intercept_stderr=_finite(result.bse["const"]),
        intercept_pvalue=_finite(result.pvalues["const"]),
        slope=float(result.params[independent]),
        slope_stderr=_finite(result.bse[independent]),
        slope_tvalue=_finite(result.tvalues[independent]),
        slope_pvalue=_finite(result.pvalues[independent]),
        r_squared=None if constant_y else _finite(result.rsquared),
        report=str(result.summary()),
        **metrics,
    )
    logger.info(
        "%s ~ %s: slope=%.6g p=%s R2=%s (n=%d)",
        dependent, independent, summary.slope, summary.slope_pvalue, summary.r_squared, summary.n_obs,
    )
    return summary


def run_regressions(joined: pd.DataFrame, independent: str = "traffic") -> Dict[str, RegressionSummary]:
    return {dependent: fit_ols(joined, dependent, independent) for dependent in DEPENDENT_VARIABLES}


def format_summary(summary: RegressionSummary) -> str:
    lines = [
        f"OLS: {summary.dependent} ~ {summary.independent}  (n={summary.n_obs})",
        summary.report,
        f"RMSE: {summary.rmse:.6g}  MAE: {summary.mae:.6g}",
    ]
    return "\n".join(lines)
