# housing_trends/pipeline.py: prices table -> fits -> output tables
import logging
from dataclasses import dataclass
from typing import Optional

import pandas as pd

from .config import AnalysisConfig
from .dataio import to_observations
from .models import FitReport
from .regression import fit_groups
from .report import failures_frame, models_frame, predictions_frame

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    report: FitReport
    models: pd.DataFrame
    predictions: pd.DataFrame
    failures: pd.DataFrame
    base_year: int

    def failure_summary(self) -> str:
        if self.failures.empty:
            return f"All {len(self.models)} local authorities fitted."
        counts = self.failures["error"].value_counts()
        parts = ", ".join(f"{n} {reason}" for reason, n in counts.items())
        return (
            f"{len(self.models)} of {self.report.n_groups} local authorities fitted; "
            f"{len(self.failures)} excluded ({parts})."
        )


def run_pipeline(prices: pd.DataFrame, config: Optional[AnalysisConfig] = None) -> AnalysisResult:
    """Fit every local authority in a long prices table and build the output tables."""
    config = config or AnalysisConfig()
    observations = to_observations(prices, config.base_year)
    report = fit_groups(observations, workers=config.workers)
    result = AnalysisResult(
        report=report,
        models=models_frame(report, prices),
        predictions=predictions_frame(report, config.base_year, include_observed=True),
        failures=failures_frame(report),
        base_year=config.base_year,
    )
    logger.info(result.failure_summary())
    return result
