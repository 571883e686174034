# housing_trends/interpret.py: turn log2 coefficients into prices and growth rates
import math
from typing import List, Optional, Sequence

from .models import FitReport, FittedModel, Observation, Prediction


def annual_growth_rate(model: FittedModel) -> float:
    """Fractional price growth per year implied by the slope (0.05 == 5%)."""
    return 2.0 ** model.slope - 1.0


def baseline_value(model: FittedModel) -> float:
    """Fitted price at time 0, i.e. in the base year."""
    return 2.0 ** model.intercept


def doubling_time(model: FittedModel) -> Optional[float]:
    """Years for the fitted price to double; None when prices are not rising."""
    if model.slope <= 0:
        return None
    return 1.0 / model.slope


def predict_log(model: FittedModel, time: float) -> float:
    return model.intercept + model.slope * time


def predict(model: FittedModel, observations: Sequence[Observation]) -> List[Prediction]:
    """Evaluate the model at each observation's time.

    One prediction per observation, in the same order, so repeated years give
    repeated predictions and residuals line up with the input.
    """
    return [
        Prediction(
            group_key=model.group_key,
            time=obs.time,
            predicted_value=2.0 ** predict_log(model, obs.time),
        )
        for obs in observations
    ]


def residuals(model: FittedModel, observations: Sequence[Observation]) -> List[float]:
    """Observed minus fitted, in log2 space."""
    return [math.log2(obs.value) - predict_log(model, obs.time) for obs in observations]


def predict_report(report: FitReport) -> List[Prediction]:
    """Predictions for every fitted group; failed groups have none."""
    out: List[Prediction] = []
    for key, model in report.models.items():
        out.extend(predict(model, report.groups[key]))
    return out
