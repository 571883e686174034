# housing_trends/report.py: output tables built from a FitReport
import pandas as pd

from .interpret import annual_growth_rate, baseline_value, doubling_time, predict, residuals
from .models import FitReport

MODEL_COLUMNS = [
    "Region",
    "Local Authority",
    "intercept",
    "slope",
    "annual_growth_rate",
    "baseline_price",
    "doubling_time_years",
    "r_squared",
    "n_observations",
]
PREDICTION_COLUMNS = ["Local Authority", "Year", "predicted_price"]
FAILURE_COLUMNS = ["Local Authority", "error", "message"]


def region_lookup(prices: pd.DataFrame) -> dict:
    """Local authority -> region, taken from the first row seen for each."""
    pairs = prices[["Local Authority", "Region"]].drop_duplicates("Local Authority")
    return dict(zip(pairs["Local Authority"], pairs["Region"]))


def models_frame(report: FitReport, prices: pd.DataFrame = None) -> pd.DataFrame:
    regions = region_lookup(prices) if prices is not None else {}
    rows = []
    for key, m in report.models.items():
        rows.append(
            {
                "Region": regions.get(key, "Unknown"),
                "Local Authority": key,
                "intercept": m.intercept,
                "slope": m.slope,
                "annual_growth_rate": annual_growth_rate(m),
                "baseline_price": baseline_value(m),
                "doubling_time_years": doubling_time(m),
                "r_squared": m.r_squared,
                "n_observations": m.n_observations,
            }
        )
    out = pd.DataFrame(rows, columns=MODEL_COLUMNS)
    out["doubling_time_years"] = out["doubling_time_years"].astype(float)
    return out


def predictions_frame(
    report: FitReport, base_year: int, include_observed: bool = False
) -> pd.DataFrame:
    """One row per observation of every fitted local authority.

    ``include_observed`` adds the observed median price and the log2
    residual (observed minus fitted) for each row.
    """
    rows = []
    for key, model in report.models.items():
        obs = report.groups[key]
        for o, p, r in zip(obs, predict(model, obs), residuals(model, obs)):
            rows.append(
                {
                    "Local Authority": key,
                    "Year": p.time + base_year,
                    "predicted_price": p.predicted_value,
                    "Median Price": o.value,
                    "residual": r,
                }
            )
    out = pd.DataFrame(rows, columns=PREDICTION_COLUMNS + ["Median Price", "residual"])
    if not include_observed:
        return out[PREDICTION_COLUMNS]
    return out


def failures_frame(report: FitReport) -> pd.DataFrame:
    rows = [
        {"Local Authority": key, "error": f.reason, "message": f.message}
        for key, f in report.failures.items()
    ]
    return pd.DataFrame(rows, columns=FAILURE_COLUMNS)
