# housing_trends/metrics.py: helper calcs used by sections
import pandas as pd

R2_BANDS = [0.0, 0.5, 0.8, 0.9, 0.95, 1.0]
R2_LABELS = ["< 0.5", "0.5–0.8", "0.8–0.9", "0.9–0.95", "≥ 0.95"]


def yoy_median(prices: pd.DataFrame, price_col: str = "Median Price") -> float:
    """Latest-year change in the median of local authority median prices."""
    if len(prices) == 0:
        return float("nan")
    latest_year = int(prices["Year"].max())
    cur = prices[prices["Year"] == latest_year]
    prev = prices[prices["Year"] == latest_year - 1]
    if len(cur) == 0 or len(prev) == 0:
        return float("nan")
    prev_med = prev[price_col].median()
    return (cur[price_col].median() / prev_med - 1.0) if prev_med > 0 else float("nan")


def total_change(prices: pd.DataFrame, price_col: str = "Median Price") -> pd.DataFrame:
    """First-to-last year price change per local authority."""
    g = prices.sort_values("Year").groupby("Local Authority")
    out = pd.DataFrame(
        {
            "Region": g["Region"].first(),
            "first_year": g["Year"].first(),
            "last_year": g["Year"].last(),
            "first_price": g[price_col].first(),
            "last_price": g[price_col].last(),
        }
    )
    out["change %"] = (out["last_price"] / out["first_price"] - 1.0) * 100
    return out.reset_index()


def region_summary(models: pd.DataFrame) -> pd.DataFrame:
    """Median annual growth and fit quality of the local authorities in each region."""
    if len(models) == 0:
        return pd.DataFrame(
            columns=["Region", "local_authorities", "median_growth %", "median_r_squared"]
        )
    g = (
        models.groupby("Region")
        .agg(
            local_authorities=("Local Authority", "size"),
            median_growth=("annual_growth_rate", "median"),
            median_r_squared=("r_squared", "median"),
        )
        .reset_index()
    )
    g["median_growth %"] = g.pop("median_growth") * 100
    return g.sort_values("median_growth %", ascending=False)[
        ["Region", "local_authorities", "median_growth %", "median_r_squared"]
    ].reset_index(drop=True)


def fit_quality_bands(models: pd.DataFrame) -> pd.DataFrame:
    bands = pd.cut(
        models["r_squared"], bins=R2_BANDS, labels=R2_LABELS, include_lowest=True, right=False
    )
    # right=False leaves R² == 1.0 outside the last bin
    bands = bands.fillna(R2_LABELS[-1])
    counts = bands.value_counts().reindex(R2_LABELS, fill_value=0)
    return counts.rename_axis("R² band").reset_index(name="local_authorities")


def extremes(models: pd.DataFrame, col: str, n: int = 10, ascending: bool = False) -> pd.DataFrame:
    """Top ``n`` local authorities by ``col``; NaNs last."""
    return models.sort_values(col, ascending=ascending, na_position="last").head(n)

