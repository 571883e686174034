# housing_trends/charts.py: small, composable Plotly chart factories
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go


def bar(df: pd.DataFrame, x: str, y: str, **kwargs):
    return px.bar(df, x=x, y=y, **kwargs)


def line(df: pd.DataFrame, x: str, y: str, **kwargs):
    return px.line(df, x=x, y=y, **kwargs)


def hist(series, nbins=40, **kwargs):
    return px.histogram(x=series, nbins=nbins, **kwargs)


def box(df: pd.DataFrame, x: str, y: str, **kwargs):
    return px.box(df, x=x, y=y, **kwargs)


def heatmap(df_wide: pd.DataFrame, **kwargs):
    return px.imshow(df_wide, aspect="auto", **kwargs)


def scatter(df: pd.DataFrame, x: str, y: str, **kwargs):
    return px.scatter(df, x=x, y=y, **kwargs)


def actual_vs_fitted(predictions: pd.DataFrame, local_authority: str, log_y: bool = True):
    """Observed median prices as markers with the fitted exponential trend as a line."""
    d = predictions[predictions["Local Authority"] == local_authority].sort_values("Year")
    fig = go.Figure()
    fig.add_trace(
        go.Scatter(x=d["Year"], y=d["Median Price"], mode="markers", name="Observed")
    )
    fig.add_trace(
        go.Scatter(x=d["Year"], y=d["predicted_price"], mode="lines", name="Fitted")
    )
    fig.update_layout(title=local_authority, xaxis_title="Year", yaxis_title="Median price (£)")
    if log_y:
        fig.update_yaxes(type="log")
    return fig
