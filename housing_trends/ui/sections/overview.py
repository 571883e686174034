import pandas as pd
import streamlit as st

from ...metrics import region_summary, yoy_median
from ...pipeline import AnalysisResult
from ..components import kpi, pct, pounds, section_help


def render(prices: pd.DataFrame, result: AnalysisResult):
    st.subheader("Data Preview")
    st.dataframe(prices.head(20))

    st.subheader("Key Market Indicators")
    section_help(
        "Figures summarise the filtered local authorities. Use the sidebar to adjust filters."
    )

    latest_year = int(prices["Year"].max())
    latest = prices[prices["Year"] == latest_year]
    models = result.models

    c1, c2, c3, c4, c5 = st.columns(5)
    with c1:
        kpi("Local authorities", f"{prices['Local Authority'].nunique():,}")
    with c2:
        kpi(f"Median price {latest_year}", pounds(latest["Median Price"].median()))
    with c3:
        kpi(
            "Median price YoY change",
            pct(yoy_median(prices)),
            help="Change in the median of local authority medians against the previous year.",
        )
    with c4:
        kpi(
            "Median annual growth (fitted)",
            pct(models["annual_growth_rate"].median() if len(models) else float("nan")),
            help="2^slope − 1 from the per-authority log2 regressions.",
        )
    with c5:
        kpi(
            "Fitted / excluded",
            f"{len(models):,} / {len(result.failures):,}",
        )

    st.markdown("### Growth by region")
    section_help("Median fitted annual growth and median R² of the local authorities in each region.")
    st.dataframe(region_summary(models), use_container_width=True)
