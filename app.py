# app.py
# Streamlit report: UK median house prices by local authority
# ---------------------------------------------------------------
# Sections
# - Overview (KPIs, growth by region)
# - Price trends (regional medians, local authority trajectories, heatmap)
# - Growth rates (per-authority log2 regressions, 2^slope − 1)
# - Fit quality (R² distribution, growth vs fit)
# - Local authority detail (observed vs fitted, residuals, OLS summary)
# - Excluded local authorities (fit failures and why)
#
# How to run
#   streamlit run app.py
# Place the ONS median price workbook in data/, or use the file uploader.

import logging

import pandas as pd
import streamlit as st

from housing_trends.config import BASE_YEAR, FIRST_YEAR, AnalysisConfig
from housing_trends.dataio import load_data
from housing_trends.errors import SchemaError
from housing_trends.pipeline import run_pipeline
from housing_trends.ui.components import page_header
from housing_trends.ui.sections import detail, failures, fit_quality, growth, overview, trends

logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(name)s: %(message)s")

st.set_page_config(page_title="UK House Prices by Local Authority", layout="wide")


@st.cache_resource(show_spinner=False)
def fit_all(prices: pd.DataFrame, base_year: int, workers: int):
    return run_pipeline(prices, AnalysisConfig(base_year=base_year, workers=workers))


page_header(
    "UK House Price Growth by Local Authority",
    "Median price paid per local authority, one log-linear trend per authority.",
    "Each local authority's median prices are fitted with log2(price) = a + b·t, "
    "t = years since the base year. 2^b − 1 is the annual growth rate and R² says how "
    "well a constant growth rate describes the authority.\n\n"
    "Data Source: [ONS House price statistics for small areas]"
    "(https://www.ons.gov.uk/peoplepopulationandcommunity/housing/datasets/"
    "medianhousepricefornationalandsubnationalgeographiesquarterlyrollingyearhpssadataset09).",
)

with st.sidebar:
    st.header("Data")
    file = st.file_uploader("Upload workbook (optional)", type=["xls", "xlsx", "csv"])
    min_year = st.number_input("First year", min_value=1995, max_value=2100, value=FIRST_YEAR)
    try:
        prices = load_data(file.read() if file else None, min_year=int(min_year))
    except (SchemaError, FileNotFoundError) as e:
        st.error(f"Could not load prices: {e}")
        st.stop()

    if prices.empty:
        st.warning("No rows in the selected years.")
        st.stop()

    st.caption(
        f"Loaded **{len(prices):,}** rows • {prices['Local Authority'].nunique():,} "
        f"local authorities • {prices['Year'].min()} → {prices['Year'].max()}"
    )

    st.header("Sections")
    nav = st.sidebar.radio(
        "Please select a section.",
        [
            "Overview",
            "Price trends",
            "Growth rates",
            "Fit quality",
            "Local authority detail",
            "Excluded local authorities",
        ],
    )

    st.header("Global filters")
    region = st.multiselect("Region", sorted(prices["Region"].dropna().unique().tolist()))
    base_year = st.number_input(
        "Base year (t = 0)", min_value=1995, max_value=2100, value=max(BASE_YEAR, int(min_year))
    )
    workers = st.slider("Fit workers", 1, 8, 1)

base = prices[prices["Region"].isin(region)] if region else prices
result = fit_all(base, int(base_year), workers)

if nav == "Overview":
    overview.render(base, result)

if nav == "Price trends":
    trends.render(base)

if nav == "Growth rates":
    growth.render(result)

if nav == "Fit quality":
    fit_quality.render(result)

if nav == "Local authority detail":
    detail.render(base, result)

if nav == "Excluded local authorities":
    failures.render(base, result)

st.caption("Built with Streamlit, Plotly, pandas and statsmodels.")
