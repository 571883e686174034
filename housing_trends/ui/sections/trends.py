import pandas as pd
import streamlit as st

from ...charts import heatmap, line
from ...metrics import extremes, total_change


def render(prices: pd.DataFrame):
    st.subheader("Median price by region")
    st.caption("Each line is the median of the local authority medians in that region.")

    log_scale = st.checkbox("Log scale", value=False)
    by_region = (
        prices.groupby(["Region", "Year"])["Median Price"].median().reset_index()
    )
    fig = line(by_region, x="Year", y="Median Price", color="Region", markers=True)
    if log_scale:
        fig.update_yaxes(type="log")
    st.plotly_chart(fig, use_container_width=True)

    st.subheader("Local authority trajectories")
    options = sorted(prices["Local Authority"].unique().tolist())
    change = total_change(prices)
    default = extremes(change, "change %", n=5)["Local Authority"].tolist()
    picked = st.multiselect(
        "Local authorities",
        options,
        default=default,
        help="Defaults to the five largest price rises over the window.",
    )
    if picked:
        d = prices[prices["Local Authority"].isin(picked)]
        fig = line(d, x="Year", y="Median Price", color="Local Authority", markers=True)
        if log_scale:
            fig.update_yaxes(type="log")
        st.plotly_chart(fig, use_container_width=True)
    else:
        st.info("Pick at least one local authority.")

    st.subheader("Regional heatmap (Region × Year)")
    st.caption("Darker cells indicate higher median prices.")
    pivot = by_region.pivot(index="Region", columns="Year", values="Median Price").sort_index()
    fig = heatmap(pivot, labels=dict(color="Median price"))
    fig.update_xaxes(title_text="Year")
    st.plotly_chart(fig, use_container_width=True)
