import pandas as pd
import streamlit as st

from ...charts import bar
from ...pipeline import AnalysisResult


def render(prices: pd.DataFrame, result: AnalysisResult):
    st.subheader("Excluded local authorities")
    st.caption(
        "InvalidValue: a price that is zero or negative. "
        "InsufficientData: fewer than two years. "
        "DegenerateFit: every price is in the same year."
    )
    st.write(result.failure_summary())

    failures = result.failures
    if failures.empty:
        return

    counts = failures["error"].value_counts().rename_axis("error").reset_index(name="count")
    st.plotly_chart(bar(counts, x="error", y="count"), use_container_width=True)
    st.dataframe(failures, use_container_width=True)

    la = st.selectbox("Inspect raw rows for", failures["Local Authority"].tolist())
    st.dataframe(
        prices[prices["Local Authority"] == la].sort_values("Year"),
        use_container_width=True,
    )
