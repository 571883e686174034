import streamlit as st

from ...charts import bar, hist, scatter
from ...metrics import extremes, fit_quality_bands
from ...pipeline import AnalysisResult


def render(result: AnalysisResult):
    st.subheader("Fit quality (R²)")
    st.caption(
        "R² is the share of the variance in log2 price explained by a straight line in time. "
        "Flat series have no variance to explain and are reported as 0."
    )
    models = result.models
    if models.empty:
        st.info("No fitted local authorities.")
        return

    c1, c2 = st.columns(2)
    with c1:
        st.plotly_chart(
            hist(models["r_squared"], nbins=30, labels={"x": "R²"}),
            use_container_width=True,
        )
    with c2:
        st.plotly_chart(
            bar(fit_quality_bands(models), x="R² band", y="local_authorities"),
            use_container_width=True,
        )

    st.subheader("Growth vs fit")
    st.caption("Low R² with high growth usually means a jump or a reversal within the window.")
    d = models.assign(**{"growth %": models["annual_growth_rate"] * 100})
    st.plotly_chart(
        scatter(d, x="growth %", y="r_squared", color="Region", hover_name="Local Authority"),
        use_container_width=True,
    )

    st.markdown("**Worst fits**")
    st.dataframe(
        extremes(models, "r_squared", n=15, ascending=True), use_container_width=True
    )
