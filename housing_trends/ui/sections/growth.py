import streamlit as st

from ...charts import bar, box, hist
from ...metrics import extremes
from ...pipeline import AnalysisResult


def render(result: AnalysisResult):
    st.subheader("Fitted annual growth rates")
    st.caption(
        "Each local authority gets its own line log2(price) = a + b·(year − base year); "
        "annual growth is 2^b − 1."
    )
    models = result.models.copy()
    if models.empty:
        st.info("No local authority could be fitted with the current filters.")
        return
    models["growth %"] = models["annual_growth_rate"] * 100

    bins = st.slider("Bins", 10, 100, 40)
    st.plotly_chart(
        hist(models["growth %"], nbins=bins, labels={"x": "Annual growth (%)"}),
        use_container_width=True,
    )

    n = st.slider("Show top/bottom", 5, 30, 10)
    c1, c2 = st.columns(2)
    with c1:
        st.markdown("**Fastest growing**")
        top = extremes(models, "growth %", n=n).sort_values("growth %")
        st.plotly_chart(
            bar(top, x="growth %", y="Local Authority", orientation="h"),
            use_container_width=True,
        )
    with c2:
        st.markdown("**Slowest growing**")
        bottom = extremes(models, "growth %", n=n, ascending=True).sort_values(
            "growth %", ascending=False
        )
        st.plotly_chart(
            bar(bottom, x="growth %", y="Local Authority", orientation="h"),
            use_container_width=True,
        )

    st.subheader("Growth by region")
    st.plotly_chart(
        box(models, x="Region", y="growth %", points="all", hover_name="Local Authority"),
        use_container_width=True,
    )

    st.dataframe(
        models.sort_values("growth %", ascending=False)[
            [
                "Region",
                "Local Authority",
                "growth %",
                "baseline_price",
                "doubling_time_years",
                "r_squared",
                "n_observations",
            ]
        ],
        use_container_width=True,
    )
