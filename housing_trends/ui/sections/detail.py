import numpy as np
import pandas as pd
import statsmodels.api as sm
import streamlit as st

from ...charts import actual_vs_fitted, bar
from ...interpret import annual_growth_rate, baseline_value, doubling_time
from ...pipeline import AnalysisResult
from ..components import kpi, pct, pounds


def render(prices: pd.DataFrame, result: AnalysisResult):
    st.subheader("Local authority detail")
    st.caption("Pick a local authority to compare its prices with its fitted trend.")

    fitted = list(result.report.models)
    if not fitted:
        st.info("No fitted local authorities.")
        return
    la = st.selectbox("Local authority", sorted(fitted))
    model = result.report.models[la]

    c1, c2, c3, c4 = st.columns(4)
    with c1:
        kpi("Annual growth", pct(annual_growth_rate(model)))
    with c2:
        kpi(f"Fitted price {result.base_year}", pounds(baseline_value(model)))
    with c3:
        years = doubling_time(model)
        kpi("Doubling time", f"{years:,.1f} yrs" if years else "–")
    with c4:
        kpi("R²", f"{model.r_squared:.3f}")

    log_y = st.checkbox("Log price axis", value=True)
    st.plotly_chart(actual_vs_fitted(result.predictions, la, log_y=log_y), use_container_width=True)

    d = result.predictions[result.predictions["Local Authority"] == la].sort_values("Year")
    st.markdown("**Residuals (log2 observed − log2 fitted)**")
    st.plotly_chart(bar(d, x="Year", y="residual"), use_container_width=True)
    st.dataframe(
        d[["Year", "Median Price", "predicted_price", "residual"]], use_container_width=True
    )

    with st.expander("statsmodels OLS summary"):
        obs = prices[prices["Local Authority"] == la]
        if len(obs) <= 2:
            st.info("Standard errors need at least three observations.")
        else:
            X = sm.add_constant((obs["Year"] - result.base_year).to_numpy(dtype=float))
            mod = sm.OLS(np.log2(obs["Median Price"].to_numpy(dtype=float)), X).fit()
            st.text(mod.summary(yname="log2(price)", xname=["const", "time"]).as_text())
