"""Tests for growth-rate interpretation and predictions."""

from __future__ import annotations

import math

import numpy as np
import pytest
import statsmodels.api as sm

from housing_trends.interpret import (
    annual_growth_rate,
    baseline_value,
    doubling_time,
    predict,
    predict_log,
    predict_report,
    residuals,
)
from housing_trends.models import FittedModel, Prediction
from housing_trends.regression import fit_group, fit_groups


def test_growth_rate_and_baseline_for_doubling_prices(doubling_group):
    m = fit_group("A", doubling_group)
    assert annual_growth_rate(m) == pytest.approx(1.0)
    assert baseline_value(m) == pytest.approx(100.0)
    assert doubling_time(m) == pytest.approx(1.0)


def test_flat_prices_have_no_growth(flat_group):
    m = fit_group("B", flat_group)
    assert annual_growth_rate(m) == 0.0
    assert baseline_value(m) == pytest.approx(50.0)
    assert doubling_time(m) is None


def test_falling_prices_have_negative_growth():
    m = FittedModel("Z", intercept=17.0, slope=-0.1, r_squared=0.9, n_observations=5)
    assert annual_growth_rate(m) == pytest.approx(2 ** -0.1 - 1)
    assert annual_growth_rate(m) < 0
    assert doubling_time(m) is None


def test_five_percent_growth():
    m = FittedModel("Z", intercept=17.0, slope=math.log2(1.05), r_squared=1.0, n_observations=11)
    assert annual_growth_rate(m) == pytest.approx(0.05)
    assert doubling_time(m) == pytest.approx(1 / math.log2(1.05))


def test_predict_one_per_observation_in_order(noisy_group):
    m = fit_group("Cheltenham", noisy_group)
    preds = predict(m, noisy_group)
    assert [p.time for p in preds] == [o.time for o in noisy_group]
    assert all(isinstance(p, Prediction) and p.group_key == "Cheltenham" for p in preds)
    # repeated year -> identical predictions
    assert preds[1].predicted_value == preds[2].predicted_value


def test_predictions_lie_on_fitted_line(noisy_group):
    m = fit_group("Cheltenham", noisy_group)
    for p in predict(m, noisy_group):
        assert math.log2(p.predicted_value) == pytest.approx(m.intercept + m.slope * p.time)
        assert p.predicted_value == pytest.approx(2 ** predict_log(m, p.time))


def test_residuals_match_regression_residual_vector(noisy_group):
    m = fit_group("Cheltenham", noisy_group)
    t = np.array([o.time for o in noisy_group], dtype=float)
    y = np.log2([o.value for o in noisy_group])
    ref = sm.OLS(y, sm.add_constant(t)).fit()

    got = residuals(m, noisy_group)
    assert got == pytest.approx(ref.resid.tolist(), abs=1e-10)

    # actual - predicted, taken through the price-space predictions
    via_prices = [
        math.log2(o.value) - math.log2(p.predicted_value)
        for o, p in zip(noisy_group, predict(m, noisy_group))
    ]
    assert via_prices == pytest.approx(got, abs=1e-10)


def test_residuals_satisfy_normal_equations(noisy_group):
    m = fit_group("Cheltenham", noisy_group)
    r = np.array(residuals(m, noisy_group))
    t = np.array([o.time for o in noisy_group], dtype=float)
    assert r.sum() == pytest.approx(0.0, abs=1e-10)
    assert float(r @ t) == pytest.approx(0.0, abs=1e-9)


def test_predict_report_skips_failed_groups(mixed_observations):
    report = fit_groups(mixed_observations)
    preds = predict_report(report)
    keys = {p.group_key for p in preds}
    assert keys == set(report.models)
    assert len(preds) == sum(len(report.groups[k]) for k in report.models)
