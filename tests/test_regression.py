"""Tests for the per-group OLS fit engine.

Reference values come from statsmodels OLS and numpy.polyfit on the same
log2-transformed data.
"""

from __future__ import annotations

import logging
import math

import numpy as np
import pytest
import statsmodels.api as sm

from housing_trends.errors import DegenerateFit, FitError, InsufficientData, InvalidValue
from housing_trends.models import FittedModel
from housing_trends.regression import fit_group, fit_groups, group_observations

from conftest import make_group


def _reference(observations):
    t = np.array([o.time for o in observations], dtype=float)
    y = np.log2([o.value for o in observations])
    return sm.OLS(y, sm.add_constant(t)).fit()


def _ssr(observations, intercept, slope):
    return sum(
        (math.log2(o.value) - (intercept + slope * o.time)) ** 2 for o in observations
    )


# ======================================================================== #
# group_observations                                                         #
# ======================================================================== #


def test_group_observations_partitions_by_key(mixed_observations):
    groups = group_observations(mixed_observations)
    assert list(groups) == [
        "A",
        "Isles of Scilly",
        "Cheltenham",
        "City of London",
        "B",
        "Rutland",
    ]
    assert sum(len(v) for v in groups.values()) == len(mixed_observations)
    assert all(o.group_key == k for k, obs in groups.items() for o in obs)


def test_group_observations_keeps_input_order_within_group(mixed_observations):
    groups = group_observations(mixed_observations)
    assert [o.time for o in groups["A"]] == [0, 1]


def test_group_observations_empty():
    assert group_observations([]) == {}


# ======================================================================== #
# fit_group: scenarios                                                       #
# ======================================================================== #


def test_doubling_prices_give_unit_slope(doubling_group):
    m = fit_group("A", doubling_group)
    assert isinstance(m, FittedModel)
    assert m.slope == pytest.approx(1.0)
    assert m.intercept == pytest.approx(math.log2(100))
    assert m.r_squared == pytest.approx(1.0)
    assert m.n_observations == 2


def test_flat_prices_give_zero_slope_and_zero_r_squared(flat_group):
    m = fit_group("B", flat_group)
    assert m.slope == 0.0
    assert m.intercept == pytest.approx(math.log2(50))
    # no variance to explain: R² is 0 by convention, not NaN
    assert m.r_squared == 0.0
    assert not math.isnan(m.r_squared)


def test_colinear_points_in_log_space_give_r_squared_one():
    obs = make_group("G", [(t, 1000.0 * 1.05 ** t) for t in range(11)])
    m = fit_group("G", obs)
    assert m.r_squared == pytest.approx(1.0)
    assert 2 ** m.slope == pytest.approx(1.05)


# ======================================================================== #
# fit_group: against a reference OLS                                         #
# ======================================================================== #


def test_matches_statsmodels_with_duplicate_and_gapped_years(noisy_group):
    m = fit_group("Cheltenham", noisy_group)
    ref = _reference(noisy_group)
    assert m.intercept == pytest.approx(ref.params[0], rel=1e-10)
    assert m.slope == pytest.approx(ref.params[1], rel=1e-10)
    assert m.r_squared == pytest.approx(ref.rsquared, rel=1e-10)
    assert m.n_observations == len(noisy_group)


def test_matches_polyfit_on_random_groups():
    rng = np.random.default_rng(7)
    for i in range(20):
        n = int(rng.integers(3, 15))
        times = rng.integers(0, 11, size=n)
        times[0], times[1] = 0, 10  # at least two distinct years
        values = 150_000 * 2 ** (0.04 * times + rng.normal(0, 0.05, size=n))
        obs = make_group(f"LA{i}", zip(times.tolist(), values.tolist()))
        m = fit_group(f"LA{i}", obs)
        slope, intercept = np.polyfit(times.astype(float), np.log2(values), 1)
        assert m.slope == pytest.approx(slope, rel=1e-8, abs=1e-12)
        assert m.intercept == pytest.approx(intercept, rel=1e-8)
        assert 0.0 <= m.r_squared <= 1.0


def test_fitted_line_minimises_squared_residuals(noisy_group):
    m = fit_group("Cheltenham", noisy_group)
    best = _ssr(noisy_group, m.intercept, m.slope)
    for da, db in [(1e-3, 0), (-1e-3, 0), (0, 1e-4), (0, -1e-4), (1e-3, -1e-4)]:
        assert _ssr(noisy_group, m.intercept + da, m.slope + db) > best


# ======================================================================== #
# fit_group: failures                                                        #
# ======================================================================== #


def test_single_distinct_time_is_degenerate():
    obs = make_group("City of London", [(4, 800_000.0), (4, 820_000.0), (4, 810_000.0)])
    with pytest.raises(DegenerateFit) as exc:
        fit_group("City of London", obs)
    assert exc.value.group_key == "City of London"
    assert exc.value.time == 4


@pytest.mark.parametrize("bad", [0.0, -5.0, float("nan"), float("inf")])
def test_non_positive_or_non_finite_value_is_invalid(bad):
    obs = make_group("X", [(0, 100.0), (1, bad), (2, 120.0)])
    with pytest.raises(InvalidValue) as exc:
        fit_group("X", obs)
    assert exc.value.time == 1
    assert exc.value.reason == "InvalidValue"


def test_invalid_value_is_checked_before_sample_size():
    with pytest.raises(InvalidValue):
        fit_group("X", make_group("X", [(0, -1.0)]))


@pytest.mark.parametrize("points", [[], [(0, 100.0)]])
def test_fewer_than_two_observations_is_insufficient(points):
    with pytest.raises(InsufficientData) as exc:
        fit_group("X", make_group("X", points))
    assert exc.value.n_observations == len(points)


def test_fit_errors_are_value_errors():
    assert issubclass(FitError, ValueError)
    for cls in (InvalidValue, DegenerateFit, InsufficientData):
        assert issubclass(cls, FitError)


# ======================================================================== #
# fit_groups                                                                 #
# ======================================================================== #


def test_fit_groups_collects_models_and_failures(mixed_observations):
    report = fit_groups(mixed_observations)

    assert list(report.models) == ["A", "Cheltenham", "B"]
    assert {k: f.reason for k, f in report.failures.items()} == {
        "Isles of Scilly": "InvalidValue",
        "City of London": "DegenerateFit",
        "Rutland": "InsufficientData",
    }
    # every group lands in exactly one of the two
    assert set(report.models).isdisjoint(report.failures)
    assert set(report.models) | set(report.failures) == set(report.groups)
    assert report.n_groups == 6


def test_fit_groups_never_emits_nan(mixed_observations):
    report = fit_groups(mixed_observations)
    for m in report.models.values():
        assert all(math.isfinite(v) for v in (m.intercept, m.slope, m.r_squared))
        assert 0.0 <= m.r_squared <= 1.0


def test_fit_groups_model_keys_match_their_group(mixed_observations):
    report = fit_groups(mixed_observations)
    for key, m in report.models.items():
        assert m.group_key == key
        assert m.n_observations == len(report.groups[key])


def test_fit_groups_parallel_matches_sequential(mixed_observations):
    seq = fit_groups(mixed_observations, workers=1)
    par = fit_groups(mixed_observations, workers=4)
    assert par.models == seq.models
    assert list(par.models) == list(seq.models)
    assert list(par.failures) == list(seq.failures)
    assert [f.reason for f in par.failures.values()] == [f.reason for f in seq.failures.values()]


def test_fit_groups_logs_each_failure(mixed_observations, caplog):
    with caplog.at_level(logging.WARNING, logger="housing_trends.regression"):
        fit_groups(mixed_observations)
    failed = [r for r in caplog.records if "fit_failed" in r.getMessage()]
    assert len(failed) == 3


def test_fit_groups_empty_input():
    report = fit_groups([])
    assert report.models == {}
    assert report.failures == {}
    assert report.n_groups == 0
