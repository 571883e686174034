# housing_trends/regression.py: per-local-authority OLS of log2(price) on time
"""Grouping and fit engine.

Observations are partitioned by local authority and each group gets its own
simple linear regression of ``log2(price)`` against years since the base
year. Groups that cannot be fitted are collected as failures next to the
successful models; one bad local authority never aborts the batch.

Example:
    >>> report = fit_groups(observations)
    >>> report.models["Cheltenham"].slope
    0.061...
    >>> report.failures["Isles of Scilly"].reason
    'InvalidValue'
"""
import logging
import math
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, Iterable, List, Sequence

import numpy as np

from .errors import DegenerateFit, FitError, InsufficientData, InvalidValue
from .models import FitReport, FittedModel, GroupFailure, Observation

logger = logging.getLogger(__name__)

MIN_OBSERVATIONS = 2


def group_observations(
    observations: Iterable[Observation],
) -> Dict[str, List[Observation]]:
    """Partition observations by group key in a single pass.

    Keys keep their first-seen order and each list keeps input order.
    """
    groups: Dict[str, List[Observation]] = {}
    for obs in observations:
        groups.setdefault(obs.group_key, []).append(obs)
    return groups


def _check_values(group_key: str, observations: Sequence[Observation]) -> None:
    for obs in observations:
        value = float(obs.value)
        if not math.isfinite(value) or value <= 0:
            raise InvalidValue(group_key, obs.time, obs.value)


def fit_group(group_key: str, observations: Sequence[Observation]) -> FittedModel:
    """Fit ``log2(value) = intercept + slope * time`` by closed-form OLS.

    Raises:
        InvalidValue: a value is non-positive or non-finite.
        InsufficientData: fewer than two observations.
        DegenerateFit: every observation shares the same time.
    """
    _check_values(group_key, observations)
    n = len(observations)
    if n < MIN_OBSERVATIONS:
        raise InsufficientData(group_key, n)

    t = np.array([obs.time for obs in observations], dtype=float)
    y = np.log2(np.array([obs.value for obs in observations], dtype=float))

    t_dev = t - t.mean()
    sxx = float(np.dot(t_dev, t_dev))
    if sxx == 0.0:
        raise DegenerateFit(group_key, observations[0].time)

    if np.ptp(y) == 0.0:
        # flat series: no variance to explain, R² is 0 by convention
        return FittedModel(
            group_key=group_key,
            intercept=float(y[0]),
            slope=0.0,
            r_squared=0.0,
            n_observations=n,
        )

    y_mean = y.mean()
    y_dev = y - y_mean
    slope = float(np.dot(t_dev, y_dev)) / sxx
    intercept = float(y_mean - slope * t.mean())

    resid = y - (intercept + slope * t)
    ss_res = float(np.dot(resid, resid))
    ss_tot = float(np.dot(y_dev, y_dev))
    r_squared = min(max(1.0 - ss_res / ss_tot, 0.0), 1.0)

    return FittedModel(
        group_key=group_key,
        intercept=intercept,
        slope=slope,
        r_squared=r_squared,
        n_observations=n,
    )


def fit_groups(observations: Iterable[Observation], workers: int = 1) -> FitReport:
    """Fit every group independently and collect models and failures.

    With ``workers > 1`` the groups fan out over a thread pool; the report is
    re-ordered to first-seen group order afterwards so the result does not
    depend on completion order.
    """
    groups = group_observations(observations)
    fitted: Dict[str, FittedModel] = {}
    failed: Dict[str, GroupFailure] = {}

    if workers > 1 and len(groups) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = {
                pool.submit(fit_group, key, obs): key for key, obs in groups.items()
            }
            for fut in as_completed(futures):
                key = futures[fut]
                try:
                    fitted[key] = fut.result()
                except FitError as exc:
                    failed[key] = GroupFailure(key, exc)
    else:
        for key, obs in groups.items():
            try:
                fitted[key] = fit_group(key, obs)
            except FitError as exc:
                failed[key] = GroupFailure(key, exc)

    for key, failure in failed.items():
        logger.warning(
            "fit_failed group=%r reason=%s %s", key, failure.reason, failure.message
        )

    report = FitReport(
        models={k: fitted[k] for k in groups if k in fitted},
        failures={k: failed[k] for k in groups if k in failed},
        groups=groups,
    )
    logger.info(
        "fit_batch groups=%d fitted=%d failed=%d workers=%d",
        report.n_groups,
        len(report.models),
        len(report.failures),
        workers,
    )
    return report
