"""Shared fixtures: small observation groups and an ONS-style raw sheet."""

from __future__ import annotations

import pandas as pd
import pytest

from housing_trends.models import Observation


def make_group(key: str, points) -> list[Observation]:
    return [Observation(group_key=key, time=t, value=v) for t, v in points]


@pytest.fixture()
def doubling_group():
    # log2(200) - log2(100) == 1
    return make_group("A", [(0, 100.0), (1, 200.0)])


@pytest.fixture()
def flat_group():
    return make_group("B", [(0, 50.0), (1, 50.0), (2, 50.0)])


@pytest.fixture()
def noisy_group():
    # non-contiguous years with a repeated year
    return make_group(
        "Cheltenham",
        [(0, 210_000.0), (1, 205_000.0), (1, 212_500.0), (3, 240_000.0), (6, 265_000.0), (10, 330_000.0)],
    )


@pytest.fixture()
def mixed_observations(doubling_group, flat_group, noisy_group):
    """Three fittable groups interleaved with one of each failure kind."""
    bad_value = make_group("Isles of Scilly", [(0, 300_000.0), (1, 0.0), (2, 310_000.0)])
    one_year = make_group("City of London", [(4, 800_000.0), (4, 820_000.0)])
    single = make_group("Rutland", [(0, 250_000.0)])
    return (
        doubling_group[:1]
        + bad_value
        + noisy_group
        + one_year
        + doubling_group[1:]
        + flat_group
        + single
    )


@pytest.fixture()
def raw_sheet():
    """Header-less frame shaped like the ONS median price workbook."""
    rows = [
        ["Median price paid for administrative geographies", None, None, None, None, None, None, None],
        [None] * 8,
        [
            "Region code",
            "Region name",
            "Local authority code",
            "Local authority name",
            "Year ending Dec 2007",
            "Year ending Mar 2008",
            "Year ending Dec 2008",
            "Year ending Dec 2009",
        ],
        ["E12000009", "South West", "E07000078", "Cheltenham", "200,000", "205000", "210,000", "220000"],
        ["E12000009", "South West", "E06000053", "Isles of Scilly", ":", "..", "300000", "0"],
        ["E12000007", "London", "E09000001", "City of London", "650000", "660000", "700,000", "765000"],
        [None] * 8,
        ["Source: Office for National Statistics", None, None, None, None, None, None, None],
    ]
    return pd.DataFrame(rows, dtype=object)


@pytest.fixture()
def long_prices():
    """Already tidy table as load_prices returns it."""
    return pd.DataFrame(
        {
            "Region": ["South West"] * 4 + ["London"] * 3 + ["North East"] * 2,
            "Local Authority": ["Cheltenham"] * 4 + ["Camden"] * 3 + ["Hartlepool", "Hartlepool"],
            "Year": [2008, 2009, 2010, 2011, 2008, 2009, 2010, 2008, 2009],
            "Median Price": [200_000.0, 210_000.0, 220_500.0, 231_525.0, 400_000.0, 800_000.0, 1_600_000.0, 90_000.0, -1.0],
        }
    )
