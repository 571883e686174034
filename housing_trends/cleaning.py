# housing_trends/cleaning.py: value cleaning helpers used by the loader
import re
from typing import Optional

import numpy as np
import pandas as pd

__all__ = [
    "standardise_strings",
    "coerce_price",
    "year_from_header",
    "pick_year_columns",
]

# ONS sheets mark suppressed or unavailable values with these
MISSING_MARKERS = {"", ":", "..", "-", "x", "[x]", "[c]", "n/a", "na", "nan", "none"}

_YEAR_RE = re.compile(r"(?<!\d)((?:19|20)\d{2})(?!\d)")


def standardise_strings(df: pd.DataFrame, cols=("Region", "Local Authority")) -> pd.DataFrame:
    for col in cols:
        if col in df:
            df[col] = (
                df[col]
                .astype(str)
                .str.replace(r"\s+", " ", regex=True)
                .str.strip()
                .replace({"nan": np.nan, "None": np.nan, "": np.nan})
            )
    return df


def coerce_price(s: pd.Series) -> pd.Series:
    """'£125,000' -> 125000.0; ONS missing markers and junk -> NaN."""
    text = s.astype(str).str.strip()
    text = text.where(~text.str.lower().isin(MISSING_MARKERS), np.nan)
    text = text.str.replace(r"[£,\s]", "", regex=True)
    return pd.to_numeric(text, errors="coerce")


def year_from_header(col) -> Optional[int]:
    """'Year ending Dec 2008' -> 2008, 2008.0 -> 2008, 'Region name' -> None."""
    if isinstance(col, (int, np.integer)):
        return int(col) if 1900 <= int(col) <= 2099 else None
    if isinstance(col, (float, np.floating)):
        if np.isnan(col) or not float(col).is_integer():
            return None
        return year_from_header(int(col))
    m = _YEAR_RE.search(str(col))
    return int(m.group(1)) if m else None


def pick_year_columns(columns) -> dict:
    """Map year -> column, one column per year.

    Quarterly rolling sheets carry four 'Year ending ...' columns per year;
    the December column is the calendar-year figure, so it wins. Otherwise
    the right-most column for that year is used.
    """
    picked = {}
    for col in columns:
        year = year_from_header(col)
        if year is None:
            continue
        current = picked.get(year)
        if current is not None and "dec" in str(current).lower():
            continue
        picked[year] = col
    return dict(sorted(picked.items()))
