# housing_trends/dataio.py: loading, header mapping, wide-to-long reshape
import io
import logging
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd
import streamlit as st

from .cleaning import coerce_price, pick_year_columns, standardise_strings
from .config import FIRST_YEAR, AnalysisConfig, default_dataset_path
from .errors import SchemaError
from .models import Observation

logger = logging.getLogger(__name__)

CANONICAL_COLUMNS = ["Region", "Local Authority", "Year", "Median Price"]

HEADER_ALIASES = {
    # region
    "region": "Region",
    "region name": "Region",
    "region/country name": "Region",
    "region code": "Region Code",
    # local authority
    "local authority": "Local Authority",
    "local authority name": "Local Authority",
    "local_authority": "Local Authority",
    "la name": "Local Authority",
    "district": "Local Authority",
    "local authority code": "Local Authority Code",
    "la code": "Local Authority Code",
    # long-form value columns
    "year": "Year",
    "median price": "Median Price",
    "median_price": "Median Price",
    "median price paid": "Median Price",
    "price": "Median Price",
}

Source = Union[str, Path, bytes, None]

_EXCEL_SUFFIXES = (".xls", ".xlsx", ".xlsm", ".ods")
_EXCEL_MAGIC = (b"PK\x03\x04", b"\xd0\xcf\x11\xe0")


def _map_header(col):
    return HEADER_ALIASES.get(str(col).strip().lower(), col)


def _is_excel(source) -> bool:
    if isinstance(source, bytes):
        return source.startswith(_EXCEL_MAGIC)
    return str(source).lower().endswith(_EXCEL_SUFFIXES)


def read_raw(source: Source = None, sheet_name=0) -> pd.DataFrame:
    """Read a sheet or CSV with no header so the header row can be located."""
    if source is None:
        source = default_dataset_path()
    raw = io.BytesIO(source) if isinstance(source, bytes) else source
    if _is_excel(source):
        df = pd.read_excel(raw, sheet_name=sheet_name, header=None, dtype=object)
    else:
        df = pd.read_csv(raw, header=None, dtype=str)
    logger.info("read_raw rows=%d cols=%d", df.shape[0], df.shape[1])
    return df


def find_header_row(raw: pd.DataFrame, max_scan: int = 30) -> int:
    """Index of the first row naming a local authority column.

    ONS workbooks put titles and notes above the real header.
    """
    for i in range(min(max_scan, len(raw))):
        mapped = [_map_header(v) for v in raw.iloc[i].tolist()]
        if "Local Authority" in mapped:
            return i
    raise SchemaError(["Local Authority"])


def tidy_prices(raw: pd.DataFrame) -> pd.DataFrame:
    """Header-less raw sheet -> long table with CANONICAL_COLUMNS.

    Accepts the wide ONS layout (one column per year) or a table that is
    already long (Year and Median Price columns).
    """
    header_at = find_header_row(raw)
    df = raw.iloc[header_at + 1 :].copy()
    df.columns = [_map_header(c) for c in raw.iloc[header_at].tolist()]
    df = df.loc[:, ~pd.Index(df.columns).duplicated()]

    if "Region" not in df:
        df["Region"] = "Unknown"

    if "Year" in df and "Median Price" in df:
        long = df[CANONICAL_COLUMNS].copy()
    else:
        year_cols = pick_year_columns(df.columns)
        if not year_cols:
            raise SchemaError(["Year", "Median Price"])
        wide = df[["Region", "Local Authority"] + list(year_cols.values())]
        wide = wide.rename(columns={col: year for year, col in year_cols.items()})
        long = wide.melt(
            id_vars=["Region", "Local Authority"],
            var_name="Year",
            value_name="Median Price",
        )

    long = standardise_strings(long)
    long = long.dropna(subset=["Local Authority"]).copy()
    long["Region"] = long["Region"].fillna("Unknown")
    long["Year"] = pd.to_numeric(long["Year"], errors="coerce")
    long["Median Price"] = coerce_price(long["Median Price"])

    before = len(long)
    long = long.dropna(subset=["Year", "Median Price"]).copy()
    if len(long) < before:
        logger.info("tidy_prices dropped %d rows with no year or price", before - len(long))
    long["Year"] = long["Year"].astype(int)
    return long.sort_values(["Local Authority", "Year"]).reset_index(drop=True)


def restrict_years(
    df: pd.DataFrame, min_year: int = FIRST_YEAR, max_year: Optional[int] = None
) -> pd.DataFrame:
    mask = df["Year"] >= min_year
    if max_year is not None:
        mask &= df["Year"] <= max_year
    return df.loc[mask].reset_index(drop=True)


def load_prices(source: Source = None, config: Optional[AnalysisConfig] = None) -> pd.DataFrame:
    """Read, reshape and window a median price table.

    Non-positive prices are kept; the fit engine reports them per group.
    """
    config = config or AnalysisConfig()
    df = tidy_prices(read_raw(source, sheet_name=config.sheet_name))
    df = restrict_years(df, config.min_year, config.max_year)
    logger.info(
        "load_prices rows=%d local_authorities=%d years=%s-%s",
        len(df),
        df["Local Authority"].nunique(),
        df["Year"].min() if len(df) else "-",
        df["Year"].max() if len(df) else "-",
    )
    return df


def to_observations(df: pd.DataFrame, base_year: int) -> List[Observation]:
    return [
        Observation(group_key=la, time=int(year) - base_year, value=float(price))
        for la, year, price in zip(df["Local Authority"], df["Year"], df["Median Price"])
    ]


@st.cache_data(show_spinner=False)
def load_data(
    uploaded: Optional[bytes],
    min_year: int = FIRST_YEAR,
    max_year: Optional[int] = None,
    sheet_name=0,
) -> pd.DataFrame:
    config = AnalysisConfig(min_year=min_year, max_year=max_year, sheet_name=sheet_name)
    return load_prices(uploaded, config)
