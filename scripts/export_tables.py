#!/usr/bin/env python3
"""
Fit every local authority and write the output tables, no dashboard.

- models.<ext>       Region, Local Authority, coefficients, growth rate, R²
- predictions.<ext>  Local Authority, Year, predicted_price (+ observed, residual)
- failures.<ext>     Local authorities that could not be fitted, and why

Parquet is written through DuckDB COPY (zstd), CSV through pandas.

CLI:
  python scripts/export_tables.py --input data/prices.xlsx --output out [--format parquet]

Import:
  from export_tables import main
  main(input_path="...", output_path="...", fmt="csv")
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, Optional

import duckdb
import pandas as pd

from housing_trends.config import BASE_YEAR, FIRST_YEAR, AnalysisConfig
from housing_trends.dataio import load_prices
from housing_trends.errors import SchemaError
from housing_trends.pipeline import run_pipeline

logger = logging.getLogger("export_tables")


def _escape_literal(path: str) -> str:
    # SQL string literal escape for DuckDB (single quotes doubled)
    return path.replace("'", "''")


def write_parquet(con: duckdb.DuckDBPyConnection, df: pd.DataFrame, out_path: Path,
                  compression: str = "zstd") -> None:
    con.register("export_df", df)
    try:
        con.execute(f"""
        COPY (SELECT * FROM export_df)
        TO '{_escape_literal(str(out_path))}' (FORMAT PARQUET, COMPRESSION {compression.upper()});
        """)
    finally:
        con.unregister("export_df")


def write_tables(tables: Dict[str, pd.DataFrame], out_dir: Path, fmt: str = "csv",
                 compression: str = "zstd") -> Dict[str, Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    written = {}
    con = duckdb.connect() if fmt == "parquet" else None
    try:
        for name, df in tables.items():
            out_path = out_dir / f"{name}.{fmt}"
            if fmt == "parquet":
                write_parquet(con, df, out_path, compression)
            else:
                df.to_csv(out_path, index=False)
            logger.info("%s -> %s (%d rows)", name, out_path, len(df))
            written[name] = out_path
    finally:
        if con is not None:
            con.close()
    return written


def main(input_path: Optional[str],
         output_path: str,
         fmt: str = "csv",
         base_year: int = BASE_YEAR,
         min_year: int = FIRST_YEAR,
         max_year: Optional[int] = None,
         workers: int = 1,
         sheet: str | int = 0,
         compression: str = "zstd") -> int:
    config = AnalysisConfig(base_year=base_year, min_year=min_year, max_year=max_year,
                            workers=workers, sheet_name=sheet)
    try:
        prices = load_prices(input_path, config)
    except (SchemaError, FileNotFoundError) as e:
        logger.error("Could not load %s: %s", input_path or "default dataset", e)
        return 1

    result = run_pipeline(prices, config)
    write_tables(
        {
            "models": result.models,
            "predictions": result.predictions,
            "failures": result.failures,
        },
        Path(output_path),
        fmt=fmt,
        compression=compression,
    )
    for _, row in result.failures.iterrows():
        logger.warning("excluded %s: %s (%s)", row["Local Authority"], row["error"], row["message"])
    logger.info(result.failure_summary())
    return 0


def _sheet_arg(value: str) -> str | int:
    return int(value) if value.isdigit() else value


if __name__ == "__main__":
    ap = argparse.ArgumentParser()
    ap.add_argument("--input", default=None, help="Workbook or CSV (default: data/ dataset)")
    ap.add_argument("--output", required=True, help="Output folder for the tables")
    ap.add_argument("--format", choices=["csv", "parquet"], default="csv")
    ap.add_argument("--compression", choices=["zstd", "snappy", "gzip", "uncompressed"],
                    default="zstd", help="Parquet compression")
    ap.add_argument("--base-year", type=int, default=BASE_YEAR, help="Year mapped to t=0")
    ap.add_argument("--min-year", type=int, default=FIRST_YEAR)
    ap.add_argument("--max-year", type=int, default=None)
    ap.add_argument("--workers", type=int, default=1, help="Thread pool size for group fits")
    ap.add_argument("--sheet", type=_sheet_arg, default=0, help="Sheet name or index")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="[%(levelname)s] %(message)s")
    sys.exit(main(input_path=args.input,
                  output_path=args.output,
                  fmt=args.format,
                  base_year=args.base_year,
                  min_year=args.min_year,
                  max_year=args.max_year,
                  workers=args.workers,
                  sheet=args.sheet,
                  compression=args.compression))
