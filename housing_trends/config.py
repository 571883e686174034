# housing_trends/config.py: dataset location and analysis window
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

DATA_DIR = Path(os.environ.get("HOUSING_TRENDS_DATA_DIR", "data"))
DATASET_TO_USE = os.environ.get(
    "HOUSING_TRENDS_DATASET", "median_house_prices_by_local_authority.xlsx"
)

BASE_YEAR = 2008
FIRST_YEAR = 2008


@dataclass
class AnalysisConfig:
    base_year: int = BASE_YEAR  # time 0 for the regressions
    min_year: int = FIRST_YEAR
    max_year: Optional[int] = None
    workers: int = 1  # >1 fans group fits out over a thread pool
    sheet_name: Union[str, int, None] = 0

    def __post_init__(self):
        if self.max_year is not None and self.max_year < self.min_year:
            raise ValueError(
                f"max_year ({self.max_year}) is before min_year ({self.min_year})"
            )
        if self.workers < 1:
            raise ValueError("workers must be >= 1")


def default_dataset_path() -> Path:
    return DATA_DIR / DATASET_TO_USE
