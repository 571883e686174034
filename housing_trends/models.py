# housing_trends/models.py: records passed between loader, fit engine and reports
from dataclasses import dataclass, field
from typing import Dict, List

from .errors import FitError


@dataclass(frozen=True)
class Observation:
    """One median price for one local authority in one year.

    Attributes:
        group_key: Local authority name.
        time: Years since the base year.
        value: Median price paid.
    """

    group_key: str
    time: int
    value: float


@dataclass(frozen=True)
class FittedModel:
    """Coefficients of log2(price) ~ time for one local authority.

    Attributes:
        group_key: Local authority name.
        intercept: Fitted log2 price at time 0.
        slope: Change in log2 price per year.
        r_squared: Coefficient of determination, in [0, 1].
        n_observations: Number of observations the line was fitted on.
    """

    group_key: str
    intercept: float
    slope: float
    r_squared: float
    n_observations: int


@dataclass(frozen=True)
class Prediction:
    group_key: str
    time: int
    predicted_value: float


@dataclass(frozen=True)
class GroupFailure:
    """A local authority excluded from the fitted output, and why."""

    group_key: str
    error: FitError

    @property
    def reason(self) -> str:
        return self.error.reason

    @property
    def message(self) -> str:
        return self.error.message


@dataclass
class FitReport:
    """Result of fitting every group in a batch.

    Each group key appears in exactly one of ``models`` or ``failures``;
    ``groups`` keeps the partitioned observations so predictions and
    residuals can be joined back by key.
    """

    models: Dict[str, FittedModel] = field(default_factory=dict)
    failures: Dict[str, GroupFailure] = field(default_factory=dict)
    groups: Dict[str, List[Observation]] = field(default_factory=dict)

    @property
    def n_groups(self) -> int:
        return len(self.groups)

    def __str__(self) -> str:
        return (
            f"FitReport(groups={self.n_groups}, fitted={len(self.models)}, "
            f"failed={len(self.failures)})"
        )
