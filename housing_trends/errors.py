# housing_trends/errors.py: per-group fit errors and loader schema errors


class FitError(ValueError):
    """Base class for a local authority that could not be fitted.

    Fit errors are per-group: the batch fit records them next to the
    successful models instead of aborting.
    """

    def __init__(self, group_key: str, message: str):
        super().__init__(f"{group_key}: {message}")
        self.group_key = group_key
        self.message = message

    @property
    def reason(self) -> str:
        return type(self).__name__


class InvalidValue(FitError):
    """A price that cannot be log-transformed (non-positive or non-finite)."""

    def __init__(self, group_key: str, time: int, value: float):
        super().__init__(
            group_key, f"price {value!r} at time {time} is not a positive number"
        )
        self.time = time
        self.value = value


class DegenerateFit(FitError):
    """All observations share one time point, so the slope is undefined."""

    def __init__(self, group_key: str, time: int):
        super().__init__(
            group_key, f"all observations are at time {time}; slope is undefined"
        )
        self.time = time


class InsufficientData(FitError):
    """Fewer than two observations in the group."""

    def __init__(self, group_key: str, n_observations: int):
        super().__init__(
            group_key,
            f"{n_observations} observation(s); at least 2 are needed to fit a line",
        )
        self.n_observations = n_observations


class SchemaError(ValueError):
    """The source table does not carry the columns the loader needs."""

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(f"missing required column(s): {', '.join(self.missing)}")
