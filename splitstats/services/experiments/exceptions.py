class SplitStatsError(Exception):
    """Base class for errors raised by splitstats."""


class InvalidAlternative(SplitStatsError, ValueError):
    """Alternative name is neither a string nor a {name: weight} mapping."""


class MalformedAuxiliaryData(SplitStatsError, ValueError):
    """Stored recorded_info could not be decoded into a mapping."""


class ExperimentNotFound(SplitStatsError, LookupError):
    def __init__(self, experiment_name: str):
        super().__init__(f"Experiment not found: {experiment_name}")
        self.experiment_name = experiment_name
