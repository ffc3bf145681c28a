"""Exceptions raised by the profiling pipeline."""


class ProfilingError(ValueError):
    """Base class for profiling errors."""


class DataQualityError(ProfilingError):
    """No usable trial survived validation; nothing can be profiled."""


class MissingColumnsError(ProfilingError):
    """Input table lacks one or more required columns."""

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(f"Missing required column(s): {', '.join(self.missing)}")


class AthleteProfilingError(ProfilingError):
    """Failure confined to a single athlete."""

    def __init__(self, athlete_id: str, detail: str):
        self.athlete_id = athlete_id
        self.detail = detail
        super().__init__(f"Athlete '{athlete_id}': {detail}")


class InsufficientTrialsError(AthleteProfilingError):
    """Fewer valid trials than a linear fit needs."""


class DegenerateFitError(AthleteProfilingError):
    """Regression produced non-finite or undefined coefficients."""


class InvalidMassError(AthleteProfilingError):
    """Minimum body mass is non-finite or not positive."""
