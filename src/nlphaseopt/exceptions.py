class PhaseOptError(Exception):
    """Base class for all errors raised by nlphaseopt"""


class ScheduleConfigError(PhaseOptError, ValueError):
    """Malformed phase sequence, bounds, or variable vector"""


class InfeasibleDurationError(PhaseOptError):
    """The duration derived from the fixed total time is not positive"""

    def __init__(self, ee, last_duration: float, total_time: float):
        self.ee = ee
        self.last_duration = last_duration
        self.total_time = total_time
        super().__init__(
            f"Last phase duration of {ee!s} would be {last_duration:.6g} "
            f"(total time {total_time:.6g}); phase durations must stay positive"
        )
