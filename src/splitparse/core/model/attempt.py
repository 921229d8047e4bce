"""
Attempt history entries.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .time import AtomicDateTime, Time, TimeSpan


class Attempt(BaseModel):
    """
    One historical attempt of a run.

    Legacy history encodings only record ``time``; the modern encoding also
    records the pause duration and the wall-clock bounds.

    Attributes:
        index: Attempt id from the file, unique per run but not contiguous
        time: Final time of the attempt, if it was finished
        pause_time: Total time spent paused
        started: When the attempt was started
        ended: When the attempt was reset or finished
    """

    index: int
    time: Time = Field(default_factory=Time)
    pause_time: TimeSpan | None = None
    started: AtomicDateTime | None = None
    ended: AtomicDateTime | None = None

    def duration(self) -> TimeSpan | None:
        """Wall-clock span between start and end, if both were recorded."""
        if self.started is None or self.ended is None:
            return None
        return TimeSpan.from_timedelta(self.ended.time - self.started.time)
