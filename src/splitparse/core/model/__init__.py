"""
Run data model.

All types are re-exported from this package.
"""

from .attempt import Attempt
from .metadata import RunMetadata
from .run import Run
from .segment import Segment
from .time import AtomicDateTime, Time, TimeSpan, TimingMethod

__all__ = [
    "AtomicDateTime",
    "Attempt",
    "Run",
    "RunMetadata",
    "Segment",
    "Time",
    "TimeSpan",
    "TimingMethod",
]
