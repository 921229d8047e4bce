"""
Segment model.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .time import Time


class Segment(BaseModel):
    """
    One named checkpoint of a run.

    Attributes:
        name: Display name of the split
        icon: Decoded icon image, empty when the file has none
        personal_best_split_time: Split time recorded by files older than 1.3
        best_segment_time: Fastest time ever recorded for this segment alone
        comparisons: Split times keyed by comparison name
        segment_history: Segment times keyed by attempt index
    """

    name: str = ""
    icon: bytes = b""
    personal_best_split_time: Time | None = None
    best_segment_time: Time = Field(default_factory=Time)
    comparisons: dict[str, Time] = Field(default_factory=dict)
    segment_history: dict[int, Time] = Field(default_factory=dict)

    def comparison(self, name: str) -> Time:
        """Return the split time for a comparison, empty if not recorded."""
        return self.comparisons.get(name, Time())

    def set_comparison(self, name: str, time: Time) -> None:
        self.comparisons[name] = time

    def add_history_entry(self, index: int, time: Time) -> None:
        # Duplicate ids keep the last value read
        self.segment_history[index] = time
