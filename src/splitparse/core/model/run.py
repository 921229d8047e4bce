"""
Run aggregate.

A ``Run`` is everything stored in one split file: game and category identity,
the ordered segments, the custom comparisons those segments carry, the attempt
history and the leaderboard metadata.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from pydantic import BaseModel, Field, PrivateAttr

from .attempt import Attempt
from .metadata import RunMetadata
from .segment import Segment
from .time import AtomicDateTime, Time, TimeSpan


class Run(BaseModel):
    """
    Root aggregate of a split file.

    Attributes:
        game_icon: Decoded game icon, empty when the file has none
        game_name: Name of the game
        category_name: Name of the category
        offset: Time the timer starts at
        attempt_count: Number of attempts started, as recorded by the file
        segments: Segments in split order
        custom_comparisons: Comparison names registered by the segments
        attempt_history: Historical attempts
        metadata: Leaderboard identity
        path: Where the run was loaded from
    """

    game_icon: bytes = b""
    game_name: str = ""
    category_name: str = ""
    offset: TimeSpan = Field(default_factory=TimeSpan.zero)
    attempt_count: int = 0
    segments: list[Segment] = Field(default_factory=list)
    custom_comparisons: list[str] = Field(default_factory=list)
    attempt_history: list[Attempt] = Field(default_factory=list)
    metadata: RunMetadata = Field(default_factory=RunMetadata)
    path: Path | None = None

    _attempt_positions: dict[int, int] = PrivateAttr(default_factory=dict)

    def push_segment(self, segment: Segment) -> None:
        self.segments.append(segment)

    def add_custom_comparison(self, name: str) -> None:
        """Register a comparison name once, keeping first-seen order."""
        if name not in self.custom_comparisons:
            self.custom_comparisons.append(name)

    def comparisons(self) -> Iterator[str]:
        return iter(self.custom_comparisons)

    def add_attempt(self, attempt: Attempt) -> None:
        """
        Record a historical attempt.

        Attempt indices are unique per run: an attempt whose index was already
        recorded replaces the earlier entry at its original position.
        """
        position = self._attempt_positions.get(attempt.index)
        if position is None:
            self._attempt_positions[attempt.index] = len(self.attempt_history)
            self.attempt_history.append(attempt)
        else:
            self.attempt_history[position] = attempt

    def add_attempt_with_index(
        self,
        time: Time,
        index: int,
        started: AtomicDateTime | None = None,
        ended: AtomicDateTime | None = None,
        pause_time: TimeSpan | None = None,
    ) -> None:
        self.add_attempt(
            Attempt(
                index=index,
                time=time,
                pause_time=pause_time,
                started=started,
                ended=ended,
            )
        )

    def max_attempt_history_index(self) -> int | None:
        """Highest attempt index in the history, or None if it is empty."""
        if not self.attempt_history:
            return None
        return max(attempt.index for attempt in self.attempt_history)

    def __len__(self) -> int:
        return len(self.segments)
