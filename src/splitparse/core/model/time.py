"""
Time value types for split files.

``TimeSpan`` is a signed duration, ``Time`` pairs an optional real time with an
optional game time, and ``AtomicDateTime`` is a wall-clock timestamp tagged with
whether it was synchronized against an external clock.

Examples:
    - TimeSpan.from_seconds(12.5)
    - TimeSpan.from_days(1) + TimeSpan.parse("02:30:00")
    - Time.new().with_real_time(TimeSpan.from_seconds(10))
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from ..errors import FloatFormatError, TimeSpanFormatError

_DECIMAL = re.compile(r"^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?$")


def parse_decimal(text: str) -> float:
    """
    Parse a plain decimal number.

    Raises:
        FloatFormatError: If the text is not a decimal number
    """
    if not _DECIMAL.match(text):
        raise FloatFormatError(f"Invalid number: {text!r}")
    return float(text)


class TimeSpan(BaseModel):
    """
    A signed duration with microsecond resolution.

    Split files write seconds with up to seven fractional digits (100 ns
    ticks). The seventh digit is below ``timedelta`` resolution and is rounded
    away, so ``"00:01:02.5000001"`` reads as 62.5 seconds.

    Attributes:
        value: Underlying duration, negative for spans before zero
    """

    value: timedelta = Field(default_factory=timedelta, description="Signed duration")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def zero(cls) -> TimeSpan:
        return cls(value=timedelta(0))

    @classmethod
    def from_seconds(cls, seconds: float) -> TimeSpan:
        return cls(value=timedelta(seconds=seconds))

    @classmethod
    def from_days(cls, days: int) -> TimeSpan:
        return cls(value=timedelta(days=days))

    @classmethod
    def from_timedelta(cls, value: timedelta) -> TimeSpan:
        return cls(value=value)

    @classmethod
    def parse(cls, text: str) -> TimeSpan:
        """
        Parse seconds, optionally grouped into colon-separated sexagesimal parts.

        A leading ``-`` negates the whole span. Each colon multiplies the
        accumulated value by 60, so ``"12.5"`` is 12.5 seconds, ``"1:00.5"`` is
        60.5 seconds and ``"02:30:00"`` is two and a half hours.

        Raises:
            TimeSpanFormatError: If any component is not a decimal number
        """
        body = text
        sign = 1.0
        if body.startswith("-"):
            body = body[1:]
            sign = -1.0

        seconds = 0.0
        for part in body.split(":"):
            try:
                seconds = 60.0 * seconds + parse_decimal(part)
            except FloatFormatError as err:
                raise TimeSpanFormatError(f"Invalid time span: {text!r}") from err

        try:
            return cls.from_seconds(sign * seconds)
        except OverflowError as err:
            raise TimeSpanFormatError(f"Time span out of range: {text!r}") from err

    def total_seconds(self) -> float:
        return self.value.total_seconds()

    def to_timedelta(self) -> timedelta:
        return self.value

    def __add__(self, other: TimeSpan) -> TimeSpan:
        if not isinstance(other, TimeSpan):
            return NotImplemented
        return TimeSpan(value=self.value + other.value)

    def __sub__(self, other: TimeSpan) -> TimeSpan:
        if not isinstance(other, TimeSpan):
            return NotImplemented
        return TimeSpan(value=self.value - other.value)

    def __neg__(self) -> TimeSpan:
        return TimeSpan(value=-self.value)

    def __lt__(self, other: TimeSpan) -> bool:
        return self.value < other.value

    def __le__(self, other: TimeSpan) -> bool:
        return self.value <= other.value

    def __gt__(self, other: TimeSpan) -> bool:
        return self.value > other.value

    def __ge__(self, other: TimeSpan) -> bool:
        return self.value >= other.value

    def __str__(self) -> str:
        total = self.value.total_seconds()
        sign = "-" if total < 0 else ""
        total = abs(total)
        hours, remainder = divmod(total, 3600)
        minutes, seconds = divmod(remainder, 60)
        return f"{sign}{int(hours)}:{int(minutes):02d}:{seconds:06.3f}"


class TimingMethod(StrEnum):
    """Which clock a time was measured with."""

    REAL_TIME = "real_time"
    GAME_TIME = "game_time"


class Time(BaseModel):
    """
    A pair of independently optional durations.

    ``None`` means the value was not recorded, which is distinct from a zero
    duration.
    """

    real_time: TimeSpan | None = None
    game_time: TimeSpan | None = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def new(cls) -> Time:
        return cls()

    def with_real_time(self, real_time: TimeSpan | None) -> Time:
        return self.model_copy(update={"real_time": real_time})

    def with_game_time(self, game_time: TimeSpan | None) -> Time:
        return self.model_copy(update={"game_time": game_time})

    @property
    def is_empty(self) -> bool:
        return self.real_time is None and self.game_time is None

    def __getitem__(self, method: TimingMethod) -> TimeSpan | None:
        if method == TimingMethod.REAL_TIME:
            return self.real_time
        if method == TimingMethod.GAME_TIME:
            return self.game_time
        raise KeyError(method)


class AtomicDateTime(BaseModel):
    """
    A UTC wall-clock timestamp.

    Attributes:
        time: The timestamp, timezone-aware in UTC
        synced_with_atomic_clock: Whether the clock was corroborated externally
    """

    time: datetime
    synced_with_atomic_clock: bool = False

    model_config = ConfigDict(frozen=True)
