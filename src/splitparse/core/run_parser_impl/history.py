"""
History parser mixin for split files.

Two mutually exclusive encodings describe past attempts:

    Before 1.5, ``<RunHistory>`` with one time per attempt:

        <RunHistory>
          <Time id="1">
            <RealTime>00:10:00.0000000</RealTime>
          </Time>
        </RunHistory>

    From 1.5, ``<AttemptHistory>`` with wall-clock bounds and pause time:

        <AttemptHistory>
          <Attempt id="1" started="01/02/2017 10:00:00" isStartedSynced="True"
                   ended="01/02/2017 10:12:00" isEndedSynced="False">
            <RealTime>00:10:00.0000000</RealTime>
            <PauseTime>00:02:00.0000000</PauseTime>
          </Attempt>
        </AttemptHistory>

Both write through the same ``AttemptSink`` so the caller does not need to
know which encoding produced an attempt.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

from .. import model
from ..errors import AttributeNotFoundError
from ..versioning import Grammar
from .base import Tag, parse_bool, parse_date_time, parse_int


class AttemptSink(Protocol):
    """Receives attempts as they are parsed."""

    def add_attempt(self, attempt: model.Attempt) -> None: ...


class HistoryParserMixin:
    """Parser mixin for ``<RunHistory>`` and ``<AttemptHistory>``."""

    if TYPE_CHECKING:
        read_children: Any
        read_time_span_optional: Any
        read_time_with: Any
        skip_element: Any
        skip_unknown: Any

    def parse_run_history(self, grammar: Grammar, sink: AttemptSink) -> None:
        """
        Parse a legacy ``<RunHistory>`` in the given time grammar.

        Legacy entries only carry a final time.
        """
        for tag in self.read_children():
            index = parse_int(tag.required_attribute("id"))
            sink.add_attempt(model.Attempt(index=index, time=self.read_time_with(grammar)))

    def parse_attempt_history(self, sink: AttemptSink) -> None:
        """Parse a modern ``<AttemptHistory>``."""
        for tag in self.read_children():
            sink.add_attempt(self._parse_attempt(tag))

    def _parse_attempt(self, tag: Tag) -> model.Attempt:
        index: int | None = None
        started: datetime | None = None
        ended: datetime | None = None
        started_synced = False
        ended_synced = False

        for key, value in tag.attributes():
            if key == "id":
                index = parse_int(value)
            elif key == "started":
                started = parse_date_time(value)
            elif key == "isStartedSynced":
                started_synced = parse_bool(value)
            elif key == "ended":
                ended = parse_date_time(value)
            elif key == "isEndedSynced":
                ended_synced = parse_bool(value)

        if index is None:
            raise AttributeNotFoundError("id", tag.name)

        real_time = None
        game_time = None
        pause_time = None
        for child in self.read_children():
            if child.name == "RealTime":
                real_time = self.read_time_span_optional()
            elif child.name == "GameTime":
                game_time = self.read_time_span_optional()
            elif child.name == "PauseTime":
                pause_time = self.read_time_span_optional()
            else:
                self.skip_unknown(child)

        return model.Attempt(
            index=index,
            time=model.Time(real_time=real_time, game_time=game_time),
            pause_time=pause_time,
            started=_atomic(started, started_synced),
            ended=_atomic(ended, ended_synced),
        )


def _atomic(time: datetime | None, synced: bool) -> model.AtomicDateTime | None:
    if time is None:
        return None
    return model.AtomicDateTime(time=time, synced_with_atomic_clock=synced)
