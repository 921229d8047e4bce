"""
Base parser class for split files.

Provides the parsing combinators every builder mixin uses: reading element
text, typed text, attributes, child elements, time values and images, and
skipping subtrees that are not modelled.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
from collections.abc import Callable, Iterator
from datetime import UTC, datetime
from typing import TypeVar

from ..errors import (
    AttributeNotFoundError,
    DateFormatError,
    InvalidBooleanError,
    TimeSpanFormatError,
    UnexpectedEndOfInputError,
    UnexpectedNestedElementError,
    make_int_error,
)
from ..model import Time, TimeSpan
from ..reader import EventKind, EventReader
from ..versioning import Grammar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DATE_TIME_FORMAT = "%m/%d/%Y %H:%M:%S"

# Legacy image container: the base64 payload starts at a fixed offset and the
# decoded bytes carry two header bytes and one trailer byte.
IMAGE_MIN_LENGTH = 216
IMAGE_PAYLOAD_OFFSET = 212
IMAGE_HEAD_TRIM = 2
IMAGE_TAIL_TRIM = 1

_SIGNED_INT = re.compile(r"^[+-]?[0-9]+$")
_UNSIGNED_INT = re.compile(r"^\+?[0-9]+$")


def parse_int(text: str, signed: bool = True) -> int:
    """
    Parse a decimal integer.

    Raises:
        IntegerFormatError: If the text is not an integer
    """
    pattern = _SIGNED_INT if signed else _UNSIGNED_INT
    what = "integer" if signed else "unsigned integer"
    if not pattern.match(text):
        raise make_int_error(text, what)
    try:
        return int(text)
    except ValueError as err:
        # Digit strings past the interpreter's conversion limit
        raise make_int_error(text, what) from err


def parse_bool(text: str) -> bool:
    """
    Parse the literal tokens ``True`` and ``False``.

    Raises:
        InvalidBooleanError: For any other text, including other casings
    """
    if text == "True":
        return True
    if text == "False":
        return False
    raise InvalidBooleanError(f"Invalid boolean: {text!r} (expected 'True' or 'False')")


def parse_date_time(text: str) -> datetime:
    """
    Parse a ``MM/DD/YYYY hh:mm:ss`` timestamp as UTC.

    Raises:
        DateFormatError: If the text does not match the format
    """
    try:
        return datetime.strptime(text, DATE_TIME_FORMAT).replace(tzinfo=UTC)
    except ValueError as err:
        raise DateFormatError(f"Invalid date: {text!r}") from err


def parse_time_span_text(text: str) -> TimeSpan:
    """
    Parse a time span in either of its two encodings.

    Day-qualified (``d.hh:mm:ss``): used only when the text contains both ``.``
    and ``:`` and the first ``.`` comes before the first ``:``. The part before
    the dot is a whole number of days added to the time of day after it.

    Seconds (everything else): decimal seconds, optionally grouped with colons.

    Examples:
        - "12.5" -> 12.5 seconds
        - "1.02:30:00" -> 1 day + 2h30m
        - "02:30:00" -> 2h30m

    Raises:
        TimeSpanFormatError: If the text matches neither encoding
    """
    dot = text.find(".")
    colon = text.find(":")
    if dot != -1 and colon != -1 and dot < colon:
        day_text = text[:dot]
        if not _SIGNED_INT.match(day_text):
            raise TimeSpanFormatError(f"Invalid day count in time span: {text!r}")
        try:
            days = TimeSpan.from_days(int(day_text))
        except (OverflowError, ValueError) as err:
            raise TimeSpanFormatError(f"Time span out of range: {text!r}") from err
        time_of_day = TimeSpan.parse(text[dot + 1 :])
        try:
            return days + time_of_day
        except OverflowError as err:
            raise TimeSpanFormatError(f"Time span out of range: {text!r}") from err
    return TimeSpan.parse(text)


def parse_optional_time_span_text(text: str) -> TimeSpan | None:
    """Like ``parse_time_span_text``, but empty text means "not recorded"."""
    if not text:
        return None
    return parse_time_span_text(text)


def decode_image(text: str) -> bytes:
    """
    Extract image bytes from the legacy serialized container.

    Best effort: text that is too short or whose payload is not valid base64
    yields an empty image.
    """
    if len(text) < IMAGE_MIN_LENGTH:
        return b""
    try:
        data = base64.b64decode(text[IMAGE_PAYLOAD_OFFSET:], validate=True)
    except (binascii.Error, ValueError) as err:
        logger.debug("Discarding undecodable image payload: %s", err)
        return b""
    return data[IMAGE_HEAD_TRIM : len(data) - IMAGE_TAIL_TRIM]


class Tag:
    """
    Handle to an element whose start was just read.

    Only valid while the child iteration that produced it is suspended on it;
    it is released as soon as the iteration moves on.
    """

    __slots__ = ("_name", "_attributes", "_active")

    def __init__(self, name: str, attributes: dict[str, str]):
        self._name = name
        self._attributes = attributes
        self._active = True

    def _check(self) -> None:
        if not self._active:
            raise RuntimeError(f"Tag <{self._name}> used after it was released")

    @property
    def name(self) -> str:
        self._check()
        return self._name

    def attributes(self) -> Iterator[tuple[str, str]]:
        """Attributes in document order."""
        self._check()
        return iter(list(self._attributes.items()))

    def attribute(self, name: str) -> str | None:
        """Value of an optional attribute."""
        self._check()
        for key, value in self._attributes.items():
            if key == name:
                return value
        return None

    def required_attribute(self, name: str) -> str:
        """
        Value of a required attribute.

        Raises:
            AttributeNotFoundError: If the attribute is absent
        """
        value = self.attribute(name)
        if value is None:
            raise AttributeNotFoundError(name, self._name)
        return value

    def release(self) -> None:
        self._active = False

    def __repr__(self) -> str:
        return f"Tag({self._name!r}, active={self._active})"


class BaseRunParser:
    """
    Base parser class with event reading combinators.

    Every combinator is entered right after the START of the element it reads
    and returns after consuming that element's END.
    """

    def __init__(self, reader: EventReader):
        """
        Initialize parser.

        Args:
            reader: Event source positioned before the root element
        """
        self.reader = reader

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    def read_children(self) -> Iterator[Tag]:
        """
        Iterate over the child elements of the current element.

        Each yielded ``Tag`` must be consumed by the loop body (read with a
        combinator or skipped). Text between children is ignored. The iteration
        ends after the current element's END.

        Raises:
            UnexpectedEndOfInputError: If the document ends first
        """
        while True:
            event = self.reader.next_event()
            if event.kind == EventKind.START:
                depth = self.reader.depth
                tag = Tag(event.name, event.attributes)
                try:
                    yield tag
                finally:
                    tag.release()
                if self.reader.depth >= depth:
                    # The body did not consume the element; discard the rest
                    self.skip_element()
            elif event.kind == EventKind.END:
                return
            elif event.kind == EventKind.EOF:
                raise UnexpectedEndOfInputError("Document ended inside an element")

    def skip_element(self) -> None:
        """
        Discard the rest of the current element, including all descendants.

        Raises:
            UnexpectedEndOfInputError: If the document ends first
        """
        depth = 0
        while True:
            event = self.reader.next_event()
            if event.kind == EventKind.START:
                depth += 1
            elif event.kind == EventKind.END:
                if depth == 0:
                    return
                depth -= 1
            elif event.kind == EventKind.EOF:
                raise UnexpectedEndOfInputError("Document ended inside an element")

    def skip_unknown(self, tag: Tag) -> None:
        logger.debug("Skipping <%s>", tag.name)
        self.skip_element()

    def _end_element_immediately(self) -> None:
        while True:
            event = self.reader.next_event()
            if event.kind == EventKind.START:
                raise UnexpectedNestedElementError(
                    f"Unexpected element <{event.name}> where only text is allowed"
                )
            if event.kind == EventKind.END:
                return
            if event.kind == EventKind.EOF:
                raise UnexpectedEndOfInputError("Document ended inside a text element")

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def read_text(self) -> str:
        """
        Read the text content of the current element.

        An element without text reads as the empty string.

        Raises:
            UnexpectedNestedElementError: If the element has child elements
            UnexpectedEndOfInputError: If the document ends first
        """
        with self.reader.lend() as buffer:
            while True:
                event = self.reader.next_event()
                if event.kind == EventKind.TEXT:
                    buffer.append(event.text)
                    break
                if event.kind == EventKind.END:
                    return ""
                if event.kind == EventKind.START:
                    raise UnexpectedNestedElementError(
                        f"Unexpected element <{event.name}> where only text is allowed"
                    )
                if event.kind == EventKind.EOF:
                    raise UnexpectedEndOfInputError("Document ended inside a text element")
            text = buffer.take()
        self._end_element_immediately()
        return text

    def read_text_as(self, convert: Callable[[str], T]) -> T:
        """
        Read the text content and convert it.

        ``convert`` raises the ``SplitFileError`` subclass matching its target
        type when the text is rejected.
        """
        return convert(self.read_text())

    def read_int(self, signed: bool = True) -> int:
        return self.read_text_as(lambda text: parse_int(text, signed))

    def read_bool(self) -> bool:
        return self.read_text_as(parse_bool)

    # ------------------------------------------------------------------
    # Times
    # ------------------------------------------------------------------

    def read_time_span(self) -> TimeSpan:
        """Read a time span; an empty element is a zero span."""
        text = self.read_text()
        if not text:
            return TimeSpan.zero()
        return parse_time_span_text(text)

    def read_time_span_optional(self) -> TimeSpan | None:
        """Read a time span; an empty element is "not recorded"."""
        return self.read_text_as(parse_optional_time_span_text)

    def read_time(self) -> Time:
        """Read a ``<RealTime>``/``<GameTime>`` pair; other children are skipped."""
        real_time = None
        game_time = None
        for tag in self.read_children():
            if tag.name == "RealTime":
                real_time = self.read_time_span_optional()
            elif tag.name == "GameTime":
                game_time = self.read_time_span_optional()
            else:
                self.skip_unknown(tag)
        return Time(real_time=real_time, game_time=game_time)

    def read_time_legacy(self) -> Time:
        """Read a bare time span into the real time slot."""
        return Time(real_time=self.read_time_span_optional())

    def read_time_with(self, grammar: Grammar) -> Time:
        """Read a time value in the grammar chosen for the document version."""
        if grammar == Grammar.TIME:
            return self.read_time()
        if grammar == Grammar.LEGACY_TIME:
            return self.read_time_legacy()
        raise ValueError(f"Grammar {grammar} does not describe a time value")

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    def read_image(self) -> bytes:
        """Read an embedded image; never fails on a bad payload."""
        return decode_image(self.read_text())
