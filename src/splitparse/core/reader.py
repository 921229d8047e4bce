"""
Pull-based XML event reader for split files.

Wraps ``xml.etree.ElementTree.XMLPullParser`` and turns its start/end events
into a minimal event vocabulary (START, END, TEXT, EOF) that the parsing
combinators consume one event at a time. Bytes are pulled from the source only
when the next event is demanded.

Text handling:
    - Self-closing elements produce START immediately followed by END.
    - Text is trimmed; whitespace-only text produces no event.
    - The text of an element is reported right after its START, before the
      first child START or its own END. CDATA is merged into text.

Reading stops once the root element closes. Anything after it is ignored,
whether or not it shares a read with the closing tag.
"""

from __future__ import annotations

import codecs
import logging
import xml.etree.ElementTree as ET
from collections import deque
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from .errors import ErrorContext, TextEncodingError, XmlError
from .settings import ParserSettings

logger = logging.getLogger(__name__)


class BinarySource(Protocol):
    """Anything with a binary ``read``."""

    def read(self, size: int = -1, /) -> bytes: ...


class EventKind(Enum):
    """Kinds of events produced by the reader."""

    START = "start"
    END = "end"
    TEXT = "text"
    EOF = "eof"


@dataclass
class XmlEvent:
    """
    A single reader event.

    Attributes:
        kind: Type of event
        name: Element name for START and END
        attributes: Attributes of a START element, in document order
        text: Trimmed text for TEXT
    """

    kind: EventKind
    name: str = ""
    attributes: dict[str, str] = field(default_factory=dict)
    text: str = ""

    def __repr__(self) -> str:
        if self.kind == EventKind.TEXT:
            return f"XmlEvent(text, {self.text!r})"
        return f"XmlEvent({self.kind.value}, {self.name!r})"


class ScratchBuffer:
    """
    Reusable buffer for assembling element text.

    Only one holder may use the buffer at a time; see ``EventReader.lend``.
    """

    def __init__(self, capacity: int = 0):
        self._chunks: list[str] = []
        self.capacity = capacity
        self.lent = False

    def append(self, text: str) -> None:
        self._chunks.append(text)

    def take(self) -> str:
        """Return the buffered text and clear the buffer."""
        text = "".join(self._chunks)
        self._chunks.clear()
        return text

    def clear(self) -> None:
        # Drop oversized storage instead of keeping it for the next element
        if len(self._chunks) > self.capacity:
            self._chunks = []
        else:
            self._chunks.clear()

    def __len__(self) -> int:
        return sum(len(chunk) for chunk in self._chunks)


class _OpenElement:
    __slots__ = ("element", "text_reported")

    def __init__(self, element: ET.Element):
        self.element = element
        self.text_reported = False


class EventReader:
    """
    Streaming event source over a binary XML document.

    The reader owns a single ``ScratchBuffer`` for the whole document. Callers
    borrow it with ``lend()``; the buffer is cleared when the borrow ends.
    """

    def __init__(self, source: BinarySource, settings: ParserSettings | None = None):
        """
        Initialize reader.

        Args:
            source: Binary stream positioned at the start of the document
            settings: Reader tunables, defaults when omitted
        """
        self.settings = settings or ParserSettings()
        self._source = source
        self._decoder = codecs.getincrementaldecoder("utf-8-sig")(errors="strict")
        self._parser = ET.XMLPullParser(events=("start", "end"))
        self._pending: deque[XmlEvent] = deque()
        self._open: list[_OpenElement] = []
        self._exhausted = False
        self._root_closed = False
        self._path: list[str] = []
        self._scratch = ScratchBuffer(self.settings.scratch_capacity)

    @property
    def depth(self) -> int:
        """Number of currently open elements."""
        return len(self._path)

    def element_path(self) -> tuple[str, ...]:
        return tuple(self._path)

    def context(self) -> ErrorContext:
        return ErrorContext(element_path=self.element_path())

    @contextmanager
    def lend(self) -> Iterator[ScratchBuffer]:
        """
        Lend the scratch buffer for the duration of a ``with`` block.

        Raises:
            RuntimeError: If the buffer is already lent out
        """
        if self._scratch.lent:
            raise RuntimeError("Scratch buffer is already lent out")
        self._scratch.lent = True
        try:
            yield self._scratch
        finally:
            self._scratch.clear()
            self._scratch.lent = False

    def next_event(self) -> XmlEvent:
        """
        Return the next event, pulling more bytes from the source as needed.

        Once the input is exhausted every further call returns EOF.

        Raises:
            XmlError: If the markup is malformed
            TextEncodingError: If the bytes are not valid UTF-8
        """
        while not self._pending:
            if self._exhausted:
                return XmlEvent(EventKind.EOF)
            self._pull()
        event = self._pending.popleft()
        if event.kind == EventKind.START:
            self._path.append(event.name)
        elif event.kind == EventKind.END:
            self._path.pop()
        return event

    def _pull(self) -> None:
        chunk = self._source.read(self.settings.read_chunk_size)
        final = not chunk
        encoding_error: UnicodeDecodeError | None = None
        try:
            text = self._decoder.decode(chunk, final)
        except UnicodeDecodeError as err:
            # Bytes before the bad sequence are valid and may still close the root
            text = err.object[: err.start].decode("utf-8")
            encoding_error = err

        self._feed(text)

        if self._root_closed:
            logger.debug("Root element closed; ignoring remaining input")
            self._exhausted = True
            return
        if encoding_error is not None:
            raise TextEncodingError(
                f"Document is not valid UTF-8: {encoding_error.reason}", self.context()
            ) from encoding_error
        if final:
            logger.debug("Input exhausted with %d open elements", len(self._open))
            self._exhausted = True

    def _feed(self, text: str) -> None:
        # XMLPullParser queues tokenizer errors; read_events raises them in order
        try:
            # Expat may hold back a token split across feeds until more input
            # arrives; release it before the next feed can queue an error
            self._parser.flush()
            if text:
                self._parser.feed(text)
            for event, element in self._parser.read_events():
                if event == "start":
                    self._on_start(element)
                    continue
                self._on_end(element)
                if not self._open:
                    # Anything after the root element is not part of the document
                    self._root_closed = True
                    return
        except ET.ParseError as err:
            line, column = err.position
            raise XmlError(
                f"Malformed XML: {err}",
                ErrorContext(element_path=self.element_path(), line=line, column=column + 1),
            ) from err

    def _report_text(self, entry: _OpenElement) -> None:
        if entry.text_reported:
            return
        entry.text_reported = True
        text = (entry.element.text or "").strip()
        if text:
            self._pending.append(XmlEvent(EventKind.TEXT, text=text))

    def _on_start(self, element: ET.Element) -> None:
        if self._open:
            # Parent text is complete once a child starts
            self._report_text(self._open[-1])
        self._open.append(_OpenElement(element))
        self._pending.append(
            XmlEvent(EventKind.START, name=element.tag, attributes=dict(element.attrib))
        )

    def _on_end(self, element: ET.Element) -> None:
        entry = self._open.pop()
        self._report_text(entry)
        self._pending.append(XmlEvent(EventKind.END, name=element.tag))
        element.clear()
        if self._open:
            # Finished children are detached so only the open path stays resident
            self._open[-1].element.remove(element)
