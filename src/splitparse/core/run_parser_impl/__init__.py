"""
Split file parser package.

The parser is built from mixins that each handle one part of the document,
on top of ``BaseRunParser`` which provides the reading combinators:

- MetadataParserMixin: ``<Metadata>`` (1.6+)
- SegmentParserMixin: ``<Segment>`` with comparisons and segment history
- HistoryParserMixin: ``<RunHistory>`` (before 1.5) and ``<AttemptHistory>`` (1.5+)

Usage:
    from splitparse.core.run_parser_impl import RunParser
    from splitparse.core.reader import EventReader

    run = RunParser(EventReader(stream)).parse()
"""

from __future__ import annotations

import logging

from .. import model
from ..errors import UnexpectedEndOfInputError
from ..reader import EventKind
from ..versioning import Grammar, Version, select_grammar
from .base import BaseRunParser, Tag
from .history import AttemptSink, HistoryParserMixin
from .metadata import MetadataParserMixin
from .segment import SegmentParserMixin

logger = logging.getLogger(__name__)

ROOT_TAG = "Run"


class RunParser(
    BaseRunParser,
    MetadataParserMixin,
    SegmentParserMixin,
    HistoryParserMixin,
):
    """
    Complete split file parser.

    Reads exactly one document and returns the populated ``Run``. Nothing is
    returned when any part of the document fails to parse.
    """

    def parse(self) -> model.Run:
        """
        Parse the document's root element.

        A document whose root element is not ``<Run>`` is not a split file; an
        empty run is returned for it.

        Raises:
            SplitFileError: On any malformed content
        """
        run = model.Run()

        while True:
            event = self.reader.next_event()
            if event.kind == EventKind.START:
                root = Tag(event.name, event.attributes)
                try:
                    if root.name == ROOT_TAG:
                        self.parse_run(root, run)
                    else:
                        logger.warning(
                            "Root element <%s> is not <%s>; nothing parsed",
                            root.name,
                            ROOT_TAG,
                        )
                finally:
                    root.release()
                return run
            if event.kind == EventKind.EOF:
                raise UnexpectedEndOfInputError("Document has no root element")

    def parse_run(self, root: Tag, run: model.Run) -> None:
        """Populate ``run`` from the children of the ``<Run>`` element."""
        version = Version.from_attribute(root.attribute("version"))
        logger.debug("Split file format version %s", version)

        for tag in self.read_children():
            name = tag.name
            grammar = select_grammar(version, name)

            if grammar == Grammar.SKIP:
                self.skip_element()
            elif name == "GameIcon":
                run.game_icon = self.read_image()
            elif name == "GameName":
                run.game_name = self.read_text()
            elif name == "CategoryName":
                run.category_name = self.read_text()
            elif name == "Offset":
                run.offset = self.read_time_span()
            elif name == "AttemptCount":
                run.attempt_count = self.read_int(signed=False)
            elif name == "AttemptHistory":
                self.parse_attempt_history(run)
            elif name == "RunHistory":
                self.parse_run_history(grammar, run)
            elif name == "Metadata":
                self.parse_metadata(run.metadata)
            elif name == "Segments":
                self._parse_segments(version, run)
            else:
                self.skip_unknown(tag)

    def _parse_segments(self, version: Version, run: model.Run) -> None:
        for tag in self.read_children():
            if tag.name == "Segment":
                run.push_segment(self.parse_segment(version, run))
            else:
                self.skip_unknown(tag)


__all__ = [
    "AttemptSink",
    "BaseRunParser",
    "RunParser",
    "Tag",
]
