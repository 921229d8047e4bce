"""
Split file parser entry points.

``parse`` reads one document from a binary stream or from bytes and returns the
populated ``Run``. Failures raise a ``SplitFileError`` subclass whose context
names the element being read.

Usage:
    from splitparse.core.parser import parse

    with open("Any%.lss", "rb") as f:
        run = parse(f, "Any%.lss")
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

from . import model
from .errors import SplitFileError
from .reader import BinarySource, EventReader
from .run_parser_impl import RunParser
from .settings import ParserSettings, get_parser_settings

logger = logging.getLogger(__name__)


def parse(
    source: BinarySource | bytes | bytearray,
    path: Path | str | None = None,
    settings: ParserSettings | None = None,
) -> model.Run:
    """
    Parse a split file into a ``Run``.

    The document is read in a single streaming pass. Either a complete run is
    returned or an error is raised; a partially parsed run is never returned.

    Args:
        source: Binary stream, or the raw bytes of the document
        path: Where the document was loaded from, attached to the run
        settings: Reader tunables; read from the environment when omitted

    Returns:
        The parsed run

    Raises:
        SplitFileError: If the document is malformed. The error's context names
            the element that was being read.
    """
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(bytes(source))

    reader = EventReader(source, settings or get_parser_settings())
    try:
        run = RunParser(reader).parse()
    except SplitFileError as err:
        err.with_context(reader.context())
        raise

    run.path = Path(path) if path is not None else None

    logger.info(
        "Parsed run '%s - %s': %d segments, %d attempts in history",
        run.game_name,
        run.category_name,
        len(run.segments),
        len(run.attempt_history),
    )
    return run


def parse_file_contents(data: bytes, path: Path | str | None = None) -> model.Run:
    """
    Parse a split file already loaded into memory.

    Args:
        data: Raw bytes of the document
        path: Where the bytes were loaded from

    Returns:
        The parsed run
    """
    return parse(data, path)
