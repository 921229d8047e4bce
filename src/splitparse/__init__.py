"""
splitparse - Reader for versioned speedrun split files.

Parses the legacy ``<Run>`` XML save format, across all of its format
revisions, into an in-memory run record.
"""

from __future__ import annotations

import logging

from ._version import get_version

# Re-export commonly used types for convenience
from .core import model
from .core.errors import (
    AttributeNotFoundError,
    DateFormatError,
    FloatFormatError,
    IntegerFormatError,
    InvalidBooleanError,
    ParseErrorKind,
    SplitFileError,
    TextEncodingError,
    TimeSpanFormatError,
    UnexpectedEndOfInputError,
    UnexpectedNestedElementError,
    XmlError,
)
from .core.model import (
    AtomicDateTime,
    Attempt,
    Run,
    RunMetadata,
    Segment,
    Time,
    TimeSpan,
    TimingMethod,
)
from .core.logging import setup_logging
from .core.parser import parse, parse_file_contents

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = get_version()

__all__ = [
    "__version__",
    "model",
    "parse",
    "parse_file_contents",
    "setup_logging",
    "AtomicDateTime",
    "Attempt",
    "Run",
    "RunMetadata",
    "Segment",
    "Time",
    "TimeSpan",
    "TimingMethod",
    "ParseErrorKind",
    "SplitFileError",
    "XmlError",
    "InvalidBooleanError",
    "UnexpectedEndOfInputError",
    "UnexpectedNestedElementError",
    "AttributeNotFoundError",
    "TextEncodingError",
    "IntegerFormatError",
    "FloatFormatError",
    "TimeSpanFormatError",
    "DateFormatError",
]
