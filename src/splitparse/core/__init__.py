"""Core splitparse functionality: data model, streaming reader, parser, errors."""

from . import model
from .errors import (
    ErrorContext,
    ParseErrorKind,
    SplitFileError,
)
from .logging import setup_logging
from .parser import parse, parse_file_contents
from .settings import ParserSettings, get_parser_settings
from .versioning import Grammar, Version, select_grammar

__all__ = [
    "model",
    "ErrorContext",
    "Grammar",
    "ParseErrorKind",
    "ParserSettings",
    "SplitFileError",
    "Version",
    "get_parser_settings",
    "parse",
    "parse_file_contents",
    "select_grammar",
    "setup_logging",
]
