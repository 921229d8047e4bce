"""
Error types for split file parsing.

Every failure raised while reading a save file is a subclass of
``SplitFileError``. The set is closed: callers can switch on ``err.kind``
instead of matching on message text.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional


class ParseErrorKind(StrEnum):
    """Kinds of fatal parse failures."""

    XML = "xml"
    INVALID_BOOLEAN = "invalid_boolean"
    UNEXPECTED_END_OF_INPUT = "unexpected_end_of_input"
    UNEXPECTED_NESTED_ELEMENT = "unexpected_nested_element"
    ATTRIBUTE_NOT_FOUND = "attribute_not_found"
    TEXT_ENCODING = "text_encoding"
    INTEGER_FORMAT = "integer_format"
    FLOAT_FORMAT = "float_format"
    TIME_SPAN_FORMAT = "time_span_format"
    DATE_FORMAT = "date_format"


@dataclass
class ErrorContext:
    """
    Location of an error inside the document.

    Attributes:
        element_path: Names of the open elements, outermost first
        line: Line number reported by the tokenizer, if known
        column: Column number reported by the tokenizer, if known
    """

    element_path: tuple[str, ...] = ()
    line: int | None = None
    column: int | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "at Run/Segments/Segment (line 10, column 5)"
        """
        parts = []
        if self.element_path:
            parts.append("at " + "/".join(self.element_path))
        if self.line is not None:
            position = f"line {self.line}"
            if self.column is not None:
                position += f", column {self.column}"
            parts.append(f"({position})")
        return " ".join(parts)


class SplitFileError(Exception):
    """Base exception for all split file parsing errors."""

    kind: ParseErrorKind

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            location = self.context.format()
            if location:
                return f"{self.message} {location}"
        return self.message

    def with_context(self, context: ErrorContext) -> "SplitFileError":
        """Attach context if none was recorded yet and return self."""
        if self.context is None:
            self.context = context
            self.args = (self._format_message(),)
        return self


class XmlError(SplitFileError):
    """Raised when the underlying tokenizer rejects malformed markup."""

    kind = ParseErrorKind.XML


class InvalidBooleanError(SplitFileError):
    """Raised when a boolean is anything other than ``True`` or ``False``."""

    kind = ParseErrorKind.INVALID_BOOLEAN


class UnexpectedEndOfInputError(SplitFileError):
    """Raised when the document ends while elements are still open."""

    kind = ParseErrorKind.UNEXPECTED_END_OF_INPUT


class UnexpectedNestedElementError(SplitFileError):
    """Raised when an element opens where only text is allowed."""

    kind = ParseErrorKind.UNEXPECTED_NESTED_ELEMENT


class AttributeNotFoundError(SplitFileError):
    """Raised when a required attribute is missing."""

    kind = ParseErrorKind.ATTRIBUTE_NOT_FOUND

    def __init__(
        self,
        attribute: str,
        element: str,
        context: Optional["ErrorContext"] = None,
    ):
        self.attribute = attribute
        self.element = element
        super().__init__(
            f"Required attribute '{attribute}' not found on <{element}>",
            context,
        )


class TextEncodingError(SplitFileError):
    """Raised when the byte stream is not valid text in its declared encoding."""

    kind = ParseErrorKind.TEXT_ENCODING


class IntegerFormatError(SplitFileError):
    """Raised when text that must be an integer is not one."""

    kind = ParseErrorKind.INTEGER_FORMAT


class FloatFormatError(SplitFileError):
    """Raised when text that must be a decimal number is not one."""

    kind = ParseErrorKind.FLOAT_FORMAT


class TimeSpanFormatError(SplitFileError):
    """Raised when text matches neither time span encoding."""

    kind = ParseErrorKind.TIME_SPAN_FORMAT


class DateFormatError(SplitFileError):
    """Raised when a timestamp does not match ``MM/DD/YYYY hh:mm:ss``."""

    kind = ParseErrorKind.DATE_FORMAT


def make_int_error(text: str, what: str = "integer") -> IntegerFormatError:
    """
    Helper to create an IntegerFormatError for a rejected value.

    Args:
        text: The text that failed to parse
        what: Description of the expected value

    Returns:
        IntegerFormatError with a descriptive message
    """
    return IntegerFormatError(f"Invalid {what}: {text!r}")
