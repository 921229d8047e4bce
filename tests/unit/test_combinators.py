"""
Tests for the parsing combinators in BaseRunParser.

Tests cover:
- Text reading and nested element rejection
- Child iteration, tag release and automatic skipping
- Time values in both grammars
- Scalar conversions (booleans, integers, dates)
- Embedded image decoding
"""

import base64
import io
from datetime import UTC, datetime

import pytest

from splitparse import (
    DateFormatError,
    IntegerFormatError,
    InvalidBooleanError,
    Time,
    TimeSpan,
    UnexpectedEndOfInputError,
    UnexpectedNestedElementError,
)
from splitparse.core.reader import EventKind, EventReader
from splitparse.core.run_parser_impl.base import (
    IMAGE_MIN_LENGTH,
    IMAGE_PAYLOAD_OFFSET,
    BaseRunParser,
    decode_image,
    parse_bool,
    parse_date_time,
    parse_int,
)
from splitparse.core.versioning import Grammar


def make_parser(xml: str) -> BaseRunParser:
    """Return a parser positioned just after the root element's START."""
    reader = EventReader(io.BytesIO(xml.encode("utf-8")))
    event = reader.next_event()
    assert event.kind == EventKind.START
    return BaseRunParser(reader)


def image_text(payload: bytes) -> str:
    """Wrap raw bytes in the legacy image container."""
    return "A" * IMAGE_PAYLOAD_OFFSET + base64.b64encode(payload).decode("ascii")


# =============================================================================
# Text
# =============================================================================


class TestReadText:
    """Tests for read_text."""

    def test_reads_text(self) -> None:
        parser = make_parser("<Name>Level 1</Name>")
        assert parser.read_text() == "Level 1"
        assert parser.reader.next_event().kind == EventKind.EOF

    def test_empty_element(self) -> None:
        assert make_parser("<Name></Name>").read_text() == ""

    def test_self_closing_element(self) -> None:
        assert make_parser("<Name/>").read_text() == ""

    def test_nested_element_rejected(self) -> None:
        """A child element where only text is allowed is fatal."""
        parser = make_parser("<Name><B>x</B></Name>")
        with pytest.raises(UnexpectedNestedElementError):
            parser.read_text()

    def test_nested_element_after_text_rejected(self) -> None:
        parser = make_parser("<Name>text<B/></Name>")
        with pytest.raises(UnexpectedNestedElementError):
            parser.read_text()

    def test_truncated(self) -> None:
        parser = make_parser("<Name>abc")
        with pytest.raises(UnexpectedEndOfInputError):
            parser.read_text()

    def test_buffer_returned_after_read(self) -> None:
        """The scratch buffer can be lent again once the text is read."""
        parser = make_parser("<Name>abc</Name>")
        parser.read_text()
        with parser.reader.lend() as buffer:
            assert len(buffer) == 0

    def test_buffer_returned_after_error(self) -> None:
        parser = make_parser("<Name><B/></Name>")
        with pytest.raises(UnexpectedNestedElementError):
            parser.read_text()
        with parser.reader.lend():
            pass


class TestScalarReaders:
    """Tests for typed text readers."""

    def test_read_int(self) -> None:
        assert make_parser("<AttemptCount>42</AttemptCount>").read_int() == 42

    def test_read_negative_int(self) -> None:
        assert make_parser("<Id>-3</Id>").read_int() == -3

    def test_unsigned_rejects_sign(self) -> None:
        with pytest.raises(IntegerFormatError):
            make_parser("<AttemptCount>-1</AttemptCount>").read_int(signed=False)

    def test_read_bool(self) -> None:
        assert make_parser("<Flag>True</Flag>").read_bool() is True

    def test_read_text_as(self) -> None:
        assert make_parser("<Name>abc</Name>").read_text_as(str.upper) == "ABC"


# =============================================================================
# Structure
# =============================================================================


class TestReadChildren:
    """Tests for child iteration."""

    def test_names_in_order(self) -> None:
        parser = make_parser("<Run><A>1</A><B/><C>3</C></Run>")
        names = []
        for tag in parser.read_children():
            names.append(tag.name)
            parser.skip_element()
        assert names == ["A", "B", "C"]
        assert parser.reader.next_event().kind == EventKind.EOF

    def test_unconsumed_children_are_skipped(self) -> None:
        """Children the loop body ignores are discarded with their subtrees."""
        parser = make_parser("<Run><A><X><Y/></X></A><B>text</B></Run>")
        seen = {}
        for tag in parser.read_children():
            if tag.name == "B":
                seen["B"] = parser.read_text()
        assert seen == {"B": "text"}

    def test_text_between_children_ignored(self) -> None:
        parser = make_parser("<Run>stray<A/>more<B/></Run>")
        names = [tag.name for tag in parser.read_children()]
        assert names == ["A", "B"]

    def test_attributes(self) -> None:
        parser = make_parser('<Run><Time id="4" extra="x"/></Run>')
        for tag in parser.read_children():
            assert tag.attribute("id") == "4"
            assert tag.attribute("missing") is None
            assert tag.required_attribute("extra") == "x"
            assert list(tag.attributes()) == [("id", "4"), ("extra", "x")]

    def test_tag_released_after_iteration(self) -> None:
        """A tag cannot be used once the iteration has moved past it."""
        parser = make_parser("<Run><A/><B/></Run>")
        tags = list(parser.read_children())
        with pytest.raises(RuntimeError):
            _ = tags[0].name
        with pytest.raises(RuntimeError):
            tags[0].attribute("id")

    def test_truncated(self) -> None:
        parser = make_parser("<Run><A/>")
        with pytest.raises(UnexpectedEndOfInputError):
            for _ in parser.read_children():
                pass


class TestSkipElement:
    """Tests for skip_element."""

    def test_skips_nested_subtree(self) -> None:
        parser = make_parser("<Run><A><B><C>deep</C></B></A></Run>")
        parser.skip_element()
        assert parser.reader.depth == 0
        assert parser.reader.next_event().kind == EventKind.EOF

    def test_truncated(self) -> None:
        parser = make_parser("<Run><A><B>")
        with pytest.raises(UnexpectedEndOfInputError):
            parser.skip_element()


# =============================================================================
# Times
# =============================================================================


class TestReadTime:
    """Tests for time value readers."""

    def test_real_and_game_time(self) -> None:
        parser = make_parser(
            "<SplitTime><RealTime>00:01:00</RealTime><GameTime>00:00:58.5</GameTime></SplitTime>"
        )
        assert parser.read_time() == Time(
            real_time=TimeSpan.from_seconds(60),
            game_time=TimeSpan.from_seconds(58.5),
        )

    def test_missing_children_are_empty(self) -> None:
        assert make_parser("<SplitTime/>").read_time().is_empty

    def test_empty_child_is_not_recorded(self) -> None:
        time = make_parser("<SplitTime><RealTime/></SplitTime>").read_time()
        assert time.real_time is None

    def test_unknown_child_skipped(self) -> None:
        parser = make_parser("<SplitTime><Note><x/></Note><RealTime>5</RealTime></SplitTime>")
        assert parser.read_time().real_time == TimeSpan.from_seconds(5)

    def test_legacy_time_fills_real_time(self) -> None:
        time = make_parser("<PersonalBestSplitTime>90.5</PersonalBestSplitTime>").read_time_legacy()
        assert time == Time(real_time=TimeSpan.from_seconds(90.5))

    def test_legacy_empty_is_empty_time(self) -> None:
        assert make_parser("<BestSegmentTime/>").read_time_legacy().is_empty

    def test_read_time_with_dispatches(self) -> None:
        timed = make_parser("<T><RealTime>1</RealTime></T>").read_time_with(Grammar.TIME)
        legacy = make_parser("<T>1</T>").read_time_with(Grammar.LEGACY_TIME)
        assert timed == legacy == Time(real_time=TimeSpan.from_seconds(1))

    def test_read_time_with_rejects_non_time_grammar(self) -> None:
        with pytest.raises(ValueError):
            make_parser("<T>1</T>").read_time_with(Grammar.SKIP)

    def test_read_time_span_empty_is_zero(self) -> None:
        assert make_parser("<Offset/>").read_time_span() == TimeSpan.zero()

    def test_read_time_span_optional_empty_is_none(self) -> None:
        assert make_parser("<PauseTime/>").read_time_span_optional() is None


# =============================================================================
# Scalar conversions
# =============================================================================


class TestParseBool:
    """Only the exact tokens True and False are booleans."""

    def test_tokens(self) -> None:
        assert parse_bool("True") is True
        assert parse_bool("False") is False

    @pytest.mark.parametrize("text", ["true", "FALSE", "1", "", "Maybe", " True"])
    def test_rejected(self, text: str) -> None:
        with pytest.raises(InvalidBooleanError):
            parse_bool(text)


class TestParseInt:
    """Tests for parse_int."""

    @pytest.mark.parametrize("text", ["", "1.5", "abc", "1 ", "0x1"])
    def test_rejected(self, text: str) -> None:
        with pytest.raises(IntegerFormatError):
            parse_int(text)

    def test_unsigned_accepts_plus(self) -> None:
        assert parse_int("+7", signed=False) == 7

    def test_too_many_digits_rejected(self) -> None:
        with pytest.raises(IntegerFormatError):
            parse_int("9" * 5000)


class TestParseDateTime:
    """Timestamps are MM/DD/YYYY hh:mm:ss in UTC."""

    def test_valid(self) -> None:
        assert parse_date_time("01/02/2017 10:00:00") == datetime(2017, 1, 2, 10, 0, 0, tzinfo=UTC)

    @pytest.mark.parametrize(
        "text", ["2017-01-02 10:00:00", "13/02/2017 10:00:00", "01/02/2017", "garbage"]
    )
    def test_rejected(self, text: str) -> None:
        with pytest.raises(DateFormatError):
            parse_date_time(text)


# =============================================================================
# Images
# =============================================================================


class TestImages:
    """Embedded images are decoded best effort."""

    def test_payload_is_extracted(self) -> None:
        """Two header bytes and one trailer byte are stripped."""
        assert decode_image(image_text(b"\x01\x02PNGDATA\xff")) == b"PNGDATA"

    def test_short_text_is_empty(self) -> None:
        assert decode_image("A" * (IMAGE_MIN_LENGTH - 1)) == b""

    def test_empty_text_is_empty(self) -> None:
        assert decode_image("") == b""

    def test_invalid_base64_is_empty(self) -> None:
        assert decode_image("A" * IMAGE_PAYLOAD_OFFSET + "!!!!****") == b""

    def test_read_image_from_cdata(self) -> None:
        xml = f"<Icon><![CDATA[{image_text(b'ab-icon-z')}]]></Icon>"
        assert make_parser(xml).read_image() == b"-icon-"

    def test_read_image_empty_element(self) -> None:
        assert make_parser("<Icon />").read_image() == b""
