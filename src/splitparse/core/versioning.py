"""
Split file format versions.

The ``version`` attribute on the root element selects between grammars that
reuse the same tag names. All version-dependent decisions are made by
``select_grammar`` so the builders never compare versions themselves.

Grammar changes:
    - 1.3.0.0: ``SplitTimes`` replaces ``PersonalBestSplitTime``
    - 1.4.1.0: times are ``<RealTime>``/``<GameTime>`` pairs instead of bare text
    - 1.5.0.0: ``AttemptHistory`` replaces ``RunHistory``
    - 1.6.0.0: ``Metadata`` is introduced
"""

from __future__ import annotations

from enum import StrEnum
from typing import NamedTuple

from .errors import make_int_error


class Version(NamedTuple):
    """
    A four component format version, ordered lexicographically.

    Examples:
        >>> Version.parse("1.4.1") < Version.parse("1.5")
        True
    """

    major: int = 1
    minor: int = 0
    patch: int = 0
    build: int = 0

    @classmethod
    def parse(cls, text: str) -> Version:
        """
        Parse ``major.minor.patch.build``; omitted trailing components are 0.

        Components past the fourth are ignored.

        Raises:
            IntegerFormatError: If a component is not an unsigned integer
        """
        components = [1, 0, 0, 0]
        for i, part in enumerate(text.split(".")[:4]):
            if not part.isascii() or not part.isdigit():
                raise make_int_error(text, "version")
            try:
                components[i] = int(part)
            except ValueError as err:
                raise make_int_error(text, "version") from err
        return cls(*components)

    @classmethod
    def from_attribute(cls, value: str | None) -> Version:
        """Version for a root element, defaulting to 1.0.0.0 when absent."""
        if value is None:
            return DEFAULT_VERSION
        return cls.parse(value)

    def __str__(self) -> str:
        return ".".join(str(c) for c in self)


DEFAULT_VERSION = Version(1, 0, 0, 0)
V1_3 = Version(1, 3, 0, 0)
V1_4_1 = Version(1, 4, 1, 0)
V1_5 = Version(1, 5, 0, 0)
V1_6 = Version(1, 6, 0, 0)


class Grammar(StrEnum):
    """How a child element is read."""

    PARSE = "parse"  # handled by the builder for that tag
    SKIP = "skip"  # discarded subtree
    TIME = "time"  # <RealTime>/<GameTime> children
    LEGACY_TIME = "legacy_time"  # bare text, real time only


_TIMED_TAGS = frozenset({"SplitTime", "BestSegmentTime", "SegmentHistory"})


def time_grammar(version: Version) -> Grammar:
    """Grammar of a time value for the given version."""
    return Grammar.TIME if version >= V1_4_1 else Grammar.LEGACY_TIME


def select_grammar(version: Version, tag: str) -> Grammar:
    """
    Choose how to read ``tag`` in a document of ``version``.

    Tags not affected by versioning return ``Grammar.PARSE``; the caller then
    decides by name, skipping anything it does not recognize.
    """
    if tag == "Metadata":
        return Grammar.PARSE if version >= V1_6 else Grammar.SKIP
    if tag == "AttemptHistory":
        return Grammar.PARSE if version >= V1_5 else Grammar.SKIP
    if tag == "RunHistory":
        return Grammar.SKIP if version >= V1_5 else time_grammar(version)
    if tag == "SplitTimes":
        return Grammar.PARSE if version >= V1_3 else Grammar.SKIP
    if tag == "PersonalBestSplitTime":
        return Grammar.LEGACY_TIME if version < V1_3 else Grammar.SKIP
    if tag in _TIMED_TAGS:
        return time_grammar(version)
    if tag == "AutoSplitterSettings":
        return Grammar.SKIP
    return Grammar.PARSE
