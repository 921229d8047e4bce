"""Shared pytest fixtures for splitparse tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from splitparse import Run, parse


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def splits_dir(fixtures_dir: Path) -> Path:
    """Return path to split file fixtures directory."""
    return fixtures_dir / "splits"


@pytest.fixture
def load_split(splits_dir: Path) -> Callable[[str], Run]:
    """Return a helper that parses a split file fixture by name."""

    def _load(name: str) -> Run:
        path = splits_dir / name
        with path.open("rb") as source:
            return parse(source, path)

    return _load


@pytest.fixture
def parse_xml() -> Callable[..., Run]:
    """Return a helper that parses an inline split document."""

    def _parse(text: str, path: Path | None = None) -> Run:
        return parse(text.encode("utf-8"), path)

    return _parse
