"""Version lookup for splitparse."""

import re
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"
_VERSION_LINE = re.compile(r'^version\s*=\s*["\']([^"\']+)["\']', re.MULTILINE)


def get_version() -> str:
    """Return the source checkout's version, else the installed distribution's."""
    if _PYPROJECT.is_file():
        if match := _VERSION_LINE.search(_PYPROJECT.read_text()):
            return match.group(1)
    try:
        return _metadata_version("splitparse")
    except PackageNotFoundError:
        return "0.0.0"
