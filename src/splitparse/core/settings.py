"""
Parser settings.

Settings are read from environment variables so applications embedding the
parser can tune it without code changes.

Environment variables:
    - SPLITPARSE_READ_CHUNK_SIZE: bytes fed to the XML tokenizer per read
      (default 65536)
    - SPLITPARSE_SCRATCH_CAPACITY: number of text chunks the scratch buffer
      keeps allocated between elements (default 4096)

Usage:
    from splitparse.core.settings import get_parser_settings

    settings = get_parser_settings()
"""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

READ_CHUNK_SIZE_VAR = "SPLITPARSE_READ_CHUNK_SIZE"
SCRATCH_CAPACITY_VAR = "SPLITPARSE_SCRATCH_CAPACITY"

_DEFAULT_READ_CHUNK_SIZE = 64 * 1024
_DEFAULT_SCRATCH_CAPACITY = 4096


class ParserSettings(BaseModel):
    """Tunables for the streaming reader."""

    read_chunk_size: int = Field(default=_DEFAULT_READ_CHUNK_SIZE, gt=0)
    scratch_capacity: int = Field(default=_DEFAULT_SCRATCH_CAPACITY, ge=0)

    model_config = ConfigDict(frozen=True)


def _read_int(name: str, default: int, minimum: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        value = None
    if value is None or value < minimum:
        logger.warning(
            "Invalid %s value '%s'. Expected an integer >= %d. Defaulting to %d.",
            name,
            raw,
            minimum,
            default,
        )
        return default
    return value


def get_parser_settings() -> ParserSettings:
    """
    Build settings from the environment.

    Unset variables use their defaults; invalid values log a warning and fall
    back to the default as well.
    """
    return ParserSettings(
        read_chunk_size=_read_int(READ_CHUNK_SIZE_VAR, _DEFAULT_READ_CHUNK_SIZE, 1),
        scratch_capacity=_read_int(SCRATCH_CAPACITY_VAR, _DEFAULT_SCRATCH_CAPACITY, 0),
    )
