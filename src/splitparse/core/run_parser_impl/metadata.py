"""
Metadata parser mixin for split files.

Parses the leaderboard identity block introduced in format 1.6.

Syntax:

    <Metadata>
      <Run id="z1x2c3v4" />
      <Platform usesEmulator="False">PC</Platform>
      <Region>USA</Region>
      <Variables>
        <Variable name="Version">1.0</Variable>
      </Variables>
    </Metadata>
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import model
from .base import parse_bool


class MetadataParserMixin:
    """Parser mixin for the ``<Metadata>`` block."""

    if TYPE_CHECKING:
        read_children: Any
        read_text: Any
        skip_element: Any
        skip_unknown: Any

    def parse_metadata(self, metadata: model.RunMetadata) -> None:
        """Populate ``metadata`` from the current element's children."""
        for tag in self.read_children():
            if tag.name == "Run":
                metadata.run_id = tag.required_attribute("id")
                self.skip_element()
            elif tag.name == "Platform":
                uses_emulator = tag.attribute("usesEmulator")
                if uses_emulator is not None:
                    metadata.uses_emulator = parse_bool(uses_emulator)
                metadata.platform_name = self.read_text()
            elif tag.name == "Region":
                metadata.region_name = self.read_text()
            elif tag.name == "Variables":
                self._parse_variables(metadata)
            else:
                self.skip_unknown(tag)

    def _parse_variables(self, metadata: model.RunMetadata) -> None:
        for tag in self.read_children():
            name = tag.required_attribute("name")
            metadata.add_variable(name, self.read_text())
