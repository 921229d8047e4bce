"""
Segment parser mixin for split files.

Syntax (1.4.1 and later):

    <Segment>
      <Name>Level 1</Name>
      <Icon />
      <SplitTimes>
        <SplitTime name="Personal Best">
          <RealTime>00:01:02.5000000</RealTime>
        </SplitTime>
      </SplitTimes>
      <BestSegmentTime>
        <RealTime>00:01:01.0000000</RealTime>
      </BestSegmentTime>
      <SegmentHistory>
        <Time id="1">
          <RealTime>00:01:03.0000000</RealTime>
        </Time>
      </SegmentHistory>
    </Segment>

Older files store times as bare text, and files before 1.3 carry a single
``<PersonalBestSplitTime>`` instead of ``<SplitTimes>``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import model
from ..versioning import Grammar, Version, select_grammar
from .base import parse_int


class SegmentParserMixin:
    """Parser mixin for ``<Segment>`` elements."""

    if TYPE_CHECKING:
        read_children: Any
        read_text: Any
        read_image: Any
        read_time_with: Any
        skip_element: Any
        skip_unknown: Any

    def parse_segment(self, version: Version, run: model.Run) -> model.Segment:
        """
        Parse one segment.

        Comparison names found in ``<SplitTimes>`` are registered on ``run``.
        """
        segment = model.Segment()

        for tag in self.read_children():
            name = tag.name
            grammar = select_grammar(version, name)

            if name == "Name":
                segment.name = self.read_text()
            elif name == "Icon":
                segment.icon = self.read_image()
            elif grammar == Grammar.SKIP:
                self.skip_element()
            elif name == "SplitTimes":
                self._parse_split_times(version, segment, run)
            elif name == "PersonalBestSplitTime":
                segment.personal_best_split_time = self.read_time_with(grammar)
            elif name == "BestSegmentTime":
                segment.best_segment_time = self.read_time_with(grammar)
            elif name == "SegmentHistory":
                self._parse_segment_history(grammar, segment)
            else:
                self.skip_unknown(tag)

        return segment

    def _parse_split_times(
        self, version: Version, segment: model.Segment, run: model.Run
    ) -> None:
        grammar = select_grammar(version, "SplitTime")
        for tag in self.read_children():
            if tag.name != "SplitTime":
                self.skip_unknown(tag)
                continue
            comparison = tag.required_attribute("name")
            run.add_custom_comparison(comparison)
            segment.set_comparison(comparison, self.read_time_with(grammar))

    def _parse_segment_history(self, grammar: Grammar, segment: model.Segment) -> None:
        for tag in self.read_children():
            index = parse_int(tag.required_attribute("id"))
            segment.add_history_entry(index, self.read_time_with(grammar))
