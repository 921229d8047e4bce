"""
Run identity metadata (speedrun.com style).
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class RunMetadata(BaseModel):
    """
    Identity of a run on an external leaderboard.

    Attributes:
        run_id: External run id
        platform_name: Platform the game is played on
        uses_emulator: Whether the run is played on an emulator
        region_name: Game region
        variables: Custom variables as ordered (name, value) pairs
    """

    run_id: str = ""
    platform_name: str = ""
    uses_emulator: bool = False
    region_name: str = ""
    variables: list[tuple[str, str]] = Field(default_factory=list)

    def add_variable(self, name: str, value: str) -> None:
        """Append a variable; earlier entries with the same name are kept."""
        self.variables.append((name, value))

    def variable(self, name: str) -> str | None:
        """Return the value of the first variable called ``name``."""
        for key, value in self.variables:
            if key == name:
                return value
        return None
