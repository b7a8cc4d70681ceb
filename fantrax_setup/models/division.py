from typing import Tuple

from pydantic import BaseModel, ConfigDict


class Division(BaseModel):
    """A division and the ids of its member teams, in page order."""

    model_config = ConfigDict(frozen=True)

    division_id: str
    name: str
    team_ids: Tuple[str, ...] = ()

    def membership_entry(self) -> str:
        """Formats the "~~divisions" value: "divId=team1|team2|..."."""
        return f"{self.division_id}={'|'.join(self.team_ids)}"
