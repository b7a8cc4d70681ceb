from typing import Mapping, Tuple

from pydantic import BaseModel, ConfigDict

# Home team id marking a bye; never a real team id
BYE_TEAM_ID = "-1"

PAIR_SEPARATOR = "_"


class MatchupPair(BaseModel):
    """Represents a single away vs home meeting within a scoring period."""

    model_config = ConfigDict(frozen=True)

    away_team_id: str
    home_team_id: str

    @property
    def is_bye(self) -> bool:
        return self.home_team_id == BYE_TEAM_ID

    def to_token(self) -> str:
        """Renders the pair the way the setup page encodes it ("away_home")."""
        return f"{self.away_team_id}{PAIR_SEPARATOR}{self.home_team_id}"

    @classmethod
    def from_token(cls, token: str) -> "MatchupPair":
        """Parses an "away_home" token, splitting on the first separator only.

        Team ids are assumed never to contain the separator; an id that did
        would be silently misattributed.
        """
        away, sep, home = token.partition(PAIR_SEPARATOR)
        if not sep or not away or not home:
            raise ValueError(f"Invalid matchup pair format: {token!r}")
        return cls(away_team_id=away, home_team_id=home)


# Period number -> ordered matchup pairs
Schedule = Mapping[int, Tuple[MatchupPair, ...]]
