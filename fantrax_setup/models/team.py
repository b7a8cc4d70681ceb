# fantrax_setup/models/team.py
from typing import Tuple

from pydantic import BaseModel, ConfigDict

# Literal user id the setup page uses for owners without an account yet
PLACEHOLDER_USER_ID = "NULL"


class Owner(BaseModel):
    """A person attached to a team, possibly not yet a league member."""

    model_config = ConfigDict(frozen=True)

    email: str
    user_id: str  # Real id, or synthetic NULL_<n> for placeholder owners
    is_commissioner: bool = False
    joined_league: bool = False

    @property
    def receives_email_field(self) -> bool:
        # The page renders an email input only for pending, non-commissioner owners
        return not self.is_commissioner and not self.joined_league


class Team(BaseModel):
    """Represents a team declared on the league setup page."""

    model_config = ConfigDict(frozen=True)

    team_id: str
    name: str
    short_name: str
    owners: Tuple[Owner, ...] = ()
