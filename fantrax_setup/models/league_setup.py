from typing import Annotated, List, Optional, Tuple

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from fantrax_setup.utils.misc_utils import freeze_mapping

from .division import Division
from .form_state import FormState
from .matchup import BYE_TEAM_ID, MatchupPair, Schedule
from .team import Team


class LeagueSetup(BaseModel):
    """Immutable snapshot of one fetch of the league setup page.

    Rebuilt on every fetch and never persisted. Editing a period yields a new
    snapshot (see services.schedule_editor) instead of changing this one.
    """

    model_config = ConfigDict(frozen=True)

    league_id: str
    teams: Tuple[Team, ...]
    divisions: Tuple[Division, ...]
    schedule: Annotated[Schedule, AfterValidator(freeze_mapping)]
    form_state: FormState = Field(default_factory=FormState)

    def get_team(self, team_id: str) -> Optional[Team]:
        """Looks up a team by id; the bye sentinel never resolves to a team."""
        if team_id == BYE_TEAM_ID:
            return None
        for team in self.teams:
            if team.team_id == team_id:
                return team
        return None

    def team_label(self, team_id: str) -> str:
        if team_id == BYE_TEAM_ID:
            return "BYE"
        team = self.get_team(team_id)
        return team.short_name if team else team_id

    def sorted_periods(self) -> List[int]:
        return sorted(self.schedule)

    def matchups_for(self, period: int) -> Tuple[MatchupPair, ...]:
        return self.schedule.get(period, ())
