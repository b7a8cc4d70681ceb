from typing import Dict, List

from loguru import logger

from fantrax_setup.models.division import Division
from fantrax_setup.models.form_state import FormFields, FormState
from fantrax_setup.models.league_setup import LeagueSetup
from fantrax_setup.models.team import Team

from .division_parser import extract_divisions
from .form_parser import extract_form_fields
from .schedule_parser import extract_schedule
from .team_parser import extract_teams

OWNER_EMAIL_FIELD_TAG = "teamOwnerEmail"


def owner_email_field_key(email: str, team_id: str, user_id: str) -> str:
    return f"{OWNER_EMAIL_FIELD_TAG},{email},{team_id},{user_id}"


def build_form_state(
    fields: FormFields, teams: List[Team], divisions: List[Division]
) -> FormState:
    """Combines the scraped fields with the values derived from teams and divisions."""
    owner_email_fields: Dict[str, str] = {}
    for team in teams:
        for owner in team.owners:
            # The page renders no email input for commissioners or joined owners
            if owner.receives_email_field:
                key = owner_email_field_key(owner.email, team.team_id, owner.user_id)
                owner_email_fields[key] = owner.email

    return FormState(
        hidden_fields=fields.hidden_fields,
        select_fields=fields.select_fields,
        checkbox_fields=fields.checkbox_fields,
        # Names come from addTeam() rather than the page's own name inputs
        team_names={team.team_id: team.name for team in teams},
        team_short_names={team.team_id: team.short_name for team in teams},
        owner_email_fields=owner_email_fields,
        division_names={div.division_id: div.name for div in divisions},
        division_memberships=tuple(
            div.membership_entry() for div in divisions if div.team_ids
        ),
    )


def assemble_league_setup(html: str, league_id: str) -> LeagueSetup:
    """Parses the setup page into one consistent LeagueSetup snapshot.

    Any stage failing raises its ParseError; no partial snapshot is returned.
    """
    schedule = extract_schedule(html)
    teams = extract_teams(html)
    divisions = extract_divisions(html)
    fields = extract_form_fields(html)

    known_ids = {team.team_id for team in teams}
    for division in divisions:
        unknown = [tid for tid in division.team_ids if tid not in known_ids]
        if unknown:
            # Kept as-is so the division is echoed back exactly as the page had it
            logger.warning(
                f"Division {division.division_id} lists unknown team ids: {unknown}"
            )

    setup = LeagueSetup(
        league_id=league_id,
        teams=tuple(teams),
        divisions=tuple(divisions),
        schedule=schedule,
        form_state=build_form_state(fields, teams, divisions),
    )
    logger.info(
        f"Assembled league setup {league_id}: {len(setup.teams)} teams, "
        f"{len(setup.divisions)} divisions, {len(setup.schedule)} periods"
    )
    return setup
