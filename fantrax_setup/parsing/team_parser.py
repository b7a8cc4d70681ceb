import re
from typing import Dict, List

from loguru import logger

from fantrax_setup.errors import TeamParseError
from fantrax_setup.models.team import PLACEHOLDER_USER_ID, Owner, Team

# addTeam('Name', 'SHORT', 'email', 'teamId', 'userId', isCommissioner, joinedLeague, ...);
ADD_TEAM_RE = re.compile(
    r"addTeam\('([^']*)',\s*'([^']*)',\s*'([^']*)',\s*'([^']*)',\s*'([^']*)',"
    r"\s*(true|false),\s*(true|false)"
)


def extract_teams(html: str) -> List[Team]:
    """Parses every addTeam() declaration into teams with their owners.

    A team with N owners is declared N times; owners are collected in
    declaration order. The page itself rewrites each 'NULL' user id to
    NULL_0, NULL_1, ... as it goes, and the owner email field names depend
    on those rewritten ids, so the same numbering is reproduced here. The
    counter lives in this call only.
    """
    matches = ADD_TEAM_RE.findall(html)
    if not matches:
        logger.error("No addTeam() declarations found in setup page")
        raise TeamParseError("no addTeam() calls found in HTML")

    placeholder_count = 0
    order: List[str] = []
    names: Dict[str, tuple] = {}
    owners: Dict[str, List[Owner]] = {}

    for name, short_name, email, team_id, user_id, is_comm, joined in matches:
        if user_id == PLACEHOLDER_USER_ID:
            user_id = f"{PLACEHOLDER_USER_ID}_{placeholder_count}"
            placeholder_count += 1

        owner = Owner(
            email=email,
            user_id=user_id,
            is_commissioner=is_comm == "true",
            joined_league=joined == "true",
        )
        if team_id not in owners:
            order.append(team_id)
            names[team_id] = (name, short_name)
            owners[team_id] = []
        owners[team_id].append(owner)

    teams = [
        Team(
            team_id=team_id,
            name=names[team_id][0],
            short_name=names[team_id][1],
            owners=tuple(owners[team_id]),
        )
        for team_id in order
    ]
    logger.debug(
        f"Parsed {len(teams)} teams from {len(matches)} addTeam() calls "
        f"({placeholder_count} placeholder owners)"
    )
    return teams
