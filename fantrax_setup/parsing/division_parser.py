import re
from typing import Dict, List

from bs4 import BeautifulSoup
from loguru import logger

from fantrax_setup.errors import DivisionParseError
from fantrax_setup.models.division import Division
from fantrax_setup.utils.misc_utils import looks_like_script_fragment

DIVISION_NAME_PREFIX = "divisionName_"
# __removeTeamFromDivision('tbl_{divId}', '{teamId}', false)
DIVISION_MEMBER_RE = re.compile(r"__removeTeamFromDivision\('tbl_(\w+)',\s*'(\w+)'")


def _division_names(html: str) -> Dict[str, str]:
    soup = BeautifulSoup(html, "html.parser")
    names: Dict[str, str] = {}
    for tag in soup.find_all("input", attrs={"name": re.compile(f"^{DIVISION_NAME_PREFIX}.")}):
        division_id = tag["name"][len(DIVISION_NAME_PREFIX):]
        name = tag.get("value")
        if name is None:
            continue
        if looks_like_script_fragment(division_id):
            logger.debug(f"Skipping script template division field: {tag['name']}")
            continue
        names.setdefault(division_id, name)
    return names


def extract_divisions(html: str) -> List[Division]:
    """Parses division names and their team assignments, in page order."""
    names = _division_names(html)
    if not names:
        logger.error("No divisionName_ inputs found in setup page")
        raise DivisionParseError("no division names found in HTML")

    members: Dict[str, List[str]] = {division_id: [] for division_id in names}
    for division_id, team_id in DIVISION_MEMBER_RE.findall(html):
        if division_id not in members:
            logger.debug(f"Ignoring membership of team {team_id} in unknown division {division_id}")
            continue
        if team_id not in members[division_id]:
            members[division_id].append(team_id)

    divisions = [
        Division(division_id=division_id, name=name, team_ids=tuple(members[division_id]))
        for division_id, name in names.items()
    ]
    logger.debug(f"Parsed {len(divisions)} divisions")
    return divisions
