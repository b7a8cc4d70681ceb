import re
from typing import Dict, List

from loguru import logger

from fantrax_setup.errors import ScheduleParseError
from fantrax_setup.models.matchup import MatchupPair, Schedule

# var matchupMap = {
#   '1':['awayId_homeId','awayId_-1',...],
#   '2':[...],
# };
MATCHUP_MAP_RE = re.compile(r"var\s+matchupMap\s*=\s*\{([\s\S]*?)\};")
PERIOD_ENTRY_RE = re.compile(r"'(\d+)'\s*:\s*\[([^\]]*)\]")
PAIR_TOKEN_RE = re.compile(r"'([^']+)'")


def extract_schedule(html: str) -> Schedule:
    """Parses the inline matchupMap literal into period -> matchup pairs."""
    block = MATCHUP_MAP_RE.search(html)
    if block is None:
        logger.error("matchupMap block not found in setup page")
        raise ScheduleParseError("matchupMap not found in HTML")

    entries = PERIOD_ENTRY_RE.findall(block.group(1))
    if not entries:
        logger.error("matchupMap block is present but holds no periods")
        raise ScheduleParseError("no periods found in matchupMap")

    schedule: Dict[int, tuple] = {}
    for raw_period, array_content in entries:
        period = int(raw_period)
        pairs: List[MatchupPair] = []
        for token in PAIR_TOKEN_RE.findall(array_content):
            try:
                pairs.append(MatchupPair.from_token(token))
            except ValueError as e:
                raise ScheduleParseError(
                    str(e), context={"period": period, "token": token}
                ) from e
        if period in schedule:
            logger.warning(f"Period {period} declared twice in matchupMap; keeping the last")
        schedule[period] = tuple(pairs)

    logger.debug(f"Parsed matchupMap with {len(schedule)} periods")
    return schedule
