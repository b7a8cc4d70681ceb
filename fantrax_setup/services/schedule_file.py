"""Loading a full schedule from a CSV file and diffing it against a snapshot.

Expected columns: period, away_team_id, home_team_id, one row per pair and
keyed by team id. A bye is a row whose home_team_id is -1 (or left empty).
Spreadsheet exports laid out as one row per period with team names in the
cells are not read; convert them to this layout first.
"""

import csv
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from loguru import logger

from fantrax_setup.errors import LeagueSetupError
from fantrax_setup.models.league_setup import LeagueSetup
from fantrax_setup.models.matchup import BYE_TEAM_ID, MatchupPair, Schedule

from .schedule_editor import matchups_equal

REQUIRED_COLUMNS = ("period", "away_team_id", "home_team_id")


class ScheduleFileError(LeagueSetupError):
    """The schedule CSV is malformed."""

    pass


def load_schedule_csv(path: Path) -> Schedule:
    """Reads period -> matchup pairs from a CSV, preserving row order per period."""
    schedule: Dict[int, List[MatchupPair]] = {}
    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        missing = [c for c in REQUIRED_COLUMNS if c not in (reader.fieldnames or [])]
        if missing:
            raise ScheduleFileError(f"{path}: missing columns {missing}")

        for line_no, row in enumerate(reader, start=2):
            try:
                period = int(row["period"])
            except (TypeError, ValueError) as e:
                raise ScheduleFileError(
                    f"{path}:{line_no}: invalid period {row['period']!r}"
                ) from e
            away = (row["away_team_id"] or "").strip()
            home = (row["home_team_id"] or "").strip() or BYE_TEAM_ID
            if not away:
                raise ScheduleFileError(f"{path}:{line_no}: missing away_team_id")
            schedule.setdefault(period, []).append(
                MatchupPair(away_team_id=away, home_team_id=home)
            )

    logger.info(f"Loaded {len(schedule)} periods from {path}")
    return {period: tuple(pairs) for period, pairs in schedule.items()}


def parse_period_range(text: str) -> Tuple[int, int]:
    """Parses "5" or "1-142" into an inclusive (start, end) range."""
    start, sep, end = text.partition("-")
    try:
        first = int(start)
        last = int(end) if sep else first
    except ValueError as e:
        raise ScheduleFileError(f"Invalid period range: {text!r}") from e
    if last < first:
        raise ScheduleFileError(f"Invalid period range: {text!r}")
    return first, last


def changed_periods(
    setup: LeagueSetup,
    schedule: Schedule,
    period_range: Optional[Tuple[int, int]] = None,
) -> List[int]:
    """Periods of `schedule` (within the range) whose pairs differ from `setup`."""
    changed = []
    for period in sorted(schedule):
        if period_range and not period_range[0] <= period <= period_range[1]:
            continue
        if period not in setup.schedule:
            logger.warning(f"Period {period} is not in the league schedule; skipping")
            continue
        if not matchups_equal(setup.schedule[period], schedule[period]):
            changed.append(period)
    return changed
