from typing import Iterable, Sequence

from loguru import logger

from fantrax_setup.errors import EmptyMatchupsError, UnknownPeriodError
from fantrax_setup.models.league_setup import LeagueSetup
from fantrax_setup.models.matchup import MatchupPair
from fantrax_setup.utils.misc_utils import freeze_mapping


def replace_period_matchups(
    setup: LeagueSetup, period: int, pairs: Iterable[MatchupPair]
) -> LeagueSetup:
    """Returns a copy of `setup` with one period's pairs replaced wholesale.

    Periods are never created, and the whole list is replaced rather than
    merged. `setup` itself is left untouched; every map in a snapshot is a
    read-only copy, so two pending edits never share writable state.
    """
    new_pairs = tuple(pairs)
    if period not in setup.schedule:
        logger.error(f"Refusing to edit period {period}: not present in the schedule")
        raise UnknownPeriodError(period)
    if not new_pairs:
        logger.error(f"Refusing to edit period {period}: no replacement matchups given")
        raise EmptyMatchupsError(period)

    schedule = dict(setup.schedule)
    schedule[period] = new_pairs
    logger.debug(f"Replaced period {period} with {len(new_pairs)} matchups")
    # model_copy skips validation, so freeze the new map here
    return setup.model_copy(update={"schedule": freeze_mapping(schedule)})


def matchups_equal(a: Sequence[MatchupPair], b: Sequence[MatchupPair]) -> bool:
    """Positional comparison of two matchup lists."""
    return tuple(a) == tuple(b)
