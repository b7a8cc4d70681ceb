"""Re-emits a LeagueSetup snapshot as the league setup form submission.

The server rewrites the whole league configuration from this body, so every
scraped value has to be echoed back. Only the schedule and the two edit
metadata fields are expected to differ from what the page rendered.
"""

from typing import Dict, Iterator, List, Tuple, Union
from urllib.parse import parse_qsl, urlencode

from loguru import logger

from fantrax_setup.models.league_setup import LeagueSetup
from fantrax_setup.models.matchup import Schedule

CONFIG_CHANGED_FIELD = "h2hConfigChangesMade"
CONFIG_CHANGED_VALUE = "y"

DIVISIONS_FIELD = "~~divisions"
MATCHUPS_FIELD = "matchups"

# Sent with every submission regardless of what changed
CONSTANT_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("tabId", "Matchups"),
    ("gotoNextPage", "false"),
    ("divisionName", ""),
    ("inviteMessage", ""),
    ("calculatedHeadToHeadOpponentType", "1"),
    ("playoffMatchupSetConfigId", ""),
)


class FormPayload:
    """Ordered, multi-valued form body.

    `set` replaces all values of a key and keeps the key's first position;
    `add` appends another occurrence of the key.
    """

    def __init__(self) -> None:
        self._values: Dict[str, List[str]] = {}

    def set(self, key: str, value: str) -> None:
        self._values[key] = [value]

    def add(self, key: str, value: str) -> None:
        self._values.setdefault(key, []).append(value)

    def get_all(self, key: str) -> List[str]:
        return list(self._values.get(key, []))

    def keys(self) -> List[str]:
        return list(self._values)

    def items(self) -> Iterator[Tuple[str, str]]:
        for key, values in self._values.items():
            for value in values:
                yield key, value

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def encode(self) -> str:
        """Url-encodes the payload (spaces as '+', like a browser form post)."""
        return urlencode(list(self.items()))

    def to_decoded_dict(self) -> Dict[str, Union[str, List[str]]]:
        """JSON-friendly view: one value as a string, repeated keys as a list."""
        return {
            key: values[0] if len(values) == 1 else list(values)
            for key, values in self._values.items()
        }


def decode_form_body(body: str) -> Dict[str, List[str]]:
    """Parses an encoded form body back to key -> values, keeping blanks."""
    decoded: Dict[str, List[str]] = {}
    for key, value in parse_qsl(body, keep_blank_values=True):
        decoded.setdefault(key, []).append(value)
    return decoded


def serialize_schedule(schedule: Schedule) -> List[str]:
    """One "period|away_home|away_home|..." entry per period, ascending."""
    return [
        "|".join([str(period)] + [pair.to_token() for pair in schedule[period]])
        for period in sorted(schedule)
    ]


def build_form_payload(setup: LeagueSetup, edited_period: int) -> FormPayload:
    """Builds the complete submission for `setup`, flagging `edited_period`."""
    form = FormPayload()
    state = setup.form_state

    for name, value in state.hidden_fields.items():
        if name == CONFIG_CHANGED_FIELD:
            value = CONFIG_CHANGED_VALUE
        form.set(name, value)

    for name, value in state.select_fields.items():
        form.set(name, value)
    for name, value in state.checkbox_fields.items():
        form.set(name, value)

    for team_id, name in state.team_names.items():
        form.set(f"teamName_{team_id}", name)
    for team_id, short_name in state.team_short_names.items():
        form.set(f"teamShortName_{team_id}", short_name)

    for key, email in state.owner_email_fields.items():
        form.set(key, email)

    for division_id, name in state.division_names.items():
        form.set(f"divisionName_{division_id}", name)

    for entry in state.division_memberships:
        form.add(DIVISIONS_FIELD, entry)

    for name, value in CONSTANT_FIELDS:
        form.set(name, value)

    form.set("matchupScoringPeriodToEdit", str(edited_period))
    form.set("matchupsEditedManually", "true")

    for entry in serialize_schedule(setup.schedule):
        form.add(MATCHUPS_FIELD, entry)

    logger.debug(
        f"Built setup form payload for period {edited_period}: {len(form)} keys, "
        f"{len(setup.schedule)} periods"
    )
    return form
