"""Exception hierarchy for the league setup round trip."""

from __future__ import annotations

from typing import Any, Optional

from fantrax_setup.models.enums import ParseStage


class LeagueSetupError(Exception):
    """Base class for every error raised by this package."""

    pass


class FetchError(LeagueSetupError):
    """Raised when the setup page cannot be retrieved."""

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(FetchError):
    """Exception raised for authentication failures (401, 403)."""

    pass


class ParseError(LeagueSetupError):
    """A required block or pattern is missing from the setup page.

    Always fatal: echoing back a partial configuration would overwrite the
    remote league with guessed values on the next submission.
    """

    # Set by each stage subclass; None when raised without one
    stage: Optional[ParseStage] = None

    def __init__(
        self,
        message: str,
        *,
        stage: ParseStage | None = None,
        context: dict[str, Any] | None = None,
    ):
        if stage is not None:
            self.stage = stage
        prefix = f"[{self.stage.value}] " if self.stage is not None else ""
        super().__init__(f"{prefix}{message}")
        self.context = context or {}


class ScheduleParseError(ParseError):
    stage = ParseStage.SCHEDULE


class TeamParseError(ParseError):
    stage = ParseStage.TEAMS


class DivisionParseError(ParseError):
    stage = ParseStage.DIVISIONS


class FormStateParseError(ParseError):
    stage = ParseStage.FORM_STATE


class ScheduleEditError(LeagueSetupError):
    """Caller misuse of the schedule mutator; the snapshot is left untouched."""

    pass


class UnknownPeriodError(ScheduleEditError):
    def __init__(self, period: int):
        super().__init__(f"Period {period} not found in setup matchups")
        self.period = period


class EmptyMatchupsError(ScheduleEditError):
    def __init__(self, period: int):
        super().__init__(f"Replacement matchups for period {period} must not be empty")
        self.period = period


class SubmissionError(LeagueSetupError):
    """The setup form POST did not answer with a redirect."""

    def __init__(self, status_code: int, body_snippet: str):
        super().__init__(
            f"Expected redirect on success, got status {status_code}; body: {body_snippet}"
        )
        self.status_code = status_code
        self.body_snippet = body_snippet
