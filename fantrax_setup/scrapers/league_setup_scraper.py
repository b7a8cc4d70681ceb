from typing import Iterable, Optional

from loguru import logger

from fantrax_setup.config.settings import settings
from fantrax_setup.errors import FetchError, LeagueSetupError, SubmissionError
from fantrax_setup.models.league_setup import LeagueSetup
from fantrax_setup.models.matchup import MatchupPair
from fantrax_setup.parsing.assembler import assemble_league_setup
from fantrax_setup.serialization.form_serializer import FormPayload, build_form_payload
from fantrax_setup.services.schedule_editor import replace_period_matchups
from fantrax_setup.utils.misc_utils import truncate_snippet

from .base_scraper import BaseScraper

SETUP_PAGE_PATH = "/newui/fantasy/createLeague.go"

# The only responses that mean the setup form was saved
REDIRECT_STATUS_CODES = {301, 302, 303, 307, 308}

DIAGNOSTIC_BODY_LIMIT = 500


class LeagueSetupClient(BaseScraper):
    """Reads and writes the league setup (createLeague.go) form of one league.

    Each submission replaces the entire remote configuration and carries no
    version token, so concurrent submissions for the same league race
    (last writer wins).
    """

    def __init__(
        self,
        league_id: Optional[str] = None,
        *args,
        base_url: Optional[str] = None,
        **kwargs,
    ):
        self.league_id = league_id or settings.fantrax_league_id
        if not self.league_id:
            logger.error("Fantrax league id is not set in environment variables.")
            raise LeagueSetupError("Missing Fantrax league id configuration.")
        super().__init__(*args, **kwargs)
        self.base_url = (base_url or settings.fantrax_base_url).rstrip("/")

    @property
    def page_url(self) -> str:
        return f"{self.base_url}{SETUP_PAGE_PATH}?goto=1&leagueId={self.league_id}"

    @property
    def submit_url(self) -> str:
        return f"{self.base_url}{SETUP_PAGE_PATH}?leagueId={self.league_id}"

    def fetch_setup_html(self) -> str:
        """GETs the raw markup of the league setup page."""
        logger.info(f"Fetching league setup page for league {self.league_id}")
        response = self._make_request("GET", self.page_url)
        if response.status_code != 200:
            logger.error(f"League setup page returned status {response.status_code}")
            raise FetchError(
                f"Unexpected status code: {response.status_code}",
                status_code=response.status_code,
            )
        return response.text

    def fetch_league_setup(self) -> LeagueSetup:
        """Fetches the setup page and assembles a fresh snapshot from it."""
        return assemble_league_setup(self.fetch_setup_html(), self.league_id)

    def submit(self, payload: FormPayload) -> None:
        """POSTs a serialized setup form; only a redirect counts as saved."""
        body = payload.encode().encode("utf-8")
        logger.info(f"Submitting league setup form ({len(body)} bytes) for league {self.league_id}")
        response = self._make_request(
            "POST",
            self.submit_url,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            content=body,
            check_auth=False,
        )
        # A rejected cookie also lands here so its body snippet is kept
        if response.status_code not in REDIRECT_STATUS_CODES:
            # 200 here is the server rendering its error page
            snippet = truncate_snippet(response.content, DIAGNOSTIC_BODY_LIMIT)
            logger.error(f"League setup submission rejected with status {response.status_code}")
            raise SubmissionError(response.status_code, snippet)
        logger.success(f"League setup saved (status {response.status_code})")

    def set_period_matchups(
        self, setup: LeagueSetup, period: int, pairs: Iterable[MatchupPair]
    ) -> LeagueSetup:
        """Replaces one period, submits the full form and returns the new snapshot."""
        updated = replace_period_matchups(setup, period, pairs)
        self.submit(build_form_payload(updated, period))
        return updated
