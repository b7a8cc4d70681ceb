from pathlib import Path

import pytest

from fantrax_setup.models.league_setup import LeagueSetup
from fantrax_setup.parsing.assembler import assemble_league_setup

FIXTURES_DIR = Path(__file__).parent / "fixtures"

LEAGUE_ID = "L123"


@pytest.fixture
def setup_html() -> str:
    return (FIXTURES_DIR / "league_setup.html").read_text(encoding="utf-8")


@pytest.fixture
def league_setup(setup_html: str) -> LeagueSetup:
    return assemble_league_setup(setup_html, LEAGUE_ID)
