import httpx
import pytest

from fantrax_setup.errors import (
    AuthenticationError,
    FetchError,
    LeagueSetupError,
    SubmissionError,
    UnknownPeriodError,
)
from fantrax_setup.models.matchup import MatchupPair
from fantrax_setup.scrapers.league_setup_scraper import LeagueSetupClient
from fantrax_setup.serialization.form_serializer import build_form_payload, decode_form_body

COOKIE = "FX_RM=abcdef0123456789"


def make_client(handler, league_id="L123"):
    http = httpx.Client(transport=httpx.MockTransport(handler))
    return LeagueSetupClient(
        league_id, client=http, cookies=COOKIE, base_url="https://fantrax.test/"
    )


def test_fetch_league_setup_sends_cookie_and_parses(setup_html):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return httpx.Response(200, text=setup_html)

    with make_client(handler) as client:
        setup = client.fetch_league_setup()

    request = seen["request"]
    assert request.method == "GET"
    assert request.url.path == "/newui/fantasy/createLeague.go"
    assert request.url.params["goto"] == "1"
    assert request.url.params["leagueId"] == "L123"
    assert request.headers["Cookie"] == COOKIE
    assert setup.league_id == "L123"
    assert setup.sorted_periods() == [1, 2, 3, 10]


def test_fetch_non_200_is_a_fetch_error():
    with make_client(lambda request: httpx.Response(500, text="boom")) as client:
        with pytest.raises(FetchError) as exc_info:
            client.fetch_setup_html()
    assert exc_info.value.status_code == 500


def test_fetch_does_not_follow_login_redirect():
    def handler(request):
        return httpx.Response(302, headers={"Location": "https://fantrax.test/login"})

    with make_client(handler) as client:
        with pytest.raises(FetchError):
            client.fetch_setup_html()


@pytest.mark.parametrize("status", [401, 403])
def test_auth_failures(status):
    with make_client(lambda request: httpx.Response(status)) as client:
        with pytest.raises(AuthenticationError):
            client.fetch_setup_html()


def test_transport_errors_propagate_unchanged():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with make_client(handler) as client:
        with pytest.raises(httpx.ConnectError):
            client.fetch_setup_html()


def test_submit_succeeds_only_on_redirect(league_setup):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return httpx.Response(302, headers={"Location": "/newui/fantasy/league.go"})

    payload = build_form_payload(league_setup, 1)
    with make_client(handler) as client:
        client.submit(payload)

    request = seen["request"]
    assert request.method == "POST"
    assert request.url.params["leagueId"] == "L123"
    assert "goto" not in request.url.params
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert request.content.decode() == payload.encode()


def test_submit_200_is_a_failure_with_bounded_snippet(league_setup):
    error_page = "<html>" + "x" * 1000 + "</html>"
    with make_client(lambda request: httpx.Response(200, text=error_page)) as client:
        with pytest.raises(SubmissionError) as exc_info:
            client.submit(build_form_payload(league_setup, 1))

    error = exc_info.value
    assert error.status_code == 200
    assert error.body_snippet == error_page[:500] + "..."


def test_short_error_body_is_not_marked_truncated(league_setup):
    with make_client(lambda request: httpx.Response(400, text="bad form")) as client:
        with pytest.raises(SubmissionError) as exc_info:
            client.submit(build_form_payload(league_setup, 1))
    assert exc_info.value.body_snippet == "bad form"


def test_set_period_matchups_submits_and_returns_new_snapshot(league_setup):
    bodies = []

    def handler(request):
        bodies.append(request.content.decode())
        return httpx.Response(302, headers={"Location": "/done"})

    new_pairs = [MatchupPair.from_token("t2bb_t1aa"), MatchupPair.from_token("t3cc_-1")]
    with make_client(handler) as client:
        updated = client.set_period_matchups(league_setup, 1, new_pairs)

    assert updated.schedule[1] == tuple(new_pairs)
    assert league_setup.schedule[1] != updated.schedule[1]
    decoded = decode_form_body(bodies[0])
    assert decoded["matchups"][0] == "1|t2bb_t1aa|t3cc_-1"
    assert decoded["matchupScoringPeriodToEdit"] == ["1"]


def test_set_period_matchups_validates_before_sending(league_setup):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(302)

    with make_client(handler) as client:
        with pytest.raises(UnknownPeriodError):
            client.set_period_matchups(league_setup, 999, [MatchupPair.from_token("a_b")])
    assert calls == []


def test_missing_configuration_is_rejected():
    http = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
    with pytest.raises(LeagueSetupError, match="cookie"):
        LeagueSetupClient("L123", client=http, cookies="")


@pytest.mark.parametrize("status", [401, 403])
def test_rejected_cookie_on_submit_keeps_body_snippet(league_setup, status):
    login_page = "<html><body>Please log in again</body></html>"
    with make_client(lambda request: httpx.Response(status, text=login_page)) as client:
        with pytest.raises(SubmissionError) as exc_info:
            client.submit(build_form_payload(league_setup, 1))

    assert not isinstance(exc_info.value, AuthenticationError)
    assert exc_info.value.status_code == status
    assert exc_info.value.body_snippet == login_page


def test_borrowed_http_client_is_left_unchanged(setup_html):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return httpx.Response(200, text=setup_html)

    http = httpx.Client(transport=httpx.MockTransport(handler))
    with LeagueSetupClient(
        "L123", client=http, cookies=COOKIE, base_url="https://fantrax.test/"
    ) as client:
        client.fetch_setup_html()

    assert "Cookie" not in http.headers
    assert seen["request"].headers["Cookie"] == COOKIE
    assert not http.is_closed
    http.close()
