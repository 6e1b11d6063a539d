"""End-to-end API tests against a mocked upstream."""

from unittest.mock import MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from cricai.api import create_app
from cricai.config import Settings

from tests.conftest import cricbuzz_matches_payload

SETTINGS = Settings(
    cricbuzz_api_url="https://cricbuzz.test",
    cricbuzz_api_key="secret",
    espn_url="https://espn.test/cricket",
    alt_api_url="https://alt.test",
    cricbuzz_url="https://www.cricbuzz.test",
    yahoo_url="https://yahoo.test",
)


class FakeUpstream:
    """Routes mocked requests by host and path; counts calls per path."""

    def __init__(self):
        self.routes: dict[str, httpx.Response | list[httpx.Response]] = {}
        self.calls: dict[str, int] = {}
        self.headers: dict[str, httpx.Headers] = {}

    def set(self, path: str, *responses: httpx.Response) -> None:
        self.routes[path] = list(responses)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = f"{request.url.host}{request.url.path}"
        self.calls[path] = self.calls.get(path, 0) + 1
        self.headers[path] = request.headers
        responses = self.routes.get(path)
        if not responses:
            return httpx.Response(404)
        # Repeat the last response once the queue is exhausted
        template = responses.pop(0) if len(responses) > 1 else responses[0]
        return httpx.Response(
            template.status_code, headers=template.headers, content=template.content
        )


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def sleep():
    return MagicMock()


@pytest.fixture
def scraper():
    return None


@pytest.fixture
def client(upstream, store, sleep, scraper):
    app = create_app(
        SETTINGS,
        cache_store=store,
        scraper=scraper,
        transport=httpx.MockTransport(upstream),
        sleep=sleep,
        configure_logging=False,
    )
    with TestClient(app) as test_client:
        yield test_client


LIVE = "cricbuzz.test/matches/v1/live"
RECENT = "cricbuzz.test/matches/v1/recent"
ESPN = "espn.test/cricket/scoreboard"
CRICBUZZ_CARD = "cricbuzz.test/mcenter/v1/101/scard"
ALT_CARD = "alt.test/scorecard/101"


class TestMatchLists:
    def test_live_from_primary(self, client, upstream, cricbuzz_live):
        upstream.set(LIVE, httpx.Response(200, json=cricbuzz_live))
        response = client.get("/matches/live")
        assert response.status_code == 200
        body = response.json()
        assert [m["matchId"] for m in body["live"]] == ["101", "102"]
        assert body["live"][0]["team1"]["runRate"] == 5.0
        assert body["live"][0]["seriesName"] == "Australia tour of India, 2024"
        assert body["cache"] == {
            "fromCache": False,
            "stale": False,
            "ttlMs": 30000,
            "error": None,
            "source": "cricbuzz",
        }
        assert body["lastUpdated"].startswith("2023-11-14T")
        assert upstream.headers[LIVE]["x-rapidapi-key"] == "secret"
        assert upstream.headers[LIVE]["x-rapidapi-host"] == "cricbuzz.test"

    def test_second_request_within_ttl_is_cached(self, client, upstream, cricbuzz_live, clock):
        upstream.set(LIVE, httpx.Response(200, json=cricbuzz_live))
        client.get("/matches/live")
        clock.advance(5)
        body = client.get("/matches/live").json()
        assert body["cache"]["fromCache"] is True
        assert body["cache"]["stale"] is False
        assert upstream.calls[LIVE] == 1

    def test_primary_failure_falls_back_to_espn_filtered_by_state(
        self, client, upstream, espn_scoreboard
    ):
        upstream.set(LIVE, httpx.Response(500))
        upstream.set(RECENT, httpx.Response(200, json={}))
        upstream.set(ESPN, httpx.Response(200, json=espn_scoreboard))

        live = client.get("/matches/live").json()
        assert [m["matchId"] for m in live["live"]] == ["101"]
        assert live["cache"]["source"] == "espn"

        recent = client.get("/matches/recent").json()
        assert [m["matchId"] for m in recent["recent"]] == ["201"]

    def test_empty_primary_list_falls_through(self, client, upstream, espn_scoreboard):
        upstream.set(LIVE, httpx.Response(200, json=cricbuzz_matches_payload()))
        upstream.set(ESPN, httpx.Response(200, json=espn_scoreboard))
        body = client.get("/matches/live").json()
        assert body["cache"]["source"] == "espn"

    def test_total_failure_without_cache_is_503(self, client, upstream):
        upstream.set(LIVE, httpx.Response(500))
        upstream.set(ESPN, httpx.Response(502))
        response = client.get("/matches/live")
        assert response.status_code == 503
        detail = response.json()["detail"]
        assert "live" in detail["message"]
        assert detail["error"] == "espn: HTTP 502"

    def test_total_failure_with_old_cache_serves_stale(
        self, client, upstream, cricbuzz_live, clock
    ):
        upstream.set(LIVE, httpx.Response(200, json=cricbuzz_live), httpx.Response(500))
        upstream.set(ESPN, httpx.Response(503))
        client.get("/matches/live")
        clock.advance(120)

        response = client.get("/matches/live")
        assert response.status_code == 200
        body = response.json()
        assert len(body["live"]) == 2
        assert body["cache"]["stale"] is True
        assert body["cache"]["fromCache"] is True
        assert body["cache"]["error"] == "espn: HTTP 503"

    def test_rate_limited_primary_is_retried_once(self, client, upstream, cricbuzz_live, sleep):
        upstream.set(LIVE, httpx.Response(429), httpx.Response(200, json=cricbuzz_live))
        body = client.get("/matches/live").json()
        assert upstream.calls[LIVE] == 2
        sleep.assert_called_once_with(1.5)
        assert body["cache"]["source"] == "cricbuzz"


class TestScrapeTier:
    @pytest.fixture
    def scraper(self):
        scraper = MagicMock()
        scraper.scrape.return_value = [
            {"title": "Nepal vs Oman, 1st T20I", "status": "Oman need 20 runs",
             "summary": "NEP 160/7 (20) OMA 141/4 (17)"}
        ]
        return scraper

    def test_scraper_used_after_both_apis_fail(self, client, upstream, scraper):
        upstream.set(LIVE, httpx.Response(500))
        upstream.set(ESPN, httpx.Response(500))
        body = client.get("/matches/live").json()
        assert body["cache"]["source"] == "scrape"
        assert body["live"][0]["team1"]["name"] == "Nepal"
        assert body["live"][0]["team1"]["runRate"] == 8.0
        scraper.scrape.assert_called_once()

    def test_scraper_not_called_when_primary_succeeds(
        self, client, upstream, scraper, cricbuzz_live
    ):
        upstream.set(LIVE, httpx.Response(200, json=cricbuzz_live))
        client.get("/matches/live")
        scraper.scrape.assert_not_called()


class TestScorecard:
    def test_scorecard_from_primary(self, client, upstream, cricbuzz_scorecard):
        upstream.set(CRICBUZZ_CARD, httpx.Response(200, json=cricbuzz_scorecard))
        response = client.get("/matches/101/scorecard")
        assert response.status_code == 200
        body = response.json()
        card = body["scorecard"]
        assert card["matchId"] == "101"
        assert [b["runs"] for b in card["topBatters"]] == [80, 40, 10, 5, 1]
        assert card["topBowlers"][0]["name"] == "Pat Cummins"
        assert card["inningsSummary"][0]["runRate"] == 5.0
        assert body["cache"]["ttlMs"] == 30000
        assert body["lastUpdated"] is not None

    def test_rate_limited_primary_falls_back_to_alternate(self, client, upstream):
        upstream.set(CRICBUZZ_CARD, httpx.Response(429))
        upstream.set(ALT_CARD, httpx.Response(200, json={"innings": [{"team": "Nepal"}]}))
        body = client.get("/matches/101/scorecard").json()
        assert upstream.calls[CRICBUZZ_CARD] == 2
        assert body["cache"]["source"] == "alternate"
        assert body["scorecard"]["matchId"] == "101"
        assert body["scorecard"]["inningsSummary"][0]["runs"] is None

    def test_pre_match_header_only_scorecard_is_empty(self, client, upstream):
        upstream.set(
            CRICBUZZ_CARD,
            httpx.Response(200, json={"matchHeader": {"matchId": 101, "state": "Preview"}}),
        )
        response = client.get("/matches/101/scorecard")
        assert response.status_code == 200
        body = response.json()
        assert body["scorecard"]["matchId"] == "101"
        assert body["scorecard"]["inningsSummary"] == []
        assert body["cache"]["source"] == "cricbuzz"
        assert ALT_CARD not in upstream.calls

    def test_drifted_match_list_falls_back_instead_of_500(
        self, client, upstream, espn_scoreboard
    ):
        payload = cricbuzz_matches_payload()
        payload["typeMatches"][0]["seriesMatches"] = 12
        upstream.set(LIVE, httpx.Response(200, json=payload))
        upstream.set(ESPN, httpx.Response(200, json=espn_scoreboard))
        response = client.get("/matches/live")
        assert response.status_code == 200
        assert response.json()["cache"]["source"] == "espn"

    def test_scorecard_unavailable(self, client, upstream):
        response = client.get("/matches/555/scorecard")
        assert response.status_code == 503
        assert response.json()["detail"]["error"] == "alternate: HTTP 404"


class TestPassthroughAndStatus:
    def test_root_lists_endpoints(self, client):
        body = client.get("/").json()
        assert body["status"].startswith("CRICAI Proxy")
        assert "/matches/live" in body["endpoints"]

    def test_espn_passthrough(self, client, upstream):
        upstream.set(ESPN, httpx.Response(200, text='{"events": []}'))
        response = client.get("/espn")
        assert response.status_code == 200
        assert response.json() == {"events": []}

    def test_passthrough_failure_is_502(self, client, upstream):
        upstream.set("www.cricbuzz.test/", httpx.Response(500))
        response = client.get("/cricbuzz")
        assert response.status_code == 502
        assert response.json() == {"error": "Failed", "detail": "HTTP 500"}

    def test_cache_status(self, client, upstream, cricbuzz_live, clock):
        upstream.set(LIVE, httpx.Response(200, json=cricbuzz_live))
        client.get("/matches/live")
        clock.advance(45)
        body = client.get("/cache/status").json()
        assert body["count"] == 1
        assert body["entries"]["live"] == {
            "age_seconds": 45.0,
            "ttl_seconds": 30.0,
            "is_stale": True,
        }

