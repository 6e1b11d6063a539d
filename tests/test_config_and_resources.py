"""Tests for settings loading and resource declarations."""

from unittest.mock import MagicMock

import pytest

from cricai.config import DEFAULT_TTL_RECENT, Settings
from cricai.core.types import NormalizedMatch, SourceShape
from cricai.services.resources import MatchResources, filter_by_state, normalize_match_list

from tests.conftest import espn_event


class TestSettings:
    def test_defaults_without_environment(self):
        settings = Settings.from_env({})
        assert settings.port == 3000
        assert settings.upstream_timeout == 7.0
        assert settings.retry_attempts == 2
        assert settings.ttl_recent == DEFAULT_TTL_RECENT
        assert settings.alt_api_url == ""

    def test_environment_overrides(self):
        settings = Settings.from_env(
            {
                "PORT": "8080",
                "CRICAI_TTL_LIVE": "10",
                "CRICAI_CRICBUZZ_API_KEY": "k",
                "CRICAI_ALT_API_URL": "https://alt.test",
            }
        )
        assert settings.port == 8080
        assert settings.ttl_live == 10.0
        assert settings.cricbuzz_api_key == "k"
        assert settings.alt_api_url == "https://alt.test"


def _match(match_id: str, state: str) -> NormalizedMatch:
    return NormalizedMatch(match_id=match_id, state=state)


class TestStateFilter:
    def test_live_keeps_delayed_and_unknown(self):
        matches = [
            _match("1", "live"),
            _match("2", "delayed"),
            _match("3", "unknown"),
            _match("4", "complete"),
        ]
        assert [m.match_id for m in filter_by_state(matches, "live")] == ["1", "2", "3"]

    def test_recent_keeps_abandoned(self):
        matches = [_match("1", "abandoned"), _match("2", "unknown"), _match("3", "complete")]
        assert [m.match_id for m in filter_by_state(matches, "recent")] == ["1", "3"]

    def test_mixed_shapes_are_filtered(self):
        raw = {"events": [espn_event("1", "in"), espn_event("2", "pre")]}
        upcoming = normalize_match_list("upcoming", raw, SourceShape.ESPN_SCOREBOARD)
        assert [m.match_id for m in upcoming] == ["2"]


class TestMatchResources:
    @pytest.fixture
    def resources(self):
        settings = Settings(ttl_live=11, ttl_scorecard=22)
        return MatchResources(MagicMock(), settings, MagicMock(), MagicMock())

    def test_ttl_per_resource(self, resources):
        assert resources.ttl_for("live") == 11
        assert resources.ttl_for("scorecard:1") == 22

    def test_match_list_declaration(self, resources):
        spec = resources.match_list_spec("live")
        assert spec.key == "live"
        assert spec.ttl == 11
        assert spec.require_items is True
        assert len(spec.sources) == 2

    def test_scraper_appended_when_configured(self):
        resources = MatchResources(
            MagicMock(), Settings(), MagicMock(), MagicMock(), scraper=MagicMock()
        )
        assert [s.name for s in resources.match_list_spec("recent").sources][-1] == "scrape"

    def test_scorecard_declaration(self, resources):
        spec = resources.scorecard_spec("42")
        assert spec.key == "scorecard:42"
        assert spec.require_items is False
        assert len(spec.sources) == 1

    def test_unknown_resource(self, resources):
        with pytest.raises(ValueError):
            resources.match_list_spec("archived")
