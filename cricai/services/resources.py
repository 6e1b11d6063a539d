"""Resource declarations.

Each public resource is a thin declaration of {key, sources, ttl, kind}
handed to the FallbackOrchestrator. Match lists try the Cricbuzz API, then
the ESPN scoreboard, then the HTML scraper (when one is configured).
Scorecards try Cricbuzz, then the alternate API (when configured).
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from typing import Any

from cricai.config import Settings
from cricai.core.types import FallbackResult, NormalizedMatch, SourceShape, SourceSpec
from cricai.normalizers import normalize, normalize_scorecard
from cricai.normalizers import matches as states
from cricai.providers import AlternateScorecardApi, CricbuzzApi, EspnApi, MatchScraper, scrape_source
from cricai.services.fallback import FallbackOrchestrator
from cricai.utilities.cache import LIVE_KEY, RECENT_KEY, UPCOMING_KEY, make_cache_key

logger = logging.getLogger(__name__)

MATCH_RESOURCES = (LIVE_KEY, RECENT_KEY, UPCOMING_KEY)

# Canonical states belonging to each list, for sources that mix them
RESOURCE_STATES: dict[str, frozenset[str]] = {
    LIVE_KEY: frozenset({states.LIVE, states.DELAYED}),
    RECENT_KEY: frozenset({states.COMPLETE, states.ABANDONED}),
    UPCOMING_KEY: frozenset({states.UPCOMING}),
}

# Shapes that return every match regardless of state
MIXED_SHAPES = frozenset({SourceShape.ESPN_SCOREBOARD, SourceShape.SCRAPE_SUMMARIES})


@dataclass(frozen=True)
class ResourceSpec:
    """Everything the orchestrator needs to resolve one resource."""

    key: str
    sources: list[SourceSpec]
    ttl: float
    require_items: bool
    normalizer: Callable[[Any, SourceShape | None], Any]


def filter_by_state(matches: list[NormalizedMatch], resource: str) -> list[NormalizedMatch]:
    """Keep the matches that belong to a resource list.

    Scraped summaries often lack a recognisable state; those are offered as
    live matches since the scraped page leads with games in progress.
    """
    wanted = RESOURCE_STATES[resource]
    if resource == LIVE_KEY:
        wanted = wanted | {states.UNKNOWN}
    return [m for m in matches if m.state in wanted]


def normalize_match_list(resource: str, raw: Any, shape: SourceShape | None) -> list[NormalizedMatch]:
    matches = normalize(raw, shape)
    if shape in MIXED_SHAPES:
        matches = filter_by_state(matches, resource)
    return matches


class MatchResources:
    """Declares and resolves the match-list and scorecard resources.

    Args:
        orchestrator: Shared fallback orchestrator (owns the cache)
        settings: TTLs per resource
        cricbuzz: Primary API
        espn: Secondary API for match lists
        alternate: Secondary API for scorecards, optional
        scraper: Last-resort match-list source, optional
    """

    def __init__(
        self,
        orchestrator: FallbackOrchestrator,
        settings: Settings,
        cricbuzz: CricbuzzApi,
        espn: EspnApi,
        alternate: AlternateScorecardApi | None = None,
        scraper: MatchScraper | None = None,
    ):
        self._orchestrator = orchestrator
        self._settings = settings
        self._cricbuzz = cricbuzz
        self._espn = espn
        self._alternate = alternate
        self._scraper = scraper
        self._ttls = {
            LIVE_KEY: settings.ttl_live,
            RECENT_KEY: settings.ttl_recent,
            UPCOMING_KEY: settings.ttl_upcoming,
        }

    def ttl_for(self, key: str) -> float:
        if key in self._ttls:
            return self._ttls[key]
        return self._settings.ttl_scorecard

    def match_list_spec(self, resource: str) -> ResourceSpec:
        if resource not in MATCH_RESOURCES:
            raise ValueError(f"Unknown match list resource: {resource}")
        sources = [
            self._cricbuzz.matches_source(resource),
            self._espn.scoreboard_source(),
        ]
        if self._scraper is not None:
            sources.append(scrape_source(self._scraper))
        return ResourceSpec(
            key=resource,
            sources=sources,
            ttl=self._ttls[resource],
            require_items=True,
            normalizer=partial(normalize_match_list, resource),
        )

    def scorecard_spec(self, match_id: str) -> ResourceSpec:
        sources = [self._cricbuzz.scorecard_source(match_id)]
        if self._alternate is not None:
            sources.append(self._alternate.scorecard_source(match_id))
        return ResourceSpec(
            key=make_cache_key("scorecard", match_id),
            sources=sources,
            ttl=self._settings.ttl_scorecard,
            require_items=False,
            normalizer=partial(normalize_scorecard, match_id=match_id),
        )

    def resolve(self, spec: ResourceSpec) -> FallbackResult:
        """Resolve a declared resource.

        Raises:
            NoDataAvailable: every tier failed and nothing is cached
        """
        return self._orchestrator.resolve_or_raise(
            spec.key,
            spec.sources,
            spec.ttl,
            require_items=spec.require_items,
            normalizer=spec.normalizer,
        )

    def matches(self, resource: str) -> FallbackResult:
        return self.resolve(self.match_list_spec(resource))

    def scorecard(self, match_id: str) -> FallbackResult:
        return self.resolve(self.scorecard_spec(match_id))
