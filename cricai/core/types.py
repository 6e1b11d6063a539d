"""Core data types.

Dataclasses shared by the cache, the upstream client, the fallback
orchestrator and the normalizers. Everything here is plain data; behavior
lives in the modules that use these types.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# =============================================================================
# Cache
# =============================================================================


@dataclass(frozen=True)
class CacheEntry:
    """A cached payload and the time (epoch seconds) it was stored."""

    key: str
    payload: Any
    stored_at: float


# =============================================================================
# Upstream fetches
# =============================================================================


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    RATE_LIMITED = "rate_limited"
    FAILED = "failed"


@dataclass(frozen=True)
class FetchOutcome:
    """Result of a single attempt against one upstream source.

    Build with the classmethods rather than the constructor so that a
    success never carries a failure reason and vice versa.
    """

    kind: OutcomeKind
    payload: Any = None
    reason: str | None = None
    status_code: int | None = None

    @classmethod
    def success(cls, payload: Any, status_code: int | None = None) -> "FetchOutcome":
        return cls(kind=OutcomeKind.SUCCESS, payload=payload, status_code=status_code)

    @classmethod
    def rate_limited(cls, status_code: int | None = 429) -> "FetchOutcome":
        return cls(kind=OutcomeKind.RATE_LIMITED, reason="rate limited", status_code=status_code)

    @classmethod
    def failed(cls, reason: str, status_code: int | None = None) -> "FetchOutcome":
        return cls(kind=OutcomeKind.FAILED, reason=reason, status_code=status_code)

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @property
    def is_rate_limited(self) -> bool:
        return self.kind is OutcomeKind.RATE_LIMITED


class SourceShape(str, Enum):
    """Known upstream payload shapes.

    Match lists:
        CRICBUZZ_MATCHES  - nested typeMatches -> seriesMatches -> matches tree
        ESPN_SCOREBOARD   - flat events[] list
        SCRAPE_SUMMARIES  - [{title, status, summary}] from the HTML scraper

    Scorecards:
        CRICBUZZ_SCORECARD - scoreCard[] with batsmenData/bowlersData maps
        INNINGS_SCORECARD  - flat innings[] with batting[]/bowling[] lists
    """

    CRICBUZZ_MATCHES = "cricbuzz_matches"
    ESPN_SCOREBOARD = "espn_scoreboard"
    SCRAPE_SUMMARIES = "scrape_summaries"
    CRICBUZZ_SCORECARD = "cricbuzz_scorecard"
    INNINGS_SCORECARD = "innings_scorecard"


@dataclass(frozen=True)
class SourceSpec:
    """One fallback tier.

    `invoke` already knows its URL and credentials; the orchestrator only
    calls it. `shape` tells the normalizer how to read the payload (None
    means detect it).
    """

    name: str
    invoke: Callable[[], FetchOutcome]
    shape: SourceShape | None = None


class SourceTier(str, Enum):
    CACHE = "cache"
    PRIMARY = "primary"
    SECONDARY = "secondary"
    STALE_CACHE = "stale_cache"


@dataclass(frozen=True)
class FallbackResult:
    """What the orchestrator resolved for one resource key.

    `payload` is None only for a terminal failure. `stale` is True only when
    an expired cache entry is served because every live source failed.
    """

    payload: Any
    source_used: SourceTier | None
    stale: bool = False
    error: str | None = None
    source_name: str | None = None
    stored_at: float | None = None

    @property
    def ok(self) -> bool:
        return self.source_used is not None

    @property
    def from_cache(self) -> bool:
        return self.source_used in (SourceTier.CACHE, SourceTier.STALE_CACHE)


# =============================================================================
# Normalized records
# =============================================================================


@dataclass
class TeamScore:
    id: str | None = None
    name: str | None = None
    short_name: str | None = None
    runs: int | None = None
    wickets: int | None = None
    overs: float | None = None
    run_rate: float | None = None


@dataclass
class NormalizedMatch:
    """Canonical match record, independent of the upstream shape."""

    match_id: str | None
    series_name: str | None = None
    description: str | None = None
    format: str | None = None
    state: str = "unknown"
    status: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    venue: str | None = None
    city: str | None = None
    team1: TeamScore = field(default_factory=TeamScore)
    team2: TeamScore = field(default_factory=TeamScore)


@dataclass
class InningsSummary:
    innings_id: int | None
    team: str | None = None
    runs: int | None = None
    wickets: int | None = None
    overs: float | None = None
    run_rate: float | None = None


@dataclass
class BatterLine:
    name: str | None
    team: str | None = None
    runs: int | None = None
    balls: int | None = None
    fours: int | None = None
    sixes: int | None = None
    strike_rate: float | None = None
    dismissal: str | None = None


@dataclass
class BowlerLine:
    name: str | None
    team: str | None = None
    overs: float | None = None
    maidens: int | None = None
    runs: int | None = None
    wickets: int | None = None
    economy: float | None = None


@dataclass
class NormalizedScorecard:
    match_id: str | None
    innings_summary: list[InningsSummary] = field(default_factory=list)
    top_batters: list[BatterLine] = field(default_factory=list)
    top_bowlers: list[BowlerLine] = field(default_factory=list)
