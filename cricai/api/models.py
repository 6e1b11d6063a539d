"""Pydantic models for API responses.

Field names are snake_case in Python and camelCase on the wire.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =============================================================================
# Matches
# =============================================================================


class TeamScoreModel(CamelModel):
    id: str | None = None
    name: str | None = None
    short_name: str | None = None
    runs: int | None = None
    wickets: int | None = None
    overs: float | None = None
    run_rate: float | None = None


class MatchModel(CamelModel):
    match_id: str | None
    series_name: str | None = None
    description: str | None = None
    format: str | None = None
    state: str
    status: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    venue: str | None = None
    city: str | None = None
    team1: TeamScoreModel
    team2: TeamScoreModel


# =============================================================================
# Scorecards
# =============================================================================


class InningsModel(CamelModel):
    innings_id: int | None
    team: str | None = None
    runs: int | None = None
    wickets: int | None = None
    overs: float | None = None
    run_rate: float | None = None


class BatterModel(CamelModel):
    name: str | None
    team: str | None = None
    runs: int | None = None
    balls: int | None = None
    fours: int | None = None
    sixes: int | None = None
    strike_rate: float | None = None
    dismissal: str | None = None


class BowlerModel(CamelModel):
    name: str | None
    team: str | None = None
    overs: float | None = None
    maidens: int | None = None
    runs: int | None = None
    wickets: int | None = None
    economy: float | None = None


class ScorecardModel(CamelModel):
    match_id: str | None
    innings_summary: list[InningsModel] = []
    top_batters: list[BatterModel] = []
    top_bowlers: list[BowlerModel] = []


# =============================================================================
# Envelope
# =============================================================================


class CacheInfo(CamelModel):
    """How the payload was obtained."""

    from_cache: bool
    stale: bool
    ttl_ms: int
    error: str | None = None
    source: str | None = None


class ScorecardResponse(CamelModel):
    scorecard: ScorecardModel
    cache: CacheInfo
    last_updated: str | None = None


class ServiceStatus(BaseModel):
    status: str
    version: str
    endpoints: list[str]
