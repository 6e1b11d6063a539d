"""Match list and scorecard endpoints.

- GET /matches/live
- GET /matches/recent
- GET /matches/upcoming
- GET /matches/{match_id}/scorecard

Every response carries a cache block describing which tier answered
(fresh cache, live source, or stale cache) and the last failure, if any.
"""

from datetime import UTC, datetime

from fastapi import APIRouter, Request

from cricai.api.models import CacheInfo, MatchModel, ScorecardModel, ScorecardResponse
from cricai.core.types import FallbackResult
from cricai.services import MatchResources
from cricai.utilities.cache import LIVE_KEY, RECENT_KEY, UPCOMING_KEY

router = APIRouter(prefix="/matches", tags=["matches"])


def _resources(request: Request) -> MatchResources:
    return request.app.state.resources


def _timestamp(epoch: float | None) -> str | None:
    if epoch is None:
        return None
    return datetime.fromtimestamp(epoch, tz=UTC).isoformat()


def cache_info(result: FallbackResult, ttl: float) -> CacheInfo:
    return CacheInfo(
        from_cache=result.from_cache,
        stale=result.stale,
        ttl_ms=int(ttl * 1000),
        error=result.error,
        source=result.source_name or (result.source_used.value if result.source_used else None),
    )


def _match_list(request: Request, resource: str) -> dict:
    resources = _resources(request)
    result = resources.matches(resource)
    matches = [MatchModel.model_validate(m).model_dump(by_alias=True) for m in result.payload]
    return {
        resource: matches,
        "cache": cache_info(result, resources.ttl_for(resource)).model_dump(by_alias=True),
        "lastUpdated": _timestamp(result.stored_at),
    }


@router.get("/live")
def get_live_matches(request: Request) -> dict:
    """Matches in progress (including rain and other delays)."""
    return _match_list(request, LIVE_KEY)


@router.get("/recent")
def get_recent_matches(request: Request) -> dict:
    """Completed and abandoned matches."""
    return _match_list(request, RECENT_KEY)


@router.get("/upcoming")
def get_upcoming_matches(request: Request) -> dict:
    """Scheduled matches."""
    return _match_list(request, UPCOMING_KEY)


@router.get(
    "/{match_id}/scorecard",
    response_model=ScorecardResponse,
    response_model_by_alias=True,
)
def get_scorecard(match_id: str, request: Request) -> ScorecardResponse:
    """Innings summaries with the top five batters and bowlers."""
    resources = _resources(request)
    spec = resources.scorecard_spec(match_id)
    result = resources.resolve(spec)
    return ScorecardResponse(
        scorecard=ScorecardModel.model_validate(result.payload),
        cache=cache_info(result, spec.ttl),
        last_updated=_timestamp(result.stored_at),
    )
