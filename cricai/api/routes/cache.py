"""Cache inspection endpoints.

- GET /cache/status - age of every cached resource and whether it is stale
"""

from fastapi import APIRouter, Request

router = APIRouter(prefix="/cache", tags=["cache"])


@router.get("/status")
def get_cache_status(request: Request) -> dict:
    """Get per-key cache ages.

    Returns:
        Entry count plus, for each key, its age and TTL in seconds and
        whether it has outlived the TTL
    """
    resources = request.app.state.resources
    ages = request.app.state.cache.snapshot()
    entries = {}
    for key, age in ages.items():
        ttl = resources.ttl_for(key)
        entries[key] = {"age_seconds": age, "ttl_seconds": ttl, "is_stale": age >= ttl}
    return {"count": len(entries), "entries": entries}
