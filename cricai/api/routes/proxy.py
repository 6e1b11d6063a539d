"""Raw passthrough endpoints.

- GET /          - service status and endpoint list
- GET /cricbuzz  - Cricbuzz home page HTML
- GET /espn      - ESPN cricket scoreboard JSON
- GET /yahoo     - Yahoo cricket home page HTML

These relay the upstream body untouched; no caching and no fallback.
"""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from cricai import __version__
from cricai.api.models import ServiceStatus
from cricai.upstream import UpstreamClient

logger = logging.getLogger(__name__)

router = APIRouter(tags=["proxy"])

ENDPOINTS = [
    "/matches/live",
    "/matches/recent",
    "/matches/upcoming",
    "/matches/{match_id}/scorecard",
    "/cache/status",
    "/cricbuzz",
    "/espn",
    "/yahoo",
]


def _relay(request: Request, url: str, media_type: str) -> Response:
    client: UpstreamClient = request.app.state.client
    outcome = client.get_text(url)
    if not outcome.ok:
        logger.warning("[PROXY] Passthrough to %s failed: %s", url, outcome.reason)
        return JSONResponse(
            status_code=502,
            content={"error": "Failed", "detail": outcome.reason},
        )
    return Response(content=outcome.payload, media_type=media_type)


@router.get("/", response_model=ServiceStatus)
def get_status() -> ServiceStatus:
    return ServiceStatus(
        status=f"CRICAI Proxy v{__version__} running",
        version=__version__,
        endpoints=ENDPOINTS,
    )


@router.get("/cricbuzz")
def proxy_cricbuzz(request: Request) -> Response:
    return _relay(request, request.app.state.settings.cricbuzz_url, "text/html")


@router.get("/espn")
def proxy_espn(request: Request) -> Response:
    url = f"{request.app.state.settings.espn_url.rstrip('/')}/scoreboard"
    return _relay(request, url, "application/json")


@router.get("/yahoo")
def proxy_yahoo(request: Request) -> Response:
    return _relay(request, request.app.state.settings.yahoo_url, "text/html")
