"""FastAPI application factory.

Wires one process-wide cache, upstream client and orchestrator into the
routes through app.state. Tests build their own app with isolated
collaborators.
"""

import logging
import time
from collections.abc import Callable
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cricai import __version__
from cricai.api.routes import cache, matches, proxy
from cricai.config import Settings
from cricai.core.errors import NoDataAvailable
from cricai.logging_setup import setup_logging
from cricai.providers import AlternateScorecardApi, CricbuzzApi, EspnApi, MatchScraper
from cricai.services import FallbackOrchestrator, MatchResources
from cricai.upstream import RetryPolicy, UpstreamClient
from cricai.utilities.cache import CacheStore

logger = logging.getLogger(__name__)


async def _no_data_handler(request: Request, exc: NoDataAvailable) -> JSONResponse:
    return JSONResponse(
        status_code=503,
        content={
            "detail": {
                "message": f"No data available for '{exc.key}' and nothing cached",
                "error": exc.error,
            }
        },
    )


def create_app(
    settings: Settings | None = None,
    cache_store: CacheStore | None = None,
    scraper: MatchScraper | None = None,
    transport: httpx.BaseTransport | None = None,
    sleep: Callable[[float], None] = time.sleep,
    configure_logging: bool = True,
) -> FastAPI:
    """Build the proxy application.

    Args:
        settings: Configuration; read from the environment when omitted
        cache_store: Cache to use; a fresh process-wide store when omitted
        scraper: Optional HTML scraper used as the last match-list tier
        transport: httpx transport override (tests use httpx.MockTransport)
        sleep: Backoff sleep for the retry policy
        configure_logging: Set up root logging (off in tests)
    """
    settings = settings or Settings.from_env()
    if configure_logging:
        setup_logging(settings)

    cache_store = cache_store or CacheStore()
    client = UpstreamClient(
        timeout=settings.upstream_timeout,
        user_agent=settings.user_agent,
        transport=transport,
    )
    orchestrator = FallbackOrchestrator(
        cache_store,
        RetryPolicy(
            max_attempts=settings.retry_attempts,
            backoff=settings.retry_backoff,
            sleep=sleep,
        ),
    )
    alternate = AlternateScorecardApi(client, settings.alt_api_url) if settings.alt_api_url else None
    resources = MatchResources(
        orchestrator,
        settings,
        cricbuzz=CricbuzzApi(client, settings.cricbuzz_api_url, settings.cricbuzz_api_key),
        espn=EspnApi(client, settings.espn_url),
        alternate=alternate,
        scraper=scraper,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("[START] CRICAI Proxy v%s", __version__)
        yield
        client.close()

    app = FastAPI(title="CRICAI Proxy", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.cache = cache_store
    app.state.client = client
    app.state.resources = resources

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_exception_handler(NoDataAvailable, _no_data_handler)

    app.include_router(proxy.router)
    app.include_router(matches.router)
    app.include_router(cache.router)
    return app
