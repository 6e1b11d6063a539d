"""Upstream HTTP client.

Issues one outbound GET per call and classifies the result as a
FetchOutcome. No retries and no data transformation here; retries live in
RetryPolicy and shaping lives in the normalizers.

Classification:
    429                      -> RateLimited
    other non-2xx            -> Failed("HTTP <code>")
    timeout / network error  -> Failed(<error text>)
    2xx, empty or bad JSON   -> Failed("empty response")
    2xx, usable body         -> Success(payload)
"""

import json
import logging
import threading
from typing import Any

import httpx

from cricai.config import DEFAULT_UPSTREAM_TIMEOUT, USER_AGENT
from cricai.core.types import FetchOutcome

logger = logging.getLogger(__name__)

EMPTY_RESPONSE = "empty response"


def _short(url: str) -> str:
    return url.split("://", 1)[-1]


class UpstreamClient:
    """Low-level upstream client shared by every source.

    The underlying httpx.Client is created lazily and reused so that
    keepalive connections survive across requests.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_UPSTREAM_TIMEOUT,
        user_agent: str = USER_AGENT,
        transport: httpx.BaseTransport | None = None,
        max_connections: int = 20,
    ):
        self._timeout = timeout
        self._user_agent = user_agent
        self._transport = transport
        self._max_connections = max_connections
        self._client: httpx.Client | None = None
        self._lock = threading.Lock()

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            with self._lock:
                # Double-check after acquiring lock
                if self._client is None:
                    self._client = httpx.Client(
                        timeout=self._timeout,
                        headers={"User-Agent": self._user_agent},
                        limits=httpx.Limits(
                            max_connections=self._max_connections,
                            max_keepalive_connections=self._max_connections,
                        ),
                        transport=self._transport,
                        follow_redirects=True,
                    )
        return self._client

    def _send(
        self, url: str, params: dict | None, headers: dict | None
    ) -> httpx.Response | FetchOutcome:
        """GET url, returning the response for 2xx or a non-success outcome."""
        logger.info("[UPSTREAM] Fetch %s", _short(url))
        try:
            response = self._get_client().get(url, params=params, headers=headers)
        except httpx.TimeoutException as e:
            logger.warning("[UPSTREAM] Timeout after %.1fs for %s", self._timeout, _short(url))
            return FetchOutcome.failed(f"timeout: {e}" if str(e) else "timeout")
        except (httpx.RequestError, RuntimeError, OSError) as e:
            # RuntimeError: "Cannot send a request, as the client has been closed"
            logger.warning("[UPSTREAM] Request failed for %s: %s", _short(url), e)
            return FetchOutcome.failed(str(e) or type(e).__name__)

        if response.status_code == 429:
            logger.warning("[UPSTREAM] Rate limited (429) for %s", _short(url))
            return FetchOutcome.rate_limited()
        if not response.is_success:
            logger.warning("[UPSTREAM] HTTP %d for %s", response.status_code, _short(url))
            return FetchOutcome.failed(
                f"HTTP {response.status_code}", status_code=response.status_code
            )
        return response

    def get_json(
        self,
        url: str,
        params: dict | None = None,
        headers: dict | None = None,
    ) -> FetchOutcome:
        """Fetch and parse a JSON document.

        A 2xx whose body is empty, not JSON, or an empty JSON container is a
        failure: upstream "200 OK with nothing useful" must trigger the next
        fallback tier rather than be cached as data.
        """
        result = self._send(url, params, headers)
        if isinstance(result, FetchOutcome):
            return result

        if not result.content.strip():
            logger.warning("[UPSTREAM] Empty body from %s", _short(url))
            return FetchOutcome.failed(EMPTY_RESPONSE, status_code=result.status_code)
        try:
            payload: Any = result.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("[UPSTREAM] Malformed JSON from %s", _short(url))
            return FetchOutcome.failed(EMPTY_RESPONSE, status_code=result.status_code)
        if payload is None or payload == {} or payload == []:
            logger.warning("[UPSTREAM] Empty JSON document from %s", _short(url))
            return FetchOutcome.failed(EMPTY_RESPONSE, status_code=result.status_code)

        return FetchOutcome.success(payload, status_code=result.status_code)

    def get_text(
        self,
        url: str,
        params: dict | None = None,
        headers: dict | None = None,
    ) -> FetchOutcome:
        """Fetch a document as text (HTML pages, raw passthrough)."""
        result = self._send(url, params, headers)
        if isinstance(result, FetchOutcome):
            return result
        if not result.text.strip():
            return FetchOutcome.failed(EMPTY_RESPONSE, status_code=result.status_code)
        return FetchOutcome.success(result.text, status_code=result.status_code)

    def close(self) -> None:
        """Close the HTTP client."""
        with self._lock:
            if self._client:
                self._client.close()
                self._client = None
