"""Fallback orchestrator.

Resolves one resource key through the tier chain:

    fresh cache -> sources in caller order -> stale cache -> failure

Sources are tried strictly one after another, each only once the previous
one has definitively failed; they are never reordered or run in parallel.
Per-tier errors (rate limiting, upstream failure, empty lists, unknown
shapes) are absorbed here and reported through FallbackResult.error.
"""

import logging
from collections.abc import Callable
from typing import Any

from cricai.core.errors import (
    CricaiError,
    EmptyResult,
    NoDataAvailable,
    RateLimited,
    ShapeMismatch,
    UpstreamFailed,
)
from cricai.core.types import FallbackResult, FetchOutcome, SourceShape, SourceSpec, SourceTier
from cricai.normalizers import normalize, normalize_scorecard
from cricai.upstream.retry import RATE_LIMITED_REASON, RetryPolicy
from cricai.utilities.cache import CacheStore

logger = logging.getLogger(__name__)

Normalizer = Callable[[Any, SourceShape | None], Any]

NO_SOURCES = "no sources configured"


class FallbackOrchestrator:
    """Cache-first, tiered resolver for upstream resources.

    Args:
        cache: Process-wide cache store (injected)
        retry_policy: Wraps every source invocation
    """

    def __init__(self, cache: CacheStore, retry_policy: RetryPolicy | None = None):
        self._cache = cache
        self._retry = retry_policy or RetryPolicy()

    @property
    def cache(self) -> CacheStore:
        return self._cache

    def resolve(
        self,
        key: str,
        sources: list[SourceSpec],
        ttl: float,
        require_items: bool = True,
        normalizer: Normalizer | None = None,
    ) -> FallbackResult:
        """Resolve key to a normalized payload.

        Args:
            key: Cache key ("live", "scorecard:123", ...)
            sources: Tiers in priority order; the first is "primary"
            ttl: Freshness window in seconds
            require_items: List resources treat an empty result as a failed tier;
                keyed resources (scorecards) accept any successful payload
            normalizer: Maps (raw, shape) to the canonical payload; defaults to
                normalize for list resources and normalize_scorecard otherwise

        Returns:
            FallbackResult; payload is None only when nothing succeeded and
            nothing was cached
        """
        if normalizer is None:
            normalizer = normalize if require_items else normalize_scorecard

        entry = self._cache.get(key)
        now = self._cache.now()
        if entry and self._cache.is_fresh(entry, ttl, now):
            logger.debug("[FALLBACK] %s served from fresh cache", key)
            return FallbackResult(
                payload=entry.payload,
                source_used=SourceTier.CACHE,
                stale=False,
                stored_at=entry.stored_at,
            )

        last_error = NO_SOURCES
        for index, source in enumerate(sources):
            try:
                payload = self._attempt(source, require_items, normalizer)
            except CricaiError as e:
                last_error = f"{source.name}: {e}"
                logger.warning("[FALLBACK] %s tier %s failed: %s", key, source.name, e)
                continue

            stored = self._cache.put(key, payload)
            tier = SourceTier.PRIMARY if index == 0 else SourceTier.SECONDARY
            logger.info("[FALLBACK] %s resolved from %s (%s)", key, source.name, tier.value)
            return FallbackResult(
                payload=payload,
                source_used=tier,
                stale=False,
                source_name=source.name,
                stored_at=stored.stored_at,
            )

        if entry:
            logger.warning(
                "[FALLBACK] All sources failed for %s; serving cache aged %.0fs",
                key,
                now - entry.stored_at,
            )
            return FallbackResult(
                payload=entry.payload,
                source_used=SourceTier.STALE_CACHE,
                stale=True,
                error=last_error,
                stored_at=entry.stored_at,
            )

        logger.error("[FALLBACK] No data available for %s: %s", key, last_error)
        return FallbackResult(payload=None, source_used=None, error=last_error)

    def resolve_or_raise(
        self, key: str, sources: list[SourceSpec], ttl: float, **kwargs: Any
    ) -> FallbackResult:
        """Like resolve(), but raise NoDataAvailable on terminal failure."""
        result = self.resolve(key, sources, ttl, **kwargs)
        if not result.ok:
            raise NoDataAvailable(key, result.error)
        return result

    def _attempt(self, source: SourceSpec, require_items: bool, normalizer: Normalizer) -> Any:
        """Invoke one tier and return its normalized payload.

        Raises:
            RateLimited, UpstreamFailed, EmptyResult, ShapeMismatch
        """
        outcome = self._retry.execute(lambda: self._invoke(source), name=source.name)
        if not outcome.ok:
            if outcome.reason == RATE_LIMITED_REASON:
                raise RateLimited(outcome.reason)
            raise UpstreamFailed(outcome.reason or "failed")

        try:
            payload = normalizer(outcome.payload, source.shape)
        except CricaiError:
            raise
        except Exception as e:
            # Drift the normalizer did not anticipate still counts as a failed tier
            logger.exception("[FALLBACK] Normalizing %s payload failed", source.name)
            raise ShapeMismatch(f"normalization failed: {type(e).__name__}: {e}") from e
        if require_items and not payload:
            raise EmptyResult("empty result")
        return payload

    @staticmethod
    def _invoke(source: SourceSpec) -> FetchOutcome:
        try:
            return source.invoke()
        except Exception as e:
            # A crashing source counts as a failed tier
            logger.exception("[FALLBACK] Source %s raised", source.name)
            return FetchOutcome.failed(f"{type(e).__name__}: {e}")
