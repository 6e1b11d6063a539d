"""Retry policy for rate-limited upstream calls.

Only a 429 is retried, after a fixed backoff, and only a bounded number of
times (one retry by default). Every other failure is terminal for that tier
and the fallback chain moves on. This absorbs brief rate-limit blips without
hammering an upstream that is already struggling.
"""

import logging
import time
from collections.abc import Callable

from cricai.config import DEFAULT_RETRY_ATTEMPTS, DEFAULT_RETRY_BACKOFF
from cricai.core.types import FetchOutcome

logger = logging.getLogger(__name__)

RATE_LIMITED_REASON = "rate limited"


class RetryPolicy:
    """Retry-on-429 wrapper around a single upstream call.

    Args:
        max_attempts: Total attempts including the first (2 = one retry)
        backoff: Seconds to sleep before each retry
        sleep: Sleep function, injectable so tests run without delays
    """

    def __init__(
        self,
        max_attempts: int = DEFAULT_RETRY_ATTEMPTS,
        backoff: float = DEFAULT_RETRY_BACKOFF,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.backoff = backoff
        self._sleep = sleep

    def execute(self, call: Callable[[], FetchOutcome], name: str = "upstream") -> FetchOutcome:
        """Run call, retrying while it reports RateLimited.

        Returns:
            The first non-rate-limited outcome of the first attempt unchanged,
            a Success from any attempt, or Failed("rate limited") once a 429
            was seen and the retries did not produce a Success.
        """
        outcome = call()
        if not outcome.is_rate_limited:
            return outcome

        for attempt in range(2, self.max_attempts + 1):
            logger.warning(
                "[RETRY] %s rate limited. Retry %d/%d in %.1fs",
                name,
                attempt - 1,
                self.max_attempts - 1,
                self.backoff,
            )
            self._sleep(self.backoff)
            outcome = call()
            if outcome.ok:
                return outcome
            if not outcome.is_rate_limited:
                logger.warning("[RETRY] %s retry failed: %s", name, outcome.reason)
                break

        logger.error("[RETRY] %s still failing after rate limit; giving up", name)
        return FetchOutcome.failed(RATE_LIMITED_REASON, status_code=outcome.status_code)
