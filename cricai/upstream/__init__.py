"""Upstream transport: single-call client and retry policy."""

from cricai.upstream.client import EMPTY_RESPONSE, UpstreamClient
from cricai.upstream.retry import RATE_LIMITED_REASON, RetryPolicy

__all__ = ["EMPTY_RESPONSE", "RATE_LIMITED_REASON", "RetryPolicy", "UpstreamClient"]
