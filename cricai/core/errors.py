"""Error taxonomy.

RateLimited, UpstreamFailed and EmptyResult describe why a single fallback
tier was rejected. The orchestrator absorbs them into FallbackResult.error and
never lets them escape. ShapeMismatch comes from the normalizer when a payload
matches no known shape; it is absorbed the same way.

NoDataAvailable is the only terminal error: every tier failed and there is no
cached copy to serve. The API layer maps it to HTTP 503.
"""


class CricaiError(Exception):
    """Base class for proxy errors."""


class RateLimited(CricaiError):
    """Upstream answered 429 and the single retry did not help."""


class UpstreamFailed(CricaiError):
    """Non-2xx status, network error, timeout, or unusable body."""


class EmptyResult(CricaiError):
    """A list source answered but produced zero matches."""


class ShapeMismatch(CricaiError):
    """Payload does not match any known upstream shape."""


class NoDataAvailable(CricaiError):
    """All tiers exhausted and nothing cached for the key."""

    def __init__(self, key: str, error: str | None = None):
        self.key = key
        self.error = error
        super().__init__(f"No data available for '{key}'" + (f": {error}" if error else ""))
