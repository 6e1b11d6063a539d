"""API route modules."""

from cricai.api.routes import cache, matches, proxy

__all__ = ["cache", "matches", "proxy"]
