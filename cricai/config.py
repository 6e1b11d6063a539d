"""Proxy configuration.

Configuration via environment variables:
    PORT: HTTP port (default: 3000)
    CRICAI_LOG_LEVEL: Root log level (default: INFO)
    CRICAI_UPSTREAM_TIMEOUT: Upstream request timeout in seconds (default: 7)
    CRICAI_RETRY_BACKOFF: Sleep before retrying a 429 in seconds (default: 1.5)
    CRICAI_RETRY_ATTEMPTS: Total attempts on 429, including the first (default: 2)
    CRICAI_TTL_LIVE / _RECENT / _UPCOMING / _SCORECARD: Cache TTLs in seconds
    CRICAI_CRICBUZZ_API_URL, CRICAI_CRICBUZZ_API_KEY: Primary structured API
    CRICAI_ESPN_URL: Secondary API for match lists (ESPN cricket)
    CRICAI_ALT_API_URL: Secondary API for scorecards (optional)
    CRICAI_CRICBUZZ_URL, CRICAI_YAHOO_URL: HTML sites for scraping/passthrough
"""

import os
from dataclasses import dataclass

DEFAULT_PORT = 3000
DEFAULT_UPSTREAM_TIMEOUT = 7.0  # observed upstream latency tops out around 6s
DEFAULT_RETRY_BACKOFF = 1.5
DEFAULT_RETRY_ATTEMPTS = 2  # first call + exactly one retry

# Cache TTLs (seconds) - live scores move fast, fixtures barely at all
DEFAULT_TTL_LIVE = 30.0
DEFAULT_TTL_RECENT = 5 * 60.0
DEFAULT_TTL_UPCOMING = 15 * 60.0
DEFAULT_TTL_SCORECARD = 30.0

DEFAULT_CRICBUZZ_API_URL = "https://cricbuzz-cricket.p.rapidapi.com"
DEFAULT_ESPN_URL = "https://site.web.api.espn.com/apis/v2/sports/cricket"
DEFAULT_CRICBUZZ_URL = "https://www.cricbuzz.com"
DEFAULT_YAHOO_URL = "https://cricket.yahoo.net"

USER_AGENT = "CRICAI Proxy Server"


@dataclass(frozen=True)
class Settings:
    """Resolved configuration, injected into create_app()."""

    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    upstream_timeout: float = DEFAULT_UPSTREAM_TIMEOUT
    retry_backoff: float = DEFAULT_RETRY_BACKOFF
    retry_attempts: int = DEFAULT_RETRY_ATTEMPTS
    ttl_live: float = DEFAULT_TTL_LIVE
    ttl_recent: float = DEFAULT_TTL_RECENT
    ttl_upcoming: float = DEFAULT_TTL_UPCOMING
    ttl_scorecard: float = DEFAULT_TTL_SCORECARD
    cricbuzz_api_url: str = DEFAULT_CRICBUZZ_API_URL
    cricbuzz_api_key: str = ""
    espn_url: str = DEFAULT_ESPN_URL
    cricbuzz_url: str = DEFAULT_CRICBUZZ_URL
    yahoo_url: str = DEFAULT_YAHOO_URL
    alt_api_url: str = ""
    user_agent: str = USER_AGENT

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "Settings":
        """Build settings from environment variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        return cls(
            port=int(env.get("PORT", DEFAULT_PORT)),
            log_level=env.get("CRICAI_LOG_LEVEL", "INFO"),
            upstream_timeout=float(env.get("CRICAI_UPSTREAM_TIMEOUT", DEFAULT_UPSTREAM_TIMEOUT)),
            retry_backoff=float(env.get("CRICAI_RETRY_BACKOFF", DEFAULT_RETRY_BACKOFF)),
            retry_attempts=int(env.get("CRICAI_RETRY_ATTEMPTS", DEFAULT_RETRY_ATTEMPTS)),
            ttl_live=float(env.get("CRICAI_TTL_LIVE", DEFAULT_TTL_LIVE)),
            ttl_recent=float(env.get("CRICAI_TTL_RECENT", DEFAULT_TTL_RECENT)),
            ttl_upcoming=float(env.get("CRICAI_TTL_UPCOMING", DEFAULT_TTL_UPCOMING)),
            ttl_scorecard=float(env.get("CRICAI_TTL_SCORECARD", DEFAULT_TTL_SCORECARD)),
            cricbuzz_api_url=env.get("CRICAI_CRICBUZZ_API_URL", DEFAULT_CRICBUZZ_API_URL),
            cricbuzz_api_key=env.get("CRICAI_CRICBUZZ_API_KEY", ""),
            espn_url=env.get("CRICAI_ESPN_URL", DEFAULT_ESPN_URL),
            cricbuzz_url=env.get("CRICAI_CRICBUZZ_URL", DEFAULT_CRICBUZZ_URL),
            yahoo_url=env.get("CRICAI_YAHOO_URL", DEFAULT_YAHOO_URL),
            alt_api_url=env.get("CRICAI_ALT_API_URL", ""),
        )
