"""Cricbuzz structured API source (primary tier).

Builds SourceSpecs for the Cricbuzz JSON API (RapidAPI-hosted). The
orchestrator never sees URLs or keys; they are captured in the closures here.
"""

from cricai.core.types import SourceShape, SourceSpec
from cricai.upstream.client import UpstreamClient

# Resource name -> match list path
MATCH_LIST_PATHS = {
    "live": "/matches/v1/live",
    "recent": "/matches/v1/recent",
    "upcoming": "/matches/v1/upcoming",
}
SCORECARD_PATH = "/mcenter/v1/{match_id}/scard"


class CricbuzzApi:
    """Cricbuzz API source factory.

    Args:
        client: Shared upstream client
        base_url: API root (e.g. https://cricbuzz-cricket.p.rapidapi.com)
        api_key: RapidAPI key; sent with the RapidAPI host header when set
    """

    name = "cricbuzz"

    def __init__(self, client: UpstreamClient, base_url: str, api_key: str = ""):
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key

    def _headers(self) -> dict | None:
        if not self._api_key:
            return None
        host = self._base_url.split("://", 1)[-1].split("/", 1)[0]
        return {"X-RapidAPI-Key": self._api_key, "X-RapidAPI-Host": host}

    def matches_source(self, resource: str) -> SourceSpec:
        """Source for the live/recent/upcoming match list."""
        path = MATCH_LIST_PATHS.get(resource)
        if path is None:
            raise ValueError(f"Unknown match list resource: {resource}")
        url = f"{self._base_url}{path}"
        return SourceSpec(
            name=self.name,
            invoke=lambda: self._client.get_json(url, headers=self._headers()),
            shape=SourceShape.CRICBUZZ_MATCHES,
        )

    def scorecard_source(self, match_id: str) -> SourceSpec:
        url = f"{self._base_url}{SCORECARD_PATH.format(match_id=match_id)}"
        return SourceSpec(
            name=self.name,
            invoke=lambda: self._client.get_json(url, headers=self._headers()),
            shape=SourceShape.CRICBUZZ_SCORECARD,
        )
