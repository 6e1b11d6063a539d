"""ESPN cricket API source (secondary tier for match lists).

ESPN serves a single scoreboard mixing live, finished and scheduled games;
the resource layer filters it by state after normalization.
"""

from cricai.core.types import SourceShape, SourceSpec
from cricai.upstream.client import UpstreamClient


class EspnApi:
    """ESPN scoreboard source factory."""

    name = "espn"

    def __init__(self, client: UpstreamClient, base_url: str):
        self._client = client
        self._base_url = base_url.rstrip("/")

    @property
    def scoreboard_url(self) -> str:
        return f"{self._base_url}/scoreboard"

    def scoreboard_source(self) -> SourceSpec:
        url = self.scoreboard_url
        return SourceSpec(
            name=self.name,
            invoke=lambda: self._client.get_json(url),
            shape=SourceShape.ESPN_SCOREBOARD,
        )
