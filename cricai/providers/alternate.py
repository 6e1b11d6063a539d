"""Alternate scorecard API source (secondary tier for scorecards).

Any mirror that serves a flat innings list at <base>/scorecard/<match_id>:

    {"matchId": "...", "innings": [{"team", "runs", "wickets", "overs",
                                    "batting": [...], "bowling": [...]}]}
"""

from cricai.core.types import SourceShape, SourceSpec
from cricai.upstream.client import UpstreamClient


class AlternateScorecardApi:
    name = "alternate"

    def __init__(self, client: UpstreamClient, base_url: str):
        self._client = client
        self._base_url = base_url.rstrip("/")

    def scorecard_source(self, match_id: str) -> SourceSpec:
        url = f"{self._base_url}/scorecard/{match_id}"
        return SourceSpec(
            name=self.name,
            invoke=lambda: self._client.get_json(url),
            shape=SourceShape.INNINGS_SCORECARD,
        )
