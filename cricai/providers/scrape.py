"""HTML scrape source (last-resort tier for match lists).

The scraper itself (fetching a page and walking its DOM) is an injected
collaborator. It only has to return [{title, status, summary}, ...]; this
module adapts it to the FetchOutcome contract.
"""

import logging
from typing import Protocol

from cricai.core.types import FetchOutcome, SourceShape, SourceSpec

logger = logging.getLogger(__name__)


class MatchScraper(Protocol):
    """Anything that can produce raw match summaries from a web page."""

    def scrape(self) -> list[dict]: ...


def scrape_source(scraper: MatchScraper, name: str = "scrape") -> SourceSpec:
    """Wrap a scraper as a fallback tier.

    Scraper exceptions and non-list results become Failed outcomes; an empty
    list is passed through and rejected later as an empty result.
    """

    def invoke() -> FetchOutcome:
        try:
            summaries = scraper.scrape()
        except Exception as e:
            logger.warning("[SCRAPE] %s failed: %s", name, e)
            return FetchOutcome.failed(f"scrape failed: {e}")
        if not isinstance(summaries, list):
            return FetchOutcome.failed("scrape returned no list")
        return FetchOutcome.success(summaries)

    return SourceSpec(name=name, invoke=invoke, shape=SourceShape.SCRAPE_SUMMARIES)
