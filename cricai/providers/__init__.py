"""Upstream source factories (Cricbuzz, ESPN, alternate API, HTML scrape)."""

from cricai.providers.alternate import AlternateScorecardApi
from cricai.providers.cricbuzz import CricbuzzApi
from cricai.providers.espn import EspnApi
from cricai.providers.scrape import MatchScraper, scrape_source

__all__ = [
    "AlternateScorecardApi",
    "CricbuzzApi",
    "EspnApi",
    "MatchScraper",
    "scrape_source",
]
