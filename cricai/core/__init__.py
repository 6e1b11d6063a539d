"""Core types and errors."""

from cricai.core.errors import (
    CricaiError,
    EmptyResult,
    NoDataAvailable,
    RateLimited,
    ShapeMismatch,
    UpstreamFailed,
)
from cricai.core.types import (
    BatterLine,
    BowlerLine,
    CacheEntry,
    FallbackResult,
    FetchOutcome,
    InningsSummary,
    NormalizedMatch,
    NormalizedScorecard,
    OutcomeKind,
    SourceShape,
    SourceSpec,
    SourceTier,
    TeamScore,
)

__all__ = [
    "BatterLine",
    "BowlerLine",
    "CacheEntry",
    "CricaiError",
    "EmptyResult",
    "FallbackResult",
    "FetchOutcome",
    "InningsSummary",
    "NoDataAvailable",
    "NormalizedMatch",
    "NormalizedScorecard",
    "OutcomeKind",
    "RateLimited",
    "ShapeMismatch",
    "SourceShape",
    "SourceSpec",
    "SourceTier",
    "TeamScore",
    "UpstreamFailed",
]
