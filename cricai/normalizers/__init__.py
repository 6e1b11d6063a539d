"""Upstream payload normalization.

normalize() is the single entry point: it checks (or detects) the payload
shape and dispatches to that shape's extraction function. normalize_scorecard()
wraps it for scorecard sources, where any successful reply is usable.
"""

import logging
from typing import Any

from cricai.core.errors import ShapeMismatch
from cricai.core.types import NormalizedMatch, NormalizedScorecard, SourceShape
from cricai.normalizers.matches import (
    normalize_cricbuzz_matches,
    normalize_espn_scoreboard,
    normalize_scrape_summaries,
)
from cricai.normalizers.scorecard import (
    empty_scorecard,
    normalize_cricbuzz_scorecard,
    normalize_innings_scorecard,
)
from cricai.normalizers.shapes import (
    MATCH_LIST_SHAPES,
    SCORECARD_SHAPES,
    as_list,
    detect_shape,
    resolve_shape,
)

logger = logging.getLogger(__name__)


def normalize(
    raw: Any,
    shape: SourceShape | None = None,
    match_id: Any = None,
) -> list[NormalizedMatch] | NormalizedScorecard:
    """Map a raw upstream payload to canonical records.

    Args:
        raw: Parsed upstream payload
        shape: Declared shape tag, or None to detect it
        match_id: Scorecards only; overrides the id found in the payload

    Returns:
        list[NormalizedMatch] for match-list shapes, NormalizedScorecard otherwise

    Raises:
        ShapeMismatch: payload does not fit the declared (or any) shape
    """
    shape = resolve_shape(raw, shape)

    if shape is SourceShape.CRICBUZZ_MATCHES:
        return normalize_cricbuzz_matches(raw)
    if shape is SourceShape.ESPN_SCOREBOARD:
        return normalize_espn_scoreboard(raw)
    if shape is SourceShape.SCRAPE_SUMMARIES:
        return normalize_scrape_summaries(raw)
    if shape is SourceShape.CRICBUZZ_SCORECARD:
        return normalize_cricbuzz_scorecard(raw, match_id=match_id)
    return normalize_innings_scorecard(raw, match_id=match_id)



def normalize_scorecard(
    raw: Any,
    shape: SourceShape | None = None,
    match_id: Any = None,
) -> NormalizedScorecard:
    """Normalize a scorecard reply, accepting any successful payload.

    A reply that fits no scorecard shape (typically a pre-match header-only
    document) becomes an empty scorecard instead of a failed tier.
    """
    try:
        card = normalize(raw, shape, match_id=match_id)
    except ShapeMismatch as e:
        logger.info("[NORMALIZE] Scorecard without scoring data (%s); returning empty", e)
        return empty_scorecard(raw, match_id)
    if not isinstance(card, NormalizedScorecard):
        logger.info("[NORMALIZE] Match-list payload on a scorecard source; returning empty")
        return empty_scorecard(raw, match_id)
    return card


__all__ = [
    "MATCH_LIST_SHAPES",
    "SCORECARD_SHAPES",
    "as_list",
    "detect_shape",
    "normalize",
    "normalize_scorecard",
]
