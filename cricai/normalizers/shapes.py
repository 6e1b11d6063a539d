"""Upstream shape detection.

Each known shape has one predicate. Detection is only used when a source
does not declare its shape; declared shapes are still checked with the same
predicate so a drifting upstream fails loudly instead of being misparsed.
"""

from typing import Any

from cricai.core.errors import ShapeMismatch
from cricai.core.types import SourceShape

MATCH_LIST_SHAPES = frozenset(
    {
        SourceShape.CRICBUZZ_MATCHES,
        SourceShape.ESPN_SCOREBOARD,
        SourceShape.SCRAPE_SUMMARIES,
    }
)
SCORECARD_SHAPES = frozenset({SourceShape.CRICBUZZ_SCORECARD, SourceShape.INNINGS_SCORECARD})


def as_list(value: Any) -> list:
    """Container guard: drifted list fields (numbers, dicts, strings) iterate as empty."""
    return value if isinstance(value, list) else []


def _is_cricbuzz_matches(raw: Any) -> bool:
    return isinstance(raw, dict) and isinstance(raw.get("typeMatches"), list)


def _is_espn_scoreboard(raw: Any) -> bool:
    return isinstance(raw, dict) and isinstance(raw.get("events"), list)


def _is_scrape_summaries(raw: Any) -> bool:
    if not isinstance(raw, list):
        return False
    return all(isinstance(item, dict) and "title" in item for item in raw)


def _is_cricbuzz_scorecard(raw: Any) -> bool:
    return isinstance(raw, dict) and isinstance(raw.get("scoreCard"), list)


def _is_innings_scorecard(raw: Any) -> bool:
    return isinstance(raw, dict) and isinstance(raw.get("innings"), list)


# Order matters only for payloads that could satisfy two predicates
_PREDICATES = [
    (SourceShape.CRICBUZZ_MATCHES, _is_cricbuzz_matches),
    (SourceShape.ESPN_SCOREBOARD, _is_espn_scoreboard),
    (SourceShape.CRICBUZZ_SCORECARD, _is_cricbuzz_scorecard),
    (SourceShape.INNINGS_SCORECARD, _is_innings_scorecard),
    (SourceShape.SCRAPE_SUMMARIES, _is_scrape_summaries),
]


def matches_shape(raw: Any, shape: SourceShape) -> bool:
    for candidate, predicate in _PREDICATES:
        if candidate is shape:
            return predicate(raw)
    return False


def detect_shape(raw: Any) -> SourceShape:
    """Pick the shape tag for a raw payload.

    Raises:
        ShapeMismatch: payload matches none of the known shapes
    """
    for shape, predicate in _PREDICATES:
        if predicate(raw):
            return shape
    raise ShapeMismatch(f"unrecognized payload shape ({type(raw).__name__})")


def resolve_shape(raw: Any, shape: SourceShape | None) -> SourceShape:
    """Validate a declared shape, or detect one when none was declared."""
    if shape is None:
        return detect_shape(raw)
    if not matches_shape(raw, shape):
        raise ShapeMismatch(f"payload does not match declared shape '{shape.value}'")
    return shape
