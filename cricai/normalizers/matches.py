"""Match list normalization.

Turns each known upstream match-list shape into NormalizedMatch records.
Run rates are always recomputed from runs and overs, never copied from
upstream. A malformed field degrades to None; a malformed match is skipped
with a warning; the list as a whole is never aborted.
"""

import logging
import re
from datetime import UTC, datetime
from typing import Any

from cricai.core.types import NormalizedMatch, TeamScore
from cricai.normalizers.shapes import as_list
from cricai.utilities.numbers import parse_float, parse_int, run_rate

logger = logging.getLogger(__name__)

# Canonical match states
LIVE = "live"
COMPLETE = "complete"
UPCOMING = "upcoming"
DELAYED = "delayed"
ABANDONED = "abandoned"
UNKNOWN = "unknown"

# "250/6 (45.2/50 ov)", "250/6 (45.2 ov)", "250 (49.3)", "250/6"
_ESPN_SCORE_RE = re.compile(
    r"^\s*(?P<runs>\d+)(?:\s*/\s*(?P<wickets>\d+))?"
    r"(?:\s*\(\s*(?P<overs>\d+(?:\.\d+)?)(?:\s*/\s*\d+)?\s*(?:ov|overs)?\s*\))?"
)
# Scraped summary tokens: "IND 250/6 (45.2)"
_SCRAPE_SCORE_RE = re.compile(
    r"(?P<team>[A-Z][A-Za-z]{1,5})\s+(?P<runs>\d+)(?:\s*/\s*(?P<wickets>\d+))?"
    r"(?:\s*\(\s*(?P<overs>\d+(?:\.\d+)?)\s*(?:ov|overs)?\s*\))?"
)
_VERSUS_RE = re.compile(r"\s+vs?\.?\s+", re.IGNORECASE)


def _safe(parse, item: Any, *args: Any) -> NormalizedMatch | None:
    """Run a per-match parser, skipping the match if its structure is unusable."""
    try:
        return parse(item, *args)
    except (AttributeError, IndexError, KeyError, TypeError, ValueError) as e:
        logger.warning("[NORMALIZE] Skipping malformed match %s: %s", _match_ref(item), e)
        return None


def _match_ref(item: Any) -> str:
    if not isinstance(item, dict):
        return "unknown"
    info = item.get("matchInfo") if isinstance(item.get("matchInfo"), dict) else item
    return str(info.get("matchId") or info.get("id") or info.get("title") or "unknown")


def canonical_state(state: str | None, status: str | None = None) -> str:
    """Map an upstream state string (plus status text as a hint) to a canonical state."""
    value = (state or "").strip().lower()
    text = (status or "").strip().lower()

    if value in ("complete", "completed", "finished", "result", "post"):
        return COMPLETE
    if value in ("in progress", "inprogress", "live", "in", "innings break", "stumps",
                 "lunch", "tea", "drink", "toss"):
        return LIVE
    if value in ("preview", "upcoming", "pre", "scheduled"):
        return UPCOMING
    if value in ("delay", "delayed", "rain", "rain delay", "wet outfield"):
        return DELAYED
    if value in ("abandon", "abandoned", "no result", "cancelled", "canceled"):
        return ABANDONED

    # Fall back to the human status line
    if "abandon" in text or "no result" in text:
        return ABANDONED
    if any(word in text for word in (" won ", " won by", "drawn", "match tied", "tied")):
        return COMPLETE
    if "delay" in text or "rain" in text:
        return DELAYED
    if any(word in text for word in ("need", "trail", "lead by", "opt to", "elected to", "chose to")):
        return LIVE
    if "starts" in text or "yet to begin" in text:
        return UPCOMING
    return UNKNOWN


def epoch_ms_to_iso(value: Any) -> str | None:
    """Convert an epoch-milliseconds value (int or string) to ISO-8601 UTC."""
    ms = parse_float(value)
    if ms is None or ms <= 0:
        return None
    try:
        return datetime.fromtimestamp(ms / 1000, tz=UTC).isoformat()
    except (OverflowError, OSError, ValueError):
        return None


def iso_to_utc(value: Any) -> str | None:
    """Normalize an ISO date string ("2024-01-01T09:30Z") to ISO-8601 UTC."""
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC).isoformat()


def _str_or_none(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def make_team_score(
    team_id: Any = None,
    name: Any = None,
    short_name: Any = None,
    runs: Any = None,
    wickets: Any = None,
    overs: Any = None,
) -> TeamScore:
    """Build a TeamScore with lenient parsing and a derived run rate."""
    parsed_runs = parse_int(runs)
    parsed_overs = parse_float(overs)
    return TeamScore(
        id=_str_or_none(team_id),
        name=_str_or_none(name),
        short_name=_str_or_none(short_name),
        runs=parsed_runs,
        wickets=parse_int(wickets),
        overs=parsed_overs,
        run_rate=run_rate(parsed_runs, parsed_overs),
    )


# =============================================================================
# Cricbuzz nested tree
# =============================================================================


def _latest_innings(team_score: Any) -> dict:
    """Pick the most recent innings ("inngs2" over "inngs1") from a Cricbuzz team score."""
    if not isinstance(team_score, dict):
        return {}
    innings = [
        (key, value)
        for key, value in team_score.items()
        if key.startswith("inngs") and isinstance(value, dict)
    ]
    if not innings:
        return {}
    innings.sort(key=lambda kv: parse_int(kv[0][len("inngs"):]) or 0)
    return innings[-1][1]


def _cricbuzz_team(team: Any, team_score: Any) -> TeamScore:
    team = team if isinstance(team, dict) else {}
    innings = _latest_innings(team_score)
    return make_team_score(
        team_id=team.get("teamId"),
        name=team.get("teamName"),
        short_name=team.get("teamSName"),
        runs=innings.get("runs"),
        wickets=innings.get("wickets"),
        overs=innings.get("overs"),
    )


def _parse_cricbuzz_match(match: dict, series_name: str | None) -> NormalizedMatch | None:
    info = match.get("matchInfo")
    if not isinstance(info, dict):
        return None
    score = match.get("matchScore") if isinstance(match.get("matchScore"), dict) else {}
    venue = info.get("venueInfo") if isinstance(info.get("venueInfo"), dict) else {}
    status = _str_or_none(info.get("status"))

    return NormalizedMatch(
        match_id=_str_or_none(info.get("matchId")),
        series_name=_str_or_none(info.get("seriesName")) or series_name,
        description=_str_or_none(info.get("matchDesc")),
        format=_str_or_none(info.get("matchFormat")),
        state=canonical_state(info.get("state"), status),
        status=status,
        start_date=epoch_ms_to_iso(info.get("startDate")),
        end_date=epoch_ms_to_iso(info.get("endDate")),
        venue=_str_or_none(venue.get("ground")),
        city=_str_or_none(venue.get("city")),
        team1=_cricbuzz_team(info.get("team1"), score.get("team1Score")),
        team2=_cricbuzz_team(info.get("team2"), score.get("team2Score")),
    )


def normalize_cricbuzz_matches(raw: dict) -> list[NormalizedMatch]:
    """Walk typeMatches -> seriesMatches -> seriesAdWrapper.matches.

    seriesMatches also carries advertisement entries with no seriesAdWrapper;
    those are skipped.
    """
    matches = []
    for type_group in as_list(raw.get("typeMatches")):
        if not isinstance(type_group, dict):
            continue
        for series in as_list(type_group.get("seriesMatches")):
            wrapper = series.get("seriesAdWrapper") if isinstance(series, dict) else None
            if not isinstance(wrapper, dict):
                continue
            series_name = _str_or_none(wrapper.get("seriesName"))
            for match in as_list(wrapper.get("matches")):
                if not isinstance(match, dict):
                    continue
                parsed = _safe(_parse_cricbuzz_match, match, series_name)
                if parsed:
                    matches.append(parsed)
    return matches


# =============================================================================
# ESPN flat event list
# =============================================================================


def parse_score_string(score: Any) -> tuple[int | None, int | None, float | None]:
    """Split "250/6 (45.2 ov)" into (runs, wickets, overs).

    All-out scores carry no wicket count ("250 (49.3 ov)"); wickets stay None
    rather than being guessed.
    """
    if isinstance(score, int | float) and not isinstance(score, bool):
        return parse_int(score), None, None
    if not isinstance(score, str):
        return None, None, None
    match = _ESPN_SCORE_RE.match(score)
    if not match:
        return None, None, None
    return (
        parse_int(match.group("runs")),
        parse_int(match.group("wickets")),
        parse_float(match.group("overs")),
    )


def _espn_competitor(competitor: Any) -> TeamScore:
    if not isinstance(competitor, dict):
        return TeamScore()
    team = competitor.get("team") if isinstance(competitor.get("team"), dict) else {}
    runs, wickets, overs = parse_score_string(competitor.get("score"))
    return make_team_score(
        team_id=team.get("id") or competitor.get("id"),
        name=team.get("displayName") or team.get("name"),
        short_name=team.get("abbreviation") or team.get("shortDisplayName"),
        runs=runs,
        wickets=wickets,
        overs=overs,
    )


def _parse_espn_event(event: dict, default_series: str | None) -> NormalizedMatch | None:
    if not event.get("id"):
        return None
    competitions = as_list(event.get("competitions")) or [{}]
    competition = competitions[0] if isinstance(competitions[0], dict) else {}

    status_block = competition.get("status") or event.get("status") or {}
    status_type = status_block.get("type", {}) if isinstance(status_block, dict) else {}
    status = _str_or_none(status_type.get("detail") or status_type.get("description"))
    description = _str_or_none(status_type.get("description"))
    state = canonical_state(status_type.get("state"), status)
    # ESPN reports abandoned games as state "post" with a telling description
    if state == COMPLETE and description and "abandon" in description.lower():
        state = ABANDONED

    venue = competition.get("venue") if isinstance(competition.get("venue"), dict) else {}
    address = venue.get("address") if isinstance(venue.get("address"), dict) else {}
    league = event.get("league") if isinstance(event.get("league"), dict) else {}
    match_class = competition.get("class") if isinstance(competition.get("class"), dict) else {}

    competitors = as_list(competition.get("competitors"))
    # Competitors carry an explicit batting order; fall back to list order
    competitors = sorted(
        (c for c in competitors if isinstance(c, dict)),
        key=lambda c: parse_int(c.get("order")) or 0,
    )
    team1 = _espn_competitor(competitors[0]) if len(competitors) > 0 else TeamScore()
    team2 = _espn_competitor(competitors[1]) if len(competitors) > 1 else TeamScore()

    return NormalizedMatch(
        match_id=_str_or_none(event.get("id")),
        series_name=_str_or_none(league.get("name")) or default_series,
        description=_str_or_none(competition.get("description") or event.get("description")),
        format=_str_or_none(match_class.get("generalClassCard")),
        state=state,
        status=status,
        start_date=iso_to_utc(event.get("date")),
        end_date=iso_to_utc(event.get("endDate")),
        venue=_str_or_none(venue.get("fullName")),
        city=_str_or_none(address.get("city")),
        team1=team1,
        team2=team2,
    )


def normalize_espn_scoreboard(raw: dict) -> list[NormalizedMatch]:
    leagues = as_list(raw.get("leagues"))
    default_series = None
    if leagues and isinstance(leagues[0], dict):
        default_series = _str_or_none(leagues[0].get("name"))

    matches = []
    for event in as_list(raw.get("events")):
        if not isinstance(event, dict):
            continue
        parsed = _safe(_parse_espn_event, event, default_series)
        if parsed:
            matches.append(parsed)
    return matches


# =============================================================================
# Scraped summaries
# =============================================================================


def _split_title(title: str) -> tuple[list[str], str | None]:
    """Split "India vs Australia, 3rd ODI" into (["India", "Australia"], "3rd ODI")."""
    head, _, tail = title.partition(",")
    teams = [part.strip() for part in _VERSUS_RE.split(head) if part.strip()]
    return teams, _str_or_none(tail)


def _parse_scrape_item(item: dict) -> NormalizedMatch | None:
    title = _str_or_none(item.get("title"))
    if not title:
        return None
    teams, description = _split_title(title)
    status = _str_or_none(item.get("status"))

    scores = []
    summary = item.get("summary")
    if isinstance(summary, str):
        scores = list(_SCRAPE_SCORE_RE.finditer(summary))

    def team_at(index: int) -> TeamScore:
        name = teams[index] if index < len(teams) else None
        if index >= len(scores):
            return make_team_score(name=name)
        score = scores[index]
        return make_team_score(
            name=name,
            short_name=score.group("team"),
            runs=score.group("runs"),
            wickets=score.group("wickets"),
            overs=score.group("overs"),
        )

    return NormalizedMatch(
        match_id=_str_or_none(item.get("matchId") or item.get("id")),
        description=description,
        state=canonical_state(item.get("state"), status),
        status=status,
        team1=team_at(0),
        team2=team_at(1),
    )


def normalize_scrape_summaries(raw: list) -> list[NormalizedMatch]:
    matches = []
    for item in as_list(raw):
        if not isinstance(item, dict):
            continue
        parsed = _safe(_parse_scrape_item, item)
        if parsed:
            matches.append(parsed)
    return matches
