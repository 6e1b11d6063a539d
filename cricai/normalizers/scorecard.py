"""Scorecard normalization.

Builds a NormalizedScorecard (innings summaries plus top-5 batter and bowler
rankings) from either the Cricbuzz scorecard shape or a flat innings list.
Strike rate, economy and run rate are recomputed from raw counts; upstream's
own rate fields are ignored.
"""

import logging
from typing import Any

from cricai.core.types import BatterLine, BowlerLine, InningsSummary, NormalizedScorecard
from cricai.normalizers.shapes import as_list
from cricai.utilities.numbers import economy, parse_float, parse_int, run_rate, strike_rate

logger = logging.getLogger(__name__)

TOP_N = 5


def _str_or_none(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def make_batter(
    name: Any,
    team: Any = None,
    runs: Any = None,
    balls: Any = None,
    fours: Any = None,
    sixes: Any = None,
    dismissal: Any = None,
) -> BatterLine:
    parsed_runs = parse_int(runs)
    parsed_balls = parse_int(balls)
    return BatterLine(
        name=_str_or_none(name),
        team=_str_or_none(team),
        runs=parsed_runs,
        balls=parsed_balls,
        fours=parse_int(fours),
        sixes=parse_int(sixes),
        strike_rate=strike_rate(parsed_runs, parsed_balls),
        dismissal=_str_or_none(dismissal),
    )


def make_bowler(
    name: Any,
    team: Any = None,
    overs: Any = None,
    maidens: Any = None,
    runs: Any = None,
    wickets: Any = None,
) -> BowlerLine:
    parsed_overs = parse_float(overs)
    parsed_runs = parse_int(runs)
    return BowlerLine(
        name=_str_or_none(name),
        team=_str_or_none(team),
        overs=parsed_overs,
        maidens=parse_int(maidens),
        runs=parsed_runs,
        wickets=parse_int(wickets),
        economy=economy(parsed_runs, parsed_overs),
    )


def make_innings(innings_id: Any, team: Any, runs: Any, wickets: Any, overs: Any) -> InningsSummary:
    parsed_runs = parse_int(runs)
    parsed_overs = parse_float(overs)
    return InningsSummary(
        innings_id=parse_int(innings_id),
        team=_str_or_none(team),
        runs=parsed_runs,
        wickets=parse_int(wickets),
        overs=parsed_overs,
        run_rate=run_rate(parsed_runs, parsed_overs),
    )


def _did_not_bat(batter: BatterLine) -> bool:
    # Cricbuzz lists the whole XI; players yet to bat have no balls and no dismissal
    return not batter.balls and not batter.runs and not batter.dismissal


def top_batters(batters: list[BatterLine], limit: int = TOP_N) -> list[BatterLine]:
    """Rank by runs, highest first. Unknown runs sort last; ties keep input order."""
    ranked = sorted(batters, key=lambda b: (b.runs is None, -(b.runs or 0)))
    return ranked[:limit]


def top_bowlers(bowlers: list[BowlerLine], limit: int = TOP_N) -> list[BowlerLine]:
    """Rank by wickets, highest first. Unknown wickets sort last; ties keep input order."""
    ranked = sorted(bowlers, key=lambda b: (b.wickets is None, -(b.wickets or 0)))
    return ranked[:limit]


def _ordered_values(mapping: Any) -> list[dict]:
    """Values of a Cricbuzz "bat_1", "bat_2"... map in numeric key order."""
    if isinstance(mapping, list):
        return [v for v in mapping if isinstance(v, dict)]
    if not isinstance(mapping, dict):
        return []

    def position(key: str) -> int:
        suffix = key.rsplit("_", 1)[-1]
        number = parse_int(suffix)
        return number if number is not None else 0

    return [mapping[k] for k in sorted(mapping, key=position) if isinstance(mapping[k], dict)]


# =============================================================================
# Cricbuzz scorecard
# =============================================================================


def normalize_cricbuzz_scorecard(raw: dict, match_id: Any = None) -> NormalizedScorecard:
    header = _as_dict(raw.get("matchHeader"))
    innings_list: list[InningsSummary] = []
    batters: list[BatterLine] = []
    bowlers: list[BowlerLine] = []

    for innings in as_list(raw.get("scoreCard")):
        if not isinstance(innings, dict):
            continue
        bat_team = _as_dict(innings.get("batTeamDetails"))
        bowl_team = _as_dict(innings.get("bowlTeamDetails"))
        details = _as_dict(innings.get("scoreDetails"))
        bat_team_name = bat_team.get("batTeamName") or bat_team.get("batTeamShortName")
        bowl_team_name = bowl_team.get("bowlTeamName") or bowl_team.get("bowlTeamShortName")

        innings_list.append(
            make_innings(
                innings.get("inningsId"),
                bat_team_name,
                details.get("runs"),
                details.get("wickets"),
                details.get("overs"),
            )
        )

        for entry in _ordered_values(bat_team.get("batsmenData")):
            batter = make_batter(
                entry.get("batName"),
                team=bat_team_name,
                runs=entry.get("runs"),
                balls=entry.get("balls"),
                fours=entry.get("fours"),
                sixes=entry.get("sixes"),
                dismissal=entry.get("outDesc"),
            )
            if batter.name and not _did_not_bat(batter):
                batters.append(batter)

        for entry in _ordered_values(bowl_team.get("bowlersData")):
            bowler = make_bowler(
                entry.get("bowlName"),
                team=bowl_team_name,
                overs=entry.get("overs"),
                maidens=entry.get("maidens"),
                runs=entry.get("runs"),
                wickets=entry.get("wickets"),
            )
            if bowler.name:
                bowlers.append(bowler)

    if match_id is None:
        match_id = header.get("matchId") or raw.get("matchId")

    return NormalizedScorecard(
        match_id=_str_or_none(match_id),
        innings_summary=innings_list,
        top_batters=top_batters(batters),
        top_bowlers=top_bowlers(bowlers),
    )


# =============================================================================
# Flat innings list
# =============================================================================


def normalize_innings_scorecard(raw: dict, match_id: Any = None) -> NormalizedScorecard:
    innings_list: list[InningsSummary] = []
    batters: list[BatterLine] = []
    bowlers: list[BowlerLine] = []

    for index, innings in enumerate(as_list(raw.get("innings")), start=1):
        if not isinstance(innings, dict):
            continue
        team = innings.get("team")
        innings_list.append(
            make_innings(
                innings.get("inningsId", index),
                team,
                innings.get("runs"),
                innings.get("wickets"),
                innings.get("overs"),
            )
        )
        for entry in as_list(innings.get("batting")):
            if not isinstance(entry, dict) or not entry.get("name"):
                continue
            batters.append(
                make_batter(
                    entry.get("name"),
                    team=team,
                    runs=entry.get("runs"),
                    balls=entry.get("balls"),
                    fours=entry.get("fours"),
                    sixes=entry.get("sixes"),
                    dismissal=entry.get("dismissal"),
                )
            )
        for entry in as_list(innings.get("bowling")):
            if not isinstance(entry, dict) or not entry.get("name"):
                continue
            bowlers.append(
                make_bowler(
                    entry.get("name"),
                    team=innings.get("bowlingTeam"),
                    overs=entry.get("overs"),
                    maidens=entry.get("maidens"),
                    runs=entry.get("runs"),
                    wickets=entry.get("wickets"),
                )
            )

    if match_id is None:
        match_id = raw.get("matchId")

    return NormalizedScorecard(
        match_id=_str_or_none(match_id),
        innings_summary=innings_list,
        top_batters=top_batters(batters),
        top_bowlers=top_bowlers(bowlers),
    )


def empty_scorecard(raw: Any, match_id: Any = None) -> NormalizedScorecard:
    """Scorecard with no innings, for replies that carry no scoring data yet.

    Cricbuzz answers pre-match scorecard requests with a header-only document;
    its matchId is kept when the caller supplies none.
    """
    if match_id is None and isinstance(raw, dict):
        match_id = _as_dict(raw.get("matchHeader")).get("matchId") or raw.get("matchId")
    return NormalizedScorecard(match_id=_str_or_none(match_id))
