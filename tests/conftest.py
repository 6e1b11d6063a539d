"""Shared fixtures: fake clock and representative upstream payloads."""

import pytest

from cricai.utilities.cache import CacheStore


class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock) -> CacheStore:
    return CacheStore(clock=clock)


def cricbuzz_match(match_id: int, state: str = "In Progress", runs1=150, overs1=30) -> dict:
    return {
        "matchInfo": {
            "matchId": match_id,
            "seriesName": "Australia tour of India, 2024",
            "matchDesc": "3rd ODI",
            "matchFormat": "ODI",
            "startDate": "1704101400000",
            "endDate": "1704130200000",
            "state": state,
            "status": "India need 100 runs",
            "team1": {"teamId": 2, "teamName": "India", "teamSName": "IND"},
            "team2": {"teamId": 4, "teamName": "Australia", "teamSName": "AUS"},
            "venueInfo": {"ground": "Wankhede Stadium", "city": "Mumbai"},
        },
        "matchScore": {
            "team1Score": {"inngs1": {"inningsId": 1, "runs": runs1, "wickets": 3, "overs": overs1}},
            "team2Score": {"inngs1": {"inningsId": 2, "runs": 249, "wickets": 10, "overs": 50}},
        },
    }


def cricbuzz_matches_payload(*matches: dict) -> dict:
    return {
        "typeMatches": [
            {
                "matchType": "International",
                "seriesMatches": [
                    {
                        "seriesAdWrapper": {
                            "seriesId": 7000,
                            "seriesName": "Australia tour of India, 2024",
                            "matches": list(matches),
                        }
                    },
                    {"adDetail": {"name": "native_matches", "layout": "native_large"}},
                ],
            }
        ]
    }


def espn_event(event_id: str, state: str = "in", score1="150/3 (30 ov)") -> dict:
    return {
        "id": event_id,
        "date": "2024-01-01T09:30Z",
        "description": "3rd ODI",
        "league": {"name": "Australia tour of India, 2024"},
        "competitions": [
            {
                "description": "3rd ODI",
                "class": {"generalClassCard": "ODI"},
                "venue": {"fullName": "Wankhede Stadium", "address": {"city": "Mumbai"}},
                "status": {
                    "type": {
                        "state": state,
                        "description": "In Progress",
                        "detail": "India need 100 runs",
                    }
                },
                "competitors": [
                    {
                        "id": "6",
                        "order": 1,
                        "team": {"id": "6", "displayName": "India", "abbreviation": "IND"},
                        "score": score1,
                    },
                    {
                        "id": "2",
                        "order": 2,
                        "team": {"id": "2", "displayName": "Australia", "abbreviation": "AUS"},
                        "score": "249 (50 ov)",
                    },
                ],
            }
        ],
    }


@pytest.fixture
def cricbuzz_live() -> dict:
    return cricbuzz_matches_payload(cricbuzz_match(101), cricbuzz_match(102))


@pytest.fixture
def espn_scoreboard() -> dict:
    return {
        "leagues": [{"name": "International"}],
        "events": [
            espn_event("101", state="in"),
            espn_event("201", state="post"),
            espn_event("301", state="pre", score1=None),
        ],
    }


@pytest.fixture
def cricbuzz_scorecard() -> dict:
    return {
        "matchHeader": {"matchId": 101},
        "scoreCard": [
            {
                "inningsId": 1,
                "batTeamDetails": {
                    "batTeamName": "India",
                    "batTeamShortName": "IND",
                    "batsmenData": {
                        "bat_1": {"batName": "Rohit Sharma", "runs": 10, "balls": 12,
                                  "fours": 1, "sixes": 0, "outDesc": "c Carey b Starc"},
                        "bat_2": {"batName": "Shubman Gill", "runs": 80, "balls": 64,
                                  "fours": 8, "sixes": 2, "outDesc": "b Cummins"},
                        "bat_3": {"batName": "Virat Kohli", "runs": 5, "balls": 9,
                                  "fours": 0, "sixes": 0, "outDesc": "lbw b Zampa"},
                        "bat_4": {"batName": "Shreyas Iyer", "runs": 40, "balls": 50,
                                  "fours": 3, "sixes": 1, "outDesc": "not out"},
                        "bat_5": {"batName": "KL Rahul", "runs": 1, "balls": 4,
                                  "fours": 0, "sixes": 0, "outDesc": "not out"},
                        "bat_6": {"batName": "Hardik Pandya", "runs": 0, "balls": 0,
                                  "fours": 0, "sixes": 0, "outDesc": ""},
                    },
                },
                "bowlTeamDetails": {
                    "bowlTeamName": "Australia",
                    "bowlersData": {
                        "bowl_1": {"bowlName": "Mitchell Starc", "overs": 8, "maidens": 1,
                                   "runs": 40, "wickets": 1, "economy": 99},
                        "bowl_2": {"bowlName": "Pat Cummins", "overs": 10, "maidens": 0,
                                   "runs": 45, "wickets": 2},
                        "bowl_3": {"bowlName": "Adam Zampa", "overs": "0", "maidens": 0,
                                   "runs": 12, "wickets": 1},
                    },
                },
                "scoreDetails": {"runs": 150, "wickets": 3, "overs": 30},
            }
        ],
    }
