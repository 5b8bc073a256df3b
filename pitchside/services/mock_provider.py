"""
In-memory provider serving static fixtures in the live provider's payload shape.
"""
from __future__ import annotations

import copy
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..analytics.categories import StatCategory
from ..exceptions import APINotFoundError


def _details(season_stat_id: int, values: Mapping[int, Any]) -> List[Dict[str, Any]]:
    return [
        {
            "id": index,
            "player_statistic_id": season_stat_id,
            "type_id": int(type_id),
            "value": value,
        }
        for index, (type_id, value) in enumerate(values.items(), start=1)
    ]


def _season(stat_id: int, player_id: int, team_id: int, season_id: int, values: Mapping[int, Any]) -> Dict[str, Any]:
    return {
        "id": stat_id,
        "player_id": player_id,
        "team_id": team_id,
        "season_id": season_id,
        "has_values": True,
        "details": _details(stat_id, values),
    }


MOCK_TEAMS: Dict[int, str] = {1: "Mock Team FC", 2: "Sample United", 3: "Fixture City"}

MOCK_PLAYERS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "team_id": 1,
        "nationality_id": 1,
        "position_id": 27,
        "detailed_position_id": 156,
        "common_name": "Messi",
        "firstname": "Lionel",
        "lastname": "Messi",
        "name": "Lionel Messi",
        "display_name": "L. Messi",
        "image_path": "https://cdn.besoccer.test/players/1.png",
        "height": 170,
        "weight": 72,
        "date_of_birth": "1987-06-24",
    },
    {
        "id": 2,
        "team_id": 2,
        "nationality_id": 2,
        "position_id": 27,
        "detailed_position_id": 151,
        "common_name": "Ronaldo",
        "firstname": "Cristiano",
        "lastname": "Ronaldo",
        "name": "Cristiano Ronaldo",
        "display_name": "C. Ronaldo",
        "image_path": "https://cdn.besoccer.test/players/2.png",
        "height": 187,
        "weight": 83,
        "date_of_birth": "1985-02-05",
    },
    {
        "id": 3,
        "team_id": 3,
        "nationality_id": 1,
        "position_id": 27,
        "detailed_position_id": 151,
        "common_name": "Alvarez",
        "firstname": "Julian",
        "lastname": "Alvarez",
        "name": "Julian Alvarez",
        "display_name": "J. Alvarez",
        "image_path": "https://cdn.besoccer.test/players/3.png",
        "height": 170,
        "weight": 71,
        "date_of_birth": "2000-01-31",
    },
]

# Seasons are listed most recent first, as the provider returns them.
MOCK_STATISTICS: Dict[int, List[Dict[str, Any]]] = {
    1: [
        _season(11, 1, 1, 2024, {
            StatCategory.GOALS: {"total": 12, "goals": 10, "penalties": 2},
            StatCategory.ASSISTS: {"total": 9},
            StatCategory.APPEARANCES: {"total": 30},
            StatCategory.MINUTES_PLAYED: {"total": 2480},
            StatCategory.SUBSTITUTIONS: {"in": 3, "out": 5},
            StatCategory.RATING: {"total": 7.92, "average": "7.92"},
        }),
        _season(12, 1, 1, 2023, {
            StatCategory.GOALS: {"total": 11},
            StatCategory.ASSISTS: {"total": 14},
            StatCategory.APPEARANCES: {"total": 32},
            StatCategory.MINUTES_PLAYED: {"total": 2710},
            StatCategory.RATING: {"total": 8.05},
        }),
        _season(13, 1, 1, 2022, {
            StatCategory.GOALS: {"total": 21},
            StatCategory.ASSISTS: {"total": 20},
            StatCategory.APPEARANCES: {"total": 41},
            StatCategory.RATING: {"total": 8.31},
        }),
        _season(14, 1, 1, 2021, {
            StatCategory.GOALS: {"total": 11},
            StatCategory.ASSISTS: {"total": 15},
            StatCategory.APPEARANCES: {"total": 34},
            StatCategory.RATING: 7.6,
        }),
    ],
    2: [
        _season(21, 2, 2, 2024, {
            StatCategory.GOALS: {"total": 25},
            StatCategory.ASSISTS: {"total": 4},
            StatCategory.APPEARANCES: {"total": 31},
            StatCategory.MINUTES_PLAYED: {"total": 2690},
            StatCategory.RATING: {"total": 7.41},
        }),
        _season(22, 2, 2, 2023, {
            StatCategory.GOALS: {"total": 35},
            StatCategory.ASSISTS: {"total": 11},
            StatCategory.APPEARANCES: {"total": 31},
            StatCategory.RATING: {"total": 7.88},
        }),
    ],
}


class MockProvider:
    """
    Drop-in replacement for the live provider client used when mocks are on.

    Fixtures are copied on construction and on every read so callers can never
    mutate the shared tables.
    """

    def __init__(
        self,
        players: Optional[Sequence[Mapping[str, Any]]] = None,
        statistics: Optional[Mapping[int, Sequence[Mapping[str, Any]]]] = None,
        *,
        teams: Optional[Mapping[int, str]] = None,
    ):
        self._players = {
            int(player["id"]): dict(player)
            for player in copy.deepcopy(list(MOCK_PLAYERS if players is None else players))
        }
        source = MOCK_STATISTICS if statistics is None else statistics
        self._statistics = {int(key): copy.deepcopy(list(value)) for key, value in source.items()}
        self._teams = dict(MOCK_TEAMS if teams is None else teams)

    def get_player(self, player_id: int) -> Dict[str, Any]:
        player = self._players.get(player_id)
        if player is None:
            raise APINotFoundError(
                f"API request failed: 404 Not Found. Player {player_id} does not exist.",
                status_code=404,
            )
        return {"data": copy.deepcopy(player)}

    def get_player_statistics(self, player_id: int) -> Dict[str, Any]:
        if player_id not in self._players:
            raise APINotFoundError(
                f"API request failed: 404 Not Found. Player {player_id} does not exist.",
                status_code=404,
            )
        return {"data": copy.deepcopy(self._statistics.get(player_id, []))}

    def search_players(self, name: str) -> Dict[str, Any]:
        needle = name.strip().lower()
        matches = []
        for player in self._players.values():
            haystacks = (player.get("display_name") or "", player.get("name") or "")
            if needle and any(needle in text.lower() for text in haystacks):
                team_id = player.get("team_id")
                team_name = self._teams.get(team_id) if team_id is not None else None
                matches.append(
                    {
                        "id": player["id"],
                        "display_name": player.get("display_name"),
                        "team": {"name": team_name} if team_name else None,
                        "position_id": player.get("position_id"),
                    }
                )
        return {"data": matches}
