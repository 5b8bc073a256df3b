from __future__ import annotations

import asyncio
import threading
from dataclasses import replace

from pitchside.analytics import StatCategory
from pitchside.exceptions import APIClientError
from pitchside.services import (
    NO_CURRENT_SEASON,
    NO_PLAYERS_FOUND,
    NO_STATISTICS,
    MockProvider,
    PlayerStatsGateway,
)
from pitchside.services.mock_provider import MOCK_PLAYERS

GOALS = StatCategory.GOALS
ASSISTS = StatCategory.ASSISTS
RATING = StatCategory.RATING


def _stats_entry(season_id, values):
    return {
        "season_id": season_id,
        "details": [{"type_id": int(cid), "value": value} for cid, value in values.items()],
    }


class DummyProvider:
    def __init__(self, *, players=None, statistics=None, search=None, error=None, failing_ids=None):
        self._players = players or {}
        self._statistics = statistics or {}
        self._search = search or {"data": []}
        self._error = error
        self._failing_ids = failing_ids
        self.calls = []

    def get_player(self, player_id):
        self.calls.append(("player", player_id))
        return {"data": self._players[player_id]}

    def get_player_statistics(self, player_id):
        self.calls.append(("statistics", player_id))
        if self._error is not None and (self._failing_ids is None or player_id in self._failing_ids):
            raise self._error
        return {"data": self._statistics.get(player_id, [])}

    def search_players(self, name):
        self.calls.append(("search", name))
        return self._search


def _mock_gateway(**kwargs):
    return PlayerStatsGateway(enable_mocks=True, **kwargs)


def test_analyze_mock_player():
    result = asyncio.run(_mock_gateway().analyze_player(1))
    assert result["status"] == "ok"
    assert result["playerInfo"]["name"] == "L. Messi"
    assert result["currentSeason"]["season_id"] == 2024
    assert result["currentSeason"]["statistics"][GOALS]["total"] == 12
    assert result["currentSeason"]["statistics"][RATING] == {"total": 7.92}
    assert result["previousSeason"]["season_id"] == 2023
    assert result["typeIds"]["GOALS"] == 52


def test_analyze_player_with_single_season_has_no_previous():
    statistics = {1: [_stats_entry(2024, {GOALS: {"total": 3}})]}
    gateway = _mock_gateway(mock_provider=MockProvider(statistics=statistics))
    result = asyncio.run(gateway.analyze_player(1))
    assert result["previousSeason"] is None


def test_analyze_player_without_statistics_returns_object():
    result = asyncio.run(_mock_gateway().analyze_player(3))
    assert result["status"] == "no_statistics"
    assert result["playerInfo"]["name"] == "J. Alvarez"
    assert result["currentSeason"] is None
    assert result["error"] == NO_CURRENT_SEASON


def test_analyze_unknown_player_returns_error_string():
    result = asyncio.run(_mock_gateway().analyze_player(999))
    assert isinstance(result, str)
    assert result.startswith("Error analyzing player: API request failed: 404")
    assert result.endswith("Please try again later.")


def test_historical_aggregates_all_seasons():
    statistics = {
        1: [
            _stats_entry(2024, {GOALS: {"total": 10}, RATING: {"total": 7}}),
            _stats_entry(2023, {GOALS: {"total": 10}, RATING: {"total": 8}}),
            _stats_entry(2022, {GOALS: {"total": 10}, RATING: 9}),
            _stats_entry(2021, {GOALS: {"total": 10}, RATING: {"total": 8}}),
        ]
    }
    gateway = _mock_gateway(mock_provider=MockProvider(statistics=statistics))
    result = asyncio.run(gateway.analyze_historical_stats(1))
    assert result["totalSeasons"] == 4
    assert result["seasonIds"] == [2024, 2023, 2022, 2021]
    assert result["statistics"][GOALS] == {"total": 40}
    assert result["statistics"][RATING] == {"total": 8.0}


def test_historical_default_fixtures():
    result = asyncio.run(_mock_gateway().analyze_historical_stats(1))
    assert result["statistics"][GOALS]["total"] == 55
    assert result["statistics"][RATING]["total"] == 7.97
    assert result["statistics"][StatCategory.SUBSTITUTIONS] == {"in": 3, "out": 5}


def test_historical_without_statistics():
    result = asyncio.run(_mock_gateway().analyze_historical_stats(3))
    assert result["status"] == "no_statistics"
    assert result["totalSeasons"] == 0
    assert result["statistics"] == {}
    assert result["error"] == NO_STATISTICS


def test_compare_mock_players():
    result = asyncio.run(_mock_gateway().compare_players([1, 2], "bar", [GOALS, ASSISTS]))
    chart = result["chartData"]
    assert chart["players"] == ["L. Messi", "C. Ronaldo"]
    assert chart["chartType"] == "bar"
    assert chart["data"] == [
        {"label": "goals", "L. Messi": 12, "C. Ronaldo": 25},
        {"label": "assists", "L. Messi": 9, "C. Ronaldo": 4},
    ]


def test_compare_defaults_categories():
    result = asyncio.run(_mock_gateway().compare_players([1, 2], "radar"))
    labels = [row["label"] for row in result["chartData"]["data"]]
    assert labels == ["goals", "assists", "appearances", "rating"]


def test_compare_fails_when_a_player_has_no_statistics():
    statistics = {1: [_stats_entry(2024, {GOALS: {"total": 12}})]}
    gateway = _mock_gateway(mock_provider=MockProvider(statistics=statistics))
    result = asyncio.run(gateway.compare_players([1, 2], "bar", [GOALS]))
    assert isinstance(result, str)
    assert result.startswith("Error comparing players")
    assert "C. Ronaldo" in result


def test_compare_rejects_bad_arguments():
    gateway = _mock_gateway()
    single = asyncio.run(gateway.compare_players([1, 1], "bar", [GOALS]))
    assert single.startswith("Error comparing players: Provide at least two")
    chart = asyncio.run(gateway.compare_players([1, 2], "pie", [GOALS]))
    assert "Unsupported chart type" in chart


def test_compare_disambiguates_duplicate_names():
    players = [dict(player) for player in MOCK_PLAYERS]
    players[1]["display_name"] = "L. Messi"
    gateway = _mock_gateway(mock_provider=MockProvider(players=players))
    result = asyncio.run(gateway.compare_players([1, 2], "bar", [GOALS]))
    assert result["chartData"]["players"] == ["L. Messi (1)", "L. Messi (2)"]


def test_search_returns_top_match():
    result = asyncio.run(_mock_gateway().search_players("messi"))
    assert result == [{"id": 1, "name": "L. Messi", "team": "Mock Team FC", "position": 27}]


def test_search_not_found_never_raises():
    assert asyncio.run(_mock_gateway().search_players("zzzznotaplayer")) == NO_PLAYERS_FOUND
    assert asyncio.run(_mock_gateway().search_players("   ")) == NO_PLAYERS_FOUND


def test_live_search_defaults_team_name():
    provider = DummyProvider(
        search={"data": [{"id": 7, "display_name": "X. Player", "team": None, "position_id": 26}]}
    )
    gateway = PlayerStatsGateway(provider)
    assert gateway.source == "live"
    result = asyncio.run(gateway.search_players("player"))
    assert result == [{"id": 7, "name": "X. Player", "team": "Unknown Team", "position": 26}]


def test_live_upstream_failure_becomes_string():
    provider = DummyProvider(
        players={5: {"id": 5, "display_name": "E. Rror"}},
        error=APIClientError("API request failed: 500 Internal Server Error", status_code=500),
    )
    result = asyncio.run(PlayerStatsGateway(provider).analyze_player(5))
    assert result == (
        "Error analyzing player: API request failed: 500 Internal Server Error. "
        "Please try again later."
    )


def test_live_malformed_payload_becomes_string():
    provider = DummyProvider(players={5: {"display_name": "No Id"}})
    result = asyncio.run(PlayerStatsGateway(provider).analyze_player(5))
    assert result.startswith("Error analyzing player: Player payload is missing")


def test_live_fetches_run_concurrently():
    barrier = threading.Barrier(2, timeout=5)

    class BarrierProvider(DummyProvider):
        def get_player(self, player_id):
            barrier.wait()
            return super().get_player(player_id)

        def get_player_statistics(self, player_id):
            barrier.wait()
            return super().get_player_statistics(player_id)

    provider = BarrierProvider(
        players={5: {"id": 5, "display_name": "C. Oncurrent"}},
        statistics={5: [_stats_entry(2024, {GOALS: {"total": 1}})]},
    )
    result = asyncio.run(PlayerStatsGateway(provider).analyze_player(5))
    assert result["status"] == "ok"
    assert sorted(call[0] for call in provider.calls) == ["player", "statistics"]


def test_mock_and_live_paths_agree():
    mock_gateway = _mock_gateway()
    live_gateway = PlayerStatsGateway(MockProvider(), enable_mocks=False)
    assert live_gateway.source == "live"
    for operation, args in (
        ("analyze_player", (1,)),
        ("analyze_historical_stats", (2,)),
        ("compare_players", ([1, 2], "bar", [GOALS])),
        ("search_players", ("ronaldo",)),
    ):
        mock_result = asyncio.run(getattr(mock_gateway, operation)(*args))
        live_result = asyncio.run(getattr(live_gateway, operation)(*args))
        assert mock_result == live_result


def test_mocks_flag_read_from_settings(settings):
    assert PlayerStatsGateway(settings=settings).source == "mock"
    live_settings = replace(settings, enable_mocks=False)
    assert PlayerStatsGateway(settings=live_settings).source == "live"


def _two_live_players(**kwargs):
    return DummyProvider(
        players={
            5: {"id": 5, "display_name": "F. Irst"},
            6: {"id": 6, "display_name": "S. Econd"},
        },
        statistics={
            5: [_stats_entry(2024, {GOALS: {"total": 5}})],
            6: [_stats_entry(2024, {GOALS: {"total": 6}})],
        },
        **kwargs,
    )


def test_compare_names_the_player_whose_fetch_failed():
    provider = _two_live_players(
        error=APIClientError("API request failed: 500 Internal Server Error", status_code=500),
        failing_ids={6},
    )
    result = asyncio.run(PlayerStatsGateway(provider).compare_players([5, 6], "bar", [GOALS]))
    assert isinstance(result, str)
    assert result == (
        "Error comparing players: Failed to fetch player 6: "
        "API request failed: 500 Internal Server Error. Please try again later."
    )
    assert result.status_code == 500


def test_compare_fetches_players_concurrently():
    barrier = threading.Barrier(2, timeout=5)

    class BarrierProvider(DummyProvider):
        def get_player(self, player_id):
            barrier.wait()
            return super().get_player(player_id)

    provider = BarrierProvider(
        players={
            5: {"id": 5, "display_name": "F. Irst"},
            6: {"id": 6, "display_name": "S. Econd"},
        },
        statistics={
            5: [_stats_entry(2024, {GOALS: {"total": 5}})],
            6: [_stats_entry(2024, {GOALS: {"total": 6}})],
        },
    )
    result = asyncio.run(PlayerStatsGateway(provider).compare_players([5, 6], "bar", [GOALS]))
    assert result["chartData"]["data"] == [{"label": "goals", "F. Irst": 5, "S. Econd": 6}]


def test_failures_carry_a_status_code():
    gateway = _mock_gateway()
    assert asyncio.run(gateway.search_players("zzzznotaplayer")).status_code == 404
    assert asyncio.run(gateway.analyze_player(999)).status_code == 404
    assert asyncio.run(gateway.compare_players([1, 3], "bar", [GOALS])).status_code == 404
    assert asyncio.run(gateway.compare_players([1], "bar", [GOALS])).status_code == 400
