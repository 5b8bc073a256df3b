"""
Dispatcher between the conversational tools and the statistics provider.

Every operation fetches what it needs concurrently, pushes the provider
records through the analytics pipeline and returns either a result object or
a short error string. Nothing raised by the provider reaches the caller.
"""
from __future__ import annotations

import asyncio
import logging
from functools import lru_cache, partial
from typing import (
    AbstractSet,
    Any,
    Awaitable,
    Callable,
    Dict,
    List,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from ..analytics import (
    AVERAGED_CATEGORIES,
    CHART_TYPES,
    DEFAULT_COMPARISON_CATEGORIES,
    aggregate_seasons,
    build_chart_payload,
    category_table,
    normalize_season,
)
from ..clients.besoccer import (
    BeSoccerClient,
    player_identity_from_payload,
    search_results_from_payload,
    seasons_from_payload,
)
from ..config import APISettings
from ..exceptions import APIClientError
from ..records import ComparisonSubject, PlayerIdentity, SeasonStats
from .mock_provider import MockProvider

LOGGER = logging.getLogger(__name__)

NO_PLAYERS_FOUND = "No players found with that name. Please try with a different name or spelling."
NO_CURRENT_SEASON = "No current season statistics available for this player."
NO_STATISTICS = "No statistics available for this player."

SEARCH_RESULT_LIMIT = 1


class ToolError(str):
    """
    Message returned to the agent in place of a result.

    Compares and serialises as a plain string; ``status_code`` tells HTTP
    callers whether the failure was a missing resource, a rejected request or
    an upstream fault.
    """

    status_code: Optional[int]

    def __new__(cls, message: str, *, status_code: Optional[int] = None) -> "ToolError":
        error = super().__new__(cls, message)
        error.status_code = status_code
        return error


ToolResult = Union[str, Dict[str, Any], List[Dict[str, Any]]]


def _failure(action: str, exc: BaseException, *, status_code: Optional[int] = None) -> ToolError:
    detail = str(exc).strip().rstrip(".") or exc.__class__.__name__
    if status_code is None:
        status_code = getattr(exc, "status_code", None)
    return ToolError(f"Error {action}: {detail}. Please try again later.", status_code=status_code)


class PlayerStatsGateway:
    """
    Resolve the four player tools against a mock or live provider.

    Args:
        provider: Live provider client. Built from ``settings`` when omitted.
        settings: Runtime settings; read from the environment when needed.
        enable_mocks: Serve fixtures instead of calling the provider. Defaults
            to ``settings.enable_mocks`` unless a live provider is passed.
        mock_provider: Fixture provider used when mocks are enabled.
        averaged_categories: Categories reported as per-season means by the
            historical analysis.
    """

    def __init__(
        self,
        provider: Any = None,
        *,
        settings: Optional[APISettings] = None,
        enable_mocks: Optional[bool] = None,
        mock_provider: Optional[MockProvider] = None,
        averaged_categories: AbstractSet[int] = AVERAGED_CATEGORIES,
    ):
        if enable_mocks is None:
            if provider is not None:
                enable_mocks = False
            else:
                settings = settings or APISettings.from_env()
                enable_mocks = settings.enable_mocks
        self.settings = settings
        self.enable_mocks = enable_mocks
        self.averaged_categories = frozenset(averaged_categories)
        self._live_provider = provider
        self._mock_provider = mock_provider

    @property
    def source(self) -> str:
        return "mock" if self.enable_mocks else "live"

    @property
    def provider(self) -> Any:
        if self.enable_mocks:
            if self._mock_provider is None:
                self._mock_provider = MockProvider()
            return self._mock_provider
        if self._live_provider is None:
            self._live_provider = BeSoccerClient(self.settings or APISettings.from_env())
        return self._live_provider

    # ------------------------------------------------------------------
    # Tool operations
    # ------------------------------------------------------------------

    async def search_players(self, name: str) -> ToolResult:
        """Search for a player by name; returns the best match or a not-found message."""
        if not name or not name.strip():
            return ToolError(NO_PLAYERS_FOUND, status_code=404)
        return await self._guard("searching for player", partial(self._search, name.strip()))

    async def analyze_player(self, player_id: int) -> ToolResult:
        """Current season statistics, with the previous season for comparison."""
        return await self._guard("analyzing player", partial(self._analyze, player_id))

    async def analyze_historical_stats(self, player_id: int) -> ToolResult:
        """Statistics aggregated over every season the provider returns."""
        return await self._guard(
            "analyzing player history", partial(self._analyze_history, player_id)
        )

    async def compare_players(
        self,
        player_ids: Sequence[int],
        chart_type: str = "bar",
        categories: Optional[Sequence[int]] = None,
    ) -> ToolResult:
        """Chart-ready current season comparison; fails if any player lacks statistics."""
        return await self._guard(
            "comparing players",
            partial(self._compare, list(player_ids or ()), chart_type, categories),
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _guard(self, action: str, operation: Callable[[], Awaitable[ToolResult]]) -> ToolResult:
        LOGGER.debug("%s via %s provider", action, self.source)
        try:
            return await operation()
        except APIClientError as exc:
            LOGGER.warning("Provider failure while %s: %s", action, exc)
            return _failure(action, exc)
        except ValueError as exc:
            LOGGER.warning("Rejected request while %s: %s", action, exc)
            return _failure(action, exc, status_code=400)
        except Exception as exc:  # pylint: disable=broad-except
            LOGGER.exception("Unexpected failure while %s", action)
            return _failure(action, exc)

    async def _fetch_all(self, calls: Sequence[Callable[[], Any]]) -> List[Any]:
        # Blocking provider calls run on worker threads; the join fails as soon
        # as any one of them raises.
        return list(await asyncio.gather(*(asyncio.to_thread(call) for call in calls)))

    async def _fetch_player(self, player_id: int) -> Tuple[PlayerIdentity, List[SeasonStats]]:
        provider = self.provider
        player_payload, stats_payload = await self._fetch_all(
            [
                partial(provider.get_player, player_id),
                partial(provider.get_player_statistics, player_id),
            ]
        )
        return player_identity_from_payload(player_payload), seasons_from_payload(stats_payload)

    async def _fetch_subject(self, player_id: int) -> Tuple[PlayerIdentity, List[SeasonStats]]:
        try:
            return await self._fetch_player(player_id)
        except APIClientError as exc:
            # Keep the exception type so status and not-found handling survive.
            raise exc.__class__(
                f"Failed to fetch player {player_id}: {exc}", status_code=exc.status_code
            ) from exc

    async def _search(self, name: str) -> ToolResult:
        (payload,) = await self._fetch_all([partial(self.provider.search_players, name)])
        results = search_results_from_payload(payload, limit=SEARCH_RESULT_LIMIT)
        if not results:
            return ToolError(NO_PLAYERS_FOUND, status_code=404)
        return [result.to_dict() for result in results]

    async def _analyze(self, player_id: int) -> ToolResult:
        identity, seasons = await self._fetch_player(player_id)
        if not seasons:
            return {
                "status": "no_statistics",
                "playerInfo": identity.to_dict(),
                "currentSeason": None,
                "previousSeason": None,
                "typeIds": category_table(),
                "error": NO_CURRENT_SEASON,
            }
        # Provider order decides: first entry is current, second is previous.
        previous = normalize_season(seasons[1]) if len(seasons) > 1 else None
        return {
            "status": "ok",
            "playerInfo": identity.to_dict(),
            "currentSeason": normalize_season(seasons[0]),
            "previousSeason": previous,
            "typeIds": category_table(),
        }

    async def _analyze_history(self, player_id: int) -> ToolResult:
        identity, seasons = await self._fetch_player(player_id)
        result: Dict[str, Any] = {
            "status": "ok",
            "playerInfo": identity.to_dict(),
            "totalSeasons": len(seasons),
            "seasonIds": [season.season_id for season in seasons],
            "statistics": aggregate_seasons(seasons, self.averaged_categories),
            "typeIds": category_table(),
        }
        if not seasons:
            result["status"] = "no_statistics"
            result["error"] = NO_STATISTICS
        return result

    async def _compare(
        self,
        player_ids: List[int],
        chart_type: str,
        categories: Optional[Sequence[int]],
    ) -> ToolResult:
        if chart_type not in CHART_TYPES:
            raise ValueError(f"Unsupported chart type '{chart_type}'. Use 'radar' or 'bar'")
        unique_ids = list(dict.fromkeys(player_ids))
        if len(unique_ids) < 2:
            raise ValueError("Provide at least two different player ids to compare")
        category_ids = list(categories) if categories else list(DEFAULT_COMPARISON_CATEGORIES)

        bundles = await asyncio.gather(*(self._fetch_subject(pid) for pid in unique_ids))

        missing = [identity.name for identity, seasons in bundles if not seasons]
        if missing:
            return ToolError(
                f"Error comparing players: No statistics found for player {', '.join(missing)}. "
                "A comparison needs current season statistics for every player.",
                status_code=404,
            )

        names = [identity.name for identity, _ in bundles]
        subjects = []
        for identity, seasons in bundles:
            display_name = identity.name
            if names.count(display_name) > 1 or display_name == "label":
                display_name = f"{identity.name} ({identity.player_id})"
            subjects.append(ComparisonSubject(display_name=display_name, records=seasons[0].records))
        return build_chart_payload(subjects, category_ids, chart_type)


@lru_cache(maxsize=1)
def default_gateway() -> PlayerStatsGateway:
    """
    Return a process-wide gateway configured from the environment.
    """
    return PlayerStatsGateway(settings=APISettings.from_env())
