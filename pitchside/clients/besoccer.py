"""
BeSoccer API client and payload adapters.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ..cache import DataCache
from ..config import APISettings
from ..exceptions import ProviderDataError
from ..http import HTTPClient
from ..records import PlayerIdentity, PlayerSearchResult, SeasonStats, StatRecord


class BeSoccerClient:
    """
    Provide one wrapper per provider resource: player, season stats, search.
    """

    def __init__(
        self,
        settings: Optional[APISettings] = None,
        *,
        cache: Optional[DataCache] = None,
        http: Optional[HTTPClient] = None,
    ):
        self.settings = settings or APISettings.from_env()
        self.http = http or HTTPClient(
            self.settings.besoccer_base_url,
            api_token=self.settings.besoccer_token,
            timeout=self.settings.http_timeout,
        )
        self.cache = cache or DataCache(
            self.settings.cache_dir, default_ttl=self.settings.cache_ttl
        )

    def _fetch(
        self,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        cache_key: Optional[str] = None,
        use_cache: bool = True,
    ) -> Any:
        key = cache_key or path
        if use_cache:
            cached = self.cache.get(key)
            if cached is not None:
                return cached
        payload = self.http.get(path, params=params)
        if use_cache and payload is not None:
            self.cache.set(key, payload)
        return payload

    def get_player(self, player_id: int, *, use_cache: bool = True) -> Dict[str, Any]:
        """
        Fetch descriptive details for a player.
        """
        return self._fetch(
            "player",
            params={"id": player_id},
            cache_key=f"besoccer_player_{player_id}",
            use_cache=use_cache,
        )

    def get_player_statistics(
        self, player_id: int, *, use_cache: bool = True
    ) -> Dict[str, Any]:
        """
        Fetch per-season statistics for a player, most recent season first.
        """
        return self._fetch(
            f"statistics/seasons/players/{player_id}",
            cache_key=f"besoccer_player_stats_{player_id}",
            use_cache=use_cache,
        )

    def search_players(self, name: str) -> Dict[str, Any]:
        """
        Search players by a name fragment. Never cached.
        """
        return self._fetch(
            "search/players",
            params={"name": name},
            use_cache=False,
        )


# ---------------------------------------------------------------------------
# Payload adapters
# ---------------------------------------------------------------------------


def _payload_data(payload: Any, resource: str) -> Any:
    if not isinstance(payload, Mapping) or "data" not in payload:
        raise ProviderDataError(f"Malformed {resource} payload: missing 'data'.")
    return payload["data"]


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    return None


def player_identity_from_payload(payload: Any) -> PlayerIdentity:
    data = _payload_data(payload, "player")
    if not isinstance(data, Mapping):
        raise ProviderDataError("Malformed player payload: 'data' is not an object.")
    player_id = _as_int(data.get("id"))
    display_name = data.get("display_name") or data.get("name")
    if player_id is None or not display_name:
        raise ProviderDataError("Player payload is missing 'id' or 'display_name'.")
    return PlayerIdentity(
        player_id=player_id,
        name=str(display_name),
        common_name=data.get("common_name"),
        date_of_birth=data.get("date_of_birth"),
        nationality_id=data.get("nationality_id"),
        position_id=data.get("position_id"),
        detailed_position_id=data.get("detailed_position_id"),
        height=data.get("height"),
        weight=data.get("weight"),
        image_path=data.get("image_path"),
    )


def seasons_from_payload(payload: Any) -> List[SeasonStats]:
    """
    Translate a season statistics payload, keeping provider order.

    Detail entries without an integer ``type_id`` cannot be categorised and
    are skipped; their values are kept verbatim for the extractor to judge.
    """
    data = _payload_data(payload, "statistics")
    if data is None:
        return []
    if not isinstance(data, list):
        raise ProviderDataError("Malformed statistics payload: 'data' is not a list.")
    seasons: List[SeasonStats] = []
    for entry in data:
        if not isinstance(entry, Mapping):
            continue
        records = []
        for detail in entry.get("details") or ():
            if not isinstance(detail, Mapping):
                continue
            category_id = _as_int(detail.get("type_id"))
            if category_id is None:
                continue
            records.append(StatRecord(category_id=category_id, value=detail.get("value")))
        seasons.append(SeasonStats(season_id=entry.get("season_id"), records=tuple(records)))
    return seasons


def search_results_from_payload(payload: Any, *, limit: int = 1) -> List[PlayerSearchResult]:
    data = _payload_data(payload, "search")
    if not isinstance(data, list):
        return []
    results: List[PlayerSearchResult] = []
    for entry in data:
        if not isinstance(entry, Mapping):
            continue
        player_id = _as_int(entry.get("id"))
        name = entry.get("display_name") or entry.get("name")
        if player_id is None or not name:
            continue
        team = entry.get("team")
        team_name = team.get("name") if isinstance(team, Mapping) else None
        results.append(
            PlayerSearchResult(
                player_id=player_id,
                name=str(name),
                team=team_name or "Unknown Team",
                position=entry.get("position_id"),
            )
        )
        if len(results) >= limit:
            break
    return results
