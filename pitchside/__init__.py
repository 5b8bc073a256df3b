"""
Pitchside football player statistics package.
"""

from .config import APISettings
from .cache import DataCache
from .exceptions import APIClientError, APINotFoundError, APIRateLimitError, ProviderDataError
from .services import PlayerStatsGateway

__all__ = [
    "APISettings",
    "DataCache",
    "APIClientError",
    "APINotFoundError",
    "APIRateLimitError",
    "ProviderDataError",
    "PlayerStatsGateway",
    "register_player_stats_tools",
    "init_session_with_player_stats_tools",
]


def __getattr__(name):
    if name in {"register_player_stats_tools", "init_session_with_player_stats_tools"}:
        from .agent_tools import player_stats  # type: ignore import cycles

        return getattr(player_stats, name)
    raise AttributeError(f"module 'pitchside' has no attribute '{name}'")
