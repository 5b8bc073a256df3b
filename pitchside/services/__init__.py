"""Tool dispatch services for player statistics."""

from .mock_provider import MockProvider
from .player_stats import (
    NO_CURRENT_SEASON,
    NO_PLAYERS_FOUND,
    NO_STATISTICS,
    PlayerStatsGateway,
    ToolError,
    default_gateway,
)

__all__ = [
    "MockProvider",
    "NO_CURRENT_SEASON",
    "NO_PLAYERS_FOUND",
    "NO_STATISTICS",
    "PlayerStatsGateway",
    "ToolError",
    "default_gateway",
]
