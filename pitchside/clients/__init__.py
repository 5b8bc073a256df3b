"""Statistics provider clients."""

from .besoccer import (
    BeSoccerClient,
    player_identity_from_payload,
    search_results_from_payload,
    seasons_from_payload,
)

__all__ = [
    "BeSoccerClient",
    "player_identity_from_payload",
    "search_results_from_payload",
    "seasons_from_payload",
]
