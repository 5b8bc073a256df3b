"""
Provider-neutral value objects passed between adapters and the stats pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple


@dataclass(frozen=True)
class StatRecord:
    """
    A single provider statistic: a category id plus a scalar or named-field value.
    """

    category_id: int
    value: Any


@dataclass(frozen=True)
class SeasonStats:
    season_id: Any
    records: Tuple[StatRecord, ...] = ()


@dataclass(frozen=True)
class PlayerIdentity:
    """
    Descriptive attributes of a player, passed through to the agent unchanged.
    """

    player_id: int
    name: str
    common_name: Optional[str] = None
    date_of_birth: Optional[str] = None
    nationality_id: Optional[int] = None
    position_id: Optional[int] = None
    detailed_position_id: Optional[int] = None
    height: Optional[float] = None
    weight: Optional[float] = None
    image_path: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "commonName": self.common_name,
            "dateOfBirth": self.date_of_birth,
            "nationality_id": self.nationality_id,
            "position_id": self.position_id,
            "detailed_position_id": self.detailed_position_id,
            "height": self.height,
            "weight": self.weight,
            "imagePath": self.image_path,
        }


@dataclass(frozen=True)
class PlayerSearchResult:
    player_id: int
    name: str
    team: str = "Unknown Team"
    position: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.player_id,
            "name": self.name,
            "team": self.team,
            "position": self.position,
        }


@dataclass(frozen=True)
class ComparisonSubject:
    """
    One participant of a comparison chart. ``records`` is None when the
    provider returned no current-season statistics for the player.
    """

    display_name: str
    records: Optional[Sequence[StatRecord]]
