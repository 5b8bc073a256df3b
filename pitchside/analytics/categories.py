"""Static table of provider statistic categories."""
from __future__ import annotations

from enum import IntEnum
from typing import Dict, FrozenSet, Tuple

CATEGORY_TABLE_VERSION = "1"


class StatCategory(IntEnum):
    """Provider category ids; changing a value changes labels and aggregation."""

    # Match participation
    APPEARANCES = 321
    LINEUPS = 322
    BENCH = 323
    MINUTES_PLAYED = 119
    CAPTAIN = 40
    SUBSTITUTIONS = 59  # in/out

    # Scoring
    GOALS = 52
    PENALTIES_SCORED = 111
    PENALTIES_MISSED = 112
    OWN_GOALS = 324
    HIT_WOODWORK = 64

    # Shooting
    SHOTS_TOTAL = 42
    SHOTS_ON_TARGET = 86
    SHOTS_OFF_TARGET = 41
    SHOTS_BLOCKED = 58

    # Passing
    PASSES = 80
    ACCURATE_PASSES = 116
    KEY_PASSES = 117
    ASSISTS = 79
    THROUGH_BALLS = 124
    THROUGH_BALLS_WON = 125
    LONG_BALLS = 122
    LONG_BALLS_WON = 123
    CROSSES_TOTAL = 98
    CROSSES_ACCURATE = 99

    # Defending
    TACKLES = 78
    INTERCEPTIONS = 100
    CLEARANCES = 101
    BLOCKS = 97
    ERROR_LEAD_TO_GOAL = 571

    # Duels
    TOTAL_DUELS = 105
    DUELS_WON = 106
    AERIALS_WON = 107
    DRIBBLE_ATTEMPTS = 108
    SUCCESSFUL_DRIBBLES = 109
    DRIBBLED_PAST = 110
    DISPOSSESSED = 94

    # Discipline
    FOULS = 56
    FOULS_DRAWN = 96
    YELLOWCARDS = 84
    REDCARDS = 83
    YELLOWRED_CARDS = 85
    OFFSIDES = 51

    # Goalkeeping
    SAVES = 57
    SAVES_INSIDEBOX = 104
    PUNCHES = 103
    GOALS_CONCEDED = 88

    RATING = 118


AVERAGED_CATEGORIES: FrozenSet[int] = frozenset({StatCategory.RATING})

DEFAULT_COMPARISON_CATEGORIES: Tuple[int, ...] = (
    StatCategory.GOALS,
    StatCategory.ASSISTS,
    StatCategory.APPEARANCES,
    StatCategory.RATING,
)

_LABELS: Dict[int, str] = {int(member): member.name.lower() for member in StatCategory}


def category_label(category_id: int) -> str:
    """Human readable label for a category id, falling back to the id itself."""
    label = _LABELS.get(category_id)
    if label is None:
        return str(category_id)
    return label


def category_table() -> Dict[str, int]:
    """Symbolic name to id mapping, echoed to the agent alongside results."""
    return {member.name: int(member) for member in StatCategory}
