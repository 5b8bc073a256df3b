"""Normalisation and aggregation of provider player statistics."""

from .categories import (
    AVERAGED_CATEGORIES,
    CATEGORY_TABLE_VERSION,
    DEFAULT_COMPARISON_CATEGORIES,
    StatCategory,
    category_label,
    category_table,
)
from .stat_values import (
    extract_stat_value,
    fields_from_value,
    map_season_statistics,
    normalize_season,
)
from .aggregation import aggregate_seasons, round_half_up
from .comparison import CHART_TYPES, build_chart_payload, build_comparison

__all__ = [
    "AVERAGED_CATEGORIES",
    "CATEGORY_TABLE_VERSION",
    "DEFAULT_COMPARISON_CATEGORIES",
    "StatCategory",
    "category_label",
    "category_table",
    "extract_stat_value",
    "fields_from_value",
    "map_season_statistics",
    "normalize_season",
    "aggregate_seasons",
    "round_half_up",
    "CHART_TYPES",
    "build_chart_payload",
    "build_comparison",
]
