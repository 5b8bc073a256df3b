"""Folding of per-season statistics into career totals."""
from __future__ import annotations

import math
from collections import defaultdict
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import AbstractSet, Dict, Iterable, Sequence, Union

from ..records import SeasonStats
from .categories import AVERAGED_CATEGORIES
from .stat_values import NamedFields, Number, RecordLike, extract_stat_value, record_category

SeasonLike = Union[SeasonStats, Iterable[RecordLike]]


def round_half_up(value: Number, places: int = 2) -> float:
    """Round to ``places`` decimals, halves away from zero; inf and nan pass through."""
    if not math.isfinite(value):
        return float(value)
    number = Decimal(str(value))
    # Enough digits for every integer digit plus the requested decimals.
    context = Context(prec=max(28, number.adjusted() + places + 2), rounding=ROUND_HALF_UP)
    return float(number.quantize(Decimal(1).scaleb(-places), context=context))


def _season_records(season: SeasonLike) -> Iterable[RecordLike]:
    if isinstance(season, SeasonStats):
        return season.records
    return season or ()


def aggregate_seasons(
    seasons: Sequence[SeasonLike],
    averaged_categories: AbstractSet[int] = AVERAGED_CATEGORIES,
) -> Dict[int, NamedFields]:
    """
    Aggregate several seasons of stat records into one category -> fields table.

    Fields are summed across seasons. Categories listed in
    ``averaged_categories`` are then divided by the number of seasons passed
    in (not the number of seasons that contained the category) and rounded
    to two decimals. An empty ``seasons`` sequence yields an empty table.

    Args:
        seasons: Season statistics in any order; each item is a
            :class:`SeasonStats` or a plain sequence of records.
        averaged_categories: Category ids reported as a per-season mean.

    Returns:
        Mapping of category id to its aggregated named fields.
    """
    seasons = list(seasons)
    if not seasons:
        return {}

    totals: Dict[int, Dict[str, Number]] = defaultdict(dict)
    for season in seasons:
        for record in _season_records(season):
            category_id = record_category(record)
            if category_id is None:
                continue
            fields = extract_stat_value((record,), category_id)
            bucket = totals[category_id]
            for key, value in fields.items():
                bucket[key] = bucket.get(key, 0) + value

    season_count = len(seasons)
    aggregated: Dict[int, NamedFields] = {}
    for category_id, fields in totals.items():
        if category_id in averaged_categories:
            fields = {
                key: round_half_up(value / season_count) for key, value in fields.items()
            }
        aggregated[category_id] = dict(fields)
    return aggregated
