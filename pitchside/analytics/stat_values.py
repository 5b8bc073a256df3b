"""Normalisation of provider stat records into named numeric fields."""
from __future__ import annotations

from numbers import Real
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from ..records import SeasonStats, StatRecord

Number = Union[int, float]
NamedFields = Dict[str, Number]
RecordLike = Union[StatRecord, Mapping[str, Any]]


def _is_number(value: Any) -> bool:
    # bool is a subclass of int but never a statistic
    return isinstance(value, Real) and not isinstance(value, bool)


def record_category(record: RecordLike) -> Optional[int]:
    """Category id of a record, accepting adapter dicts (``type_id``) too."""
    if isinstance(record, StatRecord):
        return record.category_id
    if isinstance(record, Mapping):
        for key in ("category_id", "type_id"):
            value = record.get(key)
            if isinstance(value, int) and not isinstance(value, bool):
                return value
    return None


def record_value(record: RecordLike) -> Any:
    """Raw value of a record, or None for unrecognised shapes."""
    if isinstance(record, StatRecord):
        return record.value
    if isinstance(record, Mapping):
        return record.get("value")
    return None


def fields_from_value(value: Any) -> NamedFields:
    """
    Discriminate a raw stat value.

    Mappings keep only their numeric entries, a bare number becomes
    ``{"total": value}`` and anything else normalises to an empty mapping.
    """
    if isinstance(value, Mapping):
        return {str(key): item for key, item in value.items() if _is_number(item)}
    if _is_number(value):
        return {"total": value}
    return {}


def extract_stat_value(records: Iterable[RecordLike], category_id: int) -> NamedFields:
    """Fields of the first record matching ``category_id``; ``{}`` when absent."""
    for record in records or ():
        if record_category(record) == category_id:
            return fields_from_value(record_value(record))
    return {}


def map_season_statistics(records: Iterable[RecordLike]) -> Dict[int, NamedFields]:
    """
    Build the category -> fields table for one season.

    Every category present in ``records`` appears exactly once; when a
    category repeats, the first record wins. Categories that are absent from
    the input are never synthesised.
    """
    statistics: Dict[int, NamedFields] = {}
    for record in records or ():
        category_id = record_category(record)
        if category_id is None or category_id in statistics:
            continue
        statistics[category_id] = extract_stat_value((record,), category_id)
    return statistics


def normalize_season(season: SeasonStats) -> Dict[str, Any]:
    """Season id plus its category -> fields table."""
    return {
        "season_id": season.season_id,
        "statistics": map_season_statistics(season.records),
    }
