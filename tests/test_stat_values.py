from __future__ import annotations

from pitchside.analytics import (
    StatCategory,
    extract_stat_value,
    fields_from_value,
    map_season_statistics,
    normalize_season,
)
from pitchside.records import SeasonStats, StatRecord


def test_extract_from_empty_records():
    assert extract_stat_value([], StatCategory.GOALS) == {}
    assert extract_stat_value(None, 999) == {}


def test_extract_scalar_value_becomes_total():
    records = [StatRecord(category_id=52, value=7)]
    assert extract_stat_value(records, 52) == {"total": 7}


def test_extract_drops_non_numeric_fields():
    records = [StatRecord(category_id=10, value={"a": 3, "b": "x"})]
    assert extract_stat_value(records, 10) == {"a": 3}


def test_extract_uses_first_matching_record():
    records = [
        StatRecord(category_id=10, value={"total": 1}),
        StatRecord(category_id=10, value={"total": 2}),
    ]
    assert extract_stat_value(records, 10) == {"total": 1}


def test_extract_accepts_adapter_dicts():
    records = [{"type_id": 79, "value": {"total": 4}}, {"category_id": 52, "value": 2}]
    assert extract_stat_value(records, 79) == {"total": 4}
    assert extract_stat_value(records, 52) == {"total": 2}


def test_malformed_values_normalise_to_empty():
    assert fields_from_value(None) == {}
    assert fields_from_value("7.5") == {}
    assert fields_from_value(True) == {}
    assert fields_from_value({"in": 3, "flag": False}) == {"in": 3}
    assert fields_from_value(7.25) == {"total": 7.25}


def test_map_season_keeps_each_category_once():
    records = [
        StatRecord(category_id=10, value={"total": 1}),
        StatRecord(category_id=20, value=5),
        StatRecord(category_id=10, value={"total": 9}),
    ]
    statistics = map_season_statistics(records)
    assert set(statistics) == {10, 20}
    assert statistics[10] == {"total": 1}
    assert statistics[20] == {"total": 5}


def test_map_season_does_not_synthesise_missing_categories():
    statistics = map_season_statistics([StatRecord(category_id=52, value=None)])
    assert statistics == {52: {}}
    assert StatCategory.ASSISTS not in statistics


def test_normalize_season_shape():
    season = SeasonStats(season_id=2024, records=(StatRecord(59, {"in": 3, "out": 5}),))
    assert normalize_season(season) == {
        "season_id": 2024,
        "statistics": {59: {"in": 3, "out": 5}},
    }
