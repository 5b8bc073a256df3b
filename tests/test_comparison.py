from __future__ import annotations

import pytest

from pitchside.analytics import (
    CATEGORY_TABLE_VERSION,
    StatCategory,
    build_chart_payload,
    build_comparison,
    category_label,
    category_table,
)
from pitchside.records import ComparisonSubject, StatRecord


def _subjects():
    return [
        ComparisonSubject(
            display_name="A. Player",
            records=[
                StatRecord(StatCategory.GOALS, {"total": 12}),
                StatRecord(StatCategory.ASSISTS, {"total": 3}),
            ],
        ),
        ComparisonSubject(
            display_name="B. Player",
            records=[StatRecord(StatCategory.GOALS, 4)],
        ),
    ]


def test_rows_follow_category_order():
    rows = build_comparison(_subjects(), [StatCategory.ASSISTS, StatCategory.GOALS])
    assert len(rows) == 2
    assert all(len(row) == 3 for row in rows)
    assert rows[0] == {"label": "assists", "A. Player": 3, "B. Player": 0}
    assert rows[1] == {"label": "goals", "A. Player": 12, "B. Player": 4}


def test_unknown_category_label_is_numeric_string():
    rows = build_comparison(_subjects(), [4242])
    assert rows == [{"label": "4242", "A. Player": 0, "B. Player": 0}]


def test_subject_without_records_is_rejected():
    subjects = _subjects() + [ComparisonSubject(display_name="C. Player", records=None)]
    with pytest.raises(ValueError, match="C. Player"):
        build_comparison(subjects, [StatCategory.GOALS])


def test_duplicate_display_names_are_rejected():
    subjects = [
        ComparisonSubject(display_name="Same", records=[]),
        ComparisonSubject(display_name="Same", records=[]),
    ]
    with pytest.raises(ValueError):
        build_comparison(subjects, [StatCategory.GOALS])


def test_chart_payload_shape():
    payload = build_chart_payload(_subjects(), [StatCategory.GOALS], "radar")
    chart = payload["chartData"]
    assert chart["title"] == "Player Statistics Comparison"
    assert chart["description"] == "Comparing current season statistics"
    assert chart["players"] == ["A. Player", "B. Player"]
    assert chart["chartType"] == "radar"
    assert chart["data"] == [{"label": "goals", "A. Player": 12, "B. Player": 4}]


def test_chart_payload_rejects_unknown_chart_type():
    with pytest.raises(ValueError):
        build_chart_payload(_subjects(), [StatCategory.GOALS], "pie")


def test_category_table():
    table = category_table()
    assert CATEGORY_TABLE_VERSION == "1"
    assert table["GOALS"] == 52
    assert table["RATING"] == 118
    assert category_label(StatCategory.YELLOWCARDS) == "yellowcards"
