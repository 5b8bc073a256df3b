"""Chart-ready datasets comparing several players category by category."""
from __future__ import annotations

from typing import Any, Dict, List, Sequence, Union

from ..records import ComparisonSubject
from .categories import category_label
from .stat_values import Number, extract_stat_value

ComparisonRow = Dict[str, Union[str, Number]]

CHART_TYPES = ("radar", "bar")


def build_comparison(
    subjects: Sequence[ComparisonSubject],
    category_ids: Sequence[int],
) -> List[ComparisonRow]:
    """
    Produce one row per category, in the order given, with each player's total.

    A player without a value for a category is charted as 0, but a player
    without any statistics at all is rejected: callers must drop or report
    such players before charting.
    """
    names = [subject.display_name for subject in subjects]
    if len(set(names)) != len(names):
        raise ValueError(f"Player display names must be unique: {', '.join(names)}")
    if "label" in names:
        raise ValueError("'label' is reserved and cannot be used as a player name.")
    missing = [subject.display_name for subject in subjects if subject.records is None]
    if missing:
        raise ValueError(f"No statistics available for {', '.join(missing)}.")

    rows: List[ComparisonRow] = []
    for category_id in category_ids:
        row: ComparisonRow = {"label": category_label(category_id)}
        for subject in subjects:
            fields = extract_stat_value(subject.records, category_id)
            row[subject.display_name] = fields.get("total", 0)
        rows.append(row)
    return rows


def build_chart_payload(
    subjects: Sequence[ComparisonSubject],
    category_ids: Sequence[int],
    chart_type: str,
) -> Dict[str, Any]:
    """
    Wrap the comparison rows in the chart envelope rendered by the client.

    Raises:
        ValueError: If ``chart_type`` is not one of ``CHART_TYPES`` or the
            subjects cannot be compared.
    """
    if chart_type not in CHART_TYPES:
        raise ValueError(f"Unsupported chart type '{chart_type}'. Use 'radar' or 'bar'.")
    return {
        "chartData": {
            "title": "Player Statistics Comparison",
            "description": "Comparing current season statistics",
            "data": build_comparison(subjects, category_ids),
            "players": [subject.display_name for subject in subjects],
            "chartType": chart_type,
        }
    }
