"""
Telemetry row ordering for the dashboard data table.

Each sortable column is a member of SortField mapped to an explicit key
function; there is no attribute lookup by name. Rows with a null value in
the sort column are placed last for both directions, and ties keep their
input order.
"""

from typing import Any, Callable, Dict, List, Optional, Sequence

from burst_analytics.models import SortField, SortOrder, TelemetryRow


ROW_SORT_KEYS: Dict[SortField, Callable[[TelemetryRow], Optional[Any]]] = {
    SortField.ADVERTISER_ID: lambda row: row.advertiser_id,
    SortField.AVG_DEPLETION_RATE: lambda row: row.avg_depletion_rate,
    SortField.SPIKES_COUNT: lambda row: row.spikes_count,
    SortField.FEATURE_DATE: lambda row: row.feature_date,
}


def sort_rows(
    rows: Sequence[TelemetryRow],
    sort_by: SortField = SortField.ADVERTISER_ID,
    sort_order: SortOrder = SortOrder.ASC,
) -> List[TelemetryRow]:
    """
    Return a new list of rows ordered by one column.

    Example:
        >>> sort_rows(rows, SortField.SPIKES_COUNT, SortOrder.DESC)[0].spikes_count
        7
    """
    key = ROW_SORT_KEYS[sort_by]
    present = [row for row in rows if key(row) is not None]
    missing = [row for row in rows if key(row) is None]

    ordered = sorted(present, key=key, reverse=sort_order == SortOrder.DESC)
    return ordered + missing
