from typing import Any, List, Optional, Union

from vault_dashboard.models import BaseModel, ChartPoint, HistoryResult
from .formatters import parse_number


def date_label(timestamp: Any) -> str:
    """Short axis label such as ``Jan 5``; empty when the timestamp is unusable."""
    observed = BaseModel.parse_timestamp(timestamp)
    if observed is None:
        return ""
    return f"{observed.strftime('%b')} {observed.day}"


def _float_or_zero(value: Any) -> float:
    number = parse_number(value)
    return number if number is not None else 0.0


def _pps_change_percent(value: Any) -> Optional[float]:
    if value is None:
        return None
    number = parse_number(value)
    return number * 100 if number is not None else None


def to_chart_series(history: Union[HistoryResult, dict, None]) -> List[ChartPoint]:
    """Flatten a history response into chart points, one per record, in order.

    Amounts stay in their raw units (stroops, or native decimal for PPS);
    only ``pps_change`` is rescaled to a percentage.
    """
    if isinstance(history, dict):
        history = HistoryResult.from_dict(history)
    if not isinstance(history, HistoryResult) or not isinstance(history.data, list):
        return []

    points = []
    for record in history.data:
        timestamp = getattr(record, 'timestamp', None)
        points.append(ChartPoint(
            date=date_label(timestamp),
            timestamp=timestamp,
            vault_pps=_float_or_zero(getattr(record, 'vault_pps', None)),
            total_supply=_float_or_zero(getattr(record, 'total_supply', None)),
            total_managed_funds=_float_or_zero(getattr(record, 'total_managed_funds', None)),
            deposits=_float_or_zero(getattr(record, 'period_deposits', None)),
            withdrawals=_float_or_zero(getattr(record, 'period_withdrawals', None)),
            net_deposits=_float_or_zero(getattr(record, 'net_deposits', None)),
            pps_change=_pps_change_percent(getattr(record, 'pps_change_from_previous', None)),
        ))
    return points
