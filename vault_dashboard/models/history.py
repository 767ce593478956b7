from typing import Optional, List, Dict, Any, Union
from dataclasses import dataclass
from datetime import datetime
from .base_model import BaseModel

Numeric = Union[str, int, float]


@dataclass
class HistoryRecord(BaseModel):
    """One observation of the vault at ``timestamp``.

    ``vault_pps`` is a native decimal string. Supply, managed funds and the
    deposit/withdrawal fields are stroop integers. ``pps_change_from_previous``
    is a fraction (0.01 == 1%) and is None for the first record.
    """
    timestamp: Optional[str] = None
    vault_pps: Optional[Numeric] = None
    total_supply: Optional[Numeric] = None
    total_managed_funds: Optional[Numeric] = None
    period_deposits: Optional[Numeric] = None
    period_withdrawals: Optional[Numeric] = None
    net_deposits: Optional[Numeric] = None
    pps_change_from_previous: Optional[float] = None

    @property
    def observed_at(self) -> Optional[datetime]:
        return self.parse_timestamp(self.timestamp)


@dataclass
class CurrentState(BaseModel):
    vault_pps: Optional[Numeric] = None
    total_supply: Optional[Numeric] = None
    # One entry per asset, each carrying ``total_amount`` in stroops
    total_managed_funds: Optional[List[Dict[str, Any]]] = None


@dataclass
class PeriodMetrics(BaseModel):
    """Aggregates over a trailing window (7 or 30 days)."""
    days: Optional[int] = None
    apy: Optional[float] = None  # percentage
    pps_change: Optional[float] = None  # fraction
    net_deposits: Optional[Numeric] = None  # stroops
    net_deposits_display: Optional[str] = None


@dataclass
class FullPeriodMetrics(BaseModel):
    days: Optional[int] = None
    total_return: Optional[float] = None  # fraction
    annualized_return: Optional[float] = None  # percentage
    total_gains: Optional[Numeric] = None  # stroops
    total_gains_display: Optional[str] = None


@dataclass
class HistoryMetrics(BaseModel):
    period7d: Optional[PeriodMetrics] = None
    period30d: Optional[PeriodMetrics] = None
    full_period: Optional[FullPeriodMetrics] = None
    total_deposits: Optional[Numeric] = None
    total_deposits_display: Optional[str] = None
    total_withdrawals: Optional[Numeric] = None
    total_withdrawals_display: Optional[str] = None
    unique_depositors: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for key in ('period7d', 'period30d'):
            if key in data:
                data[key] = PeriodMetrics.from_dict(data[key])
        if 'fullPeriod' in data:
            data['fullPeriod'] = FullPeriodMetrics.from_dict(data['fullPeriod'])
        return super().from_dict(data)


@dataclass
class HistoryResult(BaseModel):
    """Response of ``GET /vault/{address}/history``."""

    data: Optional[List[HistoryRecord]] = None
    current_state: Optional[CurrentState] = None
    metrics: Optional[HistoryMetrics] = None
    period: Optional[str] = None
    interval: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict):
        """Convert API response to HistoryResult object."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if 'data' in data:
            records = HistoryRecord.from_list(data['data'])
            # malformed payloads are kept as-is so the chart can reject them
            data['data'] = records if records is not None else data['data']
        if 'currentState' in data:
            data['currentState'] = CurrentState.from_dict(data['currentState'])
        if 'metrics' in data:
            data['metrics'] = HistoryMetrics.from_dict(data['metrics'])
        return super().from_dict(data)
