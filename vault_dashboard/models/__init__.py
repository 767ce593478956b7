from .base_model import BaseModel
from .enums import Network, HistoryPeriod, HistoryInterval
from .vault_info import VaultInfo, VaultRoles, FeesBps, Asset, Strategy
from .apy import VaultAPY
from .history import (
    HistoryRecord,
    HistoryResult,
    CurrentState,
    HistoryMetrics,
    PeriodMetrics,
    FullPeriodMetrics,
)
from .balance import VaultBalance
from .fetch_outcome import FetchOutcome, VaultSnapshot
from .chart_point import ChartPoint

__all__ = [
    "BaseModel",
    "Network",
    "HistoryPeriod",
    "HistoryInterval",
    "VaultInfo",
    "VaultRoles",
    "FeesBps",
    "Asset",
    "Strategy",
    "VaultAPY",
    "HistoryRecord",
    "HistoryResult",
    "CurrentState",
    "HistoryMetrics",
    "PeriodMetrics",
    "FullPeriodMetrics",
    "VaultBalance",
    "FetchOutcome",
    "VaultSnapshot",
    "ChartPoint",
]
