from dataclasses import dataclass
from typing import Optional


@dataclass
class ChartPoint:
    """A single row of the history charts."""
    date: str
    timestamp: Optional[str]
    vault_pps: float
    total_supply: float
    total_managed_funds: float
    deposits: float
    withdrawals: float
    net_deposits: float
    pps_change: Optional[float]  # percentage, None for the first record
