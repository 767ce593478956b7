from enum import Enum


class Network(str, Enum):
    """Deployment the API should query."""
    MAINNET = "mainnet"
    TESTNET = "testnet"


class HistoryPeriod(str, Enum):
    ALL = "all"
    DAYS_7 = "7d"
    DAYS_30 = "30d"
    DAYS_90 = "90d"
    YEAR = "1y"


class HistoryInterval(str, Enum):
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
