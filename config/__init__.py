from .api_config import APIConfig
from .dashboard_config import DashboardConfig
from .log_config import LogConfig

__all__ = ["APIConfig", "DashboardConfig", "LogConfig"]
