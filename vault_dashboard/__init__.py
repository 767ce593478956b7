from .defindex_client import DefindexClient
from .dashboard import VaultDashboard
from .errors import (
    DashboardError,
    ConfigurationError,
    NetworkError,
    APIError,
    EmptyInputError,
)

__all__ = [
    'DefindexClient',
    'VaultDashboard',
    'DashboardError',
    'ConfigurationError',
    'NetworkError',
    'APIError',
    'EmptyInputError',
]
