"""Error types raised by the DeFindex client and the dashboard."""

from typing import Optional


class DashboardError(Exception):
    """Base class for errors surfaced to the dashboard user."""


class ConfigurationError(DashboardError):
    """The API key is missing; no request can be made until it is set."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message
            or "DEFINDEX_API_KEY is not set. Please configure your API key in the environment variables."
        )


class NetworkError(DashboardError):
    """The request never reached the API (DNS, refused connection, CORS)."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message
            or "Network error: Unable to connect to API. Please check your internet connection and CORS settings."
        )


class APIError(DashboardError):
    """The API answered with a non-2xx status."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status


class EmptyInputError(DashboardError, ValueError):
    """A required address was left empty."""

    def __init__(self, message: str = "Please enter a vault address"):
        super().__init__(message)
