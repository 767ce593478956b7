from dataclasses import dataclass, field
from typing import Dict, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class FetchOutcome(Generic[T]):
    """Result of one API call: a value on success, a message on failure.

    ``error`` set means the latest fetch failed. ``value`` may still hold the
    result of an earlier successful fetch, which stays on display.
    """
    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "FetchOutcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: BaseException) -> "FetchOutcome[T]":
        return cls(error=str(error) or type(error).__name__)


@dataclass
class VaultSnapshot:
    """Everything fetched by a single "analyze vault" action."""
    info: FetchOutcome = field(default_factory=FetchOutcome)
    apy: FetchOutcome = field(default_factory=FetchOutcome)
    history: FetchOutcome = field(default_factory=FetchOutcome)

    @property
    def errors(self) -> Dict[str, Optional[str]]:
        return {
            "info": self.info.error,
            "apy": self.apy.error,
            "history": self.history.error,
        }

