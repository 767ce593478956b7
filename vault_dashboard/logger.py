"""Logging system for the vault dashboard."""

import csv
import sys
import threading
from dataclasses import dataclass, asdict, field, fields
from datetime import datetime
from typing import Dict, Type, Optional
from pathlib import Path
from config import LogConfig

@dataclass
class LogEvent:
    """Base class for all log events."""
    timestamp: Optional[datetime] = field(default=None, init=False)

    def __post_init__(self):
        if self.timestamp is None:
            self.timestamp = datetime.now()

@dataclass
class ErrorEvent(LogEvent):
    """Log event for error conditions."""
    error_type: str
    message: str
    source: str
    context: Optional[str] = None

@dataclass
class APIEvent(LogEvent):
    """Interaction event with API"""
    type: str
    message: str

@dataclass
class RequestEvent(LogEvent):
    """A completed HTTP request against the DeFindex API."""
    method: str
    endpoint: str
    network: Optional[str] = None
    status: Optional[int] = None
    duration_ms: Optional[int] = None

@dataclass
class StaleResponseEvent(LogEvent):
    """A history response that arrived after a newer request was issued."""
    request_id: int
    latest_request_id: int
    period: str
    interval: str


class Logger:
    """Thread-safe logger that writes events to domain-specific CSV files."""

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self.log_dir = Path("logs")
            self._file_handles: Dict[str, Dict[str, tuple[Path, list[str]]]] = {}
            self._initialized = True

    def _rotate_if_needed(
        self,
        domain: str,
        event_name: str,
        csv_path: Path,
        headers: list[str],
    ) -> Path:
        """Rotate log file if it would exceed MAX_LOG_FILE_BYTES."""
        max_bytes = LogConfig.MAX_LOG_FILE_BYTES
        if csv_path.exists() and csv_path.stat().st_size >= max_bytes:
            domain_dir = csv_path.parent
            index = 2
            while True:
                new_path = domain_dir / f"{event_name}_{index}.csv"
                if not new_path.exists() or new_path.stat().st_size < max_bytes:
                    if not new_path.exists():
                        with open(new_path, "w", newline="") as f:
                            writer = csv.writer(f)
                            writer.writerow(headers)
                    csv_path = new_path
                    break
                index += 1
            self._file_handles[domain][event_name] = (csv_path, headers)
        return csv_path

    def _ensure_log_file(self, domain: str, event_type: Type[LogEvent]) -> tuple[Path, list[str]]:
        """Ensure the log file exists and return its path and headers."""
        if domain not in self._file_handles:
            self._file_handles[domain] = {}

        event_name = event_type.__name__.lower()
        if event_name not in self._file_handles[domain]:
            domain_dir = self.log_dir / domain
            domain_dir.mkdir(parents=True, exist_ok=True)

            csv_path = domain_dir / f"{event_name}.csv"
            headers = [f.name for f in fields(event_type)]

            if not csv_path.exists():
                with open(csv_path, 'w', newline='') as f:
                    writer = csv.writer(f)
                    writer.writerow(headers)

            self._file_handles[domain][event_name] = (csv_path, headers)
        else:
            csv_path, headers = self._file_handles[domain][event_name]

        csv_path = self._rotate_if_needed(domain, event_name, csv_path, headers)
        self._file_handles[domain][event_name] = (csv_path, headers)

        return self._file_handles[domain][event_name]

    def log(self, event: LogEvent, domain=LogConfig.DEFAULT_LOG_DOMAIN) -> None:
        """Log an event to its domain-specific CSV file.

        Args:
            event: The event to log
            domain: The logging domain (e.g. "api", "dashboard", "models")
        """
        if not LogConfig.ENABLED:
            return
        event_dict = asdict(event)
        row = [str(event_dict.get(f.name, '')) for f in fields(event)]

        if LogConfig.VERBOSE:
            print(f"{type(event).__name__}:", str(row))

        with self._lock:
            # an unwritable log directory must never fail the caller
            try:
                csv_path, _ = self._ensure_log_file(domain, type(event))
                with open(csv_path, 'a', newline='') as f:
                    writer = csv.writer(f)
                    writer.writerow(row)
            except OSError as e:
                print(f"Could not write {type(event).__name__} to {domain} log: {e}", file=sys.stderr)


# Global logger instance
logger = Logger()
