"""Observability — structured JSON logging, request counter, process metrics snapshot.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (method, path, status_code, ...) surfaced when present
    - RequestCounter only moves forward; increments are lock-guarded
    - ProcessMetrics owns the counter; middleware receives it by injection
    - memory.rssBytes is current usage (null off Linux); maxRssBytes is the
      process peak and never decreases

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - setup_logging called once on startup via lifespan
"""

import gc
import json
import logging
import resource
import sys
import threading
import time
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "method", "path", "status_code", "duration_ms", "client_ip",
    "request_count", "error_code", "field", "username",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s — %(message)s",
        ))
    logging.root.handlers = [handler]
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))


class RequestCounter:
    """Monotonic, thread-safe count of inbound requests."""

    def __init__(self):
        self._value = 0
        self._lock = threading.Lock()

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        return self._value


def _max_rss_bytes() -> int:
    rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # Linux reports KiB, macOS reports bytes
    return rss if sys.platform == "darwin" else rss * 1024


def _current_rss_bytes() -> int | None:
    """Resident set size right now, from /proc (Linux only)."""
    try:
        with open("/proc/self/statm") as f:
            resident_pages = int(f.read().split()[1])
    except (OSError, IndexError, ValueError):
        return None
    return resident_pages * resource.getpagesize()


class ProcessMetrics:
    """Uptime clock and request counter for one process."""

    def __init__(self):
        self._started = time.monotonic()
        self.requests = RequestCounter()

    def uptime(self) -> float:
        return round(time.monotonic() - self._started, 3)

    def memory(self) -> dict:
        return {
            "rssBytes": _current_rss_bytes(),
            "maxRssBytes": _max_rss_bytes(),
            "gcGenerationCounts": list(gc.get_count()),
        }

    def snapshot(self, database: str) -> dict:
        """Point-in-time metrics; no windows, no histograms."""
        return {
            "uptime": self.uptime(),
            "memory": self.memory(),
            "database": database,
            "requests": self.requests.value,
            "timestamp": utc_now_iso(),
        }


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
