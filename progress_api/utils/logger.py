"""
Logging Configuration for the Progress API
==========================================
Provides:
- Human-readable colored console logs / structured JSON file logs
- Correlation IDs for request tracing (one per inbound HTTP request)
- File-based logging with daily rotation when a log directory is configured
- Upstream call and counter update logging helpers
"""

import json
import logging
import logging.handlers
import os
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Optional


# ============================================================================
# Correlation ID management (per request context)
# ============================================================================

_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def get_correlation_id() -> str:
    """Get the correlation ID of the current request, or an empty string."""
    return _correlation_id.get() or ""


def set_correlation_id(cid: Optional[str] = None) -> str:
    """Set a new correlation ID for this request. Returns the ID."""
    cid = cid or str(uuid.uuid4())[:8]
    _correlation_id.set(cid)
    return cid


def clear_correlation_id():
    """Clear the correlation ID after a request completes."""
    _correlation_id.set(None)


# ============================================================================
# Custom Formatters
# ============================================================================

class ColoredConsoleFormatter(logging.Formatter):
    """Human-readable colored formatter for console (dev mode)."""

    COLORS = {
        "DEBUG": "\033[36m",      # Cyan
        "INFO": "\033[32m",       # Green
        "WARNING": "\033[33m",    # Yellow
        "ERROR": "\033[31m",      # Red
        "CRITICAL": "\033[35m",   # Magenta
    }
    RESET = "\033[0m"

    def format(self, record):
        color = self.COLORS.get(record.levelname, self.RESET)
        component = getattr(record, "component", "SYSTEM")
        cid = getattr(record, "correlation_id", "")

        ts = datetime.now().strftime("%H:%M:%S.%f")[:-3]

        parts = [f"{color}[{ts}]", f"[{record.levelname:<7}]", f"[{component}]"]
        if cid:
            parts.append(f"[{cid}]")
        parts.append(f"{self.RESET}")

        prefix = " ".join(parts)
        message = f"{prefix} {record.getMessage()}"
        if record.exc_info and record.exc_info[0]:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


class JSONFormatter(logging.Formatter):
    """Structured JSON formatter for file logging / production."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "component": getattr(record, "component", "SYSTEM"),
            "correlation_id": getattr(record, "correlation_id", ""),
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info and record.exc_info[0]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str, ensure_ascii=False)


# ============================================================================
# Correlation-injecting Filter
# ============================================================================

class CorrelationFilter(logging.Filter):
    """Injects the request correlation ID into every log record."""

    def filter(self, record):
        record.correlation_id = get_correlation_id()
        if not hasattr(record, "component"):
            record.component = "SYSTEM"
        return True


# ============================================================================
# Logger Factory
# ============================================================================

_configured_root = False


def configure_logging(level: str = "INFO", log_dir: Optional[str] = None):
    """
    Configure the root logger once with console (and optional file) handlers.

    Args:
        level:   Console log level name
        log_dir: Directory for rotating JSON log files; console only when None
    """
    global _configured_root
    if _configured_root:
        return
    _configured_root = True

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Console handler (colored)
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(getattr(logging, level.upper(), logging.INFO))
    console.setFormatter(ColoredConsoleFormatter())
    console.addFilter(CorrelationFilter())
    root.addHandler(console)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

        # File handler (JSON, DEBUG+, daily rotation, 7 days)
        file_handler = logging.handlers.TimedRotatingFileHandler(
            os.path.join(log_dir, "progress_api.log"), when="midnight", backupCount=7, encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(JSONFormatter())
        file_handler.addFilter(CorrelationFilter())
        root.addHandler(file_handler)

    # Suppress noisy third-party loggers
    for noisy in ("httpx", "httpcore", "redis"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


class ComponentAdapter(logging.LoggerAdapter):
    """Tags every record with the component it was logged from."""

    def process(self, msg, kwargs):
        kwargs.setdefault("extra", {})
        kwargs["extra"]["component"] = self.extra.get("component", "SYSTEM")
        return msg, kwargs


def get_logger(name: str, component: Optional[str] = None) -> ComponentAdapter:
    """
    Get a logger for a specific component.

    Args:
        name:      Logger name (typically __name__)
        component: Component tag (e.g. 'NOTION', 'VISITS')
    Returns:
        ComponentAdapter that injects the component into every record.
    """
    return ComponentAdapter(logging.getLogger(name), {"component": component or name.upper()})


# ============================================================================
# Structured Logging Helpers
# ============================================================================

def log_upstream_call(logger, method: str, url: str, status_code: int = None, latency_ms: float = None):
    """Log an outbound HTTP call to an upstream API."""
    parts = [f"🌐 UPSTREAM | {method} {url}"]
    if status_code is not None:
        parts.append(f"status={status_code}")
    if latency_ms is not None:
        parts.append(f"lat={latency_ms:.0f}ms")
    logger.debug(" | ".join(parts))


def log_counter_update(logger, key: str, value: int, latency_ms: float = None):
    """Log a single counter increment."""
    parts = [f"💾 COUNTER | {_trunc(key, 120)} -> {value}"]
    if latency_ms is not None:
        parts.append(f"lat={latency_ms:.0f}ms")
    logger.debug(" | ".join(parts))


# ============================================================================
# Helpers
# ============================================================================

def _trunc(obj: Any, max_len: int = 200) -> str:
    """Truncate a value for safe log display."""
    s = str(obj)
    return s if len(s) <= max_len else s[:max_len] + "…"
