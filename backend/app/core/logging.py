"""
Structured logging configuration

- JSON output for production and for log files
- Coloured, human-readable output for development
- Request and run correlation IDs carried in context variables
- Redaction of credential-looking keys
"""

import logging
import sys
import json
import os
from typing import Any, Dict, Optional
from datetime import datetime, UTC
from contextvars import ContextVar
from pathlib import Path
from logging.handlers import RotatingFileHandler

SENSITIVE_KEY_TOKENS = ("password", "secret", "token", "api_key", "apikey", "authorization")

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
run_id_var: ContextVar[Optional[str]] = ContextVar("run_id", default=None)

# Attributes every LogRecord has; anything else came in through `extra=`
_STANDARD_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
    "taskName",
}


def _is_sensitive_key(key: str) -> bool:
    lowered = key.lower()
    return any(token in lowered for token in SENSITIVE_KEY_TOKENS)


def redact(key: str, value: Any) -> Any:
    """Recursively replace values stored under credential-looking keys"""
    if isinstance(value, dict):
        return {
            k: "***REDACTED***" if _is_sensitive_key(str(k)) else redact(str(k), v)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return type(value)(redact(key, item) for item in value)
    if isinstance(value, str) and _is_sensitive_key(key):
        return "***REDACTED***"
    return value


def _correlation_ids() -> Dict[str, str]:
    ids = {}
    request_id = request_id_var.get()
    if request_id:
        ids["request_id"] = request_id
    run_id = run_id_var.get()
    if run_id:
        ids["run_id"] = run_id
    return ids


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging in production"""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        log_data.update(_correlation_ids())

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        extra = {
            key: value
            for key, value in vars(record).items()
            if key not in _STANDARD_RECORD_ATTRS
            and not key.startswith("_")
            and key not in log_data
            and not callable(value)
        }
        if extra:
            log_data["extra"] = redact("extra", extra)

        return json.dumps(log_data, default=str)


class DevelopmentFormatter(logging.Formatter):
    """Human-readable formatter for development"""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
        'RESET': '\033[0m'
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
        reset = self.COLORS['RESET']
        timestamp = datetime.fromtimestamp(record.created).strftime('%H:%M:%S.%f')[:-3]

        ids = _correlation_ids()
        context_parts = []
        if "request_id" in ids:
            context_parts.append(f"req:{ids['request_id'][:8]}")
        if "run_id" in ids:
            context_parts.append(f"run:{ids['run_id'][:8]}")
        context = f" [{', '.join(context_parts)}]" if context_parts else ""

        log_line = (
            f"{color}{timestamp}{reset} "
            f"{color}{record.levelname:8s}{reset} "
            f"{record.name:30s}{context} "
            f"{record.getMessage()}"
        )
        if record.exc_info:
            log_line += "\n" + self.formatException(record.exc_info)
        return log_line


class LoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that merges bound context into every record"""

    def process(self, msg: str, kwargs: Any) -> tuple:
        extra = dict(kwargs.get("extra") or {})
        extra.update(_correlation_ids())
        if self.extra:
            for key, value in self.extra.items():
                extra.setdefault(key, value)
        kwargs["extra"] = extra
        return msg, kwargs


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    use_json: bool = False,
) -> None:
    """
    Configure application logging

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path; file logs are always JSON
        use_json: If True, console output is JSON; otherwise human-readable
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(StructuredFormatter() if use_json else DevelopmentFormatter())
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=int(os.getenv("LOG_MAX_BYTES", str(20 * 1024 * 1024))),
            backupCount=int(os.getenv("LOG_BACKUP_COUNT", "5")),
            encoding="utf-8",
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(StructuredFormatter())
        root_logger.addHandler(file_handler)

    for noisy in ("urllib3", "httpx", "httpcore", "openai", "asyncio"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str, **extra: Any) -> LoggerAdapter:
    """
    Get a logger with optional bound context

    Example:
        logger = get_logger(__name__, component="segment_pipeline")
        logger.info("Segment generated", extra={"segment_number": 3})
    """
    return LoggerAdapter(logging.getLogger(name), extra)


def set_request_id(request_id: str) -> None:
    """Set request ID for correlation across log messages"""
    request_id_var.set(request_id)


def set_run_id(run_id: Optional[str]) -> None:
    """Set run ID for correlation across pipeline log messages"""
    run_id_var.set(run_id)


def clear_context() -> None:
    """Clear correlation context"""
    request_id_var.set(None)
    run_id_var.set(None)


class LogTimer:
    """Context manager for timing operations with automatic logging"""

    def __init__(self, logger: logging.Logger, operation: str, level: int = logging.INFO, **extra: Any):
        self.logger = logger
        self.operation = operation
        self.level = level
        self.extra = extra
        self.start_time: Optional[float] = None
        self.duration: Optional[float] = None

    def __enter__(self) -> "LogTimer":
        self.start_time = datetime.now().timestamp()
        self.logger.log(self.level, f"Starting: {self.operation}", extra=dict(self.extra))
        return self

    def __exit__(self, exc_type, exc_val, _exc_tb) -> None:
        self.duration = datetime.now().timestamp() - self.start_time
        extra = {**self.extra, "duration_seconds": round(self.duration, 3)}

        if exc_type:
            self.logger.error(
                f"Failed: {self.operation}",
                extra={**extra, "error": str(exc_val)},
                exc_info=(exc_type, exc_val, _exc_tb),
            )
        else:
            self.logger.log(self.level, f"Completed: {self.operation}", extra=extra)
