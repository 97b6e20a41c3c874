"""
Logging configuration for the AutoShorts service

Two output styles share the same context plumbing:
- Structured JSON lines for production and for log files
- Colourised single-line output for local development

Every record carries the request id and the job id of the coroutine that
emitted it, and credentials never reach a handler in clear text.
"""

import json
import logging
import os
import sys
from contextvars import ContextVar
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

SENSITIVE_KEY_TOKENS = ("secret", "token", "api_key", "apikey", "authorization", "credential")

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
job_id_var: ContextVar[Optional[str]] = ContextVar("job_id", default=None)

_STANDARD_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "asctime", "taskName"}


def mask_secret(value: Optional[str], visible: int = 4) -> str:
    """Render a credential as ``...abcd`` so it can be told apart in logs."""
    if not value:
        return "<empty>"
    if len(value) <= visible:
        return "..." + "*" * len(value)
    return "..." + value[-visible:]


def _is_sensitive_key(key: str) -> bool:
    lowered = key.lower()
    return any(token in lowered for token in SENSITIVE_KEY_TOKENS)


def _redact(key: str, value: Any) -> Any:
    if isinstance(value, dict):
        return {
            child_key: "***REDACTED***" if _is_sensitive_key(str(child_key)) else _redact(str(child_key), child_value)
            for child_key, child_value in value.items()
        }
    if isinstance(value, (list, tuple)):
        return type(value)(_redact(key, item) for item in value)
    if isinstance(value, str) and _is_sensitive_key(key):
        return "***REDACTED***"
    return value


def _record_extras(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_") and not callable(value)
    }


class StructuredFormatter(logging.Formatter):
    """One JSON object per line"""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }

        request_id = request_id_var.get()
        if request_id:
            payload["request_id"] = request_id
        job_id = job_id_var.get()
        if job_id:
            payload["job_id"] = job_id

        if record.exc_info:
            payload["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        extra = _record_extras(record)
        # request/job ids are already top-level
        extra.pop("request_id", None)
        extra.pop("job_id", None)
        if extra:
            payload["extra"] = _redact("extra", extra)

        return json.dumps(payload, default=str, ensure_ascii=False)


class DevelopmentFormatter(logging.Formatter):
    """Human-readable formatter for local runs"""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]

        context_parts = []
        request_id = request_id_var.get()
        if request_id:
            context_parts.append(f"req:{request_id[:8]}")
        job_id = job_id_var.get()
        if job_id:
            context_parts.append(f"job:{job_id[:8]}")
        context = f" [{', '.join(context_parts)}]" if context_parts else ""

        line = (
            f"{color}{timestamp} {record.levelname:8s}{self.RESET} "
            f"{record.name:40s}{context} {record.getMessage()}"
        )
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class LoggerAdapter(logging.LoggerAdapter):
    """Merges the adapter's fixed context into every call's ``extra``"""

    def process(self, msg: str, kwargs: Any) -> tuple:
        extra = dict(self.extra or {})
        extra.update(kwargs.get("extra") or {})
        job_id = job_id_var.get()
        if job_id:
            extra["job_id"] = job_id
        kwargs["extra"] = extra
        return msg, kwargs


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    use_json: bool = False,
) -> None:
    """
    Configure the root logger.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path of a rotating JSON log file
        use_json: Use structured JSON on the console instead of the colour format
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
            maxBytes=int(os.getenv("LOG_MAX_BYTES", str(10 * 1024 * 1024))),
            backupCount=int(os.getenv("LOG_BACKUP_COUNT", "5")),
            encoding="utf-8",
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(StructuredFormatter())
        root_logger.addHandler(file_handler)

    # The SDK and the HTTP stack are chatty at INFO
    for noisy in ("httpx", "httpcore", "google_genai", "asyncio"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str, **extra: Any) -> LoggerAdapter:
    """
    Get a logger carrying fixed context.

    Example:
        logger = get_logger(__name__, component="catch_up")
        logger.info("Slot due", extra={"slot": "morning"})
    """
    return LoggerAdapter(logging.getLogger(name), extra)


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


def set_job_id(job_id: Optional[str]) -> None:
    job_id_var.set(job_id)


def clear_context() -> None:
    request_id_var.set(None)
    job_id_var.set(None)


class LogTimer:
    """Context manager logging the start, end and duration of an operation"""

    def __init__(self, logger: logging.LoggerAdapter, operation: str, level: int = logging.INFO):
        self.logger = logger
        self.operation = operation
        self.level = level
        self.start_time: Optional[float] = None

    def __enter__(self) -> "LogTimer":
        self.start_time = datetime.now().timestamp()
        self.logger.log(self.level, f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, _exc_tb) -> None:
        duration = datetime.now().timestamp() - self.start_time
        if exc_type:
            self.logger.warning(
                f"Failed: {self.operation}",
                extra={"duration_seconds": round(duration, 3), "error": str(exc_val)},
            )
        else:
            self.logger.log(
                self.level,
                f"Completed: {self.operation}",
                extra={"duration_seconds": round(duration, 3)},
            )
