"""
Structured JSON logging for the employee API

Every record carries the request it was emitted under (request id, HTTP
method, path) once ``bind_request_context`` has been entered, so log lines
from the service, the rule engine and the content client can be joined
back to one API call.
"""
import logging
import os
import sys
import time
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator

from pythonjsonlogger import jsonlogger

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

DEFAULT_LOGGER_NAME = "employee-api"

_request_context: ContextVar[Dict[str, Any]] = ContextVar("employee_request_context", default={})


def current_request_context() -> Dict[str, Any]:
    """Fields bound for the request being handled (empty outside a request)."""
    return dict(_request_context.get())


@contextmanager
def bind_request_context(**fields: Any) -> Iterator[Dict[str, Any]]:
    """
    Attach fields such as ``request_id`` to every log record emitted inside
    the block. Nested bindings add to the outer ones.

    Usage:
        with bind_request_context(request_id="abc", method="POST", path="/employees"):
            logger.info("Employee created", extra={"employee_id": employee_id})
    """
    merged = {**_request_context.get(), **fields}
    token = _request_context.set(merged)
    try:
        yield merged
    finally:
        _request_context.reset(token)


class EmployeeJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter for API log lines.

    Adds timestamp, level, logger, module, function, then the bound request
    context. Explicit ``extra`` values win over context values.
    """

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)

        if not log_record.get("timestamp"):
            log_record["timestamp"] = self.formatTime(record, self.datefmt)
        log_record["level"] = (log_record.get("level") or record.levelname).upper()
        log_record["logger"] = record.name
        log_record["module"] = record.module
        log_record["function"] = record.funcName

        for key, value in _request_context.get().items():
            log_record.setdefault(key, value)


def setup_logger(
    name: str = DEFAULT_LOGGER_NAME,
    level: str | None = None,
    format_type: str | None = None,
) -> logging.Logger:
    """
    Setup and configure a logger

    Args:
        name: Logger name
        level: Log level (defaults to env var LOG_LEVEL or INFO)
        format_type: "json" or "text" (defaults to env var LOG_FORMAT or "json")

    Returns:
        Configured logger instance
    """
    log_level = LOG_LEVELS.get((level or os.getenv("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    format_type = format_type or os.getenv("LOG_FORMAT", "json")

    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)

    if format_type == "json":
        formatter: logging.Formatter = EmployeeJsonFormatter(
            fmt="%(timestamp)s %(level)s %(logger)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    else:
        # Text format for local development
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """Return ``name``'s logger, configuring it on first use."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        return setup_logger(name)
    return logger


class log_operation:
    """
    Context manager that logs the start, end and duration of a step.

    Usage:
        with log_operation("Fetching employee content", logger=logger, role="CEO"):
            quote, joke = client.fetch_all()
    """

    def __init__(self, operation_name: str, logger: logging.Logger | None = None, **extra_fields):
        self.operation_name = operation_name
        self.logger = logger or get_logger()
        self.extra_fields = extra_fields
        self.start_time = 0.0

    def __enter__(self):
        self.start_time = time.perf_counter()
        self.logger.info(
            f"Starting: {self.operation_name}",
            extra={"operation": self.operation_name, **self.extra_fields},
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        fields = {
            "operation": self.operation_name,
            "duration_seconds": round(time.perf_counter() - self.start_time, 3),
            **self.extra_fields,
        }
        if exc_type is None:
            self.logger.info(f"Completed: {self.operation_name}", extra={**fields, "status": "success"})
        else:
            self.logger.error(
                f"Failed: {self.operation_name}",
                extra={**fields, "status": "error", "error_type": exc_type.__name__},
                exc_info=True,
            )
        return False
