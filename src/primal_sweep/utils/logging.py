"""Structured logging for primal-sweep."""

from __future__ import annotations

import json
import logging
import sys
from contextvars import ContextVar
from typing import Any

from primal_sweep.exceptions import ConfigurationError

_run_id: ContextVar[str | None] = ContextVar("run_id", default=None)


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        run_id = current_run_id()
        if run_id is not None:
            log_entry["run_id"] = run_id

        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra"):
            log_entry["extra"] = record.extra

        return json.dumps(log_entry, default=str)


class RunTracer:
    """Context manager that attaches a run_id to all log records.

    Usage::

        with RunTracer("SIR/Control/a=0.1/l=0.5"):
            logger.info("Integrating")  # includes run_id
        # run_id cleared after exit
    """

    def __init__(self, run_id: str):
        self.run_id = run_id
        self._token = None

    def __enter__(self) -> RunTracer:
        self._token = _run_id.set(self.run_id)
        return self

    def __exit__(self, *exc: Any) -> None:
        if self._token is not None:
            _run_id.reset(self._token)


def current_run_id() -> str | None:
    """Return the run_id of the enclosing :class:`RunTracer`, if any."""
    return _run_id.get()


class _RunIDFilter(logging.Filter):
    """Injects run_id from context var into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        run_id = current_run_id()
        record.run_id = run_id if run_id is not None else "-"  # type: ignore[attr-defined]
        return True


def setup_logging(
    level: str = "INFO",
    log_format: str = "text",
    log_file: str | None = None,
    module_levels: dict[str, str] | None = None,
) -> None:
    """Configure primal-sweep logging.

    Args:
        level: Root log level (e.g. 'DEBUG', 'INFO', 'WARNING').
        log_format: 'text' for human-readable or 'json' for structured output.
        log_file: Optional file path to write logs to.
        module_levels: Per-module log levels (e.g. {'primal_sweep.sweep': 'DEBUG'}).

    Raises:
        ConfigurationError: If the log file cannot be opened.
    """
    root_logger = logging.getLogger("primal_sweep")
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    if log_format == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(run_id)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    console.addFilter(_RunIDFilter())
    root_logger.addHandler(console)

    if log_file is not None:
        try:
            file_handler = logging.FileHandler(log_file)
        except OSError as exc:
            raise ConfigurationError(f"Cannot open log file {log_file}: {exc}") from exc
        file_handler.setFormatter(formatter)
        file_handler.addFilter(_RunIDFilter())
        root_logger.addHandler(file_handler)

    if module_levels:
        for module, mod_level in module_levels.items():
            logging.getLogger(module).setLevel(getattr(logging, mod_level.upper(), logging.INFO))

    root_logger.debug(f"Logging configured: level={level}, format={log_format}")


__all__ = ["JSONFormatter", "RunTracer", "current_run_id", "setup_logging"]
