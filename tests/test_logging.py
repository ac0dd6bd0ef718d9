"""Tests for structured logging."""

from __future__ import annotations

import json
import logging
import sys

import pytest

from primal_sweep.exceptions import ConfigurationError
from primal_sweep.utils.logging import JSONFormatter, RunTracer, current_run_id, setup_logging


def _record(msg: str = "hello", level: int = logging.INFO, args: tuple = (), exc_info=None):
    return logging.LogRecord(
        name="test",
        level=level,
        pathname="",
        lineno=0,
        msg=msg,
        args=args,
        exc_info=exc_info,
    )


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger("primal_sweep")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


class TestJSONFormatter:
    def test_format_basic(self):
        data = json.loads(JSONFormatter().format(_record()))
        assert data["level"] == "INFO"
        assert data["message"] == "hello"
        assert data["logger"] == "test"
        assert "timestamp" in data
        assert "run_id" not in data

    def test_format_with_args(self):
        output = JSONFormatter().format(_record("value=%d", logging.WARNING, (42,)))
        assert json.loads(output)["message"] == "value=42"

    def test_format_with_exception(self):
        try:
            raise ValueError("test error")
        except ValueError:
            exc_info = sys.exc_info()

        record = _record("failed", logging.ERROR, exc_info=exc_info)
        data = json.loads(JSONFormatter().format(record))
        assert "exception" in data
        assert "ValueError" in data["exception"]

    def test_format_with_extra(self):
        record = _record()
        record.extra = {"runs": 240}
        data = json.loads(JSONFormatter().format(record))
        assert data["extra"] == {"runs": 240}

    def test_output_is_single_line(self):
        assert "\n" not in JSONFormatter().format(_record())

    def test_includes_run_id(self):
        with RunTracer("sir/Control/a=0.1/l=0.5"):
            data = json.loads(JSONFormatter().format(_record()))
        assert data["run_id"] == "sir/Control/a=0.1/l=0.5"


class TestRunTracer:
    def test_exposes_run_id(self):
        with RunTracer("mm/Residual/a=0.0/l=1.0") as tracer:
            assert tracer.run_id == "mm/Residual/a=0.0/l=1.0"
            assert current_run_id() == "mm/Residual/a=0.0/l=1.0"

    def test_context_cleared_after_exit(self):
        assert current_run_id() is None
        with RunTracer("test"):
            assert current_run_id() == "test"
        assert current_run_id() is None

    def test_cleared_on_exception(self):
        with pytest.raises(RuntimeError):
            with RunTracer("failing"):
                raise RuntimeError("boom")
        assert current_run_id() is None

    def test_nested_tracers(self):
        with RunTracer("outer"):
            with RunTracer("inner"):
                assert current_run_id() == "inner"
            assert current_run_id() == "outer"
        assert current_run_id() is None


class TestSetupLogging:
    def test_setup_text_format(self):
        setup_logging(level="DEBUG", log_format="text")
        logger = logging.getLogger("primal_sweep")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_setup_json_format(self):
        setup_logging(level="INFO", log_format="json")
        handler = logging.getLogger("primal_sweep").handlers[0]
        assert isinstance(handler.formatter, JSONFormatter)

    def test_repeated_setup_does_not_duplicate_handlers(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger("primal_sweep").handlers) == 1

    def test_unknown_level_falls_back_to_info(self):
        setup_logging(level="chatty")
        assert logging.getLogger("primal_sweep").level == logging.INFO

    def test_file_output_carries_run_id(self, tmp_path):
        log_file = tmp_path / "sweep.log"
        setup_logging(level="INFO", log_format="text", log_file=str(log_file))
        logger = logging.getLogger("primal_sweep.sweep")
        with RunTracer("nernst/TimeWarp/a=0.1/l=2.0"):
            logger.info("traced message")
        logger.info("untraced message")
        for handler in logging.getLogger("primal_sweep").handlers:
            handler.flush()

        lines = log_file.read_text().splitlines()
        assert "| nernst/TimeWarp/a=0.1/l=2.0 | traced message" in lines[0]
        assert "| - | untraced message" in lines[1]

    def test_module_levels(self):
        setup_logging(
            level="WARNING",
            log_format="text",
            module_levels={"primal_sweep.core": "DEBUG"},
        )
        assert logging.getLogger("primal_sweep.core").level == logging.DEBUG
        logging.getLogger("primal_sweep.core").setLevel(logging.NOTSET)

    def test_unwritable_log_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Cannot open log file"):
            setup_logging(log_file=str(tmp_path / "missing" / "sweep.log"))
