"""Tests for the CSV result sink."""

from __future__ import annotations

import math

import numpy as np
import pytest

from primal_sweep.exceptions import ResultSinkError
from primal_sweep.perturbation import PerturbationMode
from primal_sweep.sweep.sink import DEFAULT_HEADER, ResultSink, format_value, read_results


class TestFormatValue:
    def test_mode_written_as_token(self):
        assert format_value(PerturbationMode.PARAM_MOD) == "ParamMod"

    def test_float_round_trips(self):
        value = 0.1 + 0.2
        assert float(format_value(value)) == value

    def test_numpy_scalar(self):
        assert format_value(np.float64(2.5)) == "2.5"

    def test_non_finite(self):
        assert format_value(float("inf")) == "inf"
        assert format_value(-np.inf) == "-inf"
        assert format_value(np.nan) == "nan"

    def test_strings_pass_through(self):
        assert format_value("SIR_mass_err") == "SIR_mass_err"


class TestResultSink:
    def test_header_written_on_open(self, tmp_path):
        path = tmp_path / "r.csv"
        with ResultSink(path):
            pass
        assert path.read_text() == ",".join(DEFAULT_HEADER) + "\n"

    def test_rows_have_variable_width(self, tmp_path):
        path = tmp_path / "r.csv"
        with ResultSink(path) as sink:
            sink.write_row(["NERNST", PerturbationMode.CONTROL, -0.1, 0.5, 0.0606])
            sink.write_row(["SIR", PerturbationMode.CONTROL, -0.1, 0.5, 1.0, 2.0, 3.0])
        lines = path.read_text().splitlines()
        assert lines[1] == "NERNST,Control,-0.1,0.5,0.0606"
        assert lines[2] == "SIR,Control,-0.1,0.5,1.0,2.0,3.0"
        assert sink.rows_written == 2

    def test_existing_file_truncated(self, tmp_path):
        path = tmp_path / "r.csv"
        path.write_text("stale\n" * 10)
        with ResultSink(path) as sink:
            sink.write_row(["MM", PerturbationMode.RESIDUAL, 0.0, 1.0, 0.0, 1.0])
        assert len(path.read_text().splitlines()) == 2

    def test_custom_header(self, tmp_path):
        path = tmp_path / "r.csv"
        with ResultSink(path, header=["a", "b"]):
            pass
        assert path.read_text() == "a,b\n"

    def test_write_before_open_raises(self, tmp_path):
        sink = ResultSink(tmp_path / "r.csv")
        with pytest.raises(ResultSinkError, match="is not open"):
            sink.write_row(["MM"])

    def test_write_after_close_raises(self, tmp_path):
        sink = ResultSink(tmp_path / "r.csv").open()
        sink.close()
        assert not sink.is_open
        with pytest.raises(ResultSinkError):
            sink.write_row(["MM"])

    def test_open_is_idempotent(self, tmp_path):
        sink = ResultSink(tmp_path / "r.csv")
        assert sink.open() is sink.open()
        sink.close()
        sink.close()

    def test_unwritable_path(self, tmp_path):
        sink = ResultSink(tmp_path / "no" / "such" / "dir" / "r.csv")
        with pytest.raises(ResultSinkError, match="Cannot open result file"):
            sink.open()
        assert not sink.is_open

    def test_closed_after_exception(self, tmp_path):
        with pytest.raises(RuntimeError):
            with ResultSink(tmp_path / "r.csv") as sink:
                raise RuntimeError("boom")
        assert not sink.is_open

    def test_repr(self, tmp_path):
        assert "rows=0" in repr(ResultSink(tmp_path / "r.csv"))


class TestReadResults:
    def test_parses_rows(self, tmp_path):
        path = tmp_path / "r.csv"
        with ResultSink(path) as sink:
            sink.write_row(["FHN", PerturbationMode.TIME_WARP, 0.1, 2.0, -1.2, 0.5])
            sink.write_row(["NERNST", PerturbationMode.TIME_WARP, 0.1, 2.0, float("nan")])

        rows = read_results(path)
        assert rows[0] == {
            "model": "FHN",
            "mode": "TimeWarp",
            "alpha": 0.1,
            "lambda": 2.0,
            "values": [-1.2, 0.5],
        }
        assert math.isnan(rows[1]["values"][0])

    def test_missing_file(self, tmp_path):
        with pytest.raises(ResultSinkError, match="Cannot read result file"):
            read_results(tmp_path / "absent.csv")
