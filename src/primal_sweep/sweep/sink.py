"""Append-only CSV result sink."""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable, Sequence
from enum import Enum
from pathlib import Path
from typing import IO, Any

import numpy as np

from primal_sweep.exceptions import ResultSinkError

logger = logging.getLogger(__name__)

DEFAULT_HEADER: tuple[str, ...] = ("model", "mode", "alpha", "lambda", "val1", "val2", "val3")


def format_value(value: Any) -> str:
    """Locale-invariant text for one field.

    Floats use ``repr`` (shortest round-trip form, ``nan``/``inf`` for
    non-finite values); enum members are written as their value.
    """
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (float, np.floating)):
        return repr(float(value))
    return str(value)


class ResultSink:
    """CSV writer receiving one row per completed run.

    Rows may have a variable number of trailing value columns. The file is
    truncated and the header written on open; use the sink as a context
    manager so the file is closed on every exit path::

        with ResultSink("results.csv") as sink:
            sink.write_row(["MM", PerturbationMode.RESIDUAL, 0.0, 1.0, 0.0, 1.0])

    Attributes:
        path: Output file path.
        header: Header row.
        rows_written: Number of data rows written so far.
    """

    def __init__(self, path: str | Path, header: Sequence[str] = DEFAULT_HEADER):
        self.path = Path(path)
        self.header = tuple(header)
        self.rows_written = 0
        self._file: IO[str] | None = None
        self._writer: Any = None

    @property
    def is_open(self) -> bool:
        return self._file is not None

    def open(self) -> ResultSink:
        """Create the file and write the header.

        Raises:
            ResultSinkError: If the file cannot be created or written.
        """
        if self._file is not None:
            return self
        try:
            self._file = open(self.path, "w", newline="")
            self._writer = csv.writer(self._file, lineterminator="\n")
            self._writer.writerow(self.header)
        except OSError as exc:
            self.close()
            raise ResultSinkError(f"Cannot open result file {self.path}: {exc}") from exc
        logger.debug(f"Opened result sink {self.path}")
        return self

    def write_row(self, row: Sequence[Any]) -> None:
        """Append one row.

        Raises:
            ResultSinkError: If the sink is closed or the write fails.
        """
        if self._writer is None:
            raise ResultSinkError(f"Result sink {self.path} is not open")
        try:
            self._writer.writerow([format_value(v) for v in row])
        except OSError as exc:
            raise ResultSinkError(f"Failed to write to {self.path}: {exc}") from exc
        self.rows_written += 1

    def write_rows(self, rows: Iterable[Sequence[Any]]) -> None:
        for row in rows:
            self.write_row(row)

    def close(self) -> None:
        if self._file is None:
            return
        try:
            self._file.close()
        except OSError as exc:
            raise ResultSinkError(f"Failed to close {self.path}: {exc}") from exc
        finally:
            self._file = None
            self._writer = None
        logger.debug(f"Closed result sink {self.path} ({self.rows_written} rows)")

    def __enter__(self) -> ResultSink:
        return self.open()

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"ResultSink(path='{self.path}', rows={self.rows_written})"


def read_results(path: str | Path) -> list[dict[str, Any]]:
    """Parse a result file written by :class:`ResultSink`.

    Returns:
        One dict per data row with keys ``model``, ``mode``, ``alpha``,
        ``lambda`` and ``values`` (list of floats).

    Raises:
        ResultSinkError: If the file cannot be read.
    """
    try:
        with open(path, newline="") as f:
            reader = csv.reader(f)
            next(reader, None)
            return [
                {
                    "model": row[0],
                    "mode": row[1],
                    "alpha": float(row[2]),
                    "lambda": float(row[3]),
                    "values": [float(v) for v in row[4:]],
                }
                for row in reader
                if row
            ]
    except OSError as exc:
        raise ResultSinkError(f"Cannot read result file {path}: {exc}") from exc


__all__ = ["DEFAULT_HEADER", "ResultSink", "format_value", "read_results"]
