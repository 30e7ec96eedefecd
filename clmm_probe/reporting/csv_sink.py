"""Append-only CSV output."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import IO

import structlog

from clmm_probe.engine.runner import ProbeContext, ProbeRun, SizeOutcome
from clmm_probe.reporting.rows import CSV_HEADER, build_row
from clmm_probe.venues.quoter import DepthLevel

logger = structlog.get_logger()


class CsvAppender:
    """Appends probe rows to a CSV file.

    The header is written only when the file is newly created, so repeated
    runs (and several pools) can share one file.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._file: IO[str] | None = None
        self._writer = None
        self.rows_written = 0

    @property
    def is_open(self) -> bool:
        return self._file is not None

    def open(self) -> None:
        """Open the file for appending, writing the header if it is new."""
        if self._file is not None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        existed = self.path.exists()
        self._file = self.path.open("a", newline="")
        self._writer = csv.writer(self._file)
        if not existed:
            self._writer.writerow(CSV_HEADER)
            logger.debug("csv_created", path=str(self.path))

    def write_values(self, values: list[str]) -> None:
        if self._writer is None:
            self.open()
        self._writer.writerow(values)
        self._file.flush()
        self.rows_written += 1

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None
            self._writer = None

    def __enter__(self) -> CsvAppender:
        self.open()
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # ProbeSink interface

    def start(self, context: ProbeContext, depth: list[DepthLevel]) -> None:
        self.open()

    def record(self, context: ProbeContext, outcome: SizeOutcome) -> None:
        self.write_values(build_row(context, outcome).values())

    def finish(self, run: ProbeRun) -> None:
        logger.info("csv_written", path=str(self.path), rows=self.rows_written)
        self.close()


__all__ = ["CsvAppender"]
