"""Row building, CSV output and console reporting."""

from clmm_probe.reporting.console import ConsoleReporter, format_size
from clmm_probe.reporting.csv_sink import CsvAppender
from clmm_probe.reporting.merge import merge_csv_dir
from clmm_probe.reporting.rows import CSV_HEADER, ProbeRow, build_row

__all__ = [
    "CSV_HEADER",
    "ProbeRow",
    "build_row",
    "CsvAppender",
    "ConsoleReporter",
    "format_size",
    "merge_csv_dir",
]
