"""Merge a directory of probe CSVs into a single file."""

from __future__ import annotations

from pathlib import Path

import structlog

logger = structlog.get_logger()

MERGED_NAME = "all.csv"


def merge_csv_dir(day_dir: Path | str, output_name: str = MERGED_NAME) -> Path | None:
    """Concatenate every CSV in a directory into one file.

    The first file's header is kept once and the header line of every file
    is dropped. The output file itself is never an input.

    Args:
        day_dir: Directory holding per-run CSV files
        output_name: Name of the merged file inside day_dir

    Returns:
        Path of the merged file, or None if there was nothing to merge
    """
    day_dir = Path(day_dir)
    out_path = day_dir / output_name
    inputs = sorted(p for p in day_dir.rglob("*.csv") if p.resolve() != out_path.resolve())
    if not inputs:
        logger.info("merge_no_csv", directory=str(day_dir))
        return None

    header: str | None = None
    body: list[str] = []
    for path in inputs:
        lines = path.read_text().splitlines()
        if not lines:
            continue
        if header is None:
            header = lines[0]
        body.extend(line for line in lines[1:] if line)

    if header is None:
        logger.info("merge_no_csv", directory=str(day_dir))
        return None

    out_path.write_text("\n".join([header, *body]) + "\n")
    logger.info("merge_complete", output=str(out_path), files=len(inputs), rows=len(body))
    return out_path


__all__ = ["merge_csv_dir", "MERGED_NAME"]
