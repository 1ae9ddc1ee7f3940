from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from ..models.conversion_result import ConversionResult
from ..models.parameter_document import ParameterDocument, ParameterEntry
from ..models.row import Row, RowData
from ..tabular.reader import InputError
from .progress import ProgressTracker

logger = logging.getLogger(__name__)

"""Row -> ParameterDocument converter.

Single sequential pass over the rows in source order:
1. build the ParameterDocument (one ParameterEntry per column)
2. serialize it to JSON
3. write it to ``<prefix><index>.json`` (existing files are overwritten)
4. record the filename in the manifest

The counter is the row's position, starting at 0, never a value from the row.
The first failing write stops the run; files already written stay on disk.
"""

__all__ = [
    "DEFAULT_OUTPUT_PREFIX",
    "WriteError",
    "build_document",
    "output_filename",
    "convert",
    "convert_with_result",
]

DEFAULT_OUTPUT_PREFIX = "item-"
OUTPUT_SUFFIX = ".json"


class WriteError(Exception):
    """Raised when the document for one row cannot be produced or written."""

    def __init__(self, row_index: int, filename: str, cause: Exception) -> None:
        self.row_index = row_index
        self.filename = filename
        self.cause = cause
        super().__init__(f"could not write output {row_index} ({filename}): {cause}")


def build_document(row: Row) -> ParameterDocument:
    """Map every column of ``row`` to a ParameterEntry, in column order."""
    return ParameterDocument.from_entries(
        ParameterEntry(name=name, value=value) for name, value in row.items()
    )


def output_filename(prefix: str, index: int) -> str:
    """``prefix`` + index + ``.json``, no zero padding."""
    return f"{prefix}{index}{OUTPUT_SUFFIX}"


def _write_row(row: RowData, filename: str, directory: Path, indent: int | None) -> None:
    try:
        text = build_document(row.values).to_json(indent=indent)
    except (TypeError, ValueError) as e:
        raise WriteError(row.index, filename, e) from e
    try:
        (directory / filename).write_text(text, encoding="utf-8")
    except OSError as e:
        raise WriteError(row.index, filename, e) from e


def convert(
    rows: Sequence[Row] | None,
    output_prefix: str = DEFAULT_OUTPUT_PREFIX,
    *,
    output_dir: Path | str | None = None,
    indent: int | None = None,
    progress: bool = False,
) -> list[str]:
    """Write one parameter document per row and return the manifest.

    Args:
        rows: Rows in source order. None or empty raises InputError.
        output_prefix: Filename prefix, used as-is.
        output_dir: Directory receiving the files (default: current directory).
        indent: JSON indent; None writes compact JSON.
        progress: Show a tqdm bar when stdout is a TTY.

    Returns:
        Generated filenames in row order.

    Raises:
        InputError: no rows to convert
        WriteError: a row's document could not be written; earlier files remain
    """
    if rows is None:
        raise InputError("no rows given")
    if len(rows) == 0:
        raise InputError("no rows to convert")

    directory = Path(output_dir) if output_dir is not None else Path(".")
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise WriteError(0, output_filename(output_prefix, 0), e) from e

    manifest: list[str] = []
    with ProgressTracker(len(rows), enabled=progress) as tracker:
        for index, values in enumerate(rows):
            filename = output_filename(output_prefix, index)
            _write_row(RowData(index=index, values=values), filename, directory, indent)
            logger.debug(f"wrote {directory / filename} ({len(values)} parameters)")
            manifest.append(filename)
            tracker.advance(filename)

    logger.info(f"wrote {len(manifest)} parameter file(s) to {directory}")
    return manifest


def convert_with_result(
    rows: Sequence[Row] | None,
    output_prefix: str = DEFAULT_OUTPUT_PREFIX,
    *,
    output_dir: Path | str | None = None,
    indent: int | None = None,
    progress: bool = False,
) -> ConversionResult:
    """Run ``convert`` and attach timing metrics for the SUMMARY line."""
    start_time = datetime.now(UTC)
    manifest = convert(
        rows, output_prefix, output_dir=output_dir, indent=indent, progress=progress
    )
    end_time = datetime.now(UTC)
    elapsed = (end_time - start_time).total_seconds()
    throughput = len(manifest) / elapsed if elapsed > 0 else 0.0
    return ConversionResult(
        manifest=manifest,
        output_prefix=output_prefix,
        output_directory=str(output_dir if output_dir is not None else "."),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed,
        throughput_rows_per_sec=throughput,
    )
