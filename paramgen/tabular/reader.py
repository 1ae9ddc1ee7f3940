from __future__ import annotations

import csv
import dataclasses
import io
import sys
import warnings
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, TextIO

import pandas as pd

from ..models.row import Row

"""Tabular source reader.

Two mutually exclusive input modes:
- a delimited file (path, ``-`` for stdin, or an open text stream) read with pandas
- already materialized row-like records (mappings, namedtuples, dataclasses, DataFrame)

Every cell from a file is kept as text: no dtype inference and no NA conversion,
so an empty cell stays ``""``. Header names are used verbatim. Blank names and
records whose field count differs from the header raise InputError, as do
absent, unreadable and zero-row sources; loading never returns an empty list.
"""

__all__ = [
    "InputError",
    "STDIN_SOURCE",
    "read_csv_rows",
    "read_csv_stream",
    "rows_from_dataframe",
    "rows_from_records",
    "load_rows",
]

STDIN_SOURCE = "-"
DEFAULT_DELIMITER = ","
DEFAULT_ENCODING = "utf-8-sig"  # tolerates a UTF-8 BOM


class InputError(Exception):
    """Raised when the source is absent, unreadable, or yields no rows."""


def _read_text(path: Path, encoding: str) -> str:
    try:
        return path.read_text(encoding=encoding)
    except UnicodeDecodeError as e:
        raise InputError(f"source is not valid {encoding}: {e}") from e
    except OSError as e:
        raise InputError(f"source could not be read: {e}") from e


def _check_row_widths(text: str, delimiter: str, origin: str) -> None:
    """Reject any record whose field count differs from the header's.

    pandas pads short rows with empty cells and folds over-wide rows into an
    implicit index, so widths are checked on the raw records first.
    """
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter)
    expected: int | None = None
    try:
        for fields in reader:
            if not fields:
                continue  # blank line
            if expected is None:
                expected = len(fields)
            elif len(fields) != expected:
                raise InputError(
                    f"line {reader.line_num} of {origin} has {len(fields)} field(s), "
                    f"header has {expected}"
                )
    except csv.Error as e:
        raise InputError(f"source could not be parsed: {e}") from e


def _read_frame(text: str, delimiter: str) -> pd.DataFrame:
    # header=None keeps the header line verbatim; pandas would otherwise
    # rename blank ("Unnamed: N") and duplicate ("a.1") names
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("error", pd.errors.ParserWarning)
            return pd.read_csv(
                io.StringIO(text),
                sep=delimiter,
                header=None,
                index_col=False,
                dtype=str,
                keep_default_na=False,
                na_filter=False,
            )
    except pd.errors.EmptyDataError as e:
        raise InputError(f"source is empty: {e}") from e
    except (pd.errors.ParserError, pd.errors.ParserWarning) as e:
        raise InputError(f"source could not be parsed: {e}") from e


def _parse_text(text: str, delimiter: str, origin: str) -> list[Row]:
    _check_row_widths(text, delimiter, origin)
    records = list(_read_frame(text, delimiter).itertuples(index=False, name=None))
    columns = _header_columns(list(records[0]), origin)
    rows: list[Row] = []
    for values in records[1:]:
        # duplicate header names: last write wins
        row: Row = {}
        for name, value in zip(columns, values):
            row[name] = value
        rows.append(row)
    return _require_rows(rows, origin)


def _header_columns(header: list[Any], origin: str) -> list[str]:
    columns = []
    for position, name in enumerate(header):
        if str(name).strip() == "":
            raise InputError(f"blank column name at position {position} in {origin}")
        columns.append(str(name))
    return columns


def _frame_to_rows(df: pd.DataFrame) -> list[Row]:
    columns = [str(c) for c in df.columns]
    return [dict(zip(columns, values)) for values in df.itertuples(index=False, name=None)]


def _require_rows(rows: list[Row], origin: str) -> list[Row]:
    if not rows:
        raise InputError(f"no rows in {origin}")
    return rows


def read_csv_rows(
    path: Path | str,
    *,
    delimiter: str = DEFAULT_DELIMITER,
    encoding: str = DEFAULT_ENCODING,
) -> list[Row]:
    """Read a delimited file into Rows (header line gives the column names).

    Raises
    ------
    InputError
        path missing / not a file, unreadable, empty, header-only,
        blank header name, or a record wider / narrower than the header
    """
    p = Path(path)
    if not p.exists():
        raise InputError(f"source not found: {p}")
    if not p.is_file():
        raise InputError(f"source is not a file: {p}")
    return _parse_text(_read_text(p, encoding), delimiter, str(p))


def read_csv_stream(stream: TextIO, *, delimiter: str = DEFAULT_DELIMITER) -> list[Row]:
    """Read delimited text from an open stream (stdin when piped)."""
    name = str(getattr(stream, "name", "<stream>"))
    try:
        text = stream.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"source could not be read: {e}") from e
    return _parse_text(text, delimiter, name)


def rows_from_dataframe(df: pd.DataFrame) -> list[Row]:
    """Turn an in-memory DataFrame into Rows without touching cell values."""
    return _require_rows(_frame_to_rows(df), "dataframe")


def _record_to_row(record: Any, position: int) -> Row:
    if isinstance(record, Mapping):
        return dict(record)
    if hasattr(record, "_asdict"):  # namedtuple
        return dict(record._asdict())
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return {f.name: getattr(record, f.name) for f in dataclasses.fields(record)}
    raise InputError(f"record {position} is not row-like: {type(record).__name__}")


def rows_from_records(records: Iterable[Any]) -> list[Row]:
    """Normalize materialized row-like records into Rows (values are not coerced)."""
    rows = [_record_to_row(r, i) for i, r in enumerate(records)]
    return _require_rows(rows, "records")


def load_rows(
    source: Any,
    *,
    delimiter: str = DEFAULT_DELIMITER,
    encoding: str = DEFAULT_ENCODING,
    stdin: TextIO | None = None,
) -> list[Row]:
    """Resolve any supported source into a non-empty list of Rows.

    ``source`` may be a path (str / Path), ``"-"`` for stdin, an open text
    stream, a DataFrame, or an iterable of row-like records.
    """
    if source is None:
        raise InputError("no input source given")
    if isinstance(source, str) and source == STDIN_SOURCE:
        return read_csv_stream(stdin if stdin is not None else sys.stdin, delimiter=delimiter)
    if isinstance(source, (str, Path)):
        return read_csv_rows(source, delimiter=delimiter, encoding=encoding)
    if isinstance(source, pd.DataFrame):
        return rows_from_dataframe(source)
    if hasattr(source, "read"):
        return read_csv_stream(source, delimiter=delimiter)
    if isinstance(source, Iterable):
        return rows_from_records(source)
    raise InputError(f"unsupported source type: {type(source).__name__}")
