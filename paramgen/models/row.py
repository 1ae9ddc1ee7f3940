from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""Row model for the CSV -> deployment-parameters generator.

A Row is an ordered mapping of column name -> cell value. Python dicts keep
insertion order, so a plain dict built in header order is the row itself.
"""

__all__ = [
    "Row",
    "RowData",
]

Row = dict[str, Any]


@dataclass(frozen=True)
class RowData:
    """A row together with its 0-based position in the source.

    The position drives the output filename, never any value in the row.
    """
    index: int  # 0-based processing order
    values: Row  # column name -> cell value, header order
