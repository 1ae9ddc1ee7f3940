from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Result model returned by ``convert_with_result`` (manifest + run metrics)."""


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of one successful conversion run.

    ``manifest`` is the OutputManifest: generated filenames in row order.
    """
    manifest: list[str]  # filenames, row order
    output_prefix: str
    output_directory: str
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    throughput_rows_per_sec: float  # rows / elapsed

    @property
    def total_rows(self) -> int:
        return len(self.manifest)
