from __future__ import annotations

from ..models.conversion_result import ConversionResult

"""SUMMARY line rendering for the CLI."""


def _format_number(value: float) -> str:
    # Integers print without a fraction; tiny values avoid scientific notation
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 3))


def render_summary_line(result: ConversionResult) -> str:
    """Render the SUMMARY line for a finished run.

    Format:
    SUMMARY rows={n} prefix={prefix} output_dir={dir} elapsed_sec={elapsed} throughput_rps={rps}

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = ConversionResult(
        ...     manifest=["item-0.json", "item-1.json"], output_prefix="item-",
        ...     output_directory=".", start_time=start, end_time=end,
        ...     elapsed_seconds=2.0, throughput_rows_per_sec=1.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY rows=2 prefix=item- output_dir=. elapsed_sec=2 throughput_rps=1'
    """
    return (
        f"SUMMARY rows={result.total_rows} "
        f"prefix={result.output_prefix} "
        f"output_dir={result.output_directory} "
        f"elapsed_sec={_format_number(result.elapsed_seconds)} "
        f"throughput_rps={_format_number(result.throughput_rows_per_sec)}"
    )
