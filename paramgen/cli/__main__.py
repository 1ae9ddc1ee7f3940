from __future__ import annotations

import argparse
import sys
from pathlib import Path

from paramgen.config.loader import ConfigError, ConverterConfig, default_config, load_config
from paramgen.logging.init import log_summary, setup_logging
from paramgen.services.converter import WriteError, convert_with_result
from paramgen.services.summary import render_summary_line
from paramgen.tabular.reader import STDIN_SOURCE, InputError, load_rows

"""CLI entrypoint.

Flow:
- Resolve config (defaults < --config file < CLI flags)
- Load rows from the CSV path or stdin
- Write one parameter document per row
- Print the manifest (one filename per line) and a SUMMARY line

Exit codes:
- 0: every row written
- 1: config or input error, nothing written
- 2: a write failed; files for earlier rows were kept
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_WRITE_FAILURE = 2


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="paramgen",
        description="CSV -> deployment parameter files (one JSON document per row)",
    )
    p.add_argument(
        "source",
        nargs="?",
        default=None,
        help="CSV file to read ('-' or omitted: read from stdin)",
    )
    p.add_argument("--prefix", dest="output_prefix", default=None, help="Output filename prefix (default: item-)")
    p.add_argument("--output-dir", dest="output_directory", default=None, help="Directory for generated files (default: .)")
    p.add_argument("--config", type=Path, default=None, help="YAML config file")
    p.add_argument("--delimiter", default=None, help="CSV delimiter (default: ,)")
    p.add_argument("--encoding", default=None, help="CSV file encoding (default: utf-8-sig)")
    p.add_argument("--indent", type=int, default=None, help="Indent JSON output by N spaces (default: compact)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _resolve_config(args: argparse.Namespace) -> ConverterConfig:
    cfg = load_config(args.config) if args.config is not None else default_config()
    return cfg.with_overrides(
        output_prefix=args.output_prefix,
        output_directory=args.output_directory,
        delimiter=args.delimiter,
        encoding=args.encoding,
        indent=args.indent,
    )


def _resolve_source(source: str | None) -> str:
    if source is not None:
        return source
    # Nothing piped in and no path given
    if sys.stdin is None or sys.stdin.isatty():
        raise InputError("no input: pass a CSV path or pipe CSV data on stdin")
    return STDIN_SOURCE


def main(argv: list[str] | None = None) -> int:
    # Only read sys.argv when argv is None; [] means "no arguments"
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    logger = setup_logging(debug=args.debug)
    logger.debug("debug mode enabled")

    try:
        cfg = _resolve_config(args)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    try:
        source = _resolve_source(args.source)
        logger.debug(f"reading rows from: {'<stdin>' if source == STDIN_SOURCE else source}")
        rows = load_rows(source, delimiter=cfg.delimiter, encoding=cfg.encoding)
    except InputError as e:
        logger.error(f"input: {e}")
        return EXIT_FATAL

    logger.info(f"Converting {len(rows)} row(s) into {cfg.output_directory}")

    try:
        result = convert_with_result(
            rows,
            cfg.output_prefix,
            output_dir=cfg.output_directory,
            indent=cfg.indent,
            progress=True,
        )
    except InputError as e:
        logger.error(f"input: {e}")
        return EXIT_FATAL
    except WriteError as e:
        logger.error(f"write: {e}")
        logger.warning(f"{e.row_index} file(s) written before failure were kept")
        return EXIT_WRITE_FAILURE

    for filename in result.manifest:
        print(filename)
    log_summary(render_summary_line(result)[len("SUMMARY "):])
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
