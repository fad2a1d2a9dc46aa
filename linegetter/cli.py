#!/usr/bin/env python3
"""
Command-line access to lines of large files.

Usage:
    # Print lines 10 and 20 through 25
    linegetter app.log 10 20-25

    # Print the number of lines
    linegetter app.log --count
"""

import argparse
import sys
from typing import BinaryIO, List, Optional, Tuple

import yaml

from linegetter.core.getter import LineGetter, LineGetterConfig
from linegetter.errors import InvalidArgumentError
from linegetter.utils.config import Config
from linegetter.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def line_range(value: str) -> Tuple[int, int]:
    """
    Parse a line argument: a number or an inclusive range "A-B".

    Returns:
        Tuple of (first, last)
    """
    first, sep, last = value.partition("-")
    try:
        start = int(first)
        stop = int(last) if sep else start
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid line or range: {value!r}")

    if stop < start:
        raise argparse.ArgumentTypeError(f"range end precedes start: {value!r}")

    return start, stop


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="linegetter",
        description="Random access to lines of large line-delimited files",
    )

    parser.add_argument(
        'file',
        help='File to read lines from'
    )

    parser.add_argument(
        'lines',
        nargs='*',
        type=line_range,
        metavar='LINE',
        help='Line number (1-based) or inclusive range A-B'
    )

    parser.add_argument(
        '--count',
        action='store_true',
        help='Print the number of lines'
    )

    parser.add_argument(
        '--max-line-length',
        type=int,
        default=None,
        help='Truncate longer lines to this many bytes (default: from config)'
    )

    parser.add_argument(
        '--chunk-size',
        type=int,
        default=None,
        help='Bytes per read while indexing (default: from config)'
    )

    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='YAML configuration file'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        default=None,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: from config)'
    )

    parser.add_argument(
        '--log-format',
        type=str,
        default=None,
        choices=['json', 'console'],
        help='Log output format (default: from config)'
    )

    return parser.parse_intermixed_args(argv)


def print_lines(getter: LineGetter, ranges: List[Tuple[int, int]], out: BinaryIO) -> int:
    """
    Write the requested lines to out, one per output line.

    Returns:
        Number of lines that could not be read
    """
    failures = 0

    for start, stop in ranges:
        try:
            results = getter.lines(start, stop)
        except InvalidArgumentError as e:
            logger.error("Invalid line request", start=start, stop=stop, error=str(e))
            failures += 1
            continue

        for result in results:
            out.write(result.content + b"\n")

            if result.truncated:
                logger.warning(
                    "Line truncated",
                    line_number=result.line_number,
                    max_line_length=getter.max_line_length,
                )

            try:
                result.raise_for_error()
            except Exception as e:
                logger.error(
                    "Failed to read line",
                    line_number=result.line_number,
                    error=str(e),
                )
                failures += 1

    return failures


def load_config(args: argparse.Namespace) -> Config:
    """Load the configuration file and apply command-line overrides."""
    config = Config(args.config)
    if args.max_line_length is not None:
        config.set("reader.max_line_length", args.max_line_length)
    if args.chunk_size is not None:
        config.set("indexer.chunk_size", args.chunk_size)
    if args.log_level is not None:
        config.set("logging.level", args.log_level)
    if args.log_format is not None:
        config.set("logging.format", args.log_format)
    return config


def main(argv: Optional[List[str]] = None, out: Optional[BinaryIO] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    out = out if out is not None else sys.stdout.buffer

    try:
        config = load_config(args)
    except (OSError, ValueError, yaml.YAMLError) as e:
        configure_logging(log_output="stderr")
        logger.error("Cannot load configuration", file=args.config, error=str(e))
        return 1

    try:
        configure_logging(
            log_level=config.get("logging.level"),
            log_format=config.get("logging.format"),
            log_output="stderr",
        )
    except ValueError as e:
        configure_logging(log_output="stderr")
        logger.error("Invalid logging configuration", error=str(e))
        return 1

    try:
        settings = LineGetterConfig.from_config(config)
    except (ValueError, TypeError) as e:
        logger.error("Invalid configuration", error=str(e))
        return 1

    try:
        with open(args.file, "rb") as stream:
            getter = LineGetter(stream, config=settings)

            if args.count or not args.lines:
                out.write(f"{getter.count()}\n".encode())

            failures = print_lines(getter, args.lines, out)

    except OSError as e:
        logger.error("Cannot read file", file=args.file, error=str(e))
        return 1

    out.flush()

    return 1 if failures else 0


if __name__ == '__main__':
    sys.exit(main())
