"""Command line entry point: index an SQL file and print what was found."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence

from .indexfile import IndexFileError, print_results, read_index, write_index
from .models import SqlIndex
from .parser import parse_sql_file
from .sample import get_first_row_sample

INDEX_SUFFIX = ".index"
_DEFAULT_PROG = "sqlindexer"

logger = logging.getLogger(__name__)


class _UsageError(Exception):
    """Raised for invalid command line arguments."""


def format_usage(prog_name: str) -> str:
    """Return the usage text for ``prog_name``."""
    return (
        f"Usage: {prog_name} [-v] <sql_file>\n"
        "  <sql_file> : Path to the SQL file to process.\n"
        "  -v         : Enable verbose debug messages.\n"
        "               Automatically loads '<sql_file>.index' if it exists.\n"
        "               Automatically saves index to '<sql_file>.index' after parsing.\n"
    )


def _parse_args(args: Sequence[str]) -> tuple[str, bool]:
    """Return the SQL file name and whether verbose mode was asked for."""
    verbose = False
    sql_filename: str | None = None
    for arg in args:
        if arg in ("-v", "--verbose"):
            verbose = True
        elif arg.startswith("-"):
            raise _UsageError(f"Unknown option '{arg}'")
        elif sql_filename is None:
            sql_filename = arg
        else:
            raise _UsageError(
                f"Multiple SQL files specified ('{sql_filename}' and '{arg}'). "
                "Only one is allowed."
            )
    if sql_filename is None:
        raise _UsageError("SQL file path is required.")
    return sql_filename, verbose


def _install_debug_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("[%(levelname)s] %(module)s:%(lineno)d:%(funcName)s(): %(message)s")
    )
    package_logger = logging.getLogger(__package__ or "sqlindexer")
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)
    return handler


def _remove_debug_handler(handler: logging.Handler) -> None:
    package_logger = logging.getLogger(__package__ or "sqlindexer")
    package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)


def _load(index_filename: str) -> SqlIndex | None:
    logger.debug("Loading index from %s", index_filename)
    try:
        index = read_index(index_filename)
    except IndexFileError as exc:
        print(exc, file=sys.stderr)
        print(f"Error loading index file '{index_filename}'.", file=sys.stderr)
        return None
    print(
        f"Successfully loaded {len(index)} entries from index file '{index_filename}'."
    )
    logger.debug("Index loaded successfully. Count: %d", len(index))
    return index


def _build(sql_filename: str, index_filename: str) -> SqlIndex | None:
    logger.debug("Parsing %s", sql_filename)
    try:
        index = parse_sql_file(sql_filename)
    except OSError as exc:
        print(f"Error opening file '{sql_filename}': {exc.strerror or exc}", file=sys.stderr)
        print(f"Error initializing context for file '{sql_filename}'.", file=sys.stderr)
        return None
    logger.debug("File processing finished. Index count: %d", len(index))
    logger.debug("Writing index to %s", index_filename)
    try:
        write_index(index, index_filename)
    except IndexFileError as exc:
        print(exc, file=sys.stderr)
        print(f"Error writing index file '{index_filename}'.", file=sys.stderr)
    else:
        logger.debug("Index written successfully.")
    return index


def _print_sample(sql_filename: str, index: SqlIndex) -> None:
    if not len(index):
        return
    table = index.entries[0].table_info
    if table is None:
        return
    logger.debug("Attempting to get sample row for table: %s", table.name)
    try:
        sample = get_first_row_sample(sql_filename, table.end_offset, table.name)
    except OSError as exc:
        print(f"get_first_row_sample: Error opening file: {exc}", file=sys.stderr)
        sample = None
    if sample is None:
        logger.debug("Could not get sample row for table: %s", table.name)
        return
    print(f"\n--- Sample First Row for {table.name} (Offset: {table.end_offset}) ---")
    print(sample)
    print("------------------------------------------")


def _run(sql_filename: str) -> int:
    index_filename = sql_filename + INDEX_SUFFIX
    load = os.path.exists(index_filename)
    if load:
        logger.debug("Index file '%s' exists. Attempting to load.", index_filename)
    else:
        logger.debug(
            "Index file '%s' not found. Will parse SQL and save index.", index_filename
        )
    logger.debug("SQL file: %s", sql_filename)
    logger.debug("Index file: %s (%s)", index_filename, "load" if load else "save")

    index = _load(index_filename) if load else _build(sql_filename, index_filename)
    if index is None:
        logger.debug("Exiting with errors.")
        return 1

    logger.debug("Printing results.")
    print_results(index, sys.stdout)
    _print_sample(sql_filename, index)
    logger.debug("Exiting successfully.")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the indexer on the command line arguments; return the exit status."""
    if argv is None:
        argv = sys.argv[1:]
    prog_name = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else _DEFAULT_PROG

    try:
        sql_filename, verbose = _parse_args(argv)
    except _UsageError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.stderr.write(format_usage(prog_name))
        return 1

    handler = _install_debug_handler() if verbose else None
    try:
        if verbose:
            logger.debug("Verbose mode enabled.")
        return _run(sql_filename)
    finally:
        if handler is not None:
            _remove_debug_handler(handler)


if __name__ == "__main__":
    sys.exit(main())