"""Command-line interface for the GameLoom catalog core."""

from __future__ import annotations

import argparse
import logging
import os
import shlex
import sys
from datetime import datetime
from pathlib import Path

import pandas as pd

from .aliases import DEFAULT_ALIASES, AliasConfig, default_aliases_path, load_alias_config
from .config import CLI, IMPORT
from .errors import CatalogError
from .filtering import (
    FilterOutcome,
    KeywordPredicate,
    NumericRange,
    Predicate,
    SearchTerms,
    YearRange,
    parse_range,
)
from .library import Library
from .sorting import sort_records, strategy_for


_LOG_FORMAT = "%(asctime)s.%(msecs)03d - %(levelname)s - %(message)s"
_LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"


def setup_logging(log_file: Path, *, debug: bool = False) -> None:
    """Send root-logger records to `log_file` and to the console (INFO, or DEBUG with `debug`)."""
    log_file.parent.mkdir(parents=True, exist_ok=True)
    level = logging.DEBUG if debug else logging.INFO
    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATEFMT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in (logging.FileHandler(log_file, encoding="utf-8"), logging.StreamHandler()):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    logging.info(f"Logging to file: {log_file} (level={logging.getLevelName(level)})")


def _default_log_file(*, command_name: str, logs_dir: Path) -> Path:
    """`<logs_dir>/log-<YYYYmmdd-HHMMSS.mmm>-<command>.log`; the pid disambiguates a clash."""
    now = datetime.now()
    stamp = now.strftime("%Y%m%d-%H%M%S") + f".{now.microsecond // 1000:03d}"
    candidate = logs_dir / f"log-{stamp}-{command_name}.log"
    if candidate.exists():
        candidate = logs_dir / f"log-{stamp}-{command_name}-{os.getpid()}.log"
    return candidate


def _setup_logging_from_args(args: argparse.Namespace, *, command_name: str) -> None:
    logs_dir = args.logs_dir or Path(CLI.logs_dir)
    log_file = args.log_file or _default_log_file(command_name=command_name, logs_dir=logs_dir)
    setup_logging(log_file, debug=args.debug)

    argv = " ".join(shlex.quote(a) for a in sys.argv)
    logging.info(f"Invocation: {argv}")


def _resolve_aliases(path: Path | None) -> AliasConfig:
    p = path or default_aliases_path()
    if p is None:
        return DEFAULT_ALIASES
    try:
        aliases = load_alias_config(p)
    except (FileNotFoundError, ValueError) as e:
        raise SystemExit(f"Invalid alias config {p}: {e}") from e
    logging.info(f"Using alias config: {p}")
    return aliases


def _load_library(args: argparse.Namespace) -> Library:
    library = Library(aliases=_resolve_aliases(args.aliases))
    for path in args.inputs:
        try:
            library.import_csv(path, args.platform)
        except CatalogError as e:
            raise SystemExit(f"[{e.code.value}] {e}") from e
    return library


def _split_field_arg(raw: str, *, flag: str) -> tuple[str, str]:
    field, sep, rest = str(raw or "").partition("=")
    if not sep or not field.strip():
        raise SystemExit(f"{flag} expects FIELD=VALUE, got {raw!r}")
    return field.strip().lower(), rest


def _range_arg(raw: str, *, flag: str) -> tuple[str, float, float]:
    field, rest = _split_field_arg(raw, flag=flag)
    low_text, sep, high_text = rest.partition(":")
    if not sep:
        raise SystemExit(f"{flag} expects FIELD=LOW:HIGH, got {raw!r}")
    try:
        low, high = parse_range(low_text, high_text)
    except CatalogError as e:
        raise SystemExit(f"{flag} {raw!r}: {e}") from e
    return field, low, high


def build_predicates(args: argparse.Namespace) -> list[Predicate]:
    """Validate filter flags and turn them into predicates (applied in this order)."""
    predicates: list[Predicate] = []
    for raw in args.keyword or []:
        field, keyword = _split_field_arg(raw, flag="--keyword")
        predicates.append(KeywordPredicate(field, keyword))
    for raw in args.range or []:
        predicates.append(NumericRange(*_range_arg(raw, flag="--range")))
    for raw in args.years or []:
        predicates.append(YearRange(*_range_arg(raw, flag="--years")))
    if args.search:
        predicates.append(SearchTerms(args.search))
    return predicates


def _command_import(args: argparse.Namespace) -> None:
    _setup_logging_from_args(args, command_name="import")
    library = _load_library(args)
    try:
        library.export_csv(args.out)
    except CatalogError as e:
        raise SystemExit(f"[{e.code.value}] {e}") from e
    logging.info(
        f"✔ Library written: {args.out} (records={len(library)}, attributes={len(library.registry)})"
    )


def _command_query(args: argparse.Namespace) -> None:
    _setup_logging_from_args(args, command_name="query")
    predicates = build_predicates(args)
    try:
        strategy = strategy_for(args.sort_by, args.field or "", alphabetical=not args.numeric)
    except ValueError as e:
        raise SystemExit(str(e)) from e

    library = _load_library(args)
    result = library.filter(*predicates)
    if result.outcome is FilterOutcome.NO_DATA:
        logging.info("ℹ Library is empty: nothing to filter")
        return
    if result.outcome is FilterOutcome.NO_MATCH:
        logging.info(f"ℹ No record matched the {len(predicates)} active filter(s)")
        return

    ordered = sort_records(result.records, strategy, ascending=not args.descending)

    if args.out:
        try:
            library.export_csv(args.out, ordered)
        except CatalogError as e:
            raise SystemExit(f"[{e.code.value}] {e}") from e
        return

    columns = ["title", "platform", "release_date"] + [
        k for k in (args.columns or []) if k not in {"title", "platform", "release_date"}
    ]
    df = pd.DataFrame(
        [{c: (r.title if c == "title" else r.get(c)) for c in columns} for r in ordered],
        columns=columns,
    )
    with pd.option_context("display.max_colwidth", CLI.preview_max_colwidth):
        print(df.to_string(index=False))
    logging.info(f"✔ {len(ordered)} of {len(library)} record(s) shown")


def main(argv: list[str] | None = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv:
        raise SystemExit("Missing command. Use one of: import, query. Run with --help for usage.")

    parser = argparse.ArgumentParser(description="Build and query a personal video game catalog")
    sub = parser.add_subparsers(dest="command", required=True)

    p_common = argparse.ArgumentParser(add_help=False)
    p_common.add_argument("inputs", type=Path, nargs="+", help="Input CSV export(s)")
    p_common.add_argument(
        "--platform",
        type=str,
        default=None,
        help=(
            "Source platform written onto every imported game (e.g. Steam, Nintendo, "
            f"Playstation); '{IMPORT.library_platform}' keeps the platforms stored in the file"
        ),
    )
    p_common.add_argument(
        "--aliases",
        type=Path,
        help="Alias tables YAML (default: data/aliases.yaml when present, else built-in)",
    )
    p_common.add_argument(
        "--log-file",
        type=Path,
        help="Log file path (default: <logs-dir>/log-<timestamp>-<command>.log)",
    )
    p_common.add_argument(
        "--logs-dir",
        type=Path,
        help=f"Logs directory (default: {CLI.logs_dir})",
    )
    p_common.add_argument("--debug", action="store_true", help="Enable DEBUG logging (default: INFO)")

    p_import = sub.add_parser(
        "import",
        help="Import CSV exports and write the normalized library CSV",
        parents=[p_common],
    )
    p_import.add_argument("--out", type=Path, required=True, help="Output library CSV")
    p_import.set_defaults(_fn=_command_import)

    p_query = sub.add_parser(
        "query",
        help="Import CSV exports, then filter and sort the library",
        parents=[p_common],
    )
    p_query.add_argument(
        "--sort-by",
        type=str,
        default="Title",
        help="Title, Platform, Date or Custom (default: Title)",
    )
    p_query.add_argument("--field", type=str, help="Attribute used by --sort-by Custom")
    p_query.add_argument(
        "--numeric",
        action="store_true",
        help="Compare the custom field as numbers (default: alphabetical)",
    )
    p_query.add_argument("--descending", action="store_true", help="Reverse the sort order")
    p_query.add_argument(
        "--keyword",
        action="append",
        metavar="FIELD=TEXT",
        help="Keep records whose FIELD contains TEXT (repeatable)",
    )
    p_query.add_argument(
        "--range",
        action="append",
        metavar="FIELD=LOW:HIGH",
        help="Keep records whose numeric FIELD is within [LOW, HIGH] (repeatable)",
    )
    p_query.add_argument(
        "--years",
        action="append",
        metavar="FIELD=LOW:HIGH",
        help="Keep records whose date/year FIELD is within [LOW, HIGH] (repeatable)",
    )
    p_query.add_argument("--search", type=str, help="Free-text search over title and details")
    p_query.add_argument(
        "--columns",
        nargs="*",
        help="Extra attributes to display (default: title, platform, release_date)",
    )
    p_query.add_argument("--out", type=Path, help="Export the result to CSV instead of printing")
    p_query.set_defaults(_fn=_command_query)

    ns = parser.parse_args(argv)
    ns._fn(ns)
    return


if __name__ == "__main__":
    main()
