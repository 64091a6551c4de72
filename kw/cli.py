#!/usr/bin/env python3
"""
CLI entry point for the kw Kismet-to-WiGLE exporter.

Defines the following commands:
  kw export <db.kismet> [--out FILE] [--log-file FILE] [banner overrides]
  kw version
"""

import sys
import sqlite3
from argparse import ArgumentParser, Namespace
from dataclasses import replace
from importlib.metadata import PackageNotFoundError, version as _get_version

from kw.utils.log import get_logger, add_json_log, remove_log_handler
from kw.parsers.kismet import KismetSource
from kw.analysis.config import BannerConfig
from kw.export.wigle import export_wigle

logger = get_logger(__name__)

BANNER_FIELDS = ("model", "release", "device", "display", "board", "brand")


def banner_from_args(args: Namespace) -> BannerConfig:
    """
    Apply any banner overrides given on the command line to the defaults.
    """
    app_release = getattr(args, "app_release", None)
    base = BannerConfig.default() if app_release is None else BannerConfig.from_version(app_release)
    overrides = {
        name: getattr(args, name)
        for name in BANNER_FIELDS
        if getattr(args, name, None) is not None
    }
    return replace(base, **overrides)


def export(db_path: str, out: str | None, banner: BannerConfig) -> None:
    """
    Convert a Kismet database into a WiGLE CSV report.

    Parameters
    ----------
    db_path
        Path to the `.kismet` SQLite file.
    out
        Output file; the report goes to stdout when omitted.
    banner
        Tool metadata for the first line of the report.
    """
    logger.info("Export: db=%s, out=%s", db_path, out or "<stdout>")
    with KismetSource(db_path) as source:
        if out is None:
            stats = export_wigle(source, sys.stdout, banner)
            sys.stdout.flush()
        else:
            with open(out, "w", newline="", encoding="utf-8") as f:
                stats = export_wigle(source, f, banner)
    logger.info(
        "Export done: %d access points, %d rows", stats.devices, stats.rows
    )


def version() -> None:
    """
    Print the installed kw package version.
    """
    try:
        ver = _get_version("kismet-wigle")
    except PackageNotFoundError:
        ver = "unknown"
    logger.info("kw version %s", ver)


def parse_args(argv: list[str] | None = None) -> Namespace:
    """
    Parse command-line arguments and return the populated namespace.
    """
    parser = ArgumentParser(prog="kw")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # kw export
    p = subparsers.add_parser("export", help="Write a WiGLE CSV report.")
    p.add_argument("db", type=str, help="Kismet database (.kismet) to read.")
    p.add_argument("--out", "-o", type=str, help="Output file (default: stdout).")
    p.add_argument("--log-file", type=str, help="Append JSON logs to this file.")
    grp = p.add_argument_group("banner", "Override the tool metadata line.")
    grp.add_argument("--app-release", dest="app_release", type=str)
    grp.add_argument("--model", type=str)
    grp.add_argument("--release", type=str)
    grp.add_argument("--device", type=str)
    grp.add_argument("--display", type=str)
    grp.add_argument("--board", type=str)
    grp.add_argument("--brand", type=str)

    # kw version
    subparsers.add_parser("version", help="Show kw version and exit.")

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """
    Entry point: dispatch to the selected subcommand.
    """
    args = parse_args(argv)
    match args.command:
        case "export":
            handler = add_json_log(args.log_file) if args.log_file else None
            try:
                export(args.db, args.out, banner_from_args(args))
            except (sqlite3.Error, OSError, ValueError) as e:
                logger.error("Export failed: %s", e)
                sys.exit(1)
            finally:
                if handler is not None:
                    remove_log_handler(handler)
        case "version":
            version()
        case _:
            sys.exit(1)


if __name__ == "__main__":
    main()
