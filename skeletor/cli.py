"""Command-line front door for skeletor.

Parses CLI options, configures logging and the reporter theme, then dispatches
into the apply, snapshot or info flow.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .documents import DEFAULT_CONFIG_NAME, default_file_path
from .errors import SkeletorError
from .highlight import normalize_style
from .report import Reporter
from .runtime import ApplyOptions, SnapshotOptions, run_apply, run_info, run_snapshot
from .runtime.config import load_no_color, load_style_name, load_theme_name
from .ui_theme import available_theme_names, resolve_theme

LOG_FORMAT = "%(levelname)s: %(message)s"


def _add_ignore_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--ignore",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Ignore pattern, or path to a file of patterns. Repeatable.",
    )
    parser.add_argument(
        "--ignore-file",
        action="append",
        default=[],
        metavar="FILE",
        help="File of gitignore-style patterns. Repeatable.",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the ``skeletor`` argument parser with its subcommands."""
    parser = argparse.ArgumentParser(
        prog="skeletor",
        description="Scaffold directory trees from YAML and snapshot directories back to YAML.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"Reporter theme name ({', '.join(available_theme_names())}).",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    apply_parser = subparsers.add_parser("apply", help="Create files and directories from a config document.")
    apply_parser.add_argument(
        "config",
        nargs="?",
        default=None,
        help=f"Config document. Defaults to {DEFAULT_CONFIG_NAME}.",
    )
    apply_parser.add_argument("-o", "--output", default=".", help="Directory to create the tree in.")
    apply_parser.add_argument("--overwrite", action="store_true", help="Replace existing files.")
    apply_parser.add_argument("--dry-run", action="store_true", help="Preview without touching the filesystem.")
    apply_parser.add_argument("-v", "--verbose", action="store_true", help="List every operation.")
    _add_ignore_arguments(apply_parser)

    snapshot_parser = subparsers.add_parser("snapshot", help="Capture a directory as a config document.")
    snapshot_parser.add_argument("source", help="Directory to capture.")
    snapshot_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help=f"Document to write. Defaults to {DEFAULT_CONFIG_NAME}.",
    )
    snapshot_parser.add_argument(
        "--exclude-contents",
        action="store_true",
        help="Record files with empty contents.",
    )
    snapshot_parser.add_argument("--dry-run", action="store_true", help="Preview without writing the document.")
    snapshot_parser.add_argument("-v", "--verbose", action="store_true", help="List every captured entry.")
    snapshot_parser.add_argument("--note", default=None, help="Free-form note stored in the document.")
    snapshot_parser.add_argument("--stdout", action="store_true", help="Print the document instead of writing it.")
    snapshot_parser.add_argument(
        "--gitignore",
        action="store_true",
        help="Also honor SOURCE/.gitignore.",
    )
    _add_ignore_arguments(snapshot_parser)

    info_parser = subparsers.add_parser("info", help="Show metadata recorded in a config document.")
    info_parser.add_argument(
        "config",
        nargs="?",
        default=None,
        help=f"Config document. Defaults to {DEFAULT_CONFIG_NAME}.",
    )
    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    if args.debug:
        level = logging.DEBUG
    elif getattr(args, "verbose", False):
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(stream=sys.stderr, level=level, format=LOG_FORMAT)


def _build_reporter(args: argparse.Namespace) -> Reporter:
    no_color = args.no_color or load_no_color() or not sys.stdout.isatty()
    theme_name = args.theme if args.theme is not None else load_theme_name()
    return Reporter(
        theme=resolve_theme(theme_name, no_color=no_color),
        stream=sys.stdout,
        style=normalize_style(load_style_name()),
    )


def _dispatch(args: argparse.Namespace, reporter: Reporter) -> None:
    if args.command == "apply":
        run_apply(
            ApplyOptions(
                config_path=default_file_path(args.config),
                output_dir=Path(args.output),
                overwrite=args.overwrite,
                dry_run=args.dry_run,
                verbose=args.verbose,
                ignore_values=tuple(args.ignore),
                ignore_files=tuple(args.ignore_file),
            ),
            reporter,
        )
    elif args.command == "snapshot":
        run_snapshot(
            SnapshotOptions(
                source=Path(args.source),
                output_path=default_file_path(args.output),
                include_contents=not args.exclude_contents,
                dry_run=args.dry_run,
                verbose=args.verbose,
                note=args.note,
                to_stdout=args.stdout,
                ignore_values=tuple(args.ignore),
                ignore_files=tuple(args.ignore_file),
                use_gitignore=args.gitignore,
            ),
            reporter,
        )
    elif args.command == "info":
        run_info(default_file_path(args.config), reporter)
    else:
        raise SystemExit(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run one skeletor command.

    Any ``SkeletorError`` becomes ``SystemExit`` with its message (and tip),
    which prints to stderr and exits with status 1.
    """
    args = build_parser().parse_args(argv)
    _configure_logging(args)
    reporter = _build_reporter(args)
    try:
        _dispatch(args, reporter)
    except SkeletorError as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
