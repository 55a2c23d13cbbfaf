#!/usr/bin/env python
"""
Main CLI entry point for rdu: folder sizes for one directory level, or a quick
preview when the path is a file.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from rich.text import Text

from . import __version__
from .config import RduConfig, load_config
from .errors import RduError
from .models import SortKey
from .preview import preview_file
from .render import (
    bind_progress,
    create_progress,
    entries_to_json,
    make_console,
    print_ext_summary,
    print_headline,
    print_table,
)
from .report import EXT_ORDERS, apply_filters, extension_summary
from .scanner import ScanOptions, scan_directory
from .size_utils import parse_size_to_bytes

logger = logging.getLogger(__name__)

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def _non_negative_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {raw!r}")
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value


def _positive_int(raw: str) -> int:
    value = _non_negative_int(raw)
    if value == 0:
        raise argparse.ArgumentTypeError("must be >= 1")
    return value


def _size_arg(raw: str) -> int:
    try:
        value = parse_size_to_bytes(raw)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))
    if value is None:
        raise argparse.ArgumentTypeError("empty size")
    return value


def _setup_logging(level_name: str) -> None:
    logging.basicConfig(
        level=LOG_LEVELS[level_name],
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _build_bootstrap_parser() -> argparse.ArgumentParser:
    """Parses only what must be known before the config file is read."""
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("-c", "--config", type=Path, default=None)
    parser.add_argument("-l", "--log-level", choices=list(LOG_LEVELS), default="warning")
    return parser


def build_parser(config: Optional[RduConfig] = None) -> argparse.ArgumentParser:
    config = config or RduConfig()
    parser = argparse.ArgumentParser(
        prog="rdu",
        description="Fast folder size + preview tool.",
        epilog="Defaults can be set in a YAML file (see --config).",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to scan (file or directory). Defaults to the current directory.",
    )
    parser.add_argument(
        "-n", "--top",
        type=_non_negative_int,
        default=config.top,
        metavar="N",
        help=f"Show only the top N entries (default: {config.top}).",
    )
    parser.add_argument(
        "-s", "--sort",
        choices=[k.value for k in SortKey],
        default=config.sort,
        help=f"Sorting strategy (default: {config.sort}).",
    )
    parser.add_argument(
        "-d", "--depth",
        type=int,
        choices=(0, 1),
        default=config.depth,
        help="0 = first layer only, directories shown as 0 B; 1 = full subtree sizes (default: %(default)s).",
    )
    parser.add_argument(
        "-L", "--follow-symlinks",
        dest="follow_symlinks",
        action="store_true",
        default=config.follow_symlinks,
        help="Follow symlinks. Cycles are detected and not descended twice.",
    )
    parser.add_argument(
        "-F", "--no-follow-symlinks",
        dest="follow_symlinks",
        action="store_false",
        help="Do not follow symlinks (default unless the config file says otherwise).",
    )
    parser.add_argument(
        "-i", "--smart-ignore",
        dest="smart_ignore",
        action="store_true",
        default=config.smart_ignore,
        help="Skip .git, node_modules, target, dist, build, .idea, .vscode (default: on).",
    )
    parser.add_argument(
        "-I", "--no-smart-ignore",
        dest="smart_ignore",
        action="store_false",
        help="Scan everything, including the smart-ignore names.",
    )
    parser.add_argument(
        "-j", "--json",
        action="store_true",
        help="Output JSON instead of a table.",
    )
    parser.add_argument(
        "-e", "--ext",
        action="store_true",
        help="Print an extension summary (top 20 groups).",
    )
    parser.add_argument(
        "-o", "--ext-order",
        choices=EXT_ORDERS,
        default=config.ext_order,
        help="Rank extension groups by name ('key') or by total size ('size') (default: %(default)s).",
    )
    parser.add_argument(
        "-m", "--min-size",
        type=_size_arg,
        default=None,
        metavar="SIZE",
        help="Hide entries smaller than SIZE (bytes, or with a K/M/G/T suffix).",
    )
    parser.add_argument(
        "-H", "--head",
        type=_non_negative_int,
        default=config.head,
        metavar="N",
        help=f"When previewing a text file, print only the first N lines (default: {config.head}).",
    )
    parser.add_argument(
        "-w", "--workers",
        type=_positive_int,
        default=config.workers,
        metavar="N",
        help="Worker threads for the scan (default: CPU count).",
    )
    parser.add_argument(
        "-p", "--progress",
        dest="progress",
        action="store_true",
        default=config.progress,
        help="Show a progress bar while scanning when stderr is a terminal (default: on).",
    )
    parser.add_argument(
        "-P", "--no-progress",
        dest="progress",
        action="store_false",
        help="Do not show the progress bar.",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        metavar="PATH",
        help="Path to a YAML defaults file (default: platform config dir, rdu/config.yml).",
    )
    parser.add_argument(
        "-l", "--log-level",
        choices=list(LOG_LEVELS),
        default="warning",
        help="Set logging level (default: warning).",
    )
    parser.add_argument(
        "-V", "--version",
        action="version",
        version=f"rdu {__version__}",
    )
    return parser


def run(args: argparse.Namespace) -> int:
    out = make_console()
    err = make_console(stderr=True)
    path = Path(args.path).expanduser()

    if path.is_file():
        preview_file(path, out, head=args.head)
        return EXIT_OK

    options = ScanOptions(
        depth=args.depth,
        follow_symlinks=args.follow_symlinks,
        smart_ignore=args.smart_ignore,
        workers=args.workers,
    )
    logger.info("Scanning %s (depth=%s, follow_symlinks=%s, smart_ignore=%s)",
                path, options.depth, options.follow_symlinks, options.smart_ignore)

    if args.progress and err.is_terminal:
        with create_progress(err) as progress:
            result = scan_directory(path, options, bind_progress(progress))
    else:
        result = scan_directory(path, options)

    rows = apply_filters(result.entries, min_size=args.min_size, sort=args.sort, top=args.top)

    # stdout carries only the JSON document in --json mode
    info = err if args.json else out
    print_headline(info, result.root, result.total_size)
    if args.ext:
        groups = extension_summary(result.entries, order=args.ext_order)
        print_ext_summary(info, groups, args.ext_order)

    if args.json:
        document = entries_to_json(rows)
        sys.stdout.write(document + "\n")
    else:
        print_table(out, rows, result.root)
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    boot_args, _ = _build_bootstrap_parser().parse_known_args(argv)
    _setup_logging(boot_args.log_level)
    err = make_console(stderr=True)

    try:
        config = load_config(boot_args.config)
    except RduError as e:
        err.print(Text(f"Error: {e}", style="red bold"))
        return EXIT_FAILURE

    args = build_parser(config).parse_args(argv)
    try:
        return run(args)
    except RduError as e:
        logger.debug("Fatal error", exc_info=True)
        err.print(Text(f"Error: {e}", style="red bold"))
        return EXIT_FAILURE
    except KeyboardInterrupt:
        err.print(Text("Interrupted.", style="yellow"))
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    raise SystemExit(main())
