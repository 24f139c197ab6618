# Filename: cli.py
# Author: Rich Lewis @RichLewis007
# Description: Command-line interface for xdg-trash. Moves files and directories into the
#              freedesktop.org home trash instead of deleting them.

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .services import logger as logger_service
from .services.config import TrashConfig
from .services.trash import TrashMover
from .workers.trash_worker import TrashWorker

PROG = "xdg-trash"


def build_parser() -> argparse.ArgumentParser:
    # Create and configure the command-line argument parser.
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Move files and directories to the freedesktop.org home trash.",
    )
    parser.add_argument("paths", nargs="+", type=Path, metavar="PATH", help="Items to trash.")
    parser.add_argument(
        "--data-home",
        type=Path,
        default=None,
        help="Use DIR/Trash instead of the trash under $XDG_DATA_HOME.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Console log level (default: %(default)s).",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Directory for the rotating log file.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print where each item was moved.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    # Entry point for the CLI utility.
    parser = build_parser()
    args = parser.parse_args(argv)

    logger_service.configure(log_level=args.log_level, log_dir=args.log_dir)
    logger = logging.getLogger(__name__)

    if args.data_home is not None:
        config = TrashConfig(data_home=args.data_home.expanduser().absolute())
    else:
        config = TrashConfig.from_environment()
    logger.debug("Using trash directory %s", config.trash_dir)

    result = TrashWorker(args.paths, mover=TrashMover(config)).start()

    if args.verbose:
        for path, trashed in result.trashed:
            print(f"{path}\t{trashed.trash_file}")
    for path, reason in result.failed:
        print(f"{PROG}: cannot trash '{path}': {reason}", file=sys.stderr)

    return 0 if result.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
