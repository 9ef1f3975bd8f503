"""
Command-line interface for the ``file_organizer`` package.

Collects files from the root folder and moves them into a subfolder
named YYYY-MM. Only files that are older than --days-to-stay are
collected.

Exit codes:
    0  nothing to move, or all selected entries were moved
    1  a listing, destination or move failure stopped the run
    2  invalid arguments or an unusable root folder
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from . import __version__
from .errors import ConfigurationError, FileOrganizerError
from .relocator import Relocator
from .selector import Selector
from .types import RunConfig
from .utils import DEFAULT_ROOT_FOLDER, prepare_root_folder

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG = 2


def non_negative_int(value: str) -> int:
    """argparse type for --days-to-stay."""
    try:
        days = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'")
    if days < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {days}")
    return days


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="file-organizer",
        description=(
            "Collect files from the --root-folder and move them into a "
            "subfolder with the format YYYY-MM. Only files that are older "
            "than --days-to-stay will be collected."
        ),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=__version__
    )
    parser.add_argument(
        "-r",
        "--root-folder",
        default=DEFAULT_ROOT_FOLDER,
        help=f"The root folder. ~ is expanded. (default: {DEFAULT_ROOT_FOLDER})",
    )
    parser.add_argument(
        "-d",
        "--days-to-stay",
        type=non_negative_int,
        default=0,
        help="How many days to leave files in the root folder before moving. (default: 0)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show whats going on.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Do not move files; only report what would be moved.",
    )
    parser.add_argument(
        "--include-hidden",
        action="store_true",
        help="Also collect entries whose name starts with a dot.",
    )
    return parser


def setup_logging(debug: bool = False) -> None:
    """Send log records to stderr; DEBUG shows every step of the run."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def run(config: RunConfig, now: Optional[datetime] = None) -> str:
    """
    Perform one organizer pass and return the summary line.

    Raises:
        ConfigurationError: If the root folder or retention window is unusable
        FileOrganizerError: If listing, destination creation or a move fails
    """
    if config.days_to_stay < 0:
        raise ConfigurationError(
            f"Days to stay must not be negative: {config.days_to_stay}"
        )

    root = prepare_root_folder(config.root_folder)
    now = now or datetime.now()

    selector = Selector(
        root,
        config.days_to_stay,
        include_hidden=config.include_hidden,
    )
    entries = selector.select(now)
    logger.debug(f"Selection stats: {selector.get_stats()}")

    if not entries:
        return "Currently no files to move. Bye 👋"

    relocator = Relocator(root, dry_run=config.dry_run)
    moved = relocator.relocate(entries, now)
    logger.debug(relocator.get_summary())

    if config.dry_run:
        return f"{moved} file(s) would be moved."
    return f"{moved} file(s) were moved. Bye 👋"


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.debug)

    config = RunConfig(
        root_folder=Path(args.root_folder),
        days_to_stay=args.days_to_stay,
        debug=args.debug,
        dry_run=args.dry_run,
        include_hidden=args.include_hidden,
    )

    try:
        message = run(config)
    except ConfigurationError as e:
        logger.error(str(e))
        return EXIT_CONFIG
    except FileOrganizerError as e:
        logger.error(str(e))
        return EXIT_FAILURE

    print(message)
    return EXIT_OK
