"""
Selector for entries that are old enough to leave the root folder.

This module is responsible for:
- Listing the immediate children of the root folder (no recursion)
- Skipping hidden entries and dated folders created by previous runs
- Looking up each entry's origin timestamp
- Selecting entries whose origin is at or before now minus the
  retention window
"""

import logging
import os
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from .errors import ListingError
from .types import FileEntry
from .utils import is_destination_folder_name, origin_timestamp, root_folder_display

logger = logging.getLogger(__name__)

TimestampFunc = Callable[[Path], Optional[datetime]]


def list_entries(
    root_folder: Union[str, Path],
    include_hidden: bool = False
) -> List[Path]:
    """
    List the immediate children of the root folder, sorted by name.

    Args:
        root_folder: Folder to list
        include_hidden: If False, names starting with "." are left out

    Returns:
        Paths of files, directories and symlinks directly in root_folder

    Raises:
        ListingError: If the folder cannot be enumerated
    """
    try:
        with os.scandir(root_folder) as it:
            names = [e.name for e in it]
    except OSError as e:
        raise ListingError(
            f"Unable to list folder {root_folder}. Reason: {e}"
        ) from e

    if not include_hidden:
        names = [n for n in names if not n.startswith(".")]

    root = Path(root_folder)
    return [root / name for name in sorted(names)]


class Selector:
    """
    Collects entries of a root folder that reached the retention window.

    Entries named like a dated destination folder (YYYY-MM) are never
    selected, so a previous month's folder does not end up nested in
    the current one.
    """

    def __init__(
        self,
        root_folder: Union[str, Path],
        days_to_stay: int = 0,
        timestamp_func: Optional[TimestampFunc] = None,
        include_hidden: bool = False
    ):
        """
        Initialize the selector.

        Args:
            root_folder: The folder to scan
            days_to_stay: Retention window in days (must not be negative)
            timestamp_func: Optional callable(path) returning the origin
                            timestamp; defaults to utils.origin_timestamp
            include_hidden: Also consider entries whose name starts with "."
        """
        if days_to_stay < 0:
            raise ValueError(f"days_to_stay must not be negative: {days_to_stay}")

        self.root_folder = Path(root_folder)
        self.days_to_stay = days_to_stay
        self.timestamp_func = timestamp_func or origin_timestamp
        self.include_hidden = include_hidden

        self._stats: Dict[str, int] = {}
        self.reset_stats()

    def date_limit(self, now: datetime) -> datetime:
        """Entries placed at or before this instant are selected."""
        return now - timedelta(days=self.days_to_stay)

    def lookup_origin(self, path: Path) -> Optional[datetime]:
        """
        Origin timestamp of an entry, or None if it cannot be read.

        An entry without a timestamp counts as just created and stays
        in the root folder for this run.
        """
        try:
            origin = self.timestamp_func(path)
        except OSError as e:
            logger.debug(f"Unable to read origin timestamp of {path}: {e}")
            origin = None

        if origin is None:
            self._stats["unavailable"] += 1
            logger.debug(f"No origin timestamp for {path}, treating it as new")
        return origin

    def select(self, now: Optional[datetime] = None) -> List[FileEntry]:
        """
        Select the entries old enough to move.

        Args:
            now: Reference instant (defaults to the current time)

        Returns:
            FileEntry objects in name order

        Raises:
            ListingError: If the root folder cannot be listed
        """
        now = now or datetime.now()
        limit = self.date_limit(now)

        logger.debug(f"Will move files created earlier than: {limit:%Y-%m-%d %H:%M:%S}")
        logger.debug(f"Collecting files in folder: {root_folder_display(self.root_folder)}")

        selected: List[FileEntry] = []
        for path in list_entries(self.root_folder, self.include_hidden):
            self._stats["scanned"] += 1

            # Keep dated folders where they are
            if is_destination_folder_name(path.name):
                self._stats["destination_folders"] += 1
                logger.debug(f"Skip target directory {path}")
                continue

            origin = self.lookup_origin(path)
            if origin is None:
                continue

            if origin > limit:
                self._stats["too_young"] += 1
                logger.debug(
                    f"File is not old enough to move: {path} "
                    f"Created at: {origin:%Y-%m-%d %H:%M:%S}"
                )
                continue

            logger.debug(
                f"Possible file to move: {path} "
                f"Created at: {origin:%Y-%m-%d %H:%M:%S}"
            )
            selected.append(FileEntry(name=path.name, path=str(path), origin=origin))

        self._stats["selected"] = len(selected)
        return selected

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about the last scan.

        Returns:
            Dictionary with scanned, destination_folders, unavailable,
            too_young and selected counts
        """
        return dict(self._stats)

    def reset_stats(self) -> None:
        """Reset statistics for a new scan."""
        self._stats = {
            "scanned": 0,
            "destination_folders": 0,
            "unavailable": 0,
            "too_young": 0,
            "selected": 0,
        }


def select(
    root_folder: Union[str, Path],
    days_to_stay: int = 0,
    now: Optional[datetime] = None,
    timestamp_func: Optional[TimestampFunc] = None,
    include_hidden: bool = False
) -> List[FileEntry]:
    """
    Select entries of root_folder whose origin is at or before
    ``now - days_to_stay days``.

    Args:
        root_folder: The folder to scan (one level only)
        days_to_stay: Retention window in days
        now: Reference instant (defaults to the current time)
        timestamp_func: Optional origin timestamp lookup, mainly for tests
        include_hidden: Also consider entries whose name starts with "."

    Returns:
        List of selected FileEntry objects

    Raises:
        ListingError: If the root folder cannot be listed
        ValueError: If days_to_stay is negative
    """
    selector = Selector(
        root_folder,
        days_to_stay,
        timestamp_func=timestamp_func,
        include_hidden=include_hidden,
    )
    return selector.select(now)
