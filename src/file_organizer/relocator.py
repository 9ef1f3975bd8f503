"""
Relocator for moving selected entries into the dated destination folder.

This module is responsible for:
- Creating (or reusing) the YYYY-MM folder for the current month
- Removing a stale duplicate at the target path before moving
- Moving entries and counting successful moves
- Supporting dry-run mode (no actual changes)
- Returning per-entry results for reporting

A duplicate that cannot be removed is logged and the entry is skipped.
Failure to create the destination folder or to move an entry stops the
whole run with an exception.
"""

import logging
import shutil
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Union

from .errors import DestinationCreationError, MoveError
from .types import FileEntry, MoveResult, MoveStatus, PathKind
from .utils import destination_folder_name, path_kind, remove_path

logger = logging.getLogger(__name__)


def clear_target(target: Union[str, Path]) -> Optional[str]:
    """
    Remove an existing entry at the target path.

    Args:
        target: Path inside the destination folder

    Returns:
        None if the target is free afterwards, otherwise the reason the
        existing entry could not be removed
    """
    if path_kind(target) is PathKind.NOT_FOUND:
        return None

    logger.debug("↳ File in target folder already exists.")
    try:
        remove_path(target)
    except OSError as e:
        logger.warning(f"↳ Error removing file from target folder: {e}")
        return str(e)
    return None


class Relocator:
    """
    Moves entries from the root folder into its YYYY-MM subfolder.

    The destination folder is named after the date the relocation runs,
    not after the entries' own dates, and is reused by later runs in the
    same month.
    """

    def __init__(self, root_folder: Union[str, Path], dry_run: bool = False):
        """
        Initialize the relocator.

        Args:
            root_folder: The folder that holds the entries and receives
                         the dated subfolder
            dry_run: If True, report what would happen without changes
        """
        self.root_folder = Path(root_folder)
        self.dry_run = dry_run

        self.results: List[MoveResult] = []
        self._stats: Dict[MoveStatus, int] = {status: 0 for status in MoveStatus}

    def destination_for(self, now: Optional[datetime] = None) -> Path:
        """Path of the dated folder for ``now``."""
        return self.root_folder / destination_folder_name(now)

    def prepare_destination(self, now: Optional[datetime] = None) -> Path:
        """
        Make sure the destination folder exists.

        The folder is created without parents; the root folder itself
        must already exist. An existing folder is reused.

        Returns:
            The destination folder path

        Raises:
            DestinationCreationError: If the folder cannot be created or a
                                      non-directory occupies its name
        """
        destination = self.destination_for(now)
        logger.debug(f"Target Folder: {destination}")

        kind = path_kind(destination)
        if kind is PathKind.DIRECTORY:
            logger.debug(f"Target folder {destination} already exists.")
            return destination

        if kind is PathKind.FILE:
            raise DestinationCreationError(
                f"Unable to create target folder. Reason: {destination} "
                f"exists and is not a directory"
            )

        if self.dry_run:
            logger.info(f"[DRY RUN] Would create {destination}")
            return destination

        try:
            destination.mkdir()
        except OSError as e:
            raise DestinationCreationError(
                f"Unable to create target folder. Reason: {e}"
            ) from e

        logger.debug(f"Created target folder {destination}")
        return destination

    def move_entry(self, entry: FileEntry, destination: Union[str, Path]) -> MoveResult:
        """
        Move one entry into the destination folder.

        An entry already at the target path is removed first. If that
        fails the entry is left in place and SKIPPED_COLLISION returned.

        Args:
            entry: The entry to move
            destination: The prepared destination folder

        Returns:
            MoveResult describing the outcome

        Raises:
            MoveError: If the move itself fails
        """
        src_path = Path(entry.path)
        target = Path(destination) / entry.name

        logger.debug(f"About to move file from: {src_path}\n↳ to: {target}")

        if self.dry_run:
            result = MoveResult(
                source_path=str(src_path),
                dest_path=str(target),
                status=MoveStatus.DRY_RUN,
                message=f"Would move to {target}"
            )
            self._record(result)
            return result

        replaced = path_kind(target) is not PathKind.NOT_FOUND
        reason = clear_target(target)
        if reason is not None:
            result = MoveResult(
                source_path=str(src_path),
                dest_path=str(target),
                status=MoveStatus.SKIPPED_COLLISION,
                message=f"Could not remove existing file: {reason}"
            )
            self._record(result)
            return result

        try:
            shutil.move(str(src_path), str(target))
        except OSError as e:
            raise MoveError(
                f"Unable to move {src_path} to {target}. Reason: {e}",
                source=str(src_path),
                target=str(target),
            ) from e

        logger.debug("↳ OK")
        if replaced:
            result = MoveResult(
                source_path=str(src_path),
                dest_path=str(target),
                status=MoveStatus.MOVED_REPLACED,
                message="Moved successfully (replaced existing file)"
            )
        else:
            result = MoveResult(
                source_path=str(src_path),
                dest_path=str(target),
                status=MoveStatus.MOVED,
                message="Moved successfully"
            )
        self._record(result)
        return result

    def relocate(
        self,
        entries: List[FileEntry],
        now: Optional[datetime] = None,
    ) -> int:
        """
        Move all entries into the destination folder for ``now``.

        Args:
            entries: Entries chosen by the selector
            now: Reference instant (defaults to the current time)

        Returns:
            Number of entries moved (or that would be moved in dry run)

        Raises:
            DestinationCreationError: If the destination cannot be created
            MoveError: If an entry cannot be moved
        """
        destination = self.prepare_destination(now)
        total = len(entries)
        moved = 0

        for entry in entries:
            result = self.move_entry(entry, destination)
            if result.moved:
                moved += 1

        logger.info(f"Completed processing {total} entries, {moved} moved")
        return moved

    def _record(self, result: MoveResult) -> None:
        self.results.append(result)
        self._stats[result.status] += 1

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about relocations.

        Returns:
            Dictionary mapping status names to counts
        """
        return {status.value: count for status, count in self._stats.items()}

    def get_summary(self) -> str:
        """
        Get a human-readable summary of relocations.

        Returns:
            Formatted summary string
        """
        stats = self.get_stats()
        total = sum(stats.values())

        lines = [f"Relocation Summary ({total} total):"]

        if self.dry_run:
            lines.append(f"  Would move: {stats.get('dry_run', 0)}")
        else:
            moved_count = stats.get("moved", 0) + stats.get("moved_replaced", 0)
            lines.append(f"  Moved: {moved_count}")
            if stats.get("moved_replaced", 0):
                lines.append(
                    f"    (replaced existing: {stats.get('moved_replaced', 0)})"
                )

        if stats.get("skipped_collision", 0):
            lines.append(f"  Skipped: {stats.get('skipped_collision', 0)}")

        return "\n".join(lines)

    def reset_stats(self) -> None:
        """Reset statistics and results for a new batch."""
        self._stats = {status: 0 for status in MoveStatus}
        self.results = []


def relocate(
    entries: List[FileEntry],
    root_folder: Union[str, Path],
    now: Optional[datetime] = None,
    dry_run: bool = False
) -> int:
    """
    Move entries into ``root_folder/YYYY-MM`` for the month of ``now``.

    Returns:
        Number of entries moved

    Raises:
        DestinationCreationError: If the destination cannot be created
        MoveError: If an entry cannot be moved
    """
    return Relocator(root_folder, dry_run=dry_run).relocate(entries, now)
