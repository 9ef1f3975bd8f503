"""
Type definitions and data classes for the file organizer.

This module defines:
- PathKind: Enum returned by the stateless path existence/type query
- FileEntry: Data class for an entry found in the root folder
- MoveStatus: Enum for per-entry relocation outcomes
- MoveResult: Data class representing the outcome of relocating one entry
- RunConfig: Data class holding the options of a single run
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional


class PathKind(Enum):
    """What, if anything, lives at a path (symlinks are not followed)."""
    NOT_FOUND = "not_found"
    FILE = "file"
    DIRECTORY = "directory"


@dataclass(slots=True)
class FileEntry:
    """
    Represents an entry discovered in the root folder.

    Attributes:
        name: The entry's basename (e.g., "invoice.pdf")
        path: The full absolute path to the entry
        origin: When the entry was placed into the root folder, or None
                if that could not be determined
    """
    name: str
    path: str
    origin: Optional[datetime] = None

    def __hash__(self):
        return hash(self.path)

    def __eq__(self, other):
        if not isinstance(other, FileEntry):
            return False
        return self.path == other.path


class MoveStatus(Enum):
    """Status of a single relocation."""
    MOVED = "moved"                          # Moved successfully
    MOVED_REPLACED = "moved_replaced"        # Moved over a removed duplicate
    SKIPPED_COLLISION = "skipped_collision"  # Duplicate could not be removed
    DRY_RUN = "dry_run"                      # Would move (dry run mode)


@dataclass
class MoveResult:
    """Result of relocating one entry."""
    source_path: str
    dest_path: str
    status: MoveStatus
    message: str

    @property
    def moved(self) -> bool:
        return self.status in (
            MoveStatus.MOVED,
            MoveStatus.MOVED_REPLACED,
            MoveStatus.DRY_RUN,
        )


@dataclass
class RunConfig:
    """Options for one organizer run, as parsed from the command line."""
    root_folder: Path
    days_to_stay: int = 0
    debug: bool = False
    dry_run: bool = False
    include_hidden: bool = False
