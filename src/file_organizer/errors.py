"""
Exceptions raised by the file organizer.

Only fatal conditions are exceptions. Recoverable per-entry conditions
(unreadable origin timestamp, a duplicate that cannot be removed) are
reported through FileEntry.origin and MoveResult instead.
"""

from typing import Optional


class FileOrganizerError(Exception):
    """Base error for the project."""


class ConfigurationError(FileOrganizerError):
    """Root folder or retention window is unusable."""


class ListingError(FileOrganizerError):
    """The root folder could not be enumerated."""


class DestinationCreationError(FileOrganizerError):
    """The dated destination folder could not be created."""


class MoveError(FileOrganizerError):
    """An entry could not be moved into the destination folder."""

    def __init__(self, message: str, source: Optional[str] = None,
                 target: Optional[str] = None):
        super().__init__(message)
        self.source = source
        self.target = target
