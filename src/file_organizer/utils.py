"""
Path and date helpers shared by the selector and the relocator.

This module provides:
- path_kind(): Stateless existence/type query returning a PathKind
- prepare_root_folder(): Expand, normalize and validate the root folder
- root_folder_display(): Root folder as a string with a trailing separator
- destination_folder_name(): Format a date as the YYYY-MM folder name
- is_destination_folder_name(): Recognise names of dated folders
- origin_timestamp(): When an entry was placed into its folder
- remove_path(): Remove a file, symlink or directory tree
"""

import logging
import os
import re
import shutil
import stat
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from .errors import ConfigurationError
from .types import PathKind

logger = logging.getLogger(__name__)

# Dated destination folders look like 2024-03
DESTINATION_FOLDER_FORMAT = "%Y-%m"
DESTINATION_FOLDER_PATTERN = re.compile(r"\d{4}-\d{2}")

DEFAULT_ROOT_FOLDER = "~/Downloads"


def path_kind(path: Union[str, Path]) -> PathKind:
    """
    Report what lives at a path without following symlinks.

    A symlink is reported as FILE even when it points to a directory,
    so that it is moved or removed as a link and never traversed.

    Args:
        path: Path to inspect

    Returns:
        PathKind.NOT_FOUND, PathKind.FILE or PathKind.DIRECTORY
    """
    try:
        st = os.lstat(path)
    except (FileNotFoundError, NotADirectoryError):
        return PathKind.NOT_FOUND

    if stat.S_ISDIR(st.st_mode):
        return PathKind.DIRECTORY
    return PathKind.FILE


def prepare_root_folder(path: Union[str, Path]) -> Path:
    """
    Validate the given root folder and make sure it exists and is writable.

    Args:
        path: Path to the root folder. ``~`` is expanded to the user's
              home directory and relative paths are made absolute.

    Returns:
        The absolute root folder path

    Raises:
        ConfigurationError: If the folder is missing, not a directory
                            or not writable
    """
    folder = Path(os.path.abspath(os.path.expanduser(str(path))))

    if not folder.is_dir():
        raise ConfigurationError(
            f"Root folder '{path}' does not exist or is no directory."
        )

    if not os.access(folder, os.W_OK):
        raise ConfigurationError(f"Root folder '{path}' is not writable.")

    logger.debug(f"Root folder: {root_folder_display(folder)}")
    return folder


def root_folder_display(folder: Union[str, Path]) -> str:
    """Return the folder as a string that always ends with a separator."""
    folder_str = str(folder)
    if not folder_str.endswith(os.sep):
        folder_str += os.sep
    return folder_str


def destination_folder_name(now: Optional[datetime] = None) -> str:
    """
    Name of the dated folder that collects entries moved at ``now``.

    Examples:
        >>> destination_folder_name(datetime(2024, 3, 9))
        '2024-03'
    """
    now = now or datetime.now()
    return now.strftime(DESTINATION_FOLDER_FORMAT)


def is_destination_folder_name(name: str) -> bool:
    """True if ``name`` looks like a dated folder created by a previous run."""
    return DESTINATION_FOLDER_PATTERN.fullmatch(name) is not None


def origin_timestamp(path: Union[str, Path]) -> Optional[datetime]:
    """
    Determine when an entry was placed into its containing folder.

    Uses the birth time where the platform records one (macOS, BSD,
    Windows). Elsewhere the inode change time is used, which a rename
    into the folder updates. Symlinks are not followed.

    Args:
        path: The entry to inspect

    Returns:
        A naive local datetime, or None if no usable timestamp exists

    Raises:
        OSError: If the entry cannot be stat'ed
    """
    st = os.lstat(path)
    ts = getattr(st, "st_birthtime", None) or getattr(st, "st_ctime", None)
    if not ts:
        return None
    return datetime.fromtimestamp(ts)


def remove_path(path: Union[str, Path]) -> None:
    """
    Remove whatever lives at ``path``.

    Directories are removed recursively; files and symlinks are unlinked.
    A missing path is not an error.

    Raises:
        OSError: If the removal fails
    """
    kind = path_kind(path)
    if kind is PathKind.DIRECTORY:
        shutil.rmtree(path)
    elif kind is PathKind.FILE:
        os.unlink(path)
