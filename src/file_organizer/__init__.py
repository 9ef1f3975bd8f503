"""
File Organizer - A CLI tool that tidies a download folder by month.

This package provides functionality to:
- Scan the top level of a root folder (e.g. ~/Downloads)
- Select entries that have been in the folder longer than --days-to-stay
- Skip dated YYYY-MM folders created by previous runs
- Move selected entries into the YYYY-MM folder of the current month
- Replace stale duplicates left behind by an earlier run
"""

__version__ = "0.1.0"
__author__ = "File Organizer Team"
