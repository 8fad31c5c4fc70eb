"""Skip rules deciding which walked entries reach an operation."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .walker import FileEntry

DEFAULT_TRASH_MARKER = "/trash"


def is_hidden(entry: FileEntry) -> bool:
    """Check whether the entry follows the dot-file convention."""
    return entry.name.startswith(".")


def is_in_trash(entry: FileEntry, trash_marker: str = DEFAULT_TRASH_MARKER) -> bool:
    """Check whether the entry lives under a trash directory.

    This is a plain substring test on the POSIX form of the path, so any
    path segment starting with the trash name matches.
    """
    return trash_marker in entry.path.as_posix()


def should_skip(entry: FileEntry, trash_marker: str = DEFAULT_TRASH_MARKER) -> bool:
    """Decide whether an entry must be skipped.

    Rules are applied in order and short-circuit:

    1. symlinks
    2. hidden files (name starts with ``.``)
    3. anything whose path contains the trash marker
    4. directories

    Args:
        entry: Walked entry to check.
        trash_marker: Substring identifying quarantined paths.

    Returns:
        True if the entry must not be processed.

    """
    return entry.is_symlink or is_hidden(entry) or is_in_trash(entry, trash_marker) or entry.is_dir


def trash_marker_for(trash_dir_name: str) -> str:
    """Build the path marker for a trash directory name."""
    return f"/{trash_dir_name}"
