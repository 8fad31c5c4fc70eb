"""Lazy depth-first directory walk yielding entries or per-entry errors."""

from __future__ import annotations

import enum
import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileEntry:
    """A single filesystem node produced by the walk."""

    path: Path
    name: str
    is_dir: bool
    is_symlink: bool


@dataclass(frozen=True)
class WalkEntry:
    """A successfully read walk step."""

    entry: FileEntry


@dataclass(frozen=True)
class WalkError:
    """A walk step that could not be read (permission denied, vanished, ...)."""

    path: Path
    reason: str


WalkOutcome = WalkEntry | WalkError


class WalkErrorPolicy(enum.Enum):
    """What to do with a WalkError."""

    DROP = "drop"
    LOG = "log"

    @classmethod
    def from_flag(cls, log_errors: bool) -> WalkErrorPolicy:
        return cls.LOG if log_errors else cls.DROP

    def handle(self, error: WalkError, log: logging.Logger | None = None) -> None:
        """Apply the policy to a single walk error."""
        if self is WalkErrorPolicy.LOG:
            (log or logger).warning("Skipping unreadable entry %s: %s", error.path, error.reason)


def _to_entry(item: os.DirEntry[str]) -> FileEntry:
    is_symlink = item.is_symlink()
    return FileEntry(
        path=Path(item.path),
        name=item.name,
        is_dir=item.is_dir(follow_symlinks=False),
        is_symlink=is_symlink,
    )


def walk(root: Path) -> Iterator[WalkOutcome]:
    """Walk a directory tree depth-first.

    Yields every file and directory below ``root`` (``root`` itself is not
    yielded). Symlinked directories are reported but not followed. Errors
    are yielded as WalkError values instead of being raised so the caller
    decides whether they matter.

    Args:
        root: Directory to walk.

    Yields:
        WalkEntry for each readable node, WalkError for each failure.

    """
    stack: list[Path] = [root]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as it:
                items = list(it)
        except OSError as exc:
            yield WalkError(path=current, reason=exc.strerror or str(exc))
            continue

        subdirs: list[Path] = []
        for item in items:
            try:
                entry = _to_entry(item)
            except OSError as exc:
                yield WalkError(path=Path(item.path), reason=exc.strerror or str(exc))
                continue

            yield WalkEntry(entry)
            if entry.is_dir and not entry.is_symlink:
                subdirs.append(entry.path)

        # Reversed so the first subdirectory is visited first
        stack.extend(reversed(subdirs))
