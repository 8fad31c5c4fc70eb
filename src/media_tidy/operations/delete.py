"""Quarantine duplicated downloads into the trash directory."""

from __future__ import annotations

import logging
import shutil
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from ..config import DEFAULT_DELETE_SUFFIX
from .base import OperationResult

if TYPE_CHECKING:
    from ..config import TidyConfig
    from ..walker import FileEntry


def is_delete_file(name: str, suffix: str = DEFAULT_DELETE_SUFFIX) -> bool:
    """Check if a file name carries the duplicate-download suffix (case-sensitive)."""
    return name.endswith(suffix)


def unique_trash_path(trash_dir: Path, name: str) -> Path:
    """Pick a destination in the trash that does not clobber an earlier file.

    The original name is kept when free, otherwise ``<stem>_<n><suffix>``
    with the lowest free ``n`` is used.
    """
    candidate = trash_dir / name
    if not candidate.exists():
        return candidate

    original = Path(name)
    counter = 1
    while True:
        candidate = trash_dir / f"{original.stem}_{counter}{original.suffix}"
        if not candidate.exists():
            return candidate
        counter += 1


class DeleteOperation:
    """Moves files ending with the delete suffix into the trash directory."""

    OPERATION_NAME: str = "del"

    def __init__(self, config: TidyConfig, logger: logging.Logger, trash_dir: Path) -> None:
        """Initialize the operation.

        Args:
            config: Run configuration.
            logger: Logger instance.
            trash_dir: Existing quarantine directory.

        """
        self.config = config
        self.logger = logger
        self.trash_dir = trash_dir
        self.suffix = config.delete_suffix
        # Held while picking a free trash name and moving into it
        self._move_lock = threading.Lock()

    def _move_to_trash(self, entry: FileEntry) -> Path:
        with self._move_lock:
            destination = unique_trash_path(self.trash_dir, entry.name)
            shutil.move(str(entry.path), str(destination))
        return destination

    def apply(self, entry: FileEntry) -> OperationResult:
        """Move the file to the trash if its name matches.

        Failures are reported in the result rather than raised so one bad
        file does not stop the rest of the run.
        """
        if not is_delete_file(entry.name, self.suffix):
            return OperationResult(path=entry.path, success=False, action="unmatched")

        try:
            destination = self._move_to_trash(entry)
        except PermissionError as e:
            self.logger.error("Permission denied moving %s: %s", entry.path, e)
            return OperationResult(
                path=entry.path,
                success=False,
                action="error",
                error=f"Permission denied: {e}",
            )
        except OSError as e:
            self.logger.error("Error moving %s: %s", entry.path, e)
            return OperationResult(
                path=entry.path,
                success=False,
                action="error",
                error=str(e),
            )

        self.logger.debug("Moved to trash: %s -> %s", entry.path, destination)
        return OperationResult(
            path=entry.path,
            success=True,
            action="moved",
            destination=destination,
        )
