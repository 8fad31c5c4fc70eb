"""Base protocol and result type for file operations."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..walker import FileEntry


@dataclass(frozen=True)
class OperationResult:
    """Outcome of applying an operation to one file."""

    path: Path
    success: bool
    action: str  # "moved", "renamed", "matched" (rename failed), "unmatched", "error"
    destination: Path | None = None
    error: str | None = None

    @property
    def message(self) -> str:
        """Human-readable line reported for successful operations."""
        if self.destination is not None:
            return f"{self.action}: {self.path.name} -> {self.destination.name}"
        return f"{self.action}: {self.path.name}"


@runtime_checkable
class FileOperation(Protocol):
    """Interface for the per-file mutation selected at startup."""

    OPERATION_NAME: str

    def apply(self, entry: FileEntry) -> OperationResult:
        """Apply the operation to a single eligible file.

        Args:
            entry: File that passed the path filter.

        Returns:
            OperationResult describing what happened.

        """
        ...
