"""File operations with auto-discovery."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import types
from pathlib import Path
from typing import TYPE_CHECKING

from .base import FileOperation, OperationResult

if TYPE_CHECKING:
    from ..config import TidyConfig

__all__ = ["FileOperation", "OperationResult", "create_operation", "discover_operations"]

logger = logging.getLogger(__name__)


def discover_operations() -> dict[str, type]:
    """Discover all operation classes in this package, keyed by OPERATION_NAME."""
    operations: dict[str, type] = {}
    package = importlib.import_module(__package__ or "media_tidy.operations")

    for _finder, module_name, _is_pkg in pkgutil.iter_modules(package.__path__):
        if module_name == "base":
            continue
        try:
            mod = importlib.import_module(f"{package.__name__}.{module_name}")
        except ImportError:
            logger.warning("Failed to import operation module: %s", module_name)
            continue

        operations.update(_find_operation_classes(mod))
    return operations


def _find_operation_classes(mod: types.ModuleType) -> dict[str, type]:
    """Collect classes defining OPERATION_NAME from the given Python module."""
    found: dict[str, type] = {}

    for attr_name in dir(mod):
        attr = getattr(mod, attr_name)
        name = getattr(attr, "OPERATION_NAME", None)
        if isinstance(attr, type) and isinstance(name, str) and attr.__module__ == mod.__name__:
            found[name] = attr
            logger.debug("Found operation: %s", name)

    return found


def create_operation(name: str, config: TidyConfig, log: logging.Logger, trash_dir: Path) -> FileOperation:
    """Instantiate the operation registered under ``name``.

    Raises:
        KeyError: If no operation has that name.

    """
    operations = discover_operations()
    if name not in operations:
        raise KeyError(f"Unknown operation: {name}")
    return operations[name](config, log, trash_dir)
