"""Orchestrates a single media-tidy run."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .filters import trash_marker_for
from .operations import create_operation
from .pool import RunStats, WorkerPool
from .walker import WalkErrorPolicy, walk

if TYPE_CHECKING:
    from .config import TidyConfig

LOGGER_NAME = "media_tidy"


class TidyRunner:
    """Prepares the trash directory, runs the pool and reports the result."""

    def __init__(self, config: TidyConfig, root: Path, console: Console | None = None) -> None:
        """Initialize the runner.

        Args:
            config: Run configuration.
            root: Directory tree to operate on. Made absolute so the
                trash marker also matches under a relative root like ".".
            console: Console for user-facing output.

        """
        self.config = config
        self.root = root.absolute()
        self.console = console or Console()
        self.logger = self._setup_logging()
        self.trash_dir = self.root / config.trash_dir_name

    def _setup_logging(self) -> logging.Logger:
        """Set up logging for the run.

        Returns:
            Configured logger instance.

        """
        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(getattr(logging, self.config.log_level.upper(), logging.INFO))

        # Clear existing handlers to avoid duplicates if the runner is recreated
        if logger.handlers:
            logger.handlers.clear()

        console_handler = RichHandler(
            console=self.console,
            show_time=True,
            show_path=False,
        )
        logger.addHandler(console_handler)

        if self.config.log_file is not None:
            self.config.log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(self.config.log_file, encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(message)s"))
            logger.addHandler(file_handler)

        return logger

    def ensure_trash_dir(self) -> Path:
        """Create ``<root>/<trash>`` if it is missing (parents are not created).

        Raises:
            OSError: If the directory cannot be created.

        """
        if self.trash_dir.exists():
            self.console.print(f"{escape(str(self.trash_dir))} already exists.", soft_wrap=True)
        else:
            self.console.print(f"{escape(str(self.trash_dir))} does not exist, creating it.", soft_wrap=True)
            self.trash_dir.mkdir()
            self.logger.debug("Created trash directory: %s", self.trash_dir)
        return self.trash_dir

    def run(self, command: str) -> RunStats:
        """Run one operation over the whole tree.

        Args:
            command: Operation name ("del" or "trim").

        Returns:
            Aggregated run statistics.

        """
        self.ensure_trash_dir()
        operation = create_operation(command, self.config, self.logger, self.trash_dir)
        pool = WorkerPool(
            operation,
            workers=self.config.resolved_workers,
            trash_marker=trash_marker_for(self.config.trash_dir_name),
            error_policy=WalkErrorPolicy.from_flag(self.config.log_walk_errors),
            log=self.logger,
        )

        self.logger.info("Running %s on %s with %d workers", command, self.root, pool.workers)
        stats = pool.run(walk(self.root))
        self.report(stats)
        return stats

    def report(self, stats: RunStats) -> None:
        """Print per-file successes followed by the summary line."""
        for message in stats.messages:
            self.console.print(f"[green]success[/green] {escape(message)}", soft_wrap=True)

        self.console.print(
            f"use: {stats.workers} threads, total: {stats.seen}, success: {stats.succeeded}, "
            f"failed: {stats.failed}, elapsed: {stats.elapsed:.3f}s",
            soft_wrap=True,
        )
