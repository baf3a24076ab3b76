# Dotfiler Sync Context
# Per-run settings shared by every task in the tree

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from dotfiler.logger import SyncLogger, TaskReporter
from dotfiler.sync.file_sync import DEFAULT_BACKUP_PREFIX, OverwriteCallback, keep_backup
from dotfiler.sync.io import DryIO, FileIO
from dotfiler.utils.paths import expand_path


def delete_without_asking(path: Path) -> bool:
    """Non-interactive delete decision."""
    return True


@dataclass
class SyncContext:
    """
    Settings for one sync or cleanup run.

    Packages derive their own context from their parent's with
    ``with_options``, so every node carries its resolved roots.
    """

    backup_root: Path
    restore_root: Path = field(default_factory=lambda: expand_path("~"))
    io: FileIO = field(default_factory=FileIO)
    logger: SyncLogger = field(default_factory=SyncLogger)
    reporter: TaskReporter = field(default_factory=TaskReporter)
    copy: bool = False
    untracked: bool = False
    backup_prefix: str = DEFAULT_BACKUP_PREFIX
    sync_time: datetime = field(default_factory=datetime.now)
    on_overwrite: OverwriteCallback = keep_backup
    on_delete: Callable[[Path], bool] = delete_without_asking

    @classmethod
    def create(
        cls,
        backup_root: str | Path,
        *,
        logger: Optional[SyncLogger] = None,
        dry: bool = False,
        **options: Any,
    ) -> "SyncContext":
        """
        Create a context with an IO backend and reporter bound to one logger.

        Args:
            backup_root: Root directory of the backup.
            logger: Logger for the run.
            dry: Only log write operations.
            **options: Remaining SyncContext fields.

        Returns:
            New SyncContext.
        """
        logger = logger or SyncLogger()
        io = DryIO(logger) if dry else FileIO(logger)
        return cls(
            backup_root=expand_path(backup_root),
            io=io,
            logger=logger,
            reporter=TaskReporter(logger),
            **options,
        )

    def with_options(self, **changes: Any) -> "SyncContext":
        """Return a copy with some fields replaced."""
        return replace(self, **changes)
