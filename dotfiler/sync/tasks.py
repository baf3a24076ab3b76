# Dotfiler Task Tree
# File sync tasks and platform-gated packages that group them

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any, Optional

from dotfiler.exceptions import SyncError
from dotfiler.sync.cleanup import cleanup_backup_copies, cleanup_untracked
from dotfiler.sync.context import SyncContext
from dotfiler.sync.file_sync import FileSync
from dotfiler.sync.pair import SyncPair, resolve_sync_pair
from dotfiler.sync.status import GroupStatus, StatusKind, SyncState
from dotfiler.utils.paths import expand_path
from dotfiler.utils.platform import get_current_platform, get_platform_value

UNSUPPORTED_PLATFORM = "Unsupported platform"


class Task:
    """
    Base class for all tasks and packages.

    A task can be skipped with a reason. Once skipped it stays skipped.
    """

    children = False

    def __init__(self, ctx: SyncContext):
        self.ctx = ctx
        self._skip_reason: Optional[str] = None

    @property
    def skip_reason(self) -> Optional[str]:
        return self._skip_reason

    @property
    def description(self) -> Optional[str]:
        """Name shown when reporting progress."""
        return None

    def skip(self, reason: str = "") -> None:
        """Mark this task to not execute any operation."""
        if self._skip_reason is None:
            self._skip_reason = reason

    def should_execute(self) -> bool:
        return self._skip_reason is None

    def status(self) -> SyncState | GroupStatus:
        raise NotImplementedError

    def sync(self) -> None:
        raise NotImplementedError

    def cleanup(self) -> list[Path]:
        raise NotImplementedError

    def has_data(self) -> bool:
        raise NotImplementedError

    def _execute(self, op: str) -> bool:
        """Report an operation and return whether it should run."""
        self.ctx.reporter.start(self, op)
        return self.should_execute()

    def _should_delete(self, path: Path) -> bool:
        if not self.ctx.on_delete(path):
            return False
        self.ctx.reporter.start(path, "delete")
        return True


class FileSyncTask(Task):
    """Synchronizes one file or directory of a package."""

    def __init__(
        self,
        name: str,
        ctx: SyncContext,
        *,
        save_as: Optional[str] = None,
        copy: bool = False,
    ):
        """
        Initialize file sync task.

        Args:
            name: Path relative to the package's restore root.
            ctx: Context of the owning package.
            save_as: Alternative name inside the backup.
            copy: Copy instead of link. Forced on by a copy context.
        """
        super().__init__(ctx)
        self.name = name
        self.pair: SyncPair = resolve_sync_pair(
            name,
            ctx.restore_root,
            ctx.backup_root,
            save_as=save_as,
            use_copy=ctx.copy or copy,
        )

    @property
    def description(self) -> Optional[str]:
        return self.name

    @property
    def backup_path(self) -> Path:
        return self.pair.backup_path

    @property
    def restore_path(self) -> Path:
        return self.pair.restore_path

    def _file_sync(self) -> FileSync:
        return FileSync(
            self.ctx.io,
            self.ctx.logger,
            sync_time=self.ctx.sync_time,
            backup_prefix=self.ctx.backup_prefix,
            on_overwrite=self.ctx.on_overwrite,
        )

    def status(self) -> SyncState:
        return self._file_sync().status(self.pair, self.name)

    def sync(self) -> None:
        """Sync the pair, logging failures instead of raising them."""
        file_sync = self._file_sync()
        if file_sync.status(self.pair).kind == StatusKind.UP_TO_DATE:
            return

        if not self._execute("sync"):
            return
        try:
            file_sync.sync(self.pair)
        except (SyncError, OSError) as e:
            self.ctx.logger.error(f"{self.name}: {e}")

    def cleanup(self) -> list[Path]:
        """Offer stale backup copies of this file for deletion."""
        if not self.should_execute():
            return []
        return cleanup_backup_copies(
            self.pair,
            self.ctx.backup_prefix,
            self._should_delete,
            self.ctx.io,
            self.ctx.logger,
        )

    def has_data(self) -> bool:
        return self.status().kind != StatusKind.ERROR


class Package(Task):
    """
    A named, platform-gated group of tasks.

    Files of a package are backed up under ``<backup root>/<name>`` and
    restored relative to the package's restore directory.
    """

    children = True

    def __init__(
        self,
        parent_ctx: SyncContext,
        name: str = "",
        *,
        platforms: Optional[list[str]] = None,
        restore_dir: str | dict[str, str] | None = None,
        description: str = "",
    ):
        """
        Initialize package.

        Args:
            parent_ctx: Context of the enclosing package or run.
            name: Package name, also its backup subdirectory.
            platforms: Supported platforms. None or empty means all.
            restore_dir: Restore directory, optionally per platform.
            description: Human-readable description.
        """
        restore_root = parent_ctx.restore_root
        resolved_dir = get_platform_value(restore_dir)
        if resolved_dir:
            restore_root = expand_path(restore_root / Path(resolved_dir).expanduser())

        super().__init__(
            parent_ctx.with_options(
                backup_root=parent_ctx.backup_root / name,
                restore_root=restore_root,
            )
        )
        self.name = name
        self.platforms = list(platforms or [])
        self.summary = description
        self.items: list[Task] = []

        if self.platforms and get_current_platform() not in self.platforms:
            self.skip(UNSUPPORTED_PLATFORM)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def description(self) -> Optional[str]:
        return f"package {self.name}" if self.name else None

    @property
    def backup_root(self) -> Path:
        return self.ctx.backup_root

    @property
    def restore_root(self) -> Path:
        return self.ctx.restore_root

    def add(self, task: Task) -> Task:
        """Append a child task."""
        self.items.append(task)
        return task

    def file(self, name: str, **options: Any) -> FileSyncTask:
        """Append a file sync task for a path relative to this package's restore root."""
        return self.add(FileSyncTask(name, self.ctx, **options))

    def package(self, name: str, **options: Any) -> Package:
        """Append a nested package."""
        return self.add(Package(self.ctx, name, **options))

    def should_execute(self) -> bool:
        if self.skip_reason is not None:
            return False
        return not self.items or any(item.should_execute() for item in self.items)

    def status(self) -> GroupStatus:
        return GroupStatus(self.name, [item.status() for item in self.items if item.should_execute()])

    def sync(self) -> None:
        if self._execute("sync"):
            for item in self.items:
                item.sync()

    def cleanup(self) -> list[Path]:
        """
        Offer stale files under this package for deletion.

        Returns:
            Every candidate that was offered, deleted or not.
        """
        if not self._execute("clean"):
            return []

        candidates: list[Path] = []
        for item in self.items:
            candidates.extend(item.cleanup())

        # The root package shares its directory with the backup's own files
        if self.ctx.untracked and self.name:
            candidates.extend(
                cleanup_untracked(
                    self.backup_root,
                    self.tracked_paths(),
                    self._should_delete,
                    self.ctx.io,
                    self.ctx.logger,
                    exclude=candidates,
                )
            )
        return candidates

    def tracked_paths(self) -> list[Path]:
        """Backup paths of direct files and backup roots of nested packages."""
        tracked: list[Path] = []
        for item in self.items:
            if isinstance(item, FileSyncTask):
                tracked.append(item.backup_path)
            elif isinstance(item, Package):
                tracked.append(item.backup_root)
        return tracked

    def has_data(self) -> bool:
        """Check if any file of this package exists on either side."""
        return any(item.has_data() for item in self.items)

    def find_package(self, name: str) -> Optional[Package]:
        """Find this package or a nested one by name."""
        if self.name == name:
            return self
        for item in self.items:
            if isinstance(item, Package):
                found = item.find_package(name)
                if found is not None:
                    return found
        return None
