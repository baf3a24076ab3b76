# Dotfiler Sync Engine
# Builds the package tree from configuration and runs sync, status and cleanup

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotfiler.config.schema import DotfilerConfig, PackageConfig
from dotfiler.sync.context import SyncContext
from dotfiler.sync.status import GroupStatus
from dotfiler.sync.tasks import FileSyncTask, Package
from dotfiler.utils.paths import expand_path


@dataclass
class SyncResult:
    """Result of a complete sync operation."""

    synced: list[str] = field(default_factory=list)
    errors: int = 0

    @property
    def success(self) -> bool:
        return self.errors == 0

    @property
    def nothing_to_sync(self) -> bool:
        return not self.synced and self.success


@dataclass
class CleanupResult:
    """Result of a cleanup operation."""

    candidates: list[Path] = field(default_factory=list)
    deleted: list[Path] = field(default_factory=list)

    @property
    def nothing_to_clean(self) -> bool:
        return not self.deleted


class SyncEngine:
    """
    Main synchronization engine.

    Turns the enabled packages of a configuration into a task tree rooted
    at an unnamed package and runs operations over it.
    """

    def __init__(self, config: DotfilerConfig, ctx: SyncContext):
        """
        Initialize sync engine.

        Args:
            config: Backup configuration.
            ctx: Run context. Configuration options are applied on top of it.
        """
        self.config = config
        self.ctx = ctx.with_options(
            restore_root=expand_path(config.options.restore_root),
            backup_prefix=config.options.backup_prefix,
            copy=ctx.copy or config.options.use_copy,
        )
        self._root: Optional[Package] = None
        self._enabled: dict[str, Package] = {}

    @property
    def logger(self):
        return self.ctx.logger

    def build_package(self, package_config: PackageConfig, parent: Optional[Package] = None) -> Package:
        """
        Create a package task from its definition.

        File entries restricted to other platforms are left out.

        Args:
            package_config: Package definition.
            parent: Enclosing package. Defaults to a fresh root.

        Returns:
            The package with one file task per applicable file.
        """
        parent_ctx = parent.ctx if parent is not None else self.ctx
        package = Package(
            parent_ctx,
            package_config.name,
            platforms=package_config.platforms,
            restore_dir=package_config.restore_dir,
            description=package_config.description,
        )
        for file_config in package_config.get_platform_files():
            package.add(
                FileSyncTask(
                    file_config.path,
                    package.ctx,
                    save_as=file_config.resolved_save_as(),
                    copy=file_config.use_copy,
                )
            )
        if parent is not None:
            parent.add(package)
        return package

    def get_root(self) -> Package:
        """Get the root package holding every enabled package."""
        if self._root is None:
            root = Package(self.ctx)
            for key, package_config in self.config.get_enabled_packages().items():
                if package_config is None:
                    self.logger.warning(f"Package {key} not found")
                    continue
                self._enabled[key] = self.build_package(package_config, root)
            self._root = root
        return self._root

    def get_enabled_packages(self) -> dict[str, Package]:
        """Get enabled packages by key, including those skipped on this platform."""
        self.get_root()
        return dict(self._enabled)

    def get_available_packages(self) -> dict[str, Package]:
        """Get every known package by key."""
        return {
            key: self.build_package(package_config)
            for key, package_config in self.config.get_available_packages().items()
        }

    def discover_packages(self) -> list[str]:
        """
        Find packages worth enabling.

        Returns:
            Keys of packages that are not enabled, apply to this platform
            and have files on disk.
        """
        return [
            key
            for key, package in self.get_available_packages().items()
            if key not in self.config.packages and package.should_execute() and package.has_data()
        ]

    def get_status(self) -> GroupStatus:
        """Get the status of every enabled package."""
        return self.get_root().status()

    def sync(self) -> SyncResult:
        """
        Synchronize every enabled package.

        Failures of single files are logged and counted; the run continues.

        Returns:
            SyncResult with the files that needed syncing.
        """
        errors_before = self.logger.error_count
        events_before = len(self.ctx.reporter.events("sync"))

        self.get_root().sync()

        events = self.ctx.reporter.events("sync")[events_before:]
        return SyncResult(
            synced=[event.item.name for event in events if not event.item.children],
            errors=self.logger.error_count - errors_before,
        )

    def cleanup(self) -> CleanupResult:
        """
        Offer stale backup copies, and untracked files if enabled, for deletion.

        Returns:
            CleanupResult with offered and deleted paths.
        """
        deletes_before = len(self.ctx.reporter.events("delete"))
        candidates = self.get_root().cleanup()
        deleted = [event.item for event in self.ctx.reporter.events("delete")[deletes_before:]]
        return CleanupResult(candidates=candidates, deleted=deleted)
