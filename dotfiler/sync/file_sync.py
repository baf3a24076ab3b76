# Dotfiler File Sync
# Converges a restore/backup pair to a linked (or copied) state without losing data

from collections.abc import Callable
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional

from dotfiler.exceptions import OverwriteDecisionError, SyncError
from dotfiler.logger import SyncLogger
from dotfiler.sync.io import FileIO, format_sync_time
from dotfiler.sync.pair import SyncPair
from dotfiler.sync.status import StatusKind, SyncState, classify

DEFAULT_BACKUP_PREFIX = "setup-backup"


class OverwriteChoice(str, Enum):
    """Which side of a diverged pair holds the data to keep."""

    BACKUP = "backup"
    RESTORE = "restore"


OverwriteCallback = Callable[[Path, Path], OverwriteChoice]


def keep_backup(backup_path: Path, restore_path: Path) -> OverwriteChoice:
    """Non-interactive overwrite decision: the backup wins."""
    return OverwriteChoice.BACKUP


class FileSync:
    """
    Synchronizes a single file or directory against the backup.

    The state is classified from disk on every call, so a run interrupted
    halfway is completed by the next one.
    """

    def __init__(
        self,
        io: FileIO,
        logger: SyncLogger,
        *,
        sync_time: Optional[datetime] = None,
        backup_prefix: str = DEFAULT_BACKUP_PREFIX,
        on_overwrite: Optional[OverwriteCallback] = None,
    ):
        """
        Initialize file sync.

        Args:
            io: Filesystem backend.
            logger: Logger for progress messages.
            sync_time: Time used to name backup copies. Defaults to now.
            backup_prefix: Prefix of backup copy names.
            on_overwrite: Decides which side to keep when both differ.
        """
        self.io = io
        self.logger = logger
        self.sync_time = format_sync_time(sync_time)
        self.backup_prefix = backup_prefix
        self.on_overwrite = on_overwrite or keep_backup

    def status(self, pair: SyncPair, name: str = "") -> SyncState:
        """Classify the pair as it is on disk now."""
        return classify(pair, self.io, name)

    def sync(self, pair: SyncPair, on_overwrite: Optional[OverwriteCallback] = None) -> SyncState:
        """
        Bring the pair to an up to date state.

        Args:
            pair: Paths to synchronize.
            on_overwrite: Overrides the overwrite decision for this call.

        Returns:
            The state the pair was in before syncing.

        Raises:
            SyncError: If neither side exists.
            OverwriteDecisionError: If the overwrite decision is not a known choice.
        """
        state = self.status(pair)

        if state.kind == StatusKind.UP_TO_DATE:
            return state
        if state.kind == StatusKind.ERROR:
            raise SyncError(state.message)

        is_directory = state.backup_is_directory or state.restore_is_directory
        if state.kind == StatusKind.NEEDS_BACKUP:
            self._move_restore_to_backup(pair)
        elif state.kind == StatusKind.OVERWRITE_DATA:
            is_directory = self._resolve_overwrite(pair, state, on_overwrite or self.on_overwrite)
        elif state.kind == StatusKind.NEEDS_RESYNC:
            self.io.rm_rf(pair.restore_path)

        self._create_restore(pair, is_directory)
        return state

    def backup_copy_path(self, pair: SyncPair) -> Path:
        """
        Path a replaced file is saved under, next to the backup path.

        A counter is appended to the timestamp if a copy from the same
        second already exists.
        """
        backup_path = pair.backup_path
        copy_path = backup_path.with_name(f"{self.backup_prefix}-{self.sync_time}-{backup_path.name}")
        counter = 1
        while self.io.lexists(copy_path):
            copy_path = backup_path.with_name(f"{self.backup_prefix}-{self.sync_time}.{counter}-{backup_path.name}")
            counter += 1
        return copy_path

    def _resolve_overwrite(self, pair: SyncPair, state: SyncState, on_overwrite: OverwriteCallback) -> bool:
        """Save the side being replaced and re-home the kept restore. Returns the kept side's directory flag."""
        decision = on_overwrite(pair.backup_path, pair.restore_path)
        try:
            choice = OverwriteChoice(decision)
        except ValueError:
            raise OverwriteDecisionError(decision) from None

        if choice == OverwriteChoice.BACKUP:
            self._save_existing(pair.restore_path, pair)
            return state.backup_is_directory

        self._save_existing(pair.backup_path, pair)
        self._move_restore_to_backup(pair)
        return state.restore_is_directory

    def _save_existing(self, path: Path, pair: SyncPair) -> None:
        copy_path = self.backup_copy_path(pair)
        self.logger.debug(f'Saving a copy of file "{path}" under "{copy_path.parent}"')
        self.io.mkdir_p(copy_path.parent)
        self.io.mv(path, copy_path)

    def _move_restore_to_backup(self, pair: SyncPair) -> None:
        self.io.mkdir_p(pair.backup_path.parent)
        # The link target stays in place; its content is copied into the backup
        if self.io.is_link(pair.restore_path) and self.io.exists(pair.restore_path):
            self.logger.debug(f'Copying linked file from "{pair.restore_path}" to "{pair.backup_path}"')
            self.io.cp_r(pair.restore_path, pair.backup_path)
            self.io.rm_rf(pair.restore_path)
            return

        self.logger.debug(f'Moving file from "{pair.restore_path}" to "{pair.backup_path}"')
        self.io.mv(pair.restore_path, pair.backup_path)

    def _create_restore(self, pair: SyncPair, is_directory: bool) -> None:
        self.io.mkdir_p(pair.restore_path.parent)
        # A dangling link would make the link call fail
        if self.io.is_link(pair.restore_path) and not self.io.exists(pair.restore_path):
            self.io.rm_rf(pair.restore_path)

        if pair.use_copy:
            self.logger.debug(f'Copying "{pair.backup_path}" to "{pair.restore_path}"')
            self.io.cp_r(pair.backup_path, pair.restore_path)
        elif is_directory:
            self.logger.debug(f'Linking "{pair.backup_path}" with "{pair.restore_path}"')
            self.io.junction(pair.backup_path, pair.restore_path)
        else:
            self.logger.debug(f'Hard linking "{pair.backup_path}" with "{pair.restore_path}"')
            self.io.link(pair.backup_path, pair.restore_path)
