# Dotfiler Sync Status
# Classification of a restore/backup pair into a sync state

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from dotfiler.sync.io import FileIO
from dotfiler.sync.pair import SyncPair

MISSING_SOURCES = "Cannot sync. Missing both backup and restore."


class StatusKind(str, Enum):
    """Relationship between a restore path and its backup."""

    ERROR = "error"
    UP_TO_DATE = "up_to_date"
    NEEDS_BACKUP = "needs_backup"
    NEEDS_RESTORE = "needs_restore"
    OVERWRITE_DATA = "overwrite_data"
    NEEDS_RESYNC = "needs_resync"


STATUS_LABELS: dict[StatusKind, str] = {
    StatusKind.ERROR: "error",
    StatusKind.UP_TO_DATE: "up to date",
    StatusKind.NEEDS_BACKUP: "needs sync",
    StatusKind.NEEDS_RESTORE: "needs sync",
    StatusKind.NEEDS_RESYNC: "needs sync",
    StatusKind.OVERWRITE_DATA: "differs",
}


@dataclass
class SyncState:
    """State of a single pair, computed from disk."""

    kind: StatusKind
    name: str = ""
    message: Optional[str] = None
    restore_is_directory: bool = False
    backup_is_directory: bool = False
    is_linked: bool = False

    @property
    def label(self) -> str:
        """Short human-readable label."""
        return STATUS_LABELS[self.kind]

    @property
    def status_str(self) -> str:
        """Status line of the form ``name: label[: message]``."""
        text = f"{self.name}: {self.label}" if self.name else self.label
        return f"{text}: {self.message}" if self.message else text

    @property
    def needs_sync(self) -> bool:
        """Check if sync would change anything on disk."""
        return self.kind not in (StatusKind.UP_TO_DATE, StatusKind.ERROR)


@dataclass
class GroupStatus:
    """Aggregated status of a package and its children."""

    name: str
    items: list[Union[SyncState, "GroupStatus"]] = field(default_factory=list)

    @property
    def kind(self) -> Optional[StatusKind]:
        """The kind shared by every child, or None when children differ or there are none."""
        kinds = {item.kind for item in self.items}
        if len(kinds) == 1:
            return kinds.pop()
        return None


def classify(pair: SyncPair, io: FileIO, name: str = "") -> SyncState:
    """
    Classify the relationship between the two sides of a pair.

    The first matching rule wins:
    both sides missing is an error; a missing restore needs a restore; a
    missing backup needs a backup; unlinked sides that are directories or
    hold different bytes need an overwrite decision. What remains is up to
    date when the link mode matches the requested mode, otherwise it needs
    a resync. Directories are only ever compared by identity.

    Args:
        pair: Paths to classify.
        io: Filesystem backend used for reads.
        name: Display name stored on the result.

    Returns:
        Freshly computed SyncState.
    """
    has_restore = io.exists(pair.restore_path)
    has_backup = io.exists(pair.backup_path)
    if not has_restore and not has_backup:
        return SyncState(kind=StatusKind.ERROR, name=name, message=MISSING_SOURCES)

    restore_is_directory = has_restore and io.is_directory(pair.restore_path)
    backup_is_directory = has_backup and io.is_directory(pair.backup_path)
    is_linked = has_restore and has_backup and io.identical(pair.backup_path, pair.restore_path)

    if not has_restore:
        kind = StatusKind.NEEDS_RESTORE
    elif not has_backup:
        kind = StatusKind.NEEDS_BACKUP
    elif not is_linked and (
        restore_is_directory or backup_is_directory or io.read(pair.backup_path) != io.read(pair.restore_path)
    ):
        kind = StatusKind.OVERWRITE_DATA
    elif pair.use_copy != is_linked:
        kind = StatusKind.UP_TO_DATE
    else:
        kind = StatusKind.NEEDS_RESYNC

    return SyncState(
        kind=kind,
        name=name,
        restore_is_directory=restore_is_directory,
        backup_is_directory=backup_is_directory,
        is_linked=is_linked,
    )
