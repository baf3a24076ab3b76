# Dotfiler Sync Pair
# Restore/backup path pairs and their resolution from sync unit names

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotfiler.exceptions import InvalidPathError
from dotfiler.utils.paths import escape_dotfile_path, expand_path


@dataclass(frozen=True)
class SyncPair:
    """
    A machine location and its canonical location inside the backup.

    Attributes:
        restore_path: Where the application expects the file.
        backup_path: Where the file lives in the backup repository.
        use_copy: Copy files instead of linking them.
    """

    restore_path: Path
    backup_path: Path
    use_copy: bool = False

    def __post_init__(self):
        if not self.restore_path.is_absolute() or not self.backup_path.is_absolute():
            raise InvalidPathError(f"Sync paths must be absolute: {self.restore_path}, {self.backup_path}")


def resolve_sync_pair(
    name: str,
    restore_root: str | Path,
    backup_root: str | Path,
    package_name: str = "",
    *,
    save_as: Optional[str] = None,
    use_copy: bool = False,
) -> SyncPair:
    """
    Compute the restore and backup paths for a named file.

    The restore path is the name resolved against the restore root. The
    backup path is the escaped name (or its save_as override) under the
    package's directory in the backup root. No filesystem access happens.

    Args:
        name: File path relative to the restore root, or absolute.
        restore_root: Directory the application reads its settings from.
        backup_root: Root of the backup repository.
        package_name: Subdirectory of the backup root for this package.
        save_as: Alternative backup-relative name.
        use_copy: Copy files instead of linking them.

    Returns:
        Resolved SyncPair.

    Raises:
        InvalidPathError: If name is empty.
    """
    if not name or not str(name).strip():
        raise InvalidPathError("Sync unit name must not be empty")

    # Only the roots are expanded; names are taken literally
    restore_path = Path(os.path.abspath(expand_path(restore_root) / name))
    backup_path = expand_path(backup_root) / package_name / escape_dotfile_path(save_as or name)
    backup_path = Path(os.path.abspath(backup_path))
    return SyncPair(restore_path=restore_path, backup_path=backup_path, use_copy=use_copy)
