"""Dotfiler - back up and restore application settings.

Moves configuration files ("dotfiles") into a version-controlled backup
directory and links them back to where applications expect them.
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "FileSync",
    "OverwriteChoice",
    "SyncPair",
    "SyncState",
    "StatusKind",
    "SyncContext",
    "SyncEngine",
    "Package",
    "FileSyncTask",
    "resolve_sync_pair",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name in ("FileSync", "OverwriteChoice"):
        from dotfiler.sync import file_sync

        return getattr(file_sync, name)
    if name in ("SyncPair", "resolve_sync_pair"):
        from dotfiler.sync import pair

        return getattr(pair, name)
    if name in ("SyncState", "StatusKind"):
        from dotfiler.sync import status

        return getattr(status, name)
    if name == "SyncContext":
        from dotfiler.sync.context import SyncContext

        return SyncContext
    if name == "SyncEngine":
        from dotfiler.sync.engine import SyncEngine

        return SyncEngine
    if name in ("Package", "FileSyncTask"):
        from dotfiler.sync import tasks

        return getattr(tasks, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
