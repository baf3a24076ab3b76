# Dotfiler Sync Module
# Core synchronization engine and components

from dotfiler.sync.cleanup import cleanup_backup_copies, cleanup_untracked, find_backup_copies, find_untracked_files
from dotfiler.sync.context import SyncContext
from dotfiler.sync.engine import CleanupResult, SyncEngine, SyncResult
from dotfiler.sync.file_sync import FileSync, OverwriteChoice
from dotfiler.sync.io import DryIO, FileIO
from dotfiler.sync.pair import SyncPair, resolve_sync_pair
from dotfiler.sync.status import GroupStatus, StatusKind, SyncState, classify
from dotfiler.sync.tasks import FileSyncTask, Package, Task

__all__ = [
    # Paths
    "SyncPair",
    "resolve_sync_pair",
    # IO
    "FileIO",
    "DryIO",
    # Status
    "StatusKind",
    "SyncState",
    "GroupStatus",
    "classify",
    # File sync
    "FileSync",
    "OverwriteChoice",
    # Tasks
    "SyncContext",
    "Task",
    "FileSyncTask",
    "Package",
    # Cleanup
    "find_backup_copies",
    "cleanup_backup_copies",
    "find_untracked_files",
    "cleanup_untracked",
    # Engine
    "SyncEngine",
    "SyncResult",
    "CleanupResult",
]
