# Dotfiler Cleanup
# Finds stale backup copies and untracked files and offers them for deletion

import glob as globlib
from collections.abc import Callable, Iterable
from pathlib import Path

from dotfiler.logger import SyncLogger
from dotfiler.sync.io import FileIO
from dotfiler.sync.pair import SyncPair

ShouldDelete = Callable[[Path], bool]


def _is_within(path: Path, parent: Path) -> bool:
    return path == parent or parent in path.parents


def find_backup_copies(pair: SyncPair, prefix: str, io: FileIO) -> list[Path]:
    """
    List the timestamped copies saved next to a backup path.

    Args:
        pair: Pair whose backup copies to look for.
        prefix: Backup copy name prefix.
        io: Filesystem backend.

    Returns:
        Sorted copies, never including the live backup path.
    """
    backup_path = pair.backup_path
    pattern = Path(globlib.escape(str(backup_path.parent))) / (
        f"{globlib.escape(prefix)}-*-{globlib.escape(backup_path.name)}"
    )
    return [path for path in io.glob(pattern) if path != backup_path]


def _delete_candidates(
    candidates: list[Path],
    should_delete: ShouldDelete,
    io: FileIO,
    logger: SyncLogger,
) -> None:
    for path in candidates:
        if should_delete(path):
            logger.debug(f'Deleting "{path}"')
            io.rm_rf(path)


def cleanup_backup_copies(
    pair: SyncPair,
    prefix: str,
    should_delete: ShouldDelete,
    io: FileIO,
    logger: SyncLogger,
) -> list[Path]:
    """
    Offer every backup copy of a pair for deletion.

    Args:
        pair: Pair whose backup copies to clean up.
        prefix: Backup copy name prefix.
        should_delete: Decides per path whether to delete it.
        io: Filesystem backend.
        logger: Logger for progress messages.

    Returns:
        All candidates that were offered.
    """
    candidates = find_backup_copies(pair, prefix, io)
    _delete_candidates(candidates, should_delete, io, logger)
    return candidates


def find_untracked_files(
    backup_root: Path,
    tracked: Iterable[Path],
    io: FileIO,
    exclude: Iterable[Path] = (),
) -> list[Path]:
    """
    List the top-most paths under a backup root that nothing tracks.

    A path is skipped when it is tracked, lies inside a tracked path,
    contains a tracked path, or lies inside a path already listed.

    Args:
        backup_root: Package backup directory.
        tracked: Backup paths in use.
        io: Filesystem backend.
        exclude: Paths already offered elsewhere.

    Returns:
        Sorted untracked paths.
    """
    if not io.is_directory(backup_root):
        return []

    tracked = sorted(tracked)
    excluded = set(exclude)
    untracked: list[Path] = []

    pattern = Path(globlib.escape(str(backup_root))) / "**" / "*"
    for path in io.glob(pattern, recursive=True):
        if path in excluded:
            continue
        if untracked and _is_within(path, untracked[-1]):
            continue
        if any(_is_within(path, t) or _is_within(t, path) for t in tracked):
            continue
        untracked.append(path)

    return untracked


def cleanup_untracked(
    backup_root: Path,
    tracked: Iterable[Path],
    should_delete: ShouldDelete,
    io: FileIO,
    logger: SyncLogger,
    exclude: Iterable[Path] = (),
) -> list[Path]:
    """
    Offer untracked files under a backup root for deletion.

    Returns:
        All candidates that were offered.
    """
    candidates = find_untracked_files(backup_root, tracked, io, exclude)
    _delete_candidates(candidates, should_delete, io, logger)
    return candidates
