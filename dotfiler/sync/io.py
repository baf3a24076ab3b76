# Dotfiler Filesystem IO
# Real and dry-run backends for every filesystem operation the sync core performs

import glob as globlib
import os
import shutil
import subprocess
from datetime import datetime
from pathlib import Path
from typing import Optional

from dotfiler.logger import SyncLogger
from dotfiler.utils.paths import ensure_dir
from dotfiler.utils.platform import is_windows

SYNC_TIME_FORMAT = "%Y%m%d%H%M%S"


def format_sync_time(sync_time: Optional[datetime] = None) -> str:
    """
    Format the timestamp used to name backup copies.

    Args:
        sync_time: Time of the sync run. Defaults to now.

    Returns:
        Timestamp string in YYYYMMDDHHMMSS form.
    """
    return (sync_time or datetime.now()).strftime(SYNC_TIME_FORMAT)


def _is_junction(path: Path) -> bool:
    isjunction = getattr(os.path, "isjunction", None)
    return bool(isjunction and isjunction(path))


class FileIO:
    """
    Executes both read and write filesystem operations.

    Every write operation is echoed as a shell-like command in verbose mode.
    """

    dry = False

    def __init__(self, logger: Optional[SyncLogger] = None):
        """
        Initialize IO backend.

        Args:
            logger: Logger used to echo write operations.
        """
        self.logger = logger or SyncLogger()

    # Read operations

    def exists(self, path: Path) -> bool:
        """Check if a path exists, following links."""
        return os.path.exists(path)

    def lexists(self, path: Path) -> bool:
        """Check if a path exists, including dangling links."""
        return os.path.lexists(path)

    def is_directory(self, path: Path) -> bool:
        """Check if a path is a directory, following links."""
        return os.path.isdir(path)

    def is_link(self, path: Path) -> bool:
        """Check if a path is a symlink or a directory junction."""
        return os.path.islink(path) or _is_junction(path)

    def identical(self, path_a: Path, path_b: Path) -> bool:
        """Check if two paths denote the same underlying file."""
        try:
            return os.path.samefile(path_a, path_b)
        except OSError:
            return False

    def read(self, path: Path) -> bytes:
        """Read the full content of a file."""
        return Path(path).read_bytes()

    def entries(self, path: Path) -> list[Path]:
        """List directory children, sorted by name."""
        return sorted(Path(path).iterdir())

    def glob(self, pattern: str | Path, recursive: bool = False) -> list[Path]:
        """Expand a glob pattern, sorted by path."""
        return sorted(Path(match) for match in globlib.glob(str(pattern), recursive=recursive))

    # Write operations

    def _echo(self, command: str) -> None:
        self.logger.debug(f"> {command}")

    def mkdir_p(self, path: Path) -> None:
        """Create a directory and all missing parents."""
        self._echo(f'mkdir -p "{path}"')
        ensure_dir(Path(path))

    def mv(self, source: Path, dest: Path) -> None:
        """Move a file or directory."""
        self._echo(f'mv "{source}" "{dest}"')
        shutil.move(str(source), str(dest))

    def cp_r(self, source: Path, dest: Path) -> None:
        """Copy a file or a directory tree."""
        self._echo(f'cp -r "{source}" "{dest}"')
        if os.path.isdir(source):
            shutil.copytree(source, dest)
        else:
            shutil.copy2(source, dest)

    def rm_rf(self, path: Path) -> None:
        """
        Remove a path recursively.

        Links and junctions are removed without touching their targets.
        Missing paths are ignored.
        """
        self._echo(f'rm -rf "{path}"')
        if _is_junction(path):
            os.rmdir(path)
        elif os.path.islink(path):
            os.unlink(path)
        elif os.path.isdir(path):
            shutil.rmtree(path)
        elif os.path.lexists(path):
            os.unlink(path)

    def link(self, target: Path, link_path: Path) -> None:
        """Create a hard link at link_path for target."""
        self._echo(f'ln "{target}" "{link_path}"')
        os.link(target, link_path)

    def symlink(self, target: Path, link_path: Path) -> None:
        """Create a symbolic link at link_path pointing to target."""
        self._echo(f'ln -s "{target}" "{link_path}"')
        os.symlink(target, link_path, target_is_directory=os.path.isdir(target))

    def junction(self, target: Path, link_path: Path) -> None:
        """
        Link a directory.

        Windows gets an NTFS junction through the shell; other platforms
        get a directory symlink.
        """
        if is_windows():
            self.shell(["cmd", "/c", "mklink", "/J", str(link_path), str(target)])
        else:
            self.symlink(target, link_path)

    def shell(self, command: list[str]) -> str:
        """Run a command and return its standard output."""
        self._echo(subprocess.list2cmdline(command))
        completed = subprocess.run(command, check=True, capture_output=True, text=True)
        return completed.stdout


class DryIO(FileIO):
    """Executes read operations but only logs write operations."""

    dry = True

    def _echo(self, command: str) -> None:
        self.logger.info(f"> {command}")

    def mkdir_p(self, path: Path) -> None:
        self._echo(f'mkdir -p "{path}"')

    def mv(self, source: Path, dest: Path) -> None:
        self._echo(f'mv "{source}" "{dest}"')

    def cp_r(self, source: Path, dest: Path) -> None:
        self._echo(f'cp -r "{source}" "{dest}"')

    def rm_rf(self, path: Path) -> None:
        self._echo(f'rm -rf "{path}"')

    def link(self, target: Path, link_path: Path) -> None:
        self._echo(f'ln "{target}" "{link_path}"')

    def symlink(self, target: Path, link_path: Path) -> None:
        self._echo(f'ln -s "{target}" "{link_path}"')

    def shell(self, command: list[str]) -> str:
        self._echo(subprocess.list2cmdline(command))
        return ""
