# Dotfiler Path Utilities
# Path expansion and dotfile escaping for backup locations

import os
from pathlib import Path, PurePath


def expand_path(path: str | Path) -> Path:
    """
    Expand ~ and environment variables in path.

    Symlinks are not resolved: a restore path that is a link into the
    backup must keep pointing at the link itself.

    Args:
        path: Path string or Path object.

    Returns:
        Expanded absolute Path object.
    """
    path_str = str(path)
    # Expand ~ first, then environment variables
    path_str = os.path.expanduser(path_str)
    path_str = os.path.expandvars(path_str)
    return Path(os.path.abspath(path_str))


def ensure_dir(path: Path) -> Path:
    """
    Ensure directory exists, creating if necessary.

    Args:
        path: Directory path.

    Returns:
        The path that was ensured.
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def _escape_segment(segment: str) -> str:
    if segment.startswith("."):
        return "_" + segment[1:]
    return segment


def escape_dotfile_path(name: str | PurePath) -> Path:
    """
    Make a dotfile path visible inside a backup directory.

    Each path segment loses one leading dot, which becomes an underscore:
    ``.vim/vimrc`` becomes ``_vim/vimrc``. Absolute names lose their anchor
    so the result is always relative.

    Args:
        name: Relative or absolute path of the file to back up.

    Returns:
        Relative escaped path.
    """
    pure = PurePath(name)
    parts = pure.parts[1:] if pure.anchor else pure.parts
    return Path(*(_escape_segment(part) for part in parts))
