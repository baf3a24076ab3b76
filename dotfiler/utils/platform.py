# Dotfiler Platform Detection Utilities
# Platform tags for package gating and per-platform values

import platform
from typing import Any

# Platform name mapping: system name -> dotfiler platform tag
_PLATFORM_MAP: dict[str, str] = {
    "Darwin": "macos",
    "Linux": "linux",
    "Windows": "windows",
}

PLATFORMS: tuple[str, ...] = ("macos", "linux", "windows")


def get_current_platform() -> str:
    """
    Get the current platform identifier.

    Returns:
        Platform string: "macos", "linux", or "windows".
    """
    system = platform.system()
    return _PLATFORM_MAP.get(system, system.lower())


def is_windows() -> bool:
    """Check if running on Windows."""
    return get_current_platform() == "windows"


def is_platform_match(platforms: list[str] | None) -> bool:
    """
    Check if the current platform matches the given platform filter.

    Args:
        platforms: List of platform names to match against.
                   None or empty list means all platforms match.

    Returns:
        True if current platform is in the list, or if list is None/empty.
    """
    if not platforms:
        return True
    return get_current_platform() in platforms


def get_platform_value(value: Any) -> Any:
    """
    Resolve a value that may be given per platform.

    A mapping keyed by platform tags selects the entry for the current
    platform; any other value is returned unchanged.

    Args:
        value: Plain value or dict of platform tag -> value.

    Returns:
        The value for the current platform, or None if the mapping has no entry.
    """
    if isinstance(value, dict):
        return value.get(get_current_platform())
    return value
