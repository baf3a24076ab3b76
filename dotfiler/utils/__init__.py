# Dotfiler Utilities Module
# Helper functions for path handling and platform detection

from dotfiler.utils.paths import (
    ensure_dir,
    escape_dotfile_path,
    expand_path,
)
from dotfiler.utils.platform import (
    PLATFORMS,
    get_current_platform,
    get_platform_value,
    is_platform_match,
    is_windows,
)

__all__ = [
    # Platform
    "PLATFORMS",
    "get_current_platform",
    "get_platform_value",
    "is_platform_match",
    "is_windows",
    # Paths
    "expand_path",
    "ensure_dir",
    "escape_dotfile_path",
]
