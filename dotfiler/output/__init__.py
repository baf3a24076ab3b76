# Dotfiler Output Module
# Rich-based console output

from dotfiler.output.console import Console, create_console, format_status

__all__ = [
    "Console",
    "create_console",
    "format_status",
]
