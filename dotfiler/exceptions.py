# Dotfiler Exceptions
# Error types raised by the synchronization core


class DotfilerError(Exception):
    """Base class for all dotfiler errors."""


class InvalidPathError(DotfilerError, ValueError):
    """Raised when a sync unit name cannot be resolved to a path pair."""


class SyncError(DotfilerError):
    """Raised when a pair cannot be synchronized in its current state."""


class OverwriteDecisionError(DotfilerError):
    """Raised when an overwrite decision is neither backup nor restore."""

    def __init__(self, decision: object):
        super().__init__(f"Invalid overwrite decision: {decision!r} (expected 'backup' or 'restore')")
        self.decision = decision


class ConfigError(DotfilerError):
    """Raised for structurally invalid configuration edits."""
