"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
Fatal error taxonomy of the sync engine.

Only problems that make the whole run meaningless are raised as exceptions.
Per-entry problems (a file that cannot be hashed, copied or deleted) are
reported as EntryResult values instead, see core/models.py.
"""


class SyncError(RuntimeError):
    """Base class for fatal sync errors."""


class ConfigurationError(SyncError):
    """Source or destination root is unusable, or parameters are invalid."""


class ScanError(SyncError):
    """A directory could not be listed; the scan produced no result."""
