"""
treesync — one-way directory synchronization.

Core features:
- Content-based change detection (MD5, CRC-32 or xxHash64) with bounded concurrency
- Deterministic copy/delete ordering: parents created before children, children removed before parents
- Per-entry results instead of aborting on the first I/O error
- Optional deletion to system trash (via send2trash)
- CLI interface with dry-run and plain-text copy/delete reports
"""

# Get version
try:
    from importlib.metadata import version as _version, PackageNotFoundError
    __version__ = _version("treesync")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API: only what users should import directly
from treesync.commands import SyncCommand
from treesync.core import (
    SyncParams, SyncReport, DiffResult, Entry, EntryResult, EntryStatus,
    ApplyOrder, HashAlgorithmName, SyncError, ConfigurationError, ScanError,
)
from treesync.utils.convert_utils import ConvertUtils
from treesync.services import FileService, ReportService

__all__ = [
    "SyncCommand",
    "SyncParams",
    "SyncReport",
    "DiffResult",
    "Entry",
    "EntryResult",
    "EntryStatus",
    "ApplyOrder",
    "HashAlgorithmName",
    "SyncError",
    "ConfigurationError",
    "ScanError",
    "ConvertUtils",
    "FileService",
    "ReportService",
    "__version__",
]
