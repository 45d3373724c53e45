"""
Core sync engine — scanner, index, hasher, diff engine and executor.

This package contains the whole diff-and-apply pipeline:
- TreeScannerImpl: depth-first pre-order traversal of one root
- TreeIndex: relative path -> Entry lookup for one side
- HasherImpl + MD5/CRC-32/xxHash64 algorithms: streaming content digests
- DiffEngine: copy/delete lists with bounded-concurrency hashing
- SyncExecutor: ordered, concurrent application with per-entry results
- Models: Entry, DiffResult, SyncReport, and configuration objects

All components are pure Python with no UI dependencies.
"""

from .errors import SyncError, ConfigurationError, ScanError
from .scanner import TreeScannerImpl
from .index import TreeIndex
from .hasher import HasherImpl, MD5AlgorithmImpl, Crc32AlgorithmImpl, XXHashAlgorithmImpl, create_algorithm
from .sorter import Sorter
from .worker_pool import WorkerPool, TaskOutcome
from .differ import DiffEngine
from .executor import SyncExecutor
from .models import (
    Entry, EntryResult, EntryStatus, DiffResult, SyncReport, SyncStats, SyncParams,
    SyncAction, ApplyOrder, HashAlgorithmName)

__all__ = [
    "SyncError",
    "ConfigurationError",
    "ScanError",
    "TreeScannerImpl",
    "TreeIndex",
    "HasherImpl",
    "MD5AlgorithmImpl",
    "Crc32AlgorithmImpl",
    "XXHashAlgorithmImpl",
    "create_algorithm",
    "Sorter",
    "WorkerPool",
    "TaskOutcome",
    "DiffEngine",
    "SyncExecutor",
    "Entry",
    "EntryResult",
    "EntryStatus",
    "DiffResult",
    "SyncReport",
    "SyncStats",
    "SyncParams",
    "SyncAction",
    "ApplyOrder",
    "HashAlgorithmName",
]
