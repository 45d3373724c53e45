"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for tree scanning, diffing and applying a one-way sync.
"""

import stat
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from treesync.utils.convert_utils import ConvertUtils

DEFAULT_BUFFER_SIZE = 1024 * 1024  # Copy buffer per file task


# =============================
# Enums
# =============================

class HashAlgorithmName(Enum):
    """
    Content digest used to decide whether a file changed.
    One algorithm is used for the whole run.
    """
    MD5 = "md5"
    CRC32 = "crc32"
    XXH64 = "xxh64"

    @property
    def display_name(self) -> str:
        """Human-readable name for help text and summaries."""
        mapping = {
            HashAlgorithmName.MD5: "MD5",
            HashAlgorithmName.CRC32: "CRC-32",
            HashAlgorithmName.XXH64: "xxHash64",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class ApplyOrder(Enum):
    """
    Which action list the executor applies first.
    DELETE_FIRST frees stale paths before anything is created.
    COPY_FIRST copies first but still removes entries that block a copy.
    """
    DELETE_FIRST = "delete-first"
    COPY_FIRST = "copy-first"

    def __repr__(self) -> str:
        return self.value


class SyncAction(str, Enum):
    COPY = "copy"
    DELETE = "delete"
    COMPARE = "compare"


class EntryStatus(str, Enum):
    OK = "ok"
    SKIPPED = "skipped"
    FAILED = "failed"


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class Entry:
    """
    One scanned filesystem object.
    relative_path is the key of the entry inside its tree: forward-slash
    joined, without leading or trailing slash.
    """
    relative_path: str
    absolute_path: str
    is_directory: bool
    mode: int = 0
    size: int = 0

    @property
    def permissions(self) -> int:
        """Permission bits to reproduce on the destination."""
        return stat.S_IMODE(self.mode)

    @property
    def depth(self) -> int:
        return self.relative_path.count("/")

    def __repr__(self):
        kind = "dir" if self.is_directory else "file"
        return f"<Entry {kind} {self.relative_path}>"


@dataclass
class EntryResult:
    """Outcome of one unit of work on one entry."""
    entry: Entry
    action: SyncAction
    status: EntryStatus = EntryStatus.OK
    reason: Optional[str] = None
    bytes_copied: int = 0

    @property
    def ok(self) -> bool:
        return self.status == EntryStatus.OK

    def __repr__(self):
        suffix = f" ({self.reason})" if self.reason else ""
        return f"<EntryResult {self.action.value} {self.entry.relative_path}: {self.status.value}{suffix}>"


@dataclass
class DiffResult:
    """
    Output of the diff engine.
    copy is in copy order (directories first, then lexicographic);
    delete is in the reverse of that order.
    failures holds comparisons that could not be completed.
    """
    copy: List[Entry] = field(default_factory=list)
    delete: List[Entry] = field(default_factory=list)
    failures: List[EntryResult] = field(default_factory=list)
    files_compared: int = 0
    files_hashed: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.copy and not self.delete

    def __repr__(self):
        return f"<DiffResult copy={len(self.copy)}, delete={len(self.delete)}, failures={len(self.failures)}>"


@dataclass
class SyncReport:
    """
    Batch report of one application of a DiffResult.
    Every copy and delete that was attempted, skipped or failed has a result.
    """
    results: List[EntryResult] = field(default_factory=list)
    duration: float = 0.0

    def add(self, result: EntryResult) -> None:
        self.results.append(result)

    def _count(self, action: SyncAction, status: EntryStatus) -> int:
        return sum(1 for r in self.results if r.action == action and r.status == status)

    @property
    def copied(self) -> int:
        return self._count(SyncAction.COPY, EntryStatus.OK)

    @property
    def deleted(self) -> int:
        return self._count(SyncAction.DELETE, EntryStatus.OK)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.results if r.status == EntryStatus.SKIPPED)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.status == EntryStatus.FAILED)

    @property
    def bytes_copied(self) -> int:
        return sum(r.bytes_copied for r in self.results)

    @property
    def failures(self) -> List[EntryResult]:
        return [r for r in self.results if r.status == EntryStatus.FAILED]

    @property
    def success(self) -> bool:
        return self.failed == 0

    def print_summary(self) -> str:
        lines = [
            "Sync Summary:",
            f"Total Execution Time: {self.duration:.3f}s",
            f"Copied: {self.copied} ({ConvertUtils.bytes_to_human(self.bytes_copied)})",
            f"Deleted: {self.deleted}",
        ]
        if self.skipped:
            lines.append(f"Skipped: {self.skipped}")
        if self.failed:
            lines.append(f"Failed: {self.failed}")
        return "\n".join(lines)

    def __repr__(self):
        return f"<SyncReport copied={self.copied}, deleted={self.deleted}, failed={self.failed}>"


@dataclass
class SyncStats:
    """
    Timings and counts collected by SyncCommand for one run.
    """
    source_entries: int = 0
    destination_entries: int = 0
    scan_time: float = 0.0
    diff_time: float = 0.0
    apply_time: float = 0.0

    @property
    def total_time(self) -> float:
        return self.scan_time + self.diff_time + self.apply_time

    def print_summary(self) -> str:
        lines = [
            "Run Statistics:",
            f"Entries: {self.source_entries} source / {self.destination_entries} destination",
            f"Scan: {self.scan_time:.3f}s",
            f"Diff: {self.diff_time:.3f}s",
            f"Apply: {self.apply_time:.3f}s",
            f"Total: {self.total_time:.3f}s",
        ]
        return "\n".join(lines)


"""
DTO for sync parameters with built-in validation.
Interface-agnostic: built by the CLI, consumed by SyncCommand.
"""

@dataclass
class SyncParams:
    """Parameters for one sync run with validation."""
    source_root: str
    destination_root: str
    dry_run: bool = False
    hash_algorithm: HashAlgorithmName = HashAlgorithmName.MD5
    order: ApplyOrder = ApplyOrder.DELETE_FIRST
    max_workers: Optional[int] = None
    buffer_size: int = DEFAULT_BUFFER_SIZE
    use_trash: bool = False
    copy_report: Optional[str] = None
    delete_report: Optional[str] = None

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.source_root:
            raise ValueError("Source directory cannot be empty")

        if not self.destination_root:
            raise ValueError("Destination directory cannot be empty")

        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("Worker count must be at least 1")

        if self.buffer_size <= 0:
            raise ValueError("Buffer size must be positive")

        if (self.copy_report is None) != (self.delete_report is None):
            raise ValueError("Copy and delete report paths must be given together")

    @property
    def writes_reports(self) -> bool:
        return self.copy_report is not None

    @staticmethod
    def from_human_readable(
            source_root: str,
            destination_root: str,
            buffer_size_str: str = "1MB",
            dry_run: bool = False,
            hash_algorithm: HashAlgorithmName = HashAlgorithmName.MD5,
            order: ApplyOrder = ApplyOrder.DELETE_FIRST,
            max_workers: Optional[int] = None,
            use_trash: bool = False,
            copy_report: Optional[str] = None,
            delete_report: Optional[str] = None,
    ) -> 'SyncParams':
        """
        Factory method to create params from human-readable inputs.
        Used for CLI argument conversion.
        """
        return SyncParams(
            source_root=source_root,
            destination_root=destination_root,
            dry_run=dry_run,
            hash_algorithm=hash_algorithm,
            order=order,
            max_workers=max_workers,
            buffer_size=ConvertUtils.human_to_bytes(buffer_size_str),
            use_trash=use_trash,
            copy_report=copy_report,
            delete_report=delete_report,
        )
