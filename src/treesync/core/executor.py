"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

executor.py
Applies a DiffResult to the destination root.

ORDER CONTRACT
--------------
DELETE_FIRST (default):
  1. delete list, in delete order
  2. directories of the copy list, in copy order, one at a time
  3. files of the copy list, concurrently
  4. permission bits of the created directories, deepest first
COPY_FIRST:
  1. deletes that occupy a path needed by the copy list (type changes)
  2-4. as above
  5. the remaining deletes

Each step finishes before the next starts. Nothing aborts the batch: every
entry ends up in the SyncReport as OK, SKIPPED or FAILED.
"""

import os
import time
import logging
from typing import Callable, List, Optional, Set

from treesync.core.models import (
    ApplyOrder, DEFAULT_BUFFER_SIZE, DiffResult, Entry, EntryResult,
    EntryStatus, SyncAction, SyncReport,
)
from treesync.core.sorter import Sorter
from treesync.core.worker_pool import TaskOutcome, WorkerPool
from treesync.services.file_service import FileService

logger = logging.getLogger(__name__)


class SyncExecutor:
    """
    Applies copy and delete lists against one destination root.

    Attributes:
        destination_root: Root the relative paths are resolved against
        order: Which list is applied first (see module docstring)
        buffer_size: Read size for file copies
        use_trash: Move deleted entries to the system trash instead of removing them
    """

    def __init__(
            self,
            destination_root: str,
            max_workers: Optional[int] = None,
            order: ApplyOrder = ApplyOrder.DELETE_FIRST,
            buffer_size: int = DEFAULT_BUFFER_SIZE,
            use_trash: bool = False
    ):
        self.destination_root = destination_root
        self.order = order
        self.buffer_size = buffer_size
        self.use_trash = use_trash
        self.pool = WorkerPool(max_workers=max_workers, name="treesync-copy")

    def destination_path(self, entry: Entry) -> str:
        return os.path.join(self.destination_root, *entry.relative_path.split("/"))

    def apply(
            self,
            diff: DiffResult,
            stopped_flag: Optional[Callable[[], bool]] = None,
            progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> SyncReport:
        start_time = time.time()
        report = SyncReport()

        if self.order == ApplyOrder.DELETE_FIRST:
            self._delete(diff.delete, report, stopped_flag)
            self._copy(diff.copy, report, stopped_flag, progress_callback)
        else:
            blocking, remaining = Sorter.split_blocking_deletes(diff.delete, diff.copy)
            self._delete(blocking, report, stopped_flag)
            self._copy(diff.copy, report, stopped_flag, progress_callback)
            self._delete(remaining, report, stopped_flag)

        report.duration = time.time() - start_time
        logger.debug(f"Apply finished in {report.duration:.2f} seconds: "
                     f"{report.copied} copied, {report.deleted} deleted, {report.failed} failed")
        return report

    # =============================
    # Deletes
    # =============================

    def _delete(self, entries: List[Entry], report: SyncReport,
                stopped_flag: Optional[Callable[[], bool]]) -> None:
        for entry in entries:
            if stopped_flag and stopped_flag():
                report.add(EntryResult(entry, SyncAction.DELETE, EntryStatus.SKIPPED, "cancelled"))
                continue
            try:
                target = self.destination_path(entry)
                if self.use_trash:
                    FileService.move_to_trash(target)
                else:
                    FileService.remove(target, entry.is_directory)
            except (OSError, RuntimeError) as e:
                logger.warning(f"Delete failed, {entry.relative_path}: {e}")
                report.add(EntryResult(entry, SyncAction.DELETE, EntryStatus.FAILED, str(e)))
                continue
            logger.info(f"delete, {entry.relative_path}")
            report.add(EntryResult(entry, SyncAction.DELETE))

    # =============================
    # Copies
    # =============================

    def _copy(self, entries: List[Entry], report: SyncReport,
              stopped_flag: Optional[Callable[[], bool]],
              progress_callback: Optional[Callable[[str, int, object], None]]) -> None:
        directories = [e for e in entries if e.is_directory]
        files = [e for e in entries if not e.is_directory]

        failed_dirs: Set[str] = set()
        created_dirs: List[Entry] = []
        for entry in directories:
            blocked_by = self._failed_ancestor(entry, failed_dirs)
            if blocked_by is not None:
                failed_dirs.add(entry.relative_path)
                report.add(EntryResult(entry, SyncAction.COPY, EntryStatus.SKIPPED,
                                       f"parent directory not created: {blocked_by}"))
                continue
            if stopped_flag and stopped_flag():
                failed_dirs.add(entry.relative_path)
                report.add(EntryResult(entry, SyncAction.COPY, EntryStatus.SKIPPED, "cancelled"))
                continue
            try:
                FileService.make_directory(self.destination_path(entry))
            except OSError as e:
                logger.warning(f"Copy failed, {entry.relative_path}: {e}")
                failed_dirs.add(entry.relative_path)
                report.add(EntryResult(entry, SyncAction.COPY, EntryStatus.FAILED, str(e)))
                continue
            logger.info(f"copy, {entry.relative_path}")
            created_dirs.append(entry)
            report.add(EntryResult(entry, SyncAction.COPY))

        runnable: List[Entry] = []
        for entry in files:
            blocked_by = self._failed_ancestor(entry, failed_dirs)
            if blocked_by is not None:
                report.add(EntryResult(entry, SyncAction.COPY, EntryStatus.SKIPPED,
                                       f"parent directory not created: {blocked_by}"))
            else:
                runnable.append(entry)

        if runnable:
            self._copy_files(runnable, report, stopped_flag, progress_callback)

        # Read-only source directories must not block their own children
        for entry in reversed(created_dirs):
            try:
                FileService.set_permissions(self.destination_path(entry), entry.permissions)
            except OSError as e:
                logger.warning(f"Cannot set mode on {entry.relative_path}: {e}")

    def _copy_files(self, files: List[Entry], report: SyncReport,
                    stopped_flag: Optional[Callable[[], bool]],
                    progress_callback: Optional[Callable[[str, int, object], None]]) -> None:
        total = len(files)
        processed = 0

        def collect(outcome: TaskOutcome) -> None:
            nonlocal processed
            entry = outcome.item
            processed += 1
            if outcome.skipped:
                report.add(EntryResult(entry, SyncAction.COPY, EntryStatus.SKIPPED, "cancelled"))
            elif outcome.error is not None:
                logger.warning(f"Copy failed, {entry.relative_path}: {outcome.error}")
                report.add(EntryResult(entry, SyncAction.COPY, EntryStatus.FAILED, str(outcome.error)))
            else:
                logger.info(f"copy, {entry.relative_path}")
                report.add(EntryResult(entry, SyncAction.COPY, bytes_copied=outcome.value))
            if progress_callback:
                progress_callback('copying', processed, total)

        self.pool.map(self._copy_one, files, stopped_flag=stopped_flag, on_result=collect)

    def _copy_one(self, entry: Entry) -> int:
        return FileService.copy_file(
            entry.absolute_path,
            self.destination_path(entry),
            entry.permissions,
            self.buffer_size,
        )

    @staticmethod
    def _failed_ancestor(entry: Entry, failed_dirs: Set[str]) -> Optional[str]:
        path = entry.relative_path
        while "/" in path:
            path = path[:path.rfind("/")]
            if path in failed_dirs:
                return path
        return None
