"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

differ.py
Computes which entries must be copied or deleted so that the destination
tree matches the source tree.

Decision table for a source entry S and destination entry D at the same path:
    D missing                  -> copy S
    S and D differ in type     -> delete D, copy S
    both directories           -> nothing
    both files, sizes differ   -> copy S (no hashing needed)
    both files, same size      -> hash both sides; copy S if digests differ
Destination entries with no source counterpart are deleted.

Only the same-size file pairs go through the worker pool. Every other
decision is made synchronously in the calling thread.
"""

import time
import logging
from typing import Callable, List, Optional, Tuple

from treesync.core.index import TreeIndex
from treesync.core.interfaces import Hasher
from treesync.core.models import DiffResult, Entry, EntryResult, EntryStatus, SyncAction
from treesync.core.sorter import Sorter
from treesync.core.worker_pool import TaskOutcome, WorkerPool

logger = logging.getLogger(__name__)


class DiffEngine:
    """
    Compares a source index with a destination index.
    The hasher and worker count are fixed per engine; nothing is global.
    """

    def __init__(self, hasher: Hasher, max_workers: Optional[int] = None):
        self.hasher = hasher
        self.pool = WorkerPool(max_workers=max_workers, name="treesync-hash")

    def compare(
            self,
            source: TreeIndex,
            destination: TreeIndex,
            stopped_flag: Optional[Callable[[], bool]] = None,
            progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> DiffResult:
        """
        Returns the copy list (copy order) and delete list (delete order).
        Comparison failures never abort the diff: the entry is copied and the
        failure is recorded in DiffResult.failures.
        """
        start_time = time.time()
        result = DiffResult()
        copy: List[Entry] = []
        delete: List[Entry] = []
        candidates: List[Tuple[Entry, Entry]] = []

        for path, src in source.items():
            dst = destination.get(path)
            if dst is None:
                copy.append(src)
            elif src.is_directory != dst.is_directory:
                logger.debug(f"Type changed, replacing: {path}")
                delete.append(dst)
                copy.append(src)
            elif src.is_directory:
                continue
            elif src.size != dst.size:
                result.files_compared += 1
                copy.append(src)
            else:
                result.files_compared += 1
                candidates.append((src, dst))

        for path, dst in destination.items():
            if path not in source:
                delete.append(dst)

        if candidates:
            self._compare_contents(candidates, copy, result, stopped_flag, progress_callback)

        result.copy = Sorter.sort_for_copy(copy)
        result.delete = Sorter.sort_for_delete(delete)

        logger.debug(f"Diff finished in {time.time() - start_time:.2f} seconds: "
                     f"{len(result.copy)} to copy, {len(result.delete)} to delete, "
                     f"{result.files_hashed} pairs hashed")
        return result

    def _compare_contents(
            self,
            candidates: List[Tuple[Entry, Entry]],
            copy: List[Entry],
            result: DiffResult,
            stopped_flag: Optional[Callable[[], bool]],
            progress_callback: Optional[Callable[[str, int, object], None]]
    ) -> None:
        """Hashes same-size pairs in the pool and collects the verdicts here."""
        total = len(candidates)
        processed = 0

        def collect(outcome: TaskOutcome) -> None:
            nonlocal processed
            src, dst = outcome.item
            processed += 1

            if outcome.skipped:
                result.failures.append(EntryResult(
                    entry=src, action=SyncAction.COMPARE,
                    status=EntryStatus.SKIPPED, reason="cancelled"))
            elif outcome.error is not None:
                # Unknown content is treated as changed
                logger.warning(f"Cannot compare {src.relative_path}: {outcome.error}")
                result.failures.append(EntryResult(
                    entry=src, action=SyncAction.COMPARE,
                    status=EntryStatus.FAILED, reason=str(outcome.error)))
                copy.append(src)
            else:
                result.files_hashed += 1
                if not outcome.value:
                    copy.append(src)

            if progress_callback:
                progress_callback('comparing', processed, total)

        self.pool.map(self._same_content, candidates, stopped_flag=stopped_flag, on_result=collect)

    def _same_content(self, pair: Tuple[Entry, Entry]) -> bool:
        src, dst = pair
        return self.hasher.same_content(src.absolute_path, dst.absolute_path)
