"""
Unified command orchestrator for a sync run.
This is the SINGLE source of truth for the run workflow; the CLI only
builds SyncParams and prints results.
"""
import time
import logging
from pathlib import Path
from typing import Callable, Optional, Tuple

from treesync.core.differ import DiffEngine
from treesync.core.errors import ConfigurationError
from treesync.core.executor import SyncExecutor
from treesync.core.hasher import HasherImpl, create_algorithm
from treesync.core.index import TreeIndex
from treesync.core.models import DiffResult, SyncParams, SyncReport, SyncStats
from treesync.core.scanner import TreeScannerImpl
from treesync.services.report_service import ReportService

logger = logging.getLogger(__name__)


class SyncCommand:
    """
    Orchestrates the entire sync workflow:
    1. Validate both roots
    2. Scan source and destination, build one TreeIndex per side
    3. Diff the indices
    4. Apply the diff unless params.dry_run is set
    5. Write the copy/delete reports if requested

    Usage:
        params = SyncParams(source_root="./src", destination_root="./dst")
        diff, report = SyncCommand().execute(params)
    """

    def __init__(self):
        self.stats = SyncStats()

    @staticmethod
    def validate_roots(source_root: str, destination_root: str) -> None:
        """Raises ConfigurationError before any work is done."""
        for label, root in (("Source", source_root), ("Destination", destination_root)):
            path = Path(root)
            if not path.exists():
                raise ConfigurationError(f"{label} directory does not exist: {root}")
            if not path.is_dir():
                raise ConfigurationError(f"{label} must be a directory: {root}")

        source = Path(source_root).resolve()
        destination = Path(destination_root).resolve()
        if source == destination:
            raise ConfigurationError("Source and destination are the same directory")
        if source in destination.parents or destination in source.parents:
            raise ConfigurationError("Source and destination must not be nested inside each other")

    def execute(
            self,
            params: SyncParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None,
            stopped_flag: Optional[Callable[[], bool]] = None
    ) -> Tuple[DiffResult, Optional[SyncReport]]:
        """
        Execute one sync run.

        Args:
            params: Validated sync parameters
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None
            stopped_flag: () -> bool (returns True if operation should stop)

        Returns:
            Tuple of (diff, report); report is None for a dry run

        Raises:
            ConfigurationError: If a root is unusable
            ScanError: If either tree cannot be scanned completely
        """
        self.stats = SyncStats()
        self.validate_roots(params.source_root, params.destination_root)

        # Step 1: Scan both sides
        start_time = time.time()
        source_index = TreeIndex.from_entries(
            TreeScannerImpl(params.source_root).scan(stopped_flag, progress_callback))
        destination_index = TreeIndex.from_entries(
            TreeScannerImpl(params.destination_root).scan(stopped_flag, progress_callback))
        self.stats.scan_time = time.time() - start_time
        self.stats.source_entries = len(source_index)
        self.stats.destination_entries = len(destination_index)

        # Step 2: Diff
        start_time = time.time()
        hasher = HasherImpl(create_algorithm(params.hash_algorithm))
        engine = DiffEngine(hasher, max_workers=params.max_workers)
        diff = engine.compare(source_index, destination_index,
                              stopped_flag=stopped_flag, progress_callback=progress_callback)
        self.stats.diff_time = time.time() - start_time

        # Step 3: Apply
        report = None
        if params.dry_run:
            logger.debug("Dry run, destination left untouched")
        else:
            executor = SyncExecutor(
                params.destination_root,
                max_workers=params.max_workers,
                order=params.order,
                buffer_size=params.buffer_size,
                use_trash=params.use_trash,
            )
            report = executor.apply(diff, stopped_flag=stopped_flag, progress_callback=progress_callback)
            self.stats.apply_time = report.duration

        # Step 4: Reports
        if params.writes_reports:
            ReportService.save_results(params.copy_report, params.delete_report, diff)

        return diff, report
