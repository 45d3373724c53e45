"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements directory tree scanning for the sync engine.
Features:
- Depth-first pre-order: a directory is emitted before anything inside it
- Explicit stack of directory iterators instead of call-stack recursion
- Siblings in name order, so two scans of the same tree are identical
- All-or-nothing: the first listing error aborts the scan
"""

import os
import stat
import time
import logging
from typing import Callable, Iterator, List, Optional

from treesync.core.errors import ConfigurationError, ScanError
from treesync.core.interfaces import TreeScanner
from treesync.core.models import Entry

logger = logging.getLogger(__name__)


class TreeScannerImpl(TreeScanner):
    """
    Scans a root directory and returns every descendant as an Entry with a
    root-relative, forward-slash joined path.

    Entries are typed by the directory listing without following symlinks:
    a symlink to a directory is reported as a non-directory entry. A symlink
    to a regular file carries the size and mode of its target.

    Attributes:
        root_dir: Root directory to scan
    """

    PROGRESS_INTERVAL = 5000  # Report progress every N entries

    def __init__(self, root_dir: str):
        self.root_dir = root_dir

    def scan(self,
             stopped_flag: Optional[Callable[[], bool]] = None,
             progress_callback: Optional[Callable[[str, int, object], None]] = None) -> List[Entry]:
        """
        Walks the whole tree. Raises ConfigurationError for a bad root and
        ScanError when any directory or entry cannot be read.
        """
        logger.debug(f"Root directory: {self.root_dir}")

        if not os.path.exists(self.root_dir):
            raise ConfigurationError(f"Directory does not exist: {self.root_dir}")
        if not os.path.isdir(self.root_dir):
            raise ConfigurationError(f"Not a directory: {self.root_dir}")

        entries: List[Entry] = []
        progress_counter = 0
        start_time = time.time()

        stack = [self._list_directory(self.root_dir, "")]
        while stack:
            entry = next(stack[-1], None)
            if entry is None:
                stack.pop()
                continue

            entries.append(entry)
            progress_counter += 1
            if progress_callback and progress_counter >= self.PROGRESS_INTERVAL:
                progress_callback('scanning', len(entries), None)
                progress_counter = 0

            if entry.is_directory:
                if stopped_flag and stopped_flag():
                    logger.debug("Scan interrupted by user")
                    raise ScanError(f"Scan cancelled: {self.root_dir}")
                stack.append(self._list_directory(entry.absolute_path, entry.relative_path))

        if progress_callback and progress_counter > 0:
            progress_callback('scanning', len(entries), None)

        logger.debug(f"Scanned {len(entries)} entries under {self.root_dir} "
                     f"in {time.time() - start_time:.2f} seconds")
        return entries

    @staticmethod
    def _list_directory(directory: str, relative_dir: str) -> Iterator[Entry]:
        """
        Lists one directory eagerly and returns an iterator over its entries.
        Reading everything up front keeps at most one open handle per call.
        """
        try:
            with os.scandir(directory) as it:
                dir_entries = sorted(it, key=lambda e: e.name)
            listed = []
            for dir_entry in dir_entries:
                st = dir_entry.stat(follow_symlinks=False)
                is_directory = dir_entry.is_dir(follow_symlinks=False)
                if dir_entry.is_symlink():
                    st = TreeScannerImpl._link_content_stat(dir_entry, st)
                listed.append(Entry(
                    relative_path=f"{relative_dir}/{dir_entry.name}" if relative_dir else dir_entry.name,
                    absolute_path=os.path.join(directory, dir_entry.name),
                    is_directory=is_directory,
                    mode=st.st_mode,
                    size=0 if is_directory else st.st_size,
                ))
        except OSError as e:
            logger.error(f"Cannot read directory {directory}: {e}")
            raise ScanError(f"Cannot read directory {directory}: {e}") from e
        return iter(listed)

    @staticmethod
    def _link_content_stat(dir_entry: os.DirEntry, link_stat: os.stat_result) -> os.stat_result:
        """
        A file symlink is copied and hashed through the link, so its size and
        mode are those of the target. Dangling links and links to directories
        keep the stat of the link itself.
        """
        try:
            target_stat = dir_entry.stat(follow_symlinks=True)
        except OSError as e:
            logger.debug(f"Cannot follow link {dir_entry.path}: {e}")
            return link_stat
        return target_stat if stat.S_ISREG(target_stat.st_mode) else link_stat
