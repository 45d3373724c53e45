"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/report_service.py
Plain-text reports of the copy and delete lists.

One relative path per line, UTF-8, CRLF after every line on all platforms,
in the same order as the action list.
"""
import logging
from typing import Iterable

from treesync.core.models import DiffResult, Entry

logger = logging.getLogger(__name__)

LINE_TERMINATOR = "\r\n"


class ReportService:
    @staticmethod
    def render(entries: Iterable[Entry]) -> str:
        return "".join(f"{entry.relative_path}{LINE_TERMINATOR}" for entry in entries)

    @staticmethod
    def save(path: str, entries: Iterable[Entry]) -> None:
        """Writes one report file, replacing any existing one."""
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(ReportService.render(entries))
        logger.debug(f"Report written: {path}")

    @classmethod
    def save_results(cls, copy_path: str, delete_path: str, diff: DiffResult) -> None:
        cls.save(copy_path, diff.copy)
        cls.save(delete_path, diff.delete)
