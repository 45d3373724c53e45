"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/index.py
Path-keyed lookup of the entries of one side of a sync.
"""

from collections.abc import Mapping
from typing import Dict, Iterable, Iterator, List

from treesync.core.models import Entry


class TreeIndex(Mapping):
    """
    Read-only mapping of relative_path -> Entry for one scanned tree.
    Built once per side and owned by a single diff.
    """

    def __init__(self, entries: Iterable[Entry] = ()):
        by_path: Dict[str, Entry] = {}
        for entry in entries:
            if entry.relative_path in by_path:
                raise ValueError(f"Duplicate path in scan result: {entry.relative_path}")
            by_path[entry.relative_path] = entry
        self._by_path = by_path

    @classmethod
    def from_entries(cls, entries: Iterable[Entry]) -> 'TreeIndex':
        return cls(entries)

    def __getitem__(self, relative_path: str) -> Entry:
        return self._by_path[relative_path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_path)

    def __len__(self) -> int:
        return len(self._by_path)

    def __contains__(self, relative_path) -> bool:
        return relative_path in self._by_path

    def entries(self) -> List[Entry]:
        """Entries in scan order."""
        return list(self._by_path.values())

    def __repr__(self):
        return f"<TreeIndex entries={len(self._by_path)}>"
