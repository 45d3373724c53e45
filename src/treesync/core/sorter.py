"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/sorter.py
Ordering rules for action lists.

Copy order: every directory before every file, then ascending by relative
path. A directory path is a strict prefix of its children's paths, so a
parent is always created before anything is copied into it.

Delete order: the exact reverse, so a directory is emptied before it is
removed.
"""

from typing import Iterable, List, Tuple

from treesync.core.models import Entry


class Sorter:
    @staticmethod
    def copy_key(entry: Entry) -> Tuple[int, str]:
        return (0 if entry.is_directory else 1, entry.relative_path)

    @staticmethod
    def sort_for_copy(entries: Iterable[Entry]) -> List[Entry]:
        return sorted(entries, key=Sorter.copy_key)

    @staticmethod
    def sort_for_delete(entries: Iterable[Entry]) -> List[Entry]:
        return sorted(entries, key=Sorter.copy_key, reverse=True)

    @staticmethod
    def split_blocking_deletes(delete: List[Entry], copy: List[Entry]) -> Tuple[List[Entry], List[Entry]]:
        """
        Splits a delete list into entries that occupy a path needed by the
        copy list (the path itself or anything below it) and the rest.
        Both parts keep delete order.
        """
        copy_paths = {entry.relative_path for entry in copy}
        blocking, remaining = [], []
        for entry in delete:
            if Sorter._occupies(entry.relative_path, copy_paths):
                blocking.append(entry)
            else:
                remaining.append(entry)
        return blocking, remaining

    @staticmethod
    def _occupies(path: str, copy_paths: set) -> bool:
        # Walk up the path: a/b/c -> a/b -> a
        while True:
            if path in copy_paths:
                return True
            slash = path.rfind("/")
            if slash < 0:
                return False
            path = path[:slash]
