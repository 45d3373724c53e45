"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the sync engine.
These protocols enforce structural typing using Python's `typing.Protocol` so
tests can inject fakes at the seams without subclassing.

Key Components:
---------------
- HashAlgorithm: Streaming digest factory (MD5, CRC-32, xxHash64).
- Hasher: Computes a content digest for a whole file.
- TreeScanner: Walks one root and returns its entries in pre-order.
"""

from typing import Protocol, List, Optional, Callable
from treesync.core.models import Entry


# ===== Interfaces =====

class Digest(Protocol):
    """Incremental digest object, the shape shared by hashlib and xxhash."""
    def update(self, data: bytes) -> None: ...
    def digest(self) -> bytes: ...


class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions like MD5, CRC-32 or xxHash
    without affecting the comparison logic.
    """
    name: str

    def new(self) -> Digest:
        """Returns a fresh incremental digest."""
        ...


class Hasher(Protocol):
    """Interface for hashing the full content of a file."""
    def compute_hash(self, path: str) -> bytes: ...
    def same_content(self, first: str, second: str) -> bool: ...


class TreeScanner(Protocol):
    """
    Interface for walking a directory tree.

    Methods:
        scan: Returns every descendant entry, parents before children.
    """
    def scan(
        self,
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[Entry]:
        """
        Scan the configured root.

        Args:
            stopped_flag: Function that returns True if operation should be canceled.
            progress_callback: Optional callback for reporting progress (stage, current, total).

        Returns:
            List of entries in depth-first pre-order.
        """
        ...
