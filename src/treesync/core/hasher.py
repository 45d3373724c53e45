"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements streaming file hashing over pluggable hash algorithms.

HasherImpl reads a file in fixed-size chunks and feeds them to a fresh digest
from the configured algorithm, so memory use does not grow with file size.
"""

import hashlib
import zlib

import xxhash

from treesync.core.interfaces import Hasher, HashAlgorithm
from treesync.core.models import HashAlgorithmName

DEFAULT_CHUNK_SIZE = 64 * 1024


# Use the same way to implement and use any other hashing algorithm
class MD5AlgorithmImpl(HashAlgorithm):
    name = HashAlgorithmName.MD5.value

    def new(self):
        return hashlib.md5()


class XXHashAlgorithmImpl(HashAlgorithm):
    name = HashAlgorithmName.XXH64.value

    def new(self):
        return xxhash.xxh64()


class _Crc32Digest:
    """Running CRC-32 with the update/digest interface of hashlib objects."""

    def __init__(self):
        self._value = 0

    def update(self, data: bytes) -> None:
        self._value = zlib.crc32(data, self._value)

    def digest(self) -> bytes:
        return self._value.to_bytes(4, "big")


class Crc32AlgorithmImpl(HashAlgorithm):
    name = HashAlgorithmName.CRC32.value

    def new(self):
        return _Crc32Digest()


_ALGORITHMS = {
    HashAlgorithmName.MD5: MD5AlgorithmImpl,
    HashAlgorithmName.CRC32: Crc32AlgorithmImpl,
    HashAlgorithmName.XXH64: XXHashAlgorithmImpl,
}


def create_algorithm(name: HashAlgorithmName) -> HashAlgorithm:
    """Builds the algorithm implementation for a configured name."""
    try:
        return _ALGORITHMS[name]()
    except KeyError:
        raise ValueError(f"Unknown hash algorithm: {name!r}") from None


class HasherImpl(Hasher):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    Open and read errors propagate as OSError; callers decide how to recover.
    """

    def __init__(self, algorithm: HashAlgorithm, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
        self.algorithm = algorithm
        self.chunk_size = chunk_size

    def compute_hash(self, path: str) -> bytes:
        """Computes the digest of the whole file, one chunk at a time."""
        digest = self.algorithm.new()
        with open(path, 'rb') as f:
            while chunk := f.read(self.chunk_size):
                digest.update(chunk)
        return digest.digest()

    def same_content(self, first: str, second: str) -> bool:
        return self.compute_hash(first) == self.compute_hash(second)
