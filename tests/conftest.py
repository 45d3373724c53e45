"""
Shared fixtures for sync engine tests.
Creates isolated source/destination trees with controlled content.
"""
import pytest
import tempfile
from pathlib import Path
from typing import Dict, Optional, Set
import sys

# Add src/ to sys.path so 'treesync' is importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from treesync.core.hasher import HasherImpl, MD5AlgorithmImpl


def build_tree(root: Path, layout: Dict[str, Optional[bytes]]) -> Path:
    """
    Creates a tree from {relative_path: content}. A value of None creates a
    directory; bytes create a file (parents are created as needed).
    """
    root.mkdir(parents=True, exist_ok=True)
    for rel, content in layout.items():
        path = root / rel
        if content is None:
            path.mkdir(parents=True, exist_ok=True)
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
    return root


def tree_paths(root: Path) -> Set[str]:
    """All relative paths below root, forward-slash joined."""
    return {p.relative_to(root).as_posix() for p in root.rglob("*")}


def tree_digests(root: Path) -> Dict[str, bytes]:
    """Relative path -> MD5 digest for every regular file below root."""
    hasher = HasherImpl(MD5AlgorithmImpl())
    return {
        p.relative_to(root).as_posix(): hasher.compute_hash(str(p))
        for p in root.rglob("*") if p.is_file()
    }


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def src_dir(temp_dir) -> Path:
    path = temp_dir / "src"
    path.mkdir()
    return path


@pytest.fixture
def dst_dir(temp_dir) -> Path:
    path = temp_dir / "dst"
    path.mkdir()
    return path


@pytest.fixture
def sample_trees(src_dir, dst_dir):
    """
    Source and destination with every kind of difference:
    - same.txt: identical on both sides (no action)
    - changed.txt: same size, different bytes (copy)
    - grown.txt: different size (copy without hashing)
    - new/: directory only in source, with a nested file (copy both)
    - docs/: directory on both sides (no action), docs/extra.md only in destination (delete)
    - stale/: destination-only directory with content (delete children then directory)
    """
    build_tree(src_dir, {
        "same.txt": b"same content",
        "changed.txt": b"version-2",
        "grown.txt": b"a much longer body than before",
        "new/inner/file.bin": b"\x00\x01\x02",
        "docs/readme.md": b"# docs",
    })
    build_tree(dst_dir, {
        "same.txt": b"same content",
        "changed.txt": b"version-1",
        "grown.txt": b"short",
        "docs/readme.md": b"# docs",
        "docs/extra.md": b"only here",
        "stale/old/leftover.txt": b"gone soon",
    })
    return src_dir, dst_dir
