"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Filesystem primitives used by the sync executor: streamed file copy,
directory creation, removal and moving to the system trash.
"""
import os
from pathlib import Path
from send2trash import send2trash


class FileService:
    """
    Stateless file operations. Errors surface as OSError (or RuntimeError for
    trash operations) so the executor can record them per entry.
    """

    @staticmethod
    def copy_file(source_path: str, dest_path: str, permissions: int, buffer_size: int) -> int:
        """
        Streams source into a created or truncated destination file and gives
        it the source permission bits. Returns the number of bytes written.
        A symlink at dest_path is replaced, never written through.
        """
        bytes_copied = 0
        if os.path.islink(dest_path):
            os.unlink(dest_path)
        fd = os.open(dest_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, permissions)
        with open(fd, 'wb') as dst, open(source_path, 'rb') as src:
            while chunk := src.read(buffer_size):
                dst.write(chunk)
                bytes_copied += len(chunk)
        # The file may have existed with other bits, and umask applies on create
        os.chmod(dest_path, permissions)
        return bytes_copied

    @staticmethod
    def make_directory(dest_path: str) -> None:
        """Creates one directory level; the parent must already exist."""
        os.mkdir(dest_path)

    @staticmethod
    def set_permissions(dest_path: str, permissions: int) -> None:
        os.chmod(dest_path, permissions)

    @staticmethod
    def remove(path: str, is_directory: bool) -> None:
        """Removes a file, or an empty directory."""
        if is_directory:
            os.rmdir(path)
        else:
            os.remove(path)

    @staticmethod
    def move_to_trash(file_path: str):
        """Moves a file or directory to the system trash."""
        path = Path(file_path)

        if not os.path.lexists(path):
            raise RuntimeError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except Exception as e:
            raise RuntimeError(f"Failed to move to trash: {e}") from e
