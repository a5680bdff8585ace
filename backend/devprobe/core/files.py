"""
Small synchronous file helpers: existence checks and byte-for-byte copy.

Library API for Python callers embedding devprobe; no HTTP route exposes
them, since they act on the service host's own filesystem.
"""

import os
import shutil
from collections.abc import Iterable
from pathlib import Path
from typing import BinaryIO

from devprobe.core.errors import FileOperationError

__all__ = [
    "read_file",
    "create_file",
    "file_exists",
    "find_nonexistent_files",
    "copy_file",
]


def read_file(path: str) -> BinaryIO:
    try:
        return open(path, "rb")
    except OSError as e:
        raise FileOperationError(f"Failed to open {path}: {e}") from e


def create_file(path: str) -> BinaryIO:
    """Create (or truncate) *path* for writing; the parent directory must exist."""
    try:
        return open(path, "wb")
    except OSError as e:
        raise FileOperationError(f"Failed to create {path}: {e}") from e


def _open_existing_for_write(path: str) -> BinaryIO:
    try:
        fd = os.open(path, os.O_WRONLY | os.O_TRUNC | getattr(os, "O_BINARY", 0))
    except OSError as e:
        raise FileOperationError(f"Failed to open {path}: {e}") from e
    return os.fdopen(fd, "wb")


def file_exists(file_path: str) -> bool:
    """True only for an existing regular file (directories don't count)."""
    return Path(file_path).is_file()


def find_nonexistent_files(paths: Iterable[str]) -> list[str]:
    """Paths (in input order) where nothing exists, file or directory."""
    return [p for p in paths if not os.path.exists(p)]


def copy_file(
    source: str, destination: str, create_dest_if_not_exists: bool = False
) -> None:
    """
    Copy *source* into *destination*.

    Without create_dest_if_not_exists the destination must already exist; it
    is overwritten either way.
    """
    with read_file(source) as src:
        if create_dest_if_not_exists:
            dst = create_file(destination)
        else:
            dst = _open_existing_for_write(destination)
        with dst:
            try:
                shutil.copyfileobj(src, dst)
            except OSError as e:
                raise FileOperationError(f"Failed to write to {destination}: {e}") from e
