"""Filesystem adapter for DazzleDU.

Measures real directories using ``os.scandir`` and ``os.lstat``. Sizes
are apparent sizes (``st_size``), not allocated blocks.
"""

import os
import stat
from typing import Hashable, List, Optional, Tuple

from ..core.adapter import SizeAdapter


class FileSystemAdapter(SizeAdapter):
    """Adapter for on-disk directory trees.

    Only regular files have a size: symlinks to files, FIFOs, sockets and
    device nodes count as 0. A symlink or junction to a directory is
    reported as a subdirectory so the traverser can refuse
    to enter it.
    """

    def __init__(self, include_hidden: bool = True):
        """Initialize filesystem adapter.

        Args:
            include_hidden: Whether to include dot-files and dot-directories
        """
        self.include_hidden = include_hidden
        # Listing of the last directory enumerated by list_files, consumed by
        # the list_subdirectories call that follows it
        self._pending: Optional[Tuple[str, List[str]]] = None

    def list_files(self, path: str) -> List[str]:
        files, directories = self._split_entries(path)
        self._pending = (path, directories)
        return files

    def list_subdirectories(self, path: str) -> List[str]:
        pending, self._pending = self._pending, None
        if pending is not None and pending[0] == path:
            return pending[1]
        _, directories = self._split_entries(path)
        return directories

    def file_size(self, path: str) -> int:
        st = os.lstat(path)
        return st.st_size if stat.S_ISREG(st.st_mode) else 0

    def is_reparse_point(self, path: str) -> bool:
        st = os.lstat(path)
        if stat.S_ISLNK(st.st_mode):
            return True
        # Windows junctions and other reparse points
        attributes = getattr(st, 'st_file_attributes', 0)
        if attributes & stat.FILE_ATTRIBUTE_REPARSE_POINT:
            return True
        isjunction = getattr(os.path, 'isjunction', None)
        return bool(isjunction and isjunction(path))

    def identity(self, path: str) -> Optional[Hashable]:
        st = os.stat(path)
        # Some filesystems (and older Windows builds) report 0 inodes
        if not st.st_ino:
            return None
        return (st.st_dev, st.st_ino)

    def exists(self, path: str) -> bool:
        return os.path.isdir(path)

    def _split_entries(self, path: str) -> Tuple[List[str], List[str]]:
        """Enumerate ``path`` once, separating files from directories.

        Entries are sorted by name so repeated runs list them in the same
        order regardless of what the OS returns.
        """
        files = []
        directories = []
        with os.scandir(path) as it:
            entries = sorted(it, key=lambda e: e.name)

        for entry in entries:
            if not self.include_hidden and entry.name.startswith('.'):
                continue
            try:
                # Follows links so directory symlinks land in `directories`
                is_dir = entry.is_dir()
            except OSError:
                is_dir = False
            if is_dir:
                directories.append(entry.path)
            else:
                files.append(entry.path)

        return files, directories

    def __repr__(self) -> str:
        return f"FileSystemAdapter(include_hidden={self.include_hidden})"
