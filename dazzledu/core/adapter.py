"""SizeAdapter abstraction for DazzleDU.

The adapter is the only part of DazzleDU that touches storage. The
traverser asks it for files, file sizes and subdirectories, which keeps
the aggregation logic independent of where the tree actually lives
(a real disk, an in-memory fixture, ...).
"""

from abc import ABC, abstractmethod
from typing import Hashable, List, Optional


class SizeAdapter(ABC):
    """Abstract adapter for measuring a directory tree.

    Listing methods raise ``OSError`` subclasses (PermissionError,
    FileNotFoundError, ...) on failure. The traverser converts those into
    ScanErrors; adapters should not swallow them.
    """

    @abstractmethod
    def list_files(self, path: str) -> List[str]:
        """Return the paths of the immediate (non-directory) files in ``path``.

        Args:
            path: Directory to enumerate

        Returns:
            List of file paths
        """
        pass

    @abstractmethod
    def file_size(self, path: str) -> int:
        """Return the apparent size in bytes of a single file."""
        pass

    @abstractmethod
    def list_subdirectories(self, path: str) -> List[str]:
        """Return the paths of the immediate subdirectories of ``path``.

        Indirection points (symlinks, junctions) that lead to directories
        must be included, so the traverser can refuse them explicitly.
        """
        pass

    @abstractmethod
    def is_reparse_point(self, path: str) -> bool:
        """Check if ``path`` is a symlink, junction or other reparse point."""
        pass

    def identity(self, path: str) -> Optional[Hashable]:
        """Return a stable identity for a directory (e.g. device+inode).

        Used by the visited-set cycle guard. Return None when identities
        are not available; the guard is then inactive for that path.
        """
        return None

    def exists(self, path: str) -> bool:
        """Check that ``path`` is an existing directory."""
        try:
            self.list_subdirectories(path)
        except OSError:
            return False
        return True
