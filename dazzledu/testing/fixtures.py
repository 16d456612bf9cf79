"""Test fixtures for DazzleDU consumers.

MemoryTreeAdapter describes a directory tree with plain dicts and lets a
test script failures (permission denied, vanished files, overlong paths)
and indirection points at exact paths, without touching the disk.
"""

import errno
import posixpath
import random
from typing import Any, Dict, Hashable, List, Optional, Tuple

from ..core.adapter import SizeAdapter


def access_denied(path: str) -> PermissionError:
    return PermissionError(errno.EACCES, "Permission denied", path)


def not_found(path: str) -> FileNotFoundError:
    return FileNotFoundError(errno.ENOENT, "No such file or directory", path)


def io_error(path: str) -> OSError:
    return OSError(errno.EIO, "Input/output error", path)


def path_too_long(path: str) -> OSError:
    return OSError(errno.ENAMETOOLONG, "File name too long", path)


class MemoryTreeAdapter(SizeAdapter):
    """In-memory SizeAdapter built from nested dicts.

    Example:
        adapter = MemoryTreeAdapter("/data", {
            "a.bin": 500,                  # file -> size in bytes
            "logs": {"b.bin": 600},        # directory -> nested dict
        })
        adapter.fail("list_subdirectories", "/data/logs", access_denied("/data/logs"))
        adapter.link("/data/loop", "/data")   # reparse point back to root

    Links behave like real symlinks: they are listed as subdirectories of
    their parent, and listing through them shows the target's contents,
    so a traversal that ignored ``is_reparse_point`` would never end.
    """

    def __init__(self,
                 root: str,
                 tree: Dict[str, Any],
                 shuffle_seed: Optional[int] = None):
        """
        Args:
            root: Absolute path of the tree's root directory
            tree: Nested dict; int values are file sizes, dict values directories
            shuffle_seed: If set, listings come back in a seeded random order
        """
        self.root = posixpath.normpath(root)
        self._files: Dict[str, int] = {}
        self._dirs: Dict[str, Dict[str, List[str]]] = {}
        self._links: Dict[str, str] = {}
        self._errors: Dict[Tuple[str, str], BaseException] = {}
        self._identities: Dict[str, Hashable] = {}
        self._random = random.Random(shuffle_seed) if shuffle_seed is not None else None
        self.calls: List[Tuple[str, str]] = []
        self._index(self.root, tree)

    def _index(self, path: str, tree: Dict[str, Any]) -> None:
        entry = self._dirs.setdefault(path, {'files': [], 'dirs': []})
        for name, value in tree.items():
            child = posixpath.join(path, name)
            if isinstance(value, dict):
                entry['dirs'].append(name)
                self._index(child, value)
            else:
                entry['files'].append(name)
                self._files[child] = int(value)

    # Scripting helpers

    def fail(self, operation: str, path: str, error: BaseException) -> 'MemoryTreeAdapter':
        """Make ``operation`` raise ``error`` whenever it is called for ``path``."""
        self._errors[(operation, path)] = error
        return self

    def link(self, path: str, target: str) -> 'MemoryTreeAdapter':
        """Add a reparse point at ``path`` pointing at directory ``target``."""
        parent, name = posixpath.split(path)
        self._dirs[self._resolve(parent)]['dirs'].append(name)
        self._links[path] = target
        return self

    def alias(self, path: str, identity: Hashable) -> 'MemoryTreeAdapter':
        """Give ``path`` an explicit identity (simulates bind mounts)."""
        self._identities[path] = identity
        return self

    def calls_for(self, operation: str) -> List[str]:
        return [path for op, path in self.calls if op == operation]

    # SizeAdapter

    def list_files(self, path: str) -> List[str]:
        entry = self._lookup('list_files', path)
        return self._ordered([posixpath.join(path, name) for name in entry['files']])

    def list_subdirectories(self, path: str) -> List[str]:
        entry = self._lookup('list_subdirectories', path)
        return self._ordered([posixpath.join(path, name) for name in entry['dirs']])

    def file_size(self, path: str) -> int:
        self._record('file_size', path)
        parent, name = posixpath.split(path)
        real = posixpath.join(self._resolve(parent), name)
        if real not in self._files:
            raise not_found(path)
        return self._files[real]

    def is_reparse_point(self, path: str) -> bool:
        self._record('is_reparse_point', path)
        return path in self._links

    def identity(self, path: str) -> Optional[Hashable]:
        self._record('identity', path)
        if path in self._identities:
            return self._identities[path]
        return self._resolve(path)

    def exists(self, path: str) -> bool:
        return self._resolve(posixpath.normpath(path)) in self._dirs

    # Internals

    def _record(self, operation: str, path: str) -> None:
        self.calls.append((operation, path))
        error = self._errors.get((operation, path))
        if error is not None:
            raise error

    def _lookup(self, operation: str, path: str) -> Dict[str, List[str]]:
        self._record(operation, path)
        real = self._resolve(path)
        if real not in self._dirs:
            raise not_found(path)
        return self._dirs[real]

    def _resolve(self, path: str) -> str:
        """Follow links in every component of ``path``."""
        if path == self.root or path in self._dirs and path not in self._links:
            return path
        if path in self._links:
            return self._resolve(self._links[path])
        parent, name = posixpath.split(path)
        if parent == path:
            return path
        return posixpath.join(self._resolve(parent), name)

    def _ordered(self, paths: List[str]) -> List[str]:
        if self._random is not None:
            self._random.shuffle(paths)
        return paths

    def __repr__(self) -> str:
        return f"MemoryTreeAdapter(root={self.root!r}, directories={len(self._dirs)})"
