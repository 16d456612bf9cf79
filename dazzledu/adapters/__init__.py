"""Storage adapters for DazzleDU."""

from .filesystem import FileSystemAdapter

__all__ = ['FileSystemAdapter']
