"""Testing utilities for DazzleDU consumers."""

from .fixtures import (
    MemoryTreeAdapter,
    access_denied,
    not_found,
    io_error,
    path_too_long,
)

__all__ = [
    'MemoryTreeAdapter',
    'access_denied',
    'not_found',
    'io_error',
    'path_too_long',
]
