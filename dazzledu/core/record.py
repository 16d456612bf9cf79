"""DirectoryRecord: one directory that qualified for the report."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DirectoryRecord:
    """A measured directory.

    Attributes:
        path: Absolute path, unique within one report
        byte_size: Cumulative apparent size of the traversed subtree
        depth: Distance from the scan root (root = 0)
    """

    path: str
    byte_size: int
    depth: int

    def __post_init__(self):
        if self.byte_size < 0:
            raise ValueError(f"byte_size cannot be negative: {self.byte_size}")
        if self.depth < 0:
            raise ValueError(f"depth cannot be negative: {self.depth}")
