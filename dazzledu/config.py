"""Configuration system for DazzleDU.

A ScanConfiguration describes one run: where to start, how big a
directory must be to be reported, and how deep to go. It is immutable
for the duration of the run.
"""

import math
import os
from dataclasses import dataclass
from typing import List, Union

from .errors import ConfigurationInvalid

BYTES_PER_GB = 1024 ** 3

UNBOUNDED_DEPTH = -1        # Sentinel: no depth limit
DEFAULT_MIN_SIZE_GB = 1


def default_root() -> str:
    """Return the system drive root (``C:\\`` style on Windows, ``/`` elsewhere)."""
    if os.name == 'nt':
        drive = os.environ.get('SystemDrive', 'C:')
        return drive.rstrip('\\/') + '\\'
    return os.sep


@dataclass(frozen=True)
class ScanConfiguration:
    """Complete configuration for one disk usage scan.

    Depth policy: ``max_depth`` bounds both reporting and descent. A
    directory deeper than ``max_depth`` is not entered and contributes
    nothing to its ancestors.
    """

    root: str
    min_size_bytes: int = DEFAULT_MIN_SIZE_GB * BYTES_PER_GB
    max_depth: int = UNBOUNDED_DEPTH

    # Skip directories whose (device, inode) was already visited
    follow_identity_guard: bool = True

    @classmethod
    def from_gigabytes(cls,
                       root: Union[str, os.PathLike],
                       min_size_gb: float = DEFAULT_MIN_SIZE_GB,
                       max_depth: int = UNBOUNDED_DEPTH,
                       **kwargs) -> 'ScanConfiguration':
        """Create a config from a threshold expressed in gigabytes.

        Args:
            root: Directory to scan (made absolute)
            min_size_gb: Minimum reportable size, GiB (fractions allowed)
            max_depth: Maximum depth, UNBOUNDED_DEPTH for no limit

        Returns:
            ScanConfiguration

        Raises:
            ConfigurationInvalid: If the threshold is NaN or infinite
        """
        root = os.path.abspath(os.fspath(root))
        if not math.isfinite(min_size_gb):
            raise ConfigurationInvalid(
                path=root, operation="validate",
                message=f"min_size must be a finite number of GB, got {min_size_gb}"
            )
        return cls(
            root=root,
            min_size_bytes=int(min_size_gb * BYTES_PER_GB),
            max_depth=max_depth,
            **kwargs
        )

    @property
    def is_bounded(self) -> bool:
        return self.max_depth != UNBOUNDED_DEPTH

    @property
    def min_size_gb(self) -> float:
        return self.min_size_bytes / BYTES_PER_GB

    def beyond_depth(self, depth: int) -> bool:
        """True when a directory at ``depth`` must not be entered at all."""
        return self.is_bounded and depth > self.max_depth

    def should_report(self, size: int, depth: int) -> bool:
        """Check whether a measured directory qualifies for the report.

        Args:
            size: Cumulative byte size of the directory
            depth: Depth the directory was visited at

        Returns:
            True if size meets the threshold and depth is within bounds
        """
        return size >= self.min_size_bytes and not self.beyond_depth(depth)

    def describe_max_depth(self) -> str:
        return str(self.max_depth) if self.is_bounded else "Infinite"

    def describe_min_size(self) -> str:
        """Threshold in GB without trailing zeros (``1``, ``0.5``)."""
        text = f"{self.min_size_gb:.3f}".rstrip('0').rstrip('.')
        return text or "0"

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not self.root:
            errors.append("root path cannot be empty")

        if self.min_size_bytes < 0:
            errors.append("min_size cannot be negative")

        if self.max_depth < 0 and self.max_depth != UNBOUNDED_DEPTH:
            errors.append(f"max_depth must be >= 0 or {UNBOUNDED_DEPTH} for unbounded")

        return errors

    def ensure_valid(self, exists=os.path.isdir) -> None:
        """Raise ConfigurationInvalid unless this config can start a scan.

        Args:
            exists: Predicate telling whether the root directory exists

        Raises:
            ConfigurationInvalid: On validation errors or a missing root
        """
        errors = self.validate()
        if errors:
            raise ConfigurationInvalid(
                path=self.root, operation='validate', message="; ".join(errors)
            )
        if not exists(self.root):
            raise ConfigurationInvalid(
                path=self.root,
                operation='validate',
                message=f"The specified path '{self.root}' could not be found"
            )
