"""Post-order size traversal for DazzleDU.

The traverser walks a directory tree depth-first, children before their
parent, and sums apparent file sizes on the way back up. Each directory
whose cumulative size meets the configured threshold is appended to the
result collector as the recursion unwinds.

Errors never escape a directory: whatever fails is handed to the
ErrorPolicy and the affected node contributes zero bytes.
"""

import time
from dataclasses import dataclass, field
from typing import Callable, Hashable, List, Optional, Set, Tuple

from ..config import ScanConfiguration
from ..errors import CycleGuardTripped, ScanError
from ..error_policies import ErrorPolicy, ContinueOnErrorsPolicy
from .adapter import SizeAdapter
from .collector import RecordCollector
from .record import DirectoryRecord

# (directories_scanned, path, depth)
ProgressCallback = Callable[[int, str, int], None]


@dataclass
class ScanResult:
    """Outcome of one scan."""
    config: ScanConfiguration
    records: Tuple[DirectoryRecord, ...]
    total_size: int
    directories_scanned: int
    errors: List[ScanError] = field(default_factory=list)
    elapsed_sec: float = 0.0


class DirectorySizeTraverser:
    """Depth-first post-order traverser computing cumulative directory sizes.

    Cycle avoidance relies on refusing to descend through reparse points
    (symlinks, junctions). Ordinary directory trees without indirection
    are acyclic, so that is sufficient on its own; the optional identity
    guard additionally skips any directory whose (device, inode) was
    already visited during this scan.
    """

    def __init__(self,
                 adapter: SizeAdapter,
                 policy: Optional[ErrorPolicy] = None,
                 progress_callback: Optional[ProgressCallback] = None,
                 progress_interval: int = 100):
        """Initialize traverser.

        Args:
            adapter: SizeAdapter used for every storage access
            policy: Error policy (defaults to ContinueOnErrorsPolicy)
            progress_callback: Called every ``progress_interval`` directories
            progress_interval: Directories between progress callbacks
        """
        self.adapter = adapter
        self.policy = policy or ContinueOnErrorsPolicy()
        self.progress_callback = progress_callback
        self.progress_interval = max(1, progress_interval)
        self.directories_scanned = 0
        self._visited: Set[Hashable] = set()

    def scan(self, config: ScanConfiguration) -> ScanResult:
        """Measure the tree below ``config.root``.

        The configuration is not validated here; use
        ``ScanConfiguration.ensure_valid`` (or ``api.scan_directory``)
        before starting a run.
        """
        self.directories_scanned = 0
        self._visited = set()
        errors_before = len(self.policy.errors)

        started = time.time()
        results = RecordCollector()
        total = self.compute_size(config.root, 0, config, results)

        return ScanResult(
            config=config,
            records=results.records,
            total_size=total,
            directories_scanned=self.directories_scanned,
            errors=self.policy.errors[errors_before:],
            elapsed_sec=time.time() - started
        )

    def compute_size(self,
                     path: str,
                     current_depth: int,
                     config: ScanConfiguration,
                     results: RecordCollector) -> int:
        """Return the cumulative size of the subtree rooted at ``path``.

        Appends a DirectoryRecord to ``results`` when the size meets the
        threshold and ``current_depth`` is within ``config.max_depth``.
        The size is returned either way, since the parent needs it.

        Args:
            path: Directory to measure
            current_depth: Depth of ``path`` relative to the scan root
            config: Immutable scan configuration
            results: Accumulator shared across the whole traversal

        Returns:
            Total apparent byte size, 0 for skipped or failed subtrees
        """
        # Beyond the limit: not entered, contributes nothing
        if config.beyond_depth(current_depth):
            return 0

        try:
            return self._measure_directory(path, current_depth, config, results)
        except OSError as error:
            # Failure specific to this directory (path too long, vanished...)
            self.policy.handle(error, 'compute_size', path)
            return 0

    def _measure_directory(self,
                           path: str,
                           depth: int,
                           config: ScanConfiguration,
                           results: RecordCollector) -> int:
        if self.adapter.is_reparse_point(path):
            self.policy.handle(
                CycleGuardTripped(path=path, operation='is_reparse_point',
                                  message="reparse point (potential loop)"),
                'is_reparse_point', path
            )
            return 0

        if config.follow_identity_guard and self._already_visited(path):
            self.policy.handle(
                CycleGuardTripped(path=path, operation='identity',
                                  message="already visited directory (potential loop)"),
                'identity', path
            )
            return 0

        self.directories_scanned += 1
        if self.progress_callback and self.directories_scanned % self.progress_interval == 0:
            self.progress_callback(self.directories_scanned, path, depth)

        total = self._sum_files(path)

        for subdirectory in self._list_subdirectories(path):
            total += self.compute_size(subdirectory, depth + 1, config, results)

        if config.should_report(total, depth):
            results.add(DirectoryRecord(path=path, byte_size=total, depth=depth))

        return total

    def _already_visited(self, path: str) -> bool:
        key = self.adapter.identity(path)
        if key is None:
            return False
        if key in self._visited:
            return True
        self._visited.add(key)
        return False

    def _sum_files(self, path: str) -> int:
        """Sum immediate file sizes; unreadable files count as 0."""
        try:
            files = self.adapter.list_files(path)
        except OSError as error:
            self.policy.handle(error, 'list_files', path)
            return 0

        total = 0
        for file_path in files:
            try:
                total += self.adapter.file_size(file_path)
            except OSError as error:
                self.policy.handle(error, 'file_size', file_path)
        return total

    def _list_subdirectories(self, path: str) -> List[str]:
        """List subdirectories; an unreadable listing counts as empty."""
        try:
            return self.adapter.list_subdirectories(path)
        except OSError as error:
            self.policy.handle(error, 'list_subdirectories', path)
            return []
