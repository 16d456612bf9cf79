"""High-level API for DazzleDU.

Simple functional interfaces wrapping the configuration, traverser and
report objects for the common case.
"""

import os
from typing import List, Optional, Union

from .config import ScanConfiguration, DEFAULT_MIN_SIZE_GB, UNBOUNDED_DEPTH
from .core.adapter import SizeAdapter
from .core.traverser import DirectorySizeTraverser, ScanResult, ProgressCallback
from .adapters.filesystem import FileSystemAdapter
from .error_policies import ErrorPolicy
from .report import assemble


def scan_directory(
    root: Union[str, os.PathLike],
    min_size_gb: float = DEFAULT_MIN_SIZE_GB,
    max_depth: int = UNBOUNDED_DEPTH,
    adapter: Optional[SizeAdapter] = None,
    policy: Optional[ErrorPolicy] = None,
    progress_callback: Optional[ProgressCallback] = None,
    progress_interval: int = 100,
    include_hidden: bool = True,
) -> ScanResult:
    """Measure a directory tree and collect directories above a threshold.

    Args:
        root: Directory to scan
        min_size_gb: Minimum reportable size in GiB
        max_depth: Maximum depth (UNBOUNDED_DEPTH = no limit)
        adapter: Storage adapter (defaults to FileSystemAdapter)
        policy: Error policy (defaults to ContinueOnErrorsPolicy)
        progress_callback: Optional periodic progress hook
        progress_interval: Directories between progress callbacks
        include_hidden: Count dot-files and dot-directories when no
            adapter is given

    Returns:
        ScanResult with the qualifying records

    Raises:
        ConfigurationInvalid: If the root does not exist or the
            configuration is inconsistent

    Example:
        >>> result = scan_directory("/data", min_size_gb=0.5, max_depth=2)
        >>> for line in build_report(result):
        ...     print(line)
    """
    adapter = adapter or FileSystemAdapter(include_hidden=include_hidden)
    config = ScanConfiguration.from_gigabytes(root, min_size_gb, max_depth)
    return scan_with_config(config, adapter, policy, progress_callback, progress_interval)


def scan_with_config(
    config: ScanConfiguration,
    adapter: Optional[SizeAdapter] = None,
    policy: Optional[ErrorPolicy] = None,
    progress_callback: Optional[ProgressCallback] = None,
    progress_interval: int = 100,
) -> ScanResult:
    """Validate ``config`` and run a scan with it."""
    adapter = adapter or FileSystemAdapter()
    config.ensure_valid(exists=adapter.exists)
    traverser = DirectorySizeTraverser(
        adapter,
        policy=policy,
        progress_callback=progress_callback,
        progress_interval=progress_interval,
    )
    return traverser.scan(config)


def build_report(result: ScanResult, human_readable: bool = False) -> List[str]:
    """Render a ScanResult as report lines, largest directories first."""
    return assemble(result.records, result.config, human_readable=human_readable)
