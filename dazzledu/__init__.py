"""DazzleDU - directory size reporting built on post-order traversal.

DazzleDU walks a directory tree once, sums apparent file sizes bottom-up,
and reports every directory whose cumulative size meets a threshold,
down to a configurable depth.

Quick start:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from dazzledu import scan_directory, build_report

    result = scan_directory("/data", min_size_gb=1, max_depth=2)
    for line in build_report(result, human_readable=True):
        print(line)
━━━━━━━━━━━━━━━━━━━━━━━━━━

Inaccessible paths, vanished files and reparse points never abort a scan:
they are recorded by the ErrorPolicy and contribute zero bytes.
"""

__version__ = "0.1.0"

from .config import (
    ScanConfiguration,
    UNBOUNDED_DEPTH,
    DEFAULT_MIN_SIZE_GB,
    BYTES_PER_GB,
    default_root,
)
from .errors import (
    ScanError,
    AccessDenied,
    NotFound,
    CycleGuardTripped,
    ScanIOError,
    PathTooLong,
    ConfigurationInvalid,
    classify_error,
)
from .error_policies import (
    ErrorPolicy,
    ContinueOnErrorsPolicy,
    CollectErrorsPolicy,
)
from .core import (
    SizeAdapter,
    DirectoryRecord,
    RecordCollector,
    DirectorySizeTraverser,
    ScanResult,
)
from .adapters import FileSystemAdapter
from .report import assemble, format_size, echo_lines, ReportFile
from .api import scan_directory, scan_with_config, build_report

__all__ = [
    "__version__",
    # Config
    "ScanConfiguration",
    "UNBOUNDED_DEPTH",
    "DEFAULT_MIN_SIZE_GB",
    "BYTES_PER_GB",
    "default_root",
    # Errors
    "ScanError",
    "AccessDenied",
    "NotFound",
    "CycleGuardTripped",
    "ScanIOError",
    "PathTooLong",
    "ConfigurationInvalid",
    "classify_error",
    "ErrorPolicy",
    "ContinueOnErrorsPolicy",
    "CollectErrorsPolicy",
    # Core
    "SizeAdapter",
    "DirectoryRecord",
    "RecordCollector",
    "DirectorySizeTraverser",
    "ScanResult",
    "FileSystemAdapter",
    # Report
    "assemble",
    "format_size",
    "echo_lines",
    "ReportFile",
    # API
    "scan_directory",
    "scan_with_config",
    "build_report",
]
