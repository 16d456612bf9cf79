"""Error taxonomy for DazzleDU.

Every problem met while measuring a tree is turned into one of the
ScanError subclasses below. Only ConfigurationInvalid stops a run; the
others are recorded by an ErrorPolicy and the affected node contributes
zero bytes.
"""

import errno
from typing import Optional

# Windows ERROR_FILENAME_EXCED_RANGE
_WINERROR_PATH_TOO_LONG = 206


class ScanError(Exception):
    """Base class for all scan problems.

    Attributes:
        path: Path that was being processed
        operation: Adapter/traverser operation that failed
        cause: Original exception, if any
    """

    kind = "ScanError"

    def __init__(self,
                 path: Optional[str] = None,
                 operation: Optional[str] = None,
                 cause: Optional[BaseException] = None,
                 message: Optional[str] = None):
        self.path = path
        self.operation = operation
        self.cause = cause
        if message is None:
            message = str(cause) if cause is not None else self.kind
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(path={self.path!r}, operation={self.operation!r})"


class AccessDenied(ScanError):
    """Permission was refused for a file or directory."""
    kind = "AccessDenied"


class NotFound(ScanError):
    """Entry vanished between enumeration and stat."""
    kind = "NotFound"


class CycleGuardTripped(ScanError):
    """A reparse point, symlink or already visited directory was skipped."""
    kind = "CycleGuardTripped"


class ScanIOError(ScanError):
    """Generic I/O failure."""
    kind = "IOError"


class PathTooLong(ScanError):
    """Path exceeds what the platform can address."""
    kind = "PathTooLong"


class ConfigurationInvalid(ScanError):
    """Scan configuration cannot be used; the run does not start."""
    kind = "ConfigurationInvalid"


def classify_error(error: BaseException,
                   path: Optional[str] = None,
                   operation: Optional[str] = None) -> ScanError:
    """Convert a raw exception into the matching ScanError.

    ScanError instances pass through unchanged (path/operation are filled
    in if they were missing).

    Args:
        error: Exception raised by the adapter or the traverser
        path: Path being processed
        operation: Name of the failing operation (e.g. 'list_files')

    Returns:
        ScanError subclass instance describing the failure
    """
    if isinstance(error, ScanError):
        if error.path is None:
            error.path = path
        if error.operation is None:
            error.operation = operation
        return error

    if isinstance(error, PermissionError):
        cls = AccessDenied
    elif isinstance(error, (FileNotFoundError, NotADirectoryError)):
        cls = NotFound
    elif isinstance(error, OSError) and _is_path_too_long(error):
        cls = PathTooLong
    else:
        cls = ScanIOError

    return cls(path=path, operation=operation, cause=error)


def _is_path_too_long(error: OSError) -> bool:
    if error.errno == errno.ENAMETOOLONG:
        return True
    return getattr(error, 'winerror', None) == _WINERROR_PATH_TOO_LONG
