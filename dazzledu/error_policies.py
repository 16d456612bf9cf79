"""
Error handling policies for DazzleDU.

The traversal never lets a filesystem error escape past the directory it
happened in. Instead it hands the error to an ErrorPolicy, which decides
how to report it, and continues with a zero contribution for the
affected node.
"""

import sys
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, TextIO

from .errors import ScanError, AccessDenied, CycleGuardTripped, classify_error


class ErrorPolicy(ABC):
    """
    Base class for error handling policies.

    Subclasses decide what happens to errors that occur while measuring
    a directory tree. All policies record errors; none of them re-raise,
    so a single bad subtree never aborts the whole scan.
    """

    def __init__(self):
        self.errors: List[ScanError] = []
        self.skipped_paths: List[str] = []

    def handle(self, error: BaseException, operation: str, path: Optional[str]) -> ScanError:
        """
        Record an error that occurred during a traversal operation.

        Args:
            error: The exception that was raised
            operation: Name of the operation that failed (e.g. 'list_files')
            path: The path being processed when the error occurred

        Returns:
            The classified ScanError
        """
        scan_error = classify_error(error, path, operation)
        self.errors.append(scan_error)
        if isinstance(scan_error, (AccessDenied, CycleGuardTripped)) and path:
            self.skipped_paths.append(path)
        self.report(scan_error)
        return scan_error

    @abstractmethod
    def report(self, error: ScanError) -> None:
        """Emit the error to the user (or not)."""
        pass

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts per kind and details
        """
        by_kind: Dict[str, int] = {}
        for error in self.errors:
            by_kind[error.kind] = by_kind.get(error.kind, 0) + 1
        return {
            'total_errors': len(self.errors),
            'by_kind': by_kind,
            'skipped_paths': len(self.skipped_paths),
            'errors': list(self.errors),
        }


class ContinueOnErrorsPolicy(ErrorPolicy):
    """
    Policy that logs errors and continues traversal.

    Each error is written to stderr as a WARNING line naming the error
    kind, the failing operation and the path.
    """

    def __init__(self, verbose: bool = True, stream: Optional[TextIO] = None):
        """
        Initialize the policy.

        Args:
            verbose: If True, print warnings when errors occur
            stream: Where warnings go (defaults to sys.stderr at call time)
        """
        super().__init__()
        self.verbose = verbose
        self.stream = stream

    def report(self, error: ScanError) -> None:
        if not self.verbose:
            return
        stream = self.stream or sys.stderr
        print(format_warning(error), file=stream)


class CollectErrorsPolicy(ErrorPolicy):
    """
    Policy that collects all errors without logging, for batch processing.

    Useful for callers that want to present every problem at the end,
    or for tests.
    """

    def report(self, error: ScanError) -> None:
        pass


def format_warning(error: ScanError) -> str:
    """Render a ScanError as a single warning line."""
    if isinstance(error, CycleGuardTripped):
        return f"WARNING: Skipping {error.message}: '{error.path}'"
    if isinstance(error, AccessDenied):
        return f"WARNING: Skipping inaccessible path '{error.path}' ({error.operation}): {error.message}"
    return f"WARNING: {error.kind} in {error.operation} for '{error.path}': {error.message}"
