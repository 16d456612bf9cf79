"""Report assembly for DazzleDU.

Turns the records collected by a scan into text lines, largest
directories first, and provides the two output collaborators: a console
echo and a report file.
"""

import os
import sys
from typing import Iterable, List, Optional, TextIO

from .config import ScanConfiguration
from .core.record import DirectoryRecord

REPORT_TITLE = "---Disk Usage Report---"
SEPARATOR = "-" * 69
SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_size(byte_size: int) -> str:
    """Render a byte count with 1024-based units and at most two decimals.

    Examples:
        >>> format_size(0)
        '0 B'
        >>> format_size(1536)
        '1.5 KB'
    """
    value = float(byte_size)
    order = 0
    while value >= 1024 and order < len(SIZE_UNITS) - 1:
        order += 1
        value /= 1024
    text = f"{value:.2f}".rstrip('0').rstrip('.')
    return f"{text} {SIZE_UNITS[order]}"


def sort_records(records: Iterable[DirectoryRecord]) -> List[DirectoryRecord]:
    """Order records by descending size; equal sizes keep their input order."""
    return sorted(records, key=lambda record: record.byte_size, reverse=True)


def header_lines(config: ScanConfiguration) -> List[str]:
    return [
        REPORT_TITLE,
        f"Scan path: {config.root}",
        f"Size Threshold: {config.describe_min_size()} GB",
        f"Max Depth: {config.describe_max_depth()}",
        SEPARATOR,
        f"{'size':<15} Path",
        SEPARATOR,
    ]


def assemble(results: Iterable[DirectoryRecord],
             config: ScanConfiguration,
             human_readable: bool = False) -> List[str]:
    """Build the report lines for a finished scan.

    Args:
        results: Records produced by the traversal
        config: Configuration the scan ran with (echoed in the header)
        human_readable: Show ``1.5 GB`` instead of raw byte counts

    Returns:
        Header lines followed by one line per record, largest first
    """
    lines = header_lines(config)
    for record in sort_records(results):
        size = format_size(record.byte_size) if human_readable else str(record.byte_size)
        lines.append(f"{size} | {record.path}")
    return lines


def echo_lines(lines: Iterable[str], stream: Optional[TextIO] = None) -> None:
    """Print every line to the console."""
    stream = stream or sys.stdout
    for line in lines:
        print(line, file=stream)


class ReportFile:
    """Persists report lines to a file chosen by the caller."""

    def __init__(self, path: str, warnings: Optional[TextIO] = None):
        """
        Args:
            path: Report file path
            warnings: Stream for non-fatal warnings (defaults to sys.stderr)
        """
        self.path = path
        self.warnings = warnings

    def clear(self) -> bool:
        """Delete a report left over from a previous run.

        Failing to delete is not fatal; a warning is printed instead.

        Returns:
            True if no old file remains
        """
        try:
            if os.path.exists(self.path):
                os.remove(self.path)
        except OSError as e:
            self._warn(f"Could not clear previous results file '{self.path}'. Details: {e}")
            return False
        return True

    def write(self, lines: Iterable[str]) -> None:
        """Append all lines to the report file.

        Raises:
            OSError: If the file cannot be written
        """
        with open(self.path, 'a', encoding='utf-8') as handle:
            for line in lines:
                handle.write(line + '\n')

    def _warn(self, message: str) -> None:
        print(f"WARNING: {message}", file=self.warnings or sys.stderr)

    def __repr__(self) -> str:
        return f"ReportFile(path={self.path!r})"
