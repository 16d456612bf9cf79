"""Command line interface for DazzleDU.

Usage:
    dazzledu -p /data -m 0.5 -d 3 -o report.txt
    python -m dazzledu --path C:\\ --human
"""

import argparse
import sys
from typing import List, Optional

from .config import default_root, DEFAULT_MIN_SIZE_GB, UNBOUNDED_DEPTH, ScanConfiguration
from .errors import ConfigurationInvalid
from .error_policies import ContinueOnErrorsPolicy
from .api import scan_with_config, build_report
from .adapters.filesystem import FileSystemAdapter
from .report import echo_lines, ReportFile


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dazzledu",
        description="Report directories whose cumulative size exceeds a threshold.",
        epilog="Example: dazzledu -p /data -m 0.1 -d 3 -o /tmp/du_report.txt "
               "(scans /data, reports folders >= 0.1 GB, up to 3 levels deep)",
    )
    parser.add_argument("-p", "--path", default=default_root(),
                        help="Starting directory to scan (default: system drive root)")
    parser.add_argument("-m", "--min-size", type=float, default=DEFAULT_MIN_SIZE_GB,
                        metavar="GB",
                        help="Minimum size in GB for a folder to be reported (default: %(default)s)")
    parser.add_argument("-d", "--max-depth", type=int, default=UNBOUNDED_DEPTH,
                        metavar="DEPTH",
                        help="Maximum directory depth to scan, -1 for infinite (default)")
    parser.add_argument("-o", "--output", default=None, metavar="FILE",
                        help="File to save the report to")
    parser.add_argument("-H", "--human", action="store_true",
                        help="Show sizes as KB/MB/GB instead of bytes")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="Do not print warnings for skipped paths")
    parser.add_argument("--skip-hidden", action="store_true",
                        help="Ignore dot-files and dot-directories")
    parser.add_argument("--progress", action="store_true",
                        help="Print periodic progress to stderr")
    return parser


def _print_progress(count: int, path: str, depth: int) -> None:
    print(f"Scanning: {path} Depth: {depth} ({count} directories)", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line tool.

    Returns:
        Process exit code (0 success, 2 invalid configuration)
    """
    parser = build_parser()
    if argv is None:
        argv = sys.argv[1:]
    if not argv:
        parser.print_help()
        return 0

    args = parser.parse_args(argv)
    adapter = FileSystemAdapter(include_hidden=not args.skip_hidden)

    # Nothing is touched on disk until the configuration is known to be usable
    try:
        config = ScanConfiguration.from_gigabytes(args.path, args.min_size, args.max_depth)
        config.ensure_valid(exists=adapter.exists)
    except ConfigurationInvalid as e:
        print(f"[ERROR]: {e}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 2

    print(f"Starting disk usage scan for: {config.root}")
    print(f"Reporting folders larger than: {config.describe_min_size()} GB")
    if config.is_bounded:
        print(f"Scanning with a max depth of: {config.max_depth}")

    report_file = None
    if args.output:
        print(f"Results will be saved to: '{args.output}'")
        report_file = ReportFile(args.output)
        report_file.clear()

    try:
        result = scan_with_config(
            config,
            adapter,
            policy=ContinueOnErrorsPolicy(verbose=not args.quiet),
            progress_callback=_print_progress if args.progress else None,
        )
    except ConfigurationInvalid as e:
        print(f"[ERROR]: {e}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 2

    print("---SCAN COMPLETE---")
    print("Results (sorted by size):")
    lines = build_report(result, human_readable=args.human)
    echo_lines(lines)

    if result.errors:
        print(f"{len(result.errors)} path(s) could not be measured completely.", file=sys.stderr)

    if report_file is not None:
        try:
            report_file.write(lines)
            print(f"Report saved to: {report_file.path}")
        except OSError as e:
            print(f"[ERROR]: Could not write report '{report_file.path}': {e}", file=sys.stderr)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
