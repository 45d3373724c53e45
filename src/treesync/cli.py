#!/usr/bin/env python3
"""
treesync CLI — Command line interface for one-way directory synchronization.
Makes the destination tree match the source tree: new and changed files are
copied, entries that exist only in the destination are removed.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import cProfile
import sys
import os
import time
import logging
from typing import List, NoReturn, Optional

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

# === EARLY DEPENDENCY VALIDATION ===
_MISSING_DEPS = []
try:
    from send2trash import send2trash
except ImportError:
    _MISSING_DEPS.append("send2trash")

try:
    import xxhash
except ImportError:
    _MISSING_DEPS.append("xxhash")

if _MISSING_DEPS:
    print("Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from treesync.core.errors import SyncError
from treesync.core.models import ApplyOrder, DiffResult, Entry, HashAlgorithmName, SyncParams, SyncReport
from treesync.commands import SyncCommand
from treesync.utils.convert_utils import ConvertUtils
from treesync.aliases import (
    HASH_ALIASES, HASH_CHOICES, HASH_HELP_TEXT,
    ORDER_ALIASES, ORDER_CHOICES, ORDER_HELP_TEXT,
    EPILOG_TEXT
)

PACKAGE_LOGGER = "treesync"


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            description="treesync — make a destination directory an exact copy of a source directory",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        # Trees
        parser.add_argument(
            "--source", "-s",
            default="./src",
            type=str,
            help="Source directory. Default: ./src"
        )
        parser.add_argument(
            "--destination", "-d",
            default="./dst",
            type=str,
            help="Destination directory to bring in line with the source. Default: ./dst"
        )

        # Comparison and application
        parser.add_argument(
            "--dry-run", "--test", "-t",
            action="store_true",
            dest="dry_run",
            help="Compute the copy and delete lists without changing the destination"
        )
        parser.add_argument(
            "--hash",
            choices=HASH_CHOICES,
            default="md5",
            type=str,
            help=HASH_HELP_TEXT
        )
        parser.add_argument(
            "--order",
            choices=ORDER_CHOICES,
            default="delete-first",
            type=str,
            help=ORDER_HELP_TEXT
        )
        parser.add_argument(
            "--workers", "-w",
            default=None,
            type=int,
            metavar='',
            help="Concurrent hashing/copy tasks. Default: number of CPUs"
        )
        parser.add_argument(
            "--buffer-size",
            default="1MB",
            type=str,
            metavar='',
            help="Read size for file copies (e.g., 64KB, 4MB). Default: 1MB"
        )
        parser.add_argument(
            "--trash",
            action="store_true",
            help="Move removed entries to the system trash instead of deleting them"
        )

        # Reports
        parser.add_argument(
            "--list", "-l",
            action="store_true",
            dest="write_lists",
            help="Write the copy and delete lists to files"
        )
        parser.add_argument(
            "--copy-file",
            default="./copy.txt",
            type=str,
            metavar='',
            help="File for the copy list (with --list). Default: ./copy.txt"
        )
        parser.add_argument(
            "--delete-file",
            default="./del.txt",
            type=str,
            metavar='',
            help="File for the delete list (with --list). Default: ./del.txt"
        )
        parser.add_argument(
            "--profile",
            default=None,
            type=str,
            metavar='',
            help="Write cProfile statistics of the run to this file"
        )

        # Output options
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="No screen output except errors"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show progress, debug logging and run statistics"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.quiet and args.verbose:
            self.error_exit("--quiet and --verbose cannot be used together")

        if args.workers is not None and args.workers < 1:
            self.error_exit("--workers must be at least 1")

        if not ConvertUtils.is_valid_size_format(args.buffer_size):
            self.error_exit(f"Invalid buffer size: {args.buffer_size}")

    def configure_logging(self) -> None:
        """Action lines are INFO records; --quiet hides them, --verbose adds DEBUG."""
        if self.quiet:
            level = logging.ERROR
        elif self.verbose:
            level = logging.DEBUG
        else:
            level = logging.INFO
        logging.getLogger(PACKAGE_LOGGER).setLevel(level)

    def create_params(self, args: argparse.Namespace) -> SyncParams:
        """Create SyncParams from CLI arguments."""
        try:
            return SyncParams.from_human_readable(
                source_root=args.source,
                destination_root=args.destination,
                buffer_size_str=args.buffer_size,
                dry_run=args.dry_run,
                hash_algorithm=HASH_ALIASES.get(args.hash, HashAlgorithmName.MD5),
                order=ORDER_ALIASES.get(args.order, ApplyOrder.DELETE_FIRST),
                max_workers=args.workers,
                use_trash=args.trash,
                copy_report=args.copy_file if args.write_lists else None,
                delete_report=args.delete_file if args.write_lists else None,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(f"\r  [{stage}] {current}/{total} ({percent:.1f}%)")
        else:
            sys.stderr.write(f"\r  [{stage}] {current} entries...")
        sys.stderr.flush()

    @staticmethod
    def stopped_flag() -> bool:
        """Check if operation should stop (placeholder for signal handling)."""
        return False

    def run_sync(self, command: SyncCommand, params: SyncParams):
        """Execute the sync workflow; fatal errors end the process."""
        try:
            diff, report = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None,
                stopped_flag=self.stopped_flag
            )
        except SyncError as e:
            self.error_exit(str(e))
        except OSError as e:
            self.error_exit(f"Cannot write report: {e}")

        if self.verbose:
            sys.stderr.write("\n")
        return diff, report

    def output_plan(self, diff: DiffResult) -> None:
        """Dry run: print the actions that would be applied, in application order."""
        if self.quiet:
            return
        for entry in diff.delete:
            print(f"delete, {self.display_path(entry)}")
        for entry in diff.copy:
            print(f"copy, {self.display_path(entry)}")

    @staticmethod
    def display_path(entry: Entry) -> str:
        return f"{entry.relative_path}/" if entry.is_directory else entry.relative_path

    def output_comparison_failures(self, diff: DiffResult) -> None:
        for result in diff.failures:
            self.warning(f"Could not compare {result.entry.relative_path}: {result.reason}")

    def output_failures(self, report: SyncReport) -> None:
        """Partial-failure summary on stderr."""
        failures = report.failures
        print(f"Sync finished with {len(failures)} failure(s):", file=sys.stderr)
        for result in failures[:10]:
            print(f"  • {result.action.value} {result.entry.relative_path}: {result.reason}", file=sys.stderr)
        if len(failures) > 10:
            print(f"  ...and {len(failures) - 10} more", file=sys.stderr)

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"Warning: {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Main entry point with conditional output behavior."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet

        self.validate_args(args)
        self.configure_logging()
        params = self.create_params(args)

        profiler = None
        if args.profile:
            profiler = cProfile.Profile()
            profiler.enable()

        command = SyncCommand()
        try:
            diff, report = self.run_sync(command, params)
        finally:
            if profiler:
                profiler.disable()
                profiler.dump_stats(args.profile)

        self.output_comparison_failures(diff)

        if report is None:
            self.output_plan(diff)
        elif not report.success:
            self.output_failures(report)

        if self.verbose:
            print(command.stats.print_summary())
            if report is not None:
                print(report.print_summary())
            print(f"\nCompleted in {time.time() - self.start_time:.2f} seconds")

        if report is not None and not report.success:
            sys.exit(1)


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\nOperation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
