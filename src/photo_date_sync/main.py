from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from . import __version__
from .config import ConfigError, ConfigManager
from .core import BatchAbortedError, BatchRunner
from .models import ErrorLevel, SyncStatus
from .utils import file_ops, path_utils, reporting
from .utils.error_handler import ErrorHandler
from .utils.logger import get_logger, set_default_log_file


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    print(f"photo-date-sync v{__version__}")
    input_path = Path(args.input)
    output_dir = Path(args.output_dir)

    if path_utils.is_same_location(input_path, output_dir):
        print("The input and output directories need to be different.")
        return 1

    try:
        config = ConfigManager(Path(args.config) if args.config else None)
    except ConfigError as exc:
        print(f"Config error: {exc}")
        return 1
    errors = config.validate_config()
    if errors:
        for error in errors:
            print(f"Config error: {error}")
        return 1

    if config.error_log_path is not None:
        set_default_log_file(config.error_log_path)
    logger = get_logger("photo_date_sync")

    mkdir_result = file_ops.safe_makedirs(output_dir, config=config, logger=logger)
    if not mkdir_result.success:
        print(f"Error: {mkdir_result.error_message}")
        return 1

    files = path_utils.resolve_input_files(input_path)
    if not files:
        print("The input argument does not point to a valid file/folder.")
        return 1

    error_handler = ErrorHandler()
    runner = BatchRunner(config, error_handler=error_handler, logger=logger)
    try:
        batch = runner.run(files, output_dir, dry_run=args.dry_run)
    except BatchAbortedError as exc:
        print(f"Aborted: {exc}")
        return 1

    status_counts = batch.status_counts()
    print(
        "Done. "
        f"Synced: {batch.count(SyncStatus.SYNCED)}, "
        f"Planned: {batch.count(SyncStatus.PLANNED)}, "
        f"Partial: {batch.count(SyncStatus.PARTIAL_FAILURE)}, "
        f"Skipped: {batch.count(SyncStatus.SKIPPED_INVALID_TIMES) + batch.count(SyncStatus.SKIPPED_INVALID_METADATA)}, "
        f"Ineligible: {len(batch.ineligible)}, "
        f"Warnings: {len(error_handler.get_by_level(ErrorLevel.RECOVERABLE))}"
    )

    if args.report:
        info = reporting.build_summary_info(
            mode="Dry-run" if args.dry_run else "Execute",
            source=input_path,
            output_dir=output_dir,
            total_files=len(files),
            ineligible_count=len(batch.ineligible),
            status_counts=status_counts,
            warnings=error_handler.errors,
            results=batch.results,
        )
        report_path = reporting.write_summary(Path(args.report), info)
        print(f"Report written to: {report_path}")

    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog="photo-date-sync")
    parser.add_argument("input", help="Image file or folder to synchronise")
    parser.add_argument("output_dir", help="Folder that receives the synchronised copies")
    parser.add_argument("--config", help="Path to config file", default=None)
    parser.add_argument("--dry-run", action="store_true", help="Only report the dates that would be applied")
    parser.add_argument("--report", help="Write a run summary to this path", default=None)
    return parser
