"""Command line interface for FieldDiff."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import Optional

from .engine import FieldDiffEngine
from .export import export_report_to_csv
from .exceptions import FieldDiffError
from .models import EngineConfig
from .reporter import ComparisonReporter
from .runner import BatchRunner

logger = logging.getLogger("fielddiff")

USAGE = "fielddiff <file1> <file2> [-export-to-csv <output.csv>]"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fielddiff",
        usage=USAGE,
        description="Compare two JSON files ignoring object field order",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  fielddiff old.json new.json
  fielddiff old.json new.json -export-to-csv report.csv
  fielddiff --manifest pairs.yaml

Exit code is 0 when the documents are structurally equal, 1 otherwise.
        """
    )

    parser.add_argument("file1", nargs="?", help="Path to the first JSON file")
    parser.add_argument("file2", nargs="?", help="Path to the second JSON file")
    parser.add_argument(
        "-export-to-csv", "--export-to-csv",
        dest="csv_path",
        metavar="OUTPUT.csv",
        help="Write the field comparison to a CSV file instead of the terminal"
    )
    parser.add_argument("-c", "--config", help="Path to a YAML/JSON engine config file")
    parser.add_argument("-m", "--manifest", help="Compare all pairs listed in a YAML manifest")
    parser.add_argument("-p", "--parallel", action="store_true", help="Parse and flatten both files concurrently")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _configure_logging(config: EngineConfig, verbose: bool):
    level = logging.DEBUG if verbose else getattr(logging, config.log_level.value)
    logging.basicConfig(level=level, format="%(message)s")


def _run_manifest(manifest_path: str, config: Optional[EngineConfig]) -> int:
    report = BatchRunner(manifest_path, config).run()
    return 0 if report.failed == 0 else 1


def _run_pair(args: argparse.Namespace, config: EngineConfig) -> int:
    if args.csv_path and not args.csv_path.lower().endswith(".csv"):
        logger.error(
            f"Invalid CSV file path '{args.csv_path}'. The file must end with the '.csv' extension."
        )
        return 1

    start_time = time.time()
    engine = FieldDiffEngine(config)
    result = engine.run(args.file1, args.file2)

    if args.csv_path:
        if result.report is None:
            logger.error("Documents match but no field report could be built; nothing exported")
            return 1
        export_report_to_csv(result.report, args.csv_path)
    elif not result.is_match:
        ComparisonReporter().print_report(result.report, args.file1, args.file2)

    logger.info(f"Comparison took {time.time() - start_time:.2f} seconds")
    return 0 if result.is_match else 1


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # usage errors exit with 1 like every other failure
        return 0 if e.code == 0 else 1

    if not args.manifest and not (args.file1 and args.file2):
        parser.print_usage(sys.stderr)
        print("fielddiff: error: two JSON file paths are required", file=sys.stderr)
        return 1

    try:
        config = EngineConfig.from_file(args.config) if args.config else EngineConfig()
        if args.parallel:
            config.concurrent = True
        _configure_logging(config, args.verbose)

        if args.manifest:
            return _run_manifest(args.manifest, config if (args.config or args.parallel) else None)
        return _run_pair(args, config)

    except FieldDiffError as e:
        logging.basicConfig(level=logging.INFO, format="%(message)s")
        logger.error(str(e))
        return 1
    except Exception as e:
        logging.basicConfig(level=logging.INFO, format="%(message)s")
        logger.error(f"Unexpected error: {e}")
        return 1
