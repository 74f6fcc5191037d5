"""
run_cleaning.py
---------------

Command-line entry point for the layoffs cleaning job.

Usage:
  python -m src.run_cleaning layoffs.csv layoffs_cleaned.csv
  python -m src.run_cleaning sqlite:///world_layoffs.db sqlite:///world_layoffs.db \
      --source-table layoffs --destination-table layoffs_staging2
  python -m src.run_cleaning layoffs.csv cleaned.csv --inspect

When SOURCE is omitted the LAYOFFS_DATABASE_URL environment variable is
used for both source and destination. When DESTINATION is omitted a CSV
source is written next to itself as <name>_cleaned.csv, so the raw export
is never overwritten; a database source is written back to the same
database, into the destination table (layoffs_cleaned by default).
"""

import argparse
import os
import sys

from src.cleaning_pipeline import CleaningStageError, format_summary, run_pipeline
from src.config import GLOBAL_CONFIG
from src.data_loading import load_layoffs, resolve_store
from src.eda import inspect_layoffs


def build_parser():
    parser = argparse.ArgumentParser(
        prog="clean-layoffs",
        description="Deduplicate, standardize, backfill and prune a layoffs dataset.",
    )
    parser.add_argument(
        "source", nargs="?", default=None,
        help="Source CSV path or database URL (default: $LAYOFFS_DATABASE_URL)",
    )
    parser.add_argument(
        "destination", nargs="?", default=None,
        help="Destination CSV path or database URL "
             "(default: <source>_cleaned.csv, or the source database)",
    )
    parser.add_argument("--source-table", default=None, help="Source table name")
    parser.add_argument("--destination-table", default=None, help="Destination table name")
    parser.add_argument(
        "--inspect", action="store_true",
        help="Print a data-quality report of the source before cleaning",
    )
    return parser


def default_destination(source):
    """Where to write when no destination is given."""
    if resolve_store(source) == "csv":
        stem, ext = os.path.splitext(os.fspath(source))
        return f"{stem}_cleaned{ext}"
    return source


def main(argv=None):
    args = build_parser().parse_args(argv)

    source = args.source or GLOBAL_CONFIG["database_url"]
    if not source:
        print("[ERROR] No source given and LAYOFFS_DATABASE_URL is not set.")
        return 2
    try:
        destination = args.destination or default_destination(source)
    except ValueError as e:
        print(f"[ERROR] {e}")
        return 2

    if args.inspect:
        try:
            df, _ = load_layoffs(source, args.source_table)
            inspect_layoffs(df, name="Source")
        except (RuntimeError, ValueError) as e:
            print(f"[ERROR] Inspection failed: {e}")
            return 1

    try:
        _, summary = run_pipeline(
            source, destination,
            source_table=args.source_table,
            destination_table=args.destination_table,
        )
    except CleaningStageError as e:
        print(f"[ERROR] {e}")
        return 1

    print("\n===== Cleaning Summary =====")
    print(format_summary(summary))
    return 0


if __name__ == "__main__":
    sys.exit(main())
