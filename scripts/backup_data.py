"""Export or import the admin data as a dated JSON backup.

Usage:
    python scripts/backup_data.py --export backups/
    python scripts/backup_data.py --import backups/signage-backup-2026-10-19.json
    python scripts/backup_data.py --import old.json --data data/signage.json

Import validates the backup fully before replacing the data file, and
replaces it atomically so a running display never reads a half-written file.
"""

import argparse
import sys

from config import CONFIG, init_logging

from src.signage.errors import SignageError
from src.signage.store import (
    export_snapshot,
    import_snapshot,
    load_snapshot,
    save_snapshot,
)


def main():
    parser = argparse.ArgumentParser(description="Back up or restore signage data")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--export", metavar="DIR", help="Write a dated backup into DIR")
    group.add_argument("--import", dest="import_file", metavar="FILE", help="Restore FILE")
    parser.add_argument(
        "--data", default=CONFIG.data_file, help="Admin data file to read / replace"
    )
    args = parser.parse_args()
    init_logging()

    try:
        if args.export:
            snapshot = load_snapshot(args.data)
            path = export_snapshot(snapshot, args.export)
            print(f"Exported {args.data} -> {path}")
        else:
            snapshot = import_snapshot(args.import_file)
            save_snapshot(snapshot, args.data)
            weeks = len(snapshot.weekly_schedule)
            print(f"Imported {args.import_file} -> {args.data} ({weeks} weeks)")
    except SignageError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
