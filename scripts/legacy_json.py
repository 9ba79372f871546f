"""
Move flash cards between the database and the legacy JSON export.

Usage examples:

  python scripts/legacy_json.py import --data-dir ./data
  python scripts/legacy_json.py export --data-dir ./backup

This script uses the same LegacyJsonService as the rest of the app, so
parsing and clamping of imported progress behave identically.
"""
from __future__ import annotations

import argparse
from pathlib import Path

from app.config import settings
from app.db.session import get_db_context
from app.services.legacy import CARDS_FILE, PROGRESS_FILE, LegacyJsonService
from app.utils.exceptions import InvalidRecordError


def main() -> None:
    parser = argparse.ArgumentParser(description="Import or export legacy flash card JSON files")
    parser.add_argument("direction", choices=["import", "export"])
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=settings.LEGACY_DATA_DIR,
        help=f"Directory containing {CARDS_FILE} and {PROGRESS_FILE}",
    )
    args = parser.parse_args()

    if args.direction == "import" and not args.data_dir.exists():
        raise SystemExit(f"Data directory not found: {args.data_dir}")

    try:
        with get_db_context() as db:
            service = LegacyJsonService(db, args.data_dir)
            if args.direction == "import":
                stats = service.import_all()
            else:
                stats = service.export_all()
    except InvalidRecordError as exc:
        raise SystemExit(f"Import failed: {exc.message} {exc.details}")

    print(f"{args.direction.capitalize()} finished: {stats}")


if __name__ == "__main__":
    main()
