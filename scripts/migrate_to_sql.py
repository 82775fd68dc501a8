"""One-off migration: users JSON file -> SQL table (DATABASE_URL)."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Make the users_api package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from users_api.core.config import get_settings  # noqa: E402
from users_api.domain.validations import validate_users_data  # noqa: E402
from users_api.repositories.json_storage import JsonUserStore  # noqa: E402
from users_api.repositories.sql_repository import SQLUserStore  # noqa: E402


def migrate(source: Path) -> int:
    if not source.exists():
        raise SystemExit(f"File not found: {source}")
    users = JsonUserStore(source).load()
    check = validate_users_data(users)
    if not check.is_valid:
        raise SystemExit(f"Refusing to migrate: {check.error}")
    target = SQLUserStore()
    target.create_schema()
    target.save(users)
    return len(users)


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Copy the users JSON file into the SQL store")
    ap.add_argument("--source", type=Path, default=None, help="JSON file (default: USERS_FILE)")
    args = ap.parse_args(argv)
    count = migrate(args.source or get_settings().users_file)
    print(f"{count} users migrated to the SQL store.")


if __name__ == "__main__":
    main()
