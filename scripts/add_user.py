#!/usr/bin/env python3
"""
Create a user in the configured store (JSON file or SQL).

Usage:
  python scripts/add_user.py --id 7 --name "Ada Lovelace" --email ada@example.com --age 36
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Make the users_api package importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from users_api.repositories import build_store  # noqa: E402
from users_api.services.user_service import UserService  # noqa: E402


def _parse_id(value: str) -> int | str:
    return int(value) if value.strip().isdigit() else value


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Add a user record")
    ap.add_argument("--id", required=True, type=_parse_id, help="User id (digits are stored as a number)")
    ap.add_argument("--name", required=True)
    ap.add_argument("--email", required=True)
    ap.add_argument("--age", required=True, type=float, help="Age (positive number)")
    args = ap.parse_args(argv)

    age = int(args.age) if args.age.is_integer() else args.age
    service = UserService(build_store())
    result = service.create_user({"id": args.id, "name": args.name, "email": args.email, "age": age})
    if not result.ok:
        sys.stderr.write(f"Error ({result.error.kind.value}): {result.error.message}\n")
        return 1
    user = result.user
    print("OK: user created")
    print(f"  id: {user['id']}")
    print(f"  name: {user['name']}")
    print(f"  email: {user['email']}")
    print(f"  age: {user['age']}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
