"""
JSON file persistence for the users collection.

The whole collection is stored as one JSON array and is always read and
written in full.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from users_api.repositories.base import StoreReadError, StoreWriteError


class JsonUserStore:
    """Load/save the users collection from a JSON array file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def load(self) -> list:
        if not self.path.exists():
            return []
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise StoreReadError(f"Could not read {self.path}: {exc}") from exc
        if not isinstance(data, list):
            raise StoreReadError(f"{self.path} does not hold a JSON array")
        return data

    def save(self, users: list) -> None:
        # Write next to the target and rename so readers never see a partial file.
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=self.path.parent, suffix=".tmp", delete=False
            ) as f:
                tmp_name = f.name
                f.write(json.dumps(users, ensure_ascii=False, indent=2))
            os.replace(tmp_name, self.path)
        except (OSError, TypeError, ValueError) as exc:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StoreWriteError(f"Could not write {self.path}: {exc}") from exc
