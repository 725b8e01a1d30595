"""Persistence layer for loading/saving the board."""

from __future__ import annotations

import json
import os
from pathlib import Path


class SaveRepository:
    """JSON file repository holding a single saved board."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        """Return whether a saved board is present."""
        return self._path.is_file()

    def load_payload(self) -> dict[str, object]:
        """Load the saved payload."""
        if not self.exists():
            raise FileNotFoundError(f"No saved board at '{self._path}'.")
        with self._path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
        if not isinstance(payload, dict):
            raise ValueError("Saved board must be a JSON object.")
        return payload

    def save_payload(self, payload: dict[str, object]) -> None:
        """Write the payload, replacing any previous save atomically."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        temp = self._path.with_name(f"{self._path.name}.tmp")
        with temp.open("w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2)
        os.replace(temp, self._path)

    def delete(self) -> None:
        """Delete the saved board if it exists."""
        if self._path.exists():
            self._path.unlink()
