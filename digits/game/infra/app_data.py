"""Where Digits keeps its runtime files (logs and saved boards)."""

from __future__ import annotations

import os
from pathlib import Path

SAVE_FILE_NAME = "board.json"


def resolve_project_root() -> Path:
    """Directory holding the ``digits`` package."""
    return Path(__file__).resolve().parents[3]


def resolve_app_data_root() -> Path:
    """``DIGITS_APP_DATA_DIR`` or ``<project>/appdata``."""
    project_root = resolve_project_root()
    return _path_from_env("DIGITS_APP_DATA_DIR", relative_to=project_root) or project_root / "appdata"


def resolve_logs_dir() -> Path:
    return resolve_app_data_root() / "logs"


def resolve_saves_dir() -> Path:
    return resolve_app_data_root() / "saves"


def resolve_save_file() -> Path:
    """``DIGITS_SAVE_FILE`` (relative to the app-data root) or the default save."""
    configured = _path_from_env("DIGITS_SAVE_FILE", relative_to=resolve_app_data_root())
    return configured or resolve_saves_dir() / SAVE_FILE_NAME


def ensure_app_data_dirs() -> dict[str, Path]:
    """Create the app-data layout and return its directories by name."""
    paths = {
        "root": resolve_app_data_root(),
        "logs": resolve_logs_dir(),
        "saves": resolve_saves_dir(),
    }
    for path in paths.values():
        path.mkdir(parents=True, exist_ok=True)
    return paths


def _path_from_env(var_name: str, *, relative_to: Path) -> Path | None:
    raw = os.getenv(var_name, "").strip()
    if not raw:
        return None
    candidate = Path(raw)
    return candidate if candidate.is_absolute() else relative_to / candidate
