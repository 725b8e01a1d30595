"""Environment-driven configuration for the Digits app."""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from pathlib import Path

DEFAULT_ENV_FILES: tuple[str, ...] = (
    "appdata/config/.env.app",
    "appdata/config/.env.app.local",
    ".env.app",
    ".env.app.local",
)

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def parse_env_lines(lines: Iterable[str]) -> dict[str, str]:
    """Parse ``KEY=VALUE`` lines; comments, blanks and bare words are skipped."""
    values: dict[str, str] = {}
    for raw in lines:
        text = raw.strip()
        if text.startswith("#"):
            continue
        key, sep, value = text.partition("=")
        key = key.strip()
        if not sep or not key:
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] in "'\"" and value[-1] == value[0]:
            value = value[1:-1]
        values[key] = value
    return values


def load_env_file(path: str = ".env.app", *, override_existing: bool = True) -> None:
    """Copy an env file's values into ``os.environ``.

    Existing variables are overwritten unless ``override_existing`` is False.
    A missing file is ignored.
    """
    env_path = _resolve_env_path(path)
    if not env_path.is_file():
        return
    parsed = parse_env_lines(env_path.read_text(encoding="utf-8").splitlines())
    for key, value in parsed.items():
        if override_existing or key not in os.environ:
            os.environ[key] = value


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load env files in order; later files win."""
    for path in DEFAULT_ENV_FILES if paths is None else paths:
        load_env_file(path, override_existing=override_existing)


def env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean switch such as ``DIGITS_CHECK_INVARIANTS``."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _resolve_env_path(path: str) -> Path:
    candidate = Path(path)
    if candidate.is_absolute() or candidate.exists():
        return candidate
    # Relative names also resolve against the project root so runs from
    # another working directory still see the app's env files.
    return Path(__file__).resolve().parents[3] / candidate
