"""Logging setup for the Digits app.

Console output is plain text by default. Each run also appends JSON lines to
``digits_run_<stamp>.jsonl``; file writes go through a queue so the game
thread never blocks on disk.
"""

from __future__ import annotations

import json
import logging
import os
import queue
from dataclasses import dataclass
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from digits.game.infra.app_data import resolve_logs_dir

__all__ = [
    "JsonFormatter",
    "LoggingConfig",
    "build_logging_config",
    "configure_logging",
    "setup_logging",
    "shutdown_logging",
]

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

_listener: QueueListener | None = None


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    level_name: str = "INFO"
    console_format: str = "text"  # text|json
    file_path: str | None = None
    file_format: str = "json"  # text|json


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra`` values land under ``fields``."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        fields = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS}
        if fields:
            entry["fields"] = fields
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=True, default=str)


def configure_logging(config: LoggingConfig) -> None:
    """Replace the root logger's handlers according to ``config``."""
    global _listener

    shutdown_logging()
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(getattr(logging, config.level_name.upper(), logging.INFO))

    console = logging.StreamHandler()
    console.setFormatter(_formatter(config.console_format))
    if not config.file_path:
        root.addHandler(console)
        return

    path = Path(config.file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(path, mode="a", encoding="utf-8", delay=True)
    file_handler.setFormatter(_formatter(config.file_format))

    records: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(QueueHandler(records))
    _listener = QueueListener(records, console, file_handler, respect_handler_level=True)
    _listener.start()


def shutdown_logging() -> None:
    """Flush and stop the background file writer, if one is running."""
    global _listener

    if _listener is None:
        return
    _listener.stop()
    for handler in _listener.handlers:
        handler.close()
    _listener = None


def build_logging_config() -> LoggingConfig:
    """Read ``DIGITS_LOG_LEVEL``/``LOG_LEVEL``, ``LOG_FORMAT`` and ``DIGITS_LOG_DIR``."""
    level_name = os.getenv("DIGITS_LOG_LEVEL") or os.getenv("LOG_LEVEL") or "INFO"
    log_dir = os.getenv("DIGITS_LOG_DIR", "").strip()
    stamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S")
    return LoggingConfig(
        level_name=level_name.upper(),
        console_format=os.getenv("LOG_FORMAT", "text").lower(),
        file_path=str((Path(log_dir) if log_dir else resolve_logs_dir()) / f"digits_run_{stamp}.jsonl"),
    )


def setup_logging() -> None:
    config = build_logging_config()
    configure_logging(config)
    logging.getLogger(__name__).info("logging_file=%s", config.file_path)


def _formatter(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter(TEXT_FORMAT)
