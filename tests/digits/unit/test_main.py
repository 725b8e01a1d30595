import logging

import pytest

from digits.game.infra import logging as digits_logging
from digits.main import main


@pytest.fixture
def restore_root_logging():
    yield
    logging.getLogger().handlers.clear()


def test_main_flushes_run_log_before_returning(monkeypatch, tmp_path, restore_root_logging) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DIGITS_APP_DATA_DIR", str(tmp_path / "appdata"))
    monkeypatch.delenv("DIGITS_SAVE_FILE", raising=False)
    monkeypatch.delenv("DIGITS_LOG_DIR", raising=False)
    monkeypatch.delenv("DIGITS_LOG_LEVEL", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "INFO")

    main()

    assert digits_logging._listener is None
    assert (tmp_path / "appdata" / "saves").is_dir()
    logs = list((tmp_path / "appdata" / "logs").glob("digits_run_*.jsonl"))
    assert logs
    assert "board_ready" in logs[0].read_text(encoding="utf-8")
