from __future__ import annotations

import os

from digits.game.infra.config import env_flag, load_default_env_files, load_env_file, parse_env_lines


def test_load_env_file_sets_values_with_overwrite_by_default(tmp_path, monkeypatch) -> None:
    env_file = tmp_path / ".env.app"
    env_file.write_text(
        "DIGITS_A=1\nDIGITS_B='two'\n#comment\nINVALID\nDIGITS_C=three\n",
        encoding="utf-8",
    )
    for key in ("DIGITS_A", "DIGITS_B"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("DIGITS_C", "already")
    load_env_file(str(env_file))
    assert os.environ.get("DIGITS_A") == "1"
    assert os.environ.get("DIGITS_B") == "two"
    assert os.environ.get("DIGITS_C") == "three"


def test_load_env_file_can_preserve_existing_values(tmp_path, monkeypatch) -> None:
    env_file = tmp_path / ".env.app"
    env_file.write_text("DIGITS_C=three\n", encoding="utf-8")
    monkeypatch.setenv("DIGITS_C", "already")
    load_env_file(str(env_file), override_existing=False)
    assert os.environ.get("DIGITS_C") == "already"


def test_load_env_file_missing_is_noop(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("DIGITS_A", raising=False)
    load_env_file(str(tmp_path / ".env.missing"))
    assert "DIGITS_A" not in os.environ


def test_load_default_env_files_honors_order(tmp_path, monkeypatch) -> None:
    app_env = tmp_path / ".env.app"
    app_local_env = tmp_path / ".env.app.local"
    app_env.write_text("DIGITS_A=app\nDIGITS_B=app\n", encoding="utf-8")
    app_local_env.write_text("DIGITS_B=app_local\n", encoding="utf-8")
    monkeypatch.delenv("DIGITS_A", raising=False)
    monkeypatch.delenv("DIGITS_B", raising=False)

    load_default_env_files(paths=(str(app_env), str(app_local_env)))

    assert os.environ.get("DIGITS_A") == "app"
    assert os.environ.get("DIGITS_B") == "app_local"


def test_env_flag(monkeypatch) -> None:
    monkeypatch.delenv("DIGITS_FLAG", raising=False)
    assert env_flag("DIGITS_FLAG") is False
    assert env_flag("DIGITS_FLAG", default=True) is True
    for raw in ("1", "true", " Yes ", "ON"):
        monkeypatch.setenv("DIGITS_FLAG", raw)
        assert env_flag("DIGITS_FLAG")
    monkeypatch.setenv("DIGITS_FLAG", "0")
    assert not env_flag("DIGITS_FLAG", default=True)


def test_parse_env_lines_skips_noise() -> None:
    parsed = parse_env_lines(["# note", "", "BARE", "=nokey", " K = 'v' ", 'Q="a=b"'])
    assert parsed == {"K": "v", "Q": "a=b"}
