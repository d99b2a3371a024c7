"""Tests for environment-driven CLI configuration."""

from pathlib import Path

from scicalc.config import HISTORY_FILE_VAR, HISTORY_LIMIT_VAR, history_limit, history_path


def test_history_path_default():
    assert history_path({}) == Path.home() / ".scicalc" / "history.json"


def test_history_path_override(tmp_path):
    target = tmp_path / "h.json"
    assert history_path({HISTORY_FILE_VAR: str(target)}) == target


def test_history_path_blank_override_uses_default():
    assert history_path({HISTORY_FILE_VAR: "  "}) == Path.home() / ".scicalc" / "history.json"


def test_history_limit():
    assert history_limit({}) == 50
    assert history_limit({HISTORY_LIMIT_VAR: "10"}) == 10
    assert history_limit({HISTORY_LIMIT_VAR: "lots"}) == 50
    assert history_limit({HISTORY_LIMIT_VAR: "0"}) == 50
    assert history_limit({HISTORY_LIMIT_VAR: "-3"}) == 50


def test_reads_process_environment(monkeypatch, tmp_path):
    monkeypatch.setenv(HISTORY_FILE_VAR, str(tmp_path / "env.json"))
    monkeypatch.setenv(HISTORY_LIMIT_VAR, "7")
    assert history_path() == tmp_path / "env.json"
    assert history_limit() == 7
