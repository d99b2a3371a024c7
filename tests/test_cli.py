"""Tests for the typer CLI."""

import json

import pytest
from typer.testing import CliRunner

from scicalc.__main__ import app
from scicalc.config import HISTORY_FILE_VAR

runner = CliRunner()


@pytest.fixture
def history_file(tmp_path, monkeypatch):
    path = tmp_path / "history.json"
    monkeypatch.setenv(HISTORY_FILE_VAR, str(path))
    return path


def _stored(path):
    return json.loads(path.read_text(encoding="utf-8"))


# --- eval ---

def test_eval_prints_result_and_records(history_file):
    result = runner.invoke(app, ["eval", "2+3*4"])
    assert result.exit_code == 0
    assert "14" in result.output
    stored = _stored(history_file)
    assert stored[0]["expression"] == "2+3*4"
    assert stored[0]["result"] == "14"


def test_eval_error_exits_nonzero_without_history(history_file):
    result = runner.invoke(app, ["eval", "10/0"])
    assert result.exit_code == 1
    assert "Error" in result.output
    assert not history_file.exists()


def test_eval_no_history(history_file):
    result = runner.invoke(app, ["eval", "0.1+0.2", "--no-history"])
    assert result.exit_code == 0
    assert "0.3" in result.output
    assert not history_file.exists()


def test_eval_appends_newest_first(history_file):
    runner.invoke(app, ["eval", "1+1"])
    runner.invoke(app, ["eval", "2+2"])
    assert [e["result"] for e in _stored(history_file)] == ["4", "2"]


# --- history / clear-history ---

def test_history_lists_entries(history_file):
    runner.invoke(app, ["eval", "sqrt(16)"])
    result = runner.invoke(app, ["history"])
    assert result.exit_code == 0
    assert "sqrt(16)" in result.output


def test_history_empty(history_file):
    result = runner.invoke(app, ["history"])
    assert "No history yet." in result.output


def test_clear_history(history_file):
    runner.invoke(app, ["eval", "1+1"])
    result = runner.invoke(app, ["clear-history"])
    assert result.exit_code == 0
    assert _stored(history_file) == []


# --- repl ---

def test_repl_evaluates_lines(history_file):
    result = runner.invoke(app, ["repl"], input="2^3\n1/0\n:quit\n")
    assert result.exit_code == 0
    assert "8" in result.output
    assert "Error" in result.output
    assert [e["expression"] for e in _stored(history_file)] == ["2^3"]


def test_repl_clear_and_eof(history_file):
    result = runner.invoke(app, ["repl"], input="1+1\n:clear\n")
    assert result.exit_code == 0
    assert _stored(history_file) == []


# --- convert / units ---

def test_convert(history_file):
    result = runner.invoke(app, ["convert", "1", "m", "ft"])
    assert result.exit_code == 0
    assert "3.28084 ft" in result.output


def test_convert_temperature(history_file):
    result = runner.invoke(app, ["convert", "100", "C", "F"])
    assert "212 F" in result.output


def test_convert_mismatch(history_file):
    result = runner.invoke(app, ["convert", "1", "m", "kg"])
    assert result.exit_code == 1
    assert "Cannot convert" in result.output


def test_units(history_file):
    result = runner.invoke(app, ["units"])
    assert result.exit_code == 0
    assert "Fahrenheit" in result.output


def test_verbose_flag(history_file):
    result = runner.invoke(app, ["-v", "eval", "1/0"])
    assert result.exit_code == 1


def test_eval_leading_minus(history_file):
    result = runner.invoke(app, ["eval", "-5+3"])
    assert result.exit_code == 0
    assert "-2" in result.output


def test_eval_leading_minus_with_option(history_file):
    result = runner.invoke(app, ["eval", "-2^2", "--no-history"])
    assert result.exit_code == 0
    assert "4" in result.output
    assert not history_file.exists()


def test_repl_operator_continues_from_result(history_file):
    result = runner.invoke(app, ["repl"], input="2^3\n+2\n7\n:quit\n")
    assert result.exit_code == 0
    assert "10" in result.output
    assert [e["expression"] for e in _stored(history_file)] == ["7", "8+2", "2^3"]
