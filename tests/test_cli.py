# tests/test_cli.py
"""
End-to-end tests for the `decodeways` command.

Run: pytest -v
"""

from __future__ import annotations

import sys
import threading

import pytest

from decodeways.cli import main
from decodeways.utility import dec_digits

# ---------- helpers -----------------------------------------------------------


@pytest.fixture
def digits_file(tmp_path):
    def _make(content: bytes, name: str = "in.txt"):
        p = tmp_path / name
        p.write_bytes(content)
        return str(p)
    return _make


@pytest.fixture
def keep_excepthooks(monkeypatch):
    # --debug installs loud handlers; keep them out of other tests
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    monkeypatch.setattr(threading, "excepthook", threading.excepthook)


def run(argv, capsys):
    code = main(argv)
    out, err = capsys.readouterr()
    return code, out, err


# ---------- success -----------------------------------------------------------

@pytest.mark.parametrize("content,expected", [
    (b"226", "3"),
    (b"111111111111", "233"),
    (b"10", "1"),
])
def test_prints_count(digits_file, capsys, content, expected):
    code, out, err = run([digits_file(content)], capsys)
    assert code == 0
    assert out == expected + "\n"
    assert err == ""


def test_prints_counts_beyond_int_str_limit(digits_file, capsys):
    # F(21001) has more digits than Python's default str() guard (4300)
    code, out, _ = run([digits_file(b"1" * 21000)], capsys)
    assert code == 0
    text = out.strip()
    assert text.isdigit()
    assert len(text) > 4300


def test_short_profile_abbreviates(digits_file, capsys):
    code, out, _ = run([digits_file(b"1" * 500), "--profile", "short"], capsys)
    assert code == 0
    assert "…" in out
    assert out.strip().endswith("digits)")


# ---------- failures ----------------------------------------------------------

def test_missing_argument(capsys):
    code, out, err = run([], capsys)
    assert code == 1
    assert out == ""
    assert "Usage: decodeways <filename>" in err


def test_unknown_option_exits_with_one(capsys):
    with pytest.raises(SystemExit) as ei:
        main(["--bogus", "x.txt"])
    assert ei.value.code == 1
    assert "unrecognized arguments" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    path = str(tmp_path / "nope.txt")
    code, out, err = run([path], capsys)
    assert code == 1
    assert out == ""
    assert f"Error opening file '{path}'" in err


@pytest.mark.parametrize("content,reason", [
    (b"", "input is empty"),
    (b"\n", "string starts with non-digit character"),
    (b"0", "string starts with 0"),
    (b"a12", "string starts with non-digit character"),
    (b"30", "encountered 0 which can not be attached to 3 at pos. 0"),
    (b"12a3", "encountered non-digit character 'a' at pos. 1"),
    (b"226\n", "encountered non-digit character '\\x0a' at pos. 2"),
    (b"  12\r\n", "string starts with non-digit character"),
])
def test_validation_failure(digits_file, capsys, content, reason):
    code, out, err = run([digits_file(content)], capsys)
    assert code == 1
    assert out == ""
    assert "Error decoding:" in err
    assert reason in err


@pytest.mark.parametrize("content,expected", [
    (b"226\n", "3"),
    (b"  12\r\n", "2"),
])
def test_trim_profile_strips_whitespace(digits_file, capsys, content, expected):
    code, out, _ = run([digits_file(content), "--profile", "trim"], capsys)
    assert code == 0
    assert out == expected + "\n"


def test_trim_profile_whitespace_only_is_empty(digits_file, capsys):
    code, _, err = run([digits_file(b" \r\n"), "--profile", "trim"], capsys)
    assert code == 1
    assert "input is empty" in err


def test_unknown_profile(digits_file, capsys):
    code, _, err = run([digits_file(b"12"), "--profile", "nope"], capsys)
    assert code == 1
    assert "Unknown profile: 'nope'" in err
    assert "default" in err


def test_max_digits_from_workspace_profile(workspace, digits_file, capsys):
    pdir = workspace / "profiles"
    pdir.mkdir(parents=True)
    (pdir / "tiny.toml").write_text("[OUTPUT]\nMAX_DIGITS = 5\n", encoding="utf-8")

    code, out, err = run([digits_file(b"1" * 100), "--profile", "tiny"], capsys)
    assert code == 1
    assert out == ""
    assert "more than 5 decimal digits" in err


def test_broken_profile_is_reported(workspace, digits_file, capsys):
    pdir = workspace / "profiles"
    pdir.mkdir(parents=True)
    (pdir / "broken.toml").write_text("[OUTPUT\n", encoding="utf-8")

    code, _, err = run([digits_file(b"12"), "--profile", "broken"], capsys)
    assert code == 1
    assert "reading broken.toml" in err


def test_unexpected_error_is_summarised(digits_file, capsys, monkeypatch):
    def boom(_path):
        raise RuntimeError("disk on fire")
    monkeypatch.setattr("decodeways.cli.read_digits", boom)

    code, _, err = run([digits_file(b"12")], capsys)
    assert code == 1
    assert "Unexpected error: RuntimeError: disk on fire" in err
    assert "--debug" in err


def test_keyboard_interrupt(digits_file, capsys, monkeypatch):
    def stop(_path):
        raise KeyboardInterrupt
    monkeypatch.setattr("decodeways.cli.read_digits", stop)

    code, _, err = run([digits_file(b"12")], capsys)
    assert code == 130
    assert "Aborted by user." in err


# ---------- debug -------------------------------------------------------------

def test_debug_reports_profile_and_clusters(digits_file, capsys, keep_excepthooks):
    code, out, err = run([digits_file(b"1111311\n"), "--profile", "trim", "--debug"], capsys)
    assert code == 0
    assert out == "16\n"
    assert "active profile: trim" in err
    assert "INPUT.STRIP_WHITESPACE" in err
    assert "read 8 bytes" in err
    assert "2 cluster(s), longest 4 pair(s)" in err
    assert f"result has {dec_digits(16)} decimal digit(s)" in err


def test_debug_from_profile(workspace, digits_file, capsys, keep_excepthooks):
    pdir = workspace / "profiles"
    pdir.mkdir(parents=True)
    (pdir / "loud.toml").write_text("[BEHAVIOUR]\nDEBUG = true\n", encoding="utf-8")

    code, _, err = run([digits_file(b"12"), "--profile", "loud"], capsys)
    assert code == 0
    assert "[debug]" in err


def test_debug_reraises_unexpected_errors(digits_file, monkeypatch, keep_excepthooks):
    def boom(_path):
        raise RuntimeError("disk on fire")
    monkeypatch.setattr("decodeways.cli.read_digits", boom)

    with pytest.raises(RuntimeError):
        main([digits_file(b"12"), "--debug"])
