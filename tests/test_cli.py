"""Tests for the command-line interface."""

import json

import pytest

from moodscope import cli


@pytest.fixture(autouse=True)
def no_api_key(monkeypatch):
    monkeypatch.setattr(cli.settings, "openai_api_key", "")
    monkeypatch.setattr(cli.settings, "api_key", "")


def test_analyze_offline(capsys):
    assert cli.main(["--offline", "analyze", "I love this!"]) == 0
    out = capsys.readouterr().out
    assert "Sentiment: positive (75% confidence, via fallback)" in out


def test_missing_key_is_reported(capsys):
    assert cli.main(["analyze", "I love this!"]) == 1
    assert "OPENAI_API_KEY" in capsys.readouterr().err


def test_invalid_text_is_reported(capsys):
    assert cli.main(["--offline", "analyze", "This is awful."]) == 1
    assert "full stops" in capsys.readouterr().err


def test_analyze_mood_offline(capsys):
    assert cli.main(["--offline", "analyze", "I feel sad today", "--mood"]) == 0
    assert "Hopeful Instrumentals" in capsys.readouterr().out


def test_compare_offline_fails(capsys):
    assert cli.main(["--offline", "compare", "sunny days", "rainy days"]) == 1
    assert "couldn't compare" in capsys.readouterr().err


def test_batch_from_file(tmp_path, capsys):
    source = tmp_path / "texts.txt"
    source.write_text("great coffee\n\nbad parking\n", encoding="utf-8")
    out = tmp_path / "out.json"

    assert cli.main(["--offline", "batch", "--file", str(source), "--out", str(out)]) == 0

    data = json.loads(out.read_text(encoding="utf-8"))
    assert [r["text"] for r in data["results"]] == ["great coffee", "bad parking"]
    assert data["summary"]["total"] == 2
    assert "Analyzing 2 text(s)" in capsys.readouterr().out


def test_missing_input_file(tmp_path, capsys):
    assert cli.main(["--offline", "batch", "--file", str(tmp_path / "nope.txt")]) == 1


def test_no_command_prints_help(capsys):
    assert cli.main([]) == 0
    assert "usage" in capsys.readouterr().out
