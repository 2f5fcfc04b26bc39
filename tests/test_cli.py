# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from __future__ import annotations

from _pytest.logging import LogCaptureFixture
from pathlib import Path
from pytest import CaptureFixture
from subspell.cli import SubspellCLI
from typing import Iterator
from unittest import mock

import io
import json
import pytest

WORDS = ["tub", "tube", "cub", "cat", "dog", "Kafka", "", "redis"]


@pytest.fixture(name="words_file")
def fixture_words_file(tmp_path: Path) -> Path:
    path = tmp_path / "words.txt"
    path.write_text("\n".join(WORDS) + "\n", encoding="utf-8")
    return path


@pytest.fixture(name="config_file")
def fixture_config_file(tmp_path: Path) -> Path:
    return tmp_path / "subspell.json"


def run(config_file: Path, *args: str) -> int | None:
    return SubspellCLI().run(args=["--config", str(config_file), *args])


def test_cli() -> None:
    with pytest.raises(SystemExit) as excinfo:
        SubspellCLI().run(args=["--help"])
    assert excinfo.value.code == 0


def test_correct(words_file: Path, config_file: Path, capsys: CaptureFixture[str]) -> None:
    ret = run(config_file, "--words", str(words_file), "correct", "TUBR", "xyz", "kakfa")
    assert ret is None
    assert capsys.readouterr().out.splitlines() == [
        "QUERY  DISTANCE  CORRECTIONS",
        "=====  ========  ===========",
        "tubr   1         tub, tube",
        "xyz",
        "kakfa  1         kafka",
    ]


def test_correct_json(words_file: Path, config_file: Path, capsys: CaptureFixture[str]) -> None:
    run(config_file, "--words", str(words_file), "correct", "--json", "tubr", "xyz")
    assert json.loads(capsys.readouterr().out) == [
        {"query": "tubr", "distance": 1, "corrections": ["tub", "tube"]},
        {"query": "xyz", "distance": None, "corrections": []},
    ]


def test_correct_all_distances(words_file: Path, config_file: Path, capsys: CaptureFixture[str]) -> None:
    run(config_file, "--words", str(words_file), "correct", "--all", "--json", "tubr")
    rows = json.loads(capsys.readouterr().out)
    assert [row["distance"] for row in rows] == [1, 2]
    assert rows[0]["corrections"] == ["tub", "tube"]
    assert rows[1]["corrections"] == ["cub", "tub", "tube"]


def test_correct_format(words_file: Path, config_file: Path, capsys: CaptureFixture[str]) -> None:
    run(config_file, "--words", str(words_file), "correct", "--format", "{query}={distance}", "cat", "dgo")
    assert capsys.readouterr().out == "cat=0\ndgo=1\n"


def test_correct_max_distance(words_file: Path, config_file: Path, capsys: CaptureFixture[str]) -> None:
    run(config_file, "--words", str(words_file), "--max-distance", "0", "correct", "--json", "tubr", "tub")
    assert json.loads(capsys.readouterr().out) == [
        {"query": "tubr", "distance": None, "corrections": []},
        {"query": "tub", "distance": 0, "corrections": ["tub"]},
    ]


def test_words_from_config(words_file: Path, config_file: Path, capsys: CaptureFixture[str]) -> None:
    config_file.write_text(json.dumps({"words": str(words_file), "max_distance": 1}), encoding="utf-8")
    run(config_file, "correct", "--json", "tubr")
    assert json.loads(capsys.readouterr().out) == [{"query": "tubr", "distance": 1, "corrections": ["tub", "tube"]}]


def test_words_missing(config_file: Path, caplog: LogCaptureFixture) -> None:
    with mock.patch("subspell.envdefault.SUBSPELL_WORDS", None):
        ret = run(config_file, "correct", "tubr")
    assert ret == 1
    assert "Specify a word list" in caplog.text


def test_words_unavailable(tmp_path: Path, config_file: Path, caplog: LogCaptureFixture) -> None:
    ret = run(config_file, "--words", str(tmp_path / "missing.txt"), "correct", "tubr")
    assert ret == 1
    assert "command failed: SourceUnavailable" in caplog.text


@pytest.mark.parametrize("max_distance", ["-1", "two", 1.5, "1.5", True, [1], -2])
def test_invalid_max_distance_in_config(
    words_file: Path, config_file: Path, caplog: LogCaptureFixture, max_distance: object
) -> None:
    config_file.write_text(json.dumps({"max_distance": max_distance}), encoding="utf-8")
    ret = run(config_file, "--words", str(words_file), "correct", "tubr")
    assert ret == 1
    assert "Invalid max distance" in caplog.text


def test_shell(words_file: Path, config_file: Path, capsys: CaptureFixture[str]) -> None:
    def lines() -> Iterator[str]:
        yield "  TUBR "
        yield "xyz"
        raise EOFError

    answers = lines()
    with mock.patch("builtins.input", side_effect=lambda prompt: next(answers)) as prompt:
        ret = run(config_file, "--words", str(words_file), "shell")

    assert ret is None
    assert prompt.call_count == 3
    prompt.assert_called_with("\n> Enter a word, can be misspelled: ")
    assert capsys.readouterr().out == (
        "\nFound correct spellings with distance 1:\ntub\ntube\nDid not find any corrections for that word\n\n"
    )


def test_index_stats(words_file: Path, config_file: Path, capsys: CaptureFixture[str]) -> None:
    run(config_file, "--words", str(words_file), "--max-distance", "1", "index", "stats", "--json")
    stats = json.loads(capsys.readouterr().out)
    assert stats["words"] == 7
    assert stats["max_distance"] == 1
    assert [layer["distance"] for layer in stats["distances"]] == [0, 1]
    assert stats["distances"][0] == {"distance": 0, "subsequences": 7, "postings": 7}
    assert stats["subsequences"] == sum(layer["subsequences"] for layer in stats["distances"]) - 1


def test_index_stats_table(words_file: Path, config_file: Path, capsys: CaptureFixture[str]) -> None:
    run(config_file, "--words", str(words_file), "--max-distance", "0", "index", "stats")
    out = capsys.readouterr().out.splitlines()
    assert out[:3] == [
        "DISTANCE  SUBSEQUENCES  POSTINGS",
        "========  ============  ========",
        "0         7             7",
    ]
    assert out[3].startswith("7 words, 7 subsequences, built in ")


def test_max_distance_from_environment(words_file: Path, config_file: Path, capsys: CaptureFixture[str]) -> None:
    with mock.patch("subspell.envdefault.SUBSPELL_MAX_DISTANCE", "1"):
        run(config_file, "--words", str(words_file), "index", "stats", "--json")
    assert json.loads(capsys.readouterr().out)["max_distance"] == 1


def test_unknown_encoding(words_file: Path, config_file: Path, caplog: LogCaptureFixture) -> None:
    ret = run(config_file, "--words", str(words_file), "--encoding", "nope", "correct", "tub")
    assert ret == 1
    assert "command failed: UserError: Unknown word list encoding 'nope'" in caplog.text


def test_words_from_stdin_with_encoding(config_file: Path, capsys: CaptureFixture[str]) -> None:
    stdin = io.TextIOWrapper(io.BytesIO("Café\ncafé\ntub\n".encode("latin-1")), encoding="utf-8")
    with mock.patch("sys.stdin", stdin):
        ret = run(config_file, "--words", "-", "--encoding", "latin-1", "correct", "--json", "cafe")
    assert ret is None
    assert json.loads(capsys.readouterr().out) == [{"query": "cafe", "distance": 1, "corrections": ["café"]}]


def test_shell_rejects_words_from_stdin(config_file: Path, caplog: LogCaptureFixture) -> None:
    with mock.patch("builtins.input") as prompt:
        ret = run(config_file, "--words", "-", "shell")
    assert ret == 1
    assert "can not read its word list from stdin" in caplog.text
    prompt.assert_not_called()
