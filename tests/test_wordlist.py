# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from __future__ import annotations

from pathlib import Path
from subspell.wordlist import is_url, normalize_lines, read_words, SourceUnavailable
from unittest import mock

import io
import pytest
import requests


class MockResponse:
    def __init__(self, status_code: int, content: bytes = b"") -> None:
        self.status_code = status_code
        self.content = content

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError("{} Client Error".format(self.status_code))


def test_normalize_lines() -> None:
    lines = ["  Tub\n", "", "TUBE", "   ", "tub", "\tcub"]
    assert normalize_lines(lines) == ["tub", "tube", "tub", "cub"]


@pytest.mark.parametrize(
    "source,expected",
    [
        ("https://example.com/words.txt", True),
        ("http://example.com/words.txt", True),
        ("words.txt", False),
        ("/usr/share/dict/words", False),
        ("-", False),
    ],
)
def test_is_url(source: str, expected: bool) -> None:
    assert is_url(source) == expected


def test_read_words_file(tmp_path: Path) -> None:
    path = tmp_path / "words.txt"
    path.write_text("Kafka\n\nredis\r\n  PG  \nkafka\n", encoding="utf-8")
    assert read_words(str(path)) == ["kafka", "redis", "pg", "kafka"]


def test_read_words_encoding(tmp_path: Path) -> None:
    path = tmp_path / "words.txt"
    path.write_bytes("Café\nnaïve\n".encode("latin-1"))
    assert read_words(str(path), encoding="latin-1") == ["café", "naïve"]


def test_read_words_missing_file(tmp_path: Path) -> None:
    with pytest.raises(SourceUnavailable) as excinfo:
        read_words(str(tmp_path / "missing.txt"))
    assert "FileNotFoundError" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


def test_read_words_undecodable_file(tmp_path: Path) -> None:
    path = tmp_path / "words.txt"
    path.write_bytes(b"tub\n\xff\xfe\xfa\n")
    with pytest.raises(SourceUnavailable) as excinfo:
        read_words(str(path))
    assert excinfo.value.source == str(path)
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def stdin_with(data: bytes) -> io.TextIOWrapper:
    return io.TextIOWrapper(io.BytesIO(data), encoding="utf-8")


def test_read_words_stdin() -> None:
    with mock.patch("sys.stdin", stdin_with(b"Tub\ntube\n")):
        assert read_words("-") == ["tub", "tube"]


def test_read_words_stdin_encoding() -> None:
    with mock.patch("sys.stdin", stdin_with("Café\nnaïve\n".encode("latin-1"))):
        assert read_words("-", encoding="latin-1") == ["café", "naïve"]


def test_read_words_stdin_undecodable() -> None:
    with mock.patch("sys.stdin", stdin_with("Café\n".encode("latin-1"))):
        with pytest.raises(SourceUnavailable) as excinfo:
            read_words("-")
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def test_read_words_unknown_encoding(tmp_path: Path) -> None:
    path = tmp_path / "words.txt"
    path.write_text("tub\n", encoding="utf-8")
    with pytest.raises(SourceUnavailable) as excinfo:
        read_words(str(path), encoding="no-such-encoding")
    assert "unknown encoding 'no-such-encoding'" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, LookupError)


def test_read_words_url() -> None:
    session = mock.Mock()
    session.get.return_value = MockResponse(200, b"Tub\ntube\n\n")
    assert read_words("https://example.com/words.txt", session=session) == ["tub", "tube"]
    session.get.assert_called_once_with("https://example.com/words.txt")


def test_read_words_url_uses_default_session() -> None:
    session = mock.Mock()
    session.get.return_value = MockResponse(200, b"tub\n")
    with mock.patch("subspell.wordlist.get_requests_session", return_value=session) as get_session:
        assert read_words("https://example.com/words.txt", timeout=5) == ["tub"]
    get_session.assert_called_once_with(timeout=5)


@pytest.mark.parametrize(
    "side_effect,return_value",
    [
        (None, MockResponse(404)),
        (requests.exceptions.ConnectionError("connection refused"), None),
        (None, MockResponse(200, b"\xff\xfe\xfa")),
    ],
)
def test_read_words_url_unavailable(side_effect: Exception | None, return_value: MockResponse | None) -> None:
    session = mock.Mock()
    session.get.side_effect = side_effect
    session.get.return_value = return_value
    with pytest.raises(SourceUnavailable):
        read_words("https://example.com/words.txt", session=session)
