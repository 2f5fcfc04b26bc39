# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""Plain newline-delimited word lists from files, stdin or HTTP(S)"""
from __future__ import annotations

from .session import get_requests_session
from .speller import normalize
from requests import Session
from typing import BinaryIO, Iterable
from urllib.parse import urlparse

import logging
import requests
import sys

STDIN_SOURCE = "-"

log = logging.getLogger("subspell.wordlist")


class Error(Exception):
    """Word list error"""


class SourceUnavailable(Error):
    """Word list could not be opened, fetched or decoded"""

    def __init__(self, source: str, reason: str) -> None:
        Error.__init__(self, "cannot read word list {!r}: {}".format(source, reason))
        self.source = source


def normalize_lines(lines: Iterable[str]) -> list[str]:
    """Trim and case-fold lines, dropping empty ones. Order and duplicates are kept."""
    words = []
    for line in lines:
        word = normalize(line)
        if word:
            words.append(word)
    return words


def is_url(source: str) -> bool:
    return urlparse(source).scheme in {"http", "https"}


def _fetch(url: str, session: Session | None, timeout: int | None) -> bytes:
    if session is None:
        session = get_requests_session(timeout=timeout)
    try:
        response = session.get(url)
        response.raise_for_status()
    except requests.exceptions.RequestException as ex:
        raise SourceUnavailable(url, "{}: {}".format(ex.__class__.__name__, ex)) from ex
    return response.content


def _read_stream(source: str, stream: BinaryIO) -> bytes:
    try:
        return stream.read()
    except OSError as ex:
        raise SourceUnavailable(source, "{}: {}".format(ex.__class__.__name__, ex)) from ex


def _decode(source: str, data: bytes, encoding: str) -> str:
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as ex:
        raise SourceUnavailable(source, "invalid {} data: {}".format(encoding, ex)) from ex
    except LookupError as ex:
        raise SourceUnavailable(source, "unknown encoding {!r}".format(encoding)) from ex


def read_words(
    source: str,
    *,
    encoding: str = "utf-8",
    session: Session | None = None,
    timeout: int | None = None,
) -> list[str]:
    """Read normalized words from a path, "-" for stdin, or an http(s) URL.

    Every source is read as bytes and decoded with `encoding`. Raises
    SourceUnavailable if anything goes wrong; a partially read list is never
    returned.
    """
    if is_url(source):
        log.debug("fetching word list from %s", source)
        data = _fetch(source, session, timeout)
    elif source == STDIN_SOURCE:
        data = _read_stream(source, sys.stdin.buffer)
    else:
        log.debug("reading word list from %r", source)
        try:
            with open(source, "rb") as fp:
                data = _read_stream(source, fp)
        except OSError as ex:
            raise SourceUnavailable(source, "{}: {}".format(ex.__class__.__name__, ex)) from ex

    words = normalize_lines(_decode(source, data, encoding).splitlines())
    log.info("Loaded %d words from %s", len(words), source)
    return words
