# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""Index of dictionary words by their deletion subsequences"""
from __future__ import annotations

from .subsequence import generate
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Tuple

import logging
import time

PROGRESS_INTERVAL = 10000

Postings = Mapping[int, Tuple[str, ...]]

_EMPTY_POSTINGS: Postings = MappingProxyType({})

log = logging.getLogger("subspell.index")


class SubsequenceIndex(Mapping[str, Postings]):
    """Read-only mapping of subsequence -> deletion count -> words reaching it.

    Every word that reduces to a subsequence at a given deletion count is kept,
    including repeated source words, not only the nearest ones.
    """

    def __init__(
        self,
        entries: Mapping[str, Mapping[int, Iterable[str]]],
        max_distance: int,
        word_count: int = 0,
        build_time: float = 0.0,
    ) -> None:
        self._entries: dict[str, Postings] = {
            subsequence: MappingProxyType({distance: tuple(words) for distance, words in by_distance.items()})
            for subsequence, by_distance in entries.items()
        }
        self.max_distance = max_distance
        self.word_count = word_count
        self.build_time = build_time

    def __getitem__(self, subsequence: str) -> Postings:
        return self._entries[subsequence]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return "<{} subsequences={} words={} max_distance={}>".format(
            self.__class__.__name__, len(self), self.word_count, self.max_distance
        )

    def lookup(self, subsequence: str) -> Postings:
        """Deletion count -> words for `subsequence`, empty when nothing reduces to it"""
        return self._entries.get(subsequence, _EMPTY_POSTINGS)

    def stats(self) -> list[dict[str, Any]]:
        """Number of subsequences and (subsequence, word) postings per deletion count"""
        subsequences = dict.fromkeys(range(self.max_distance + 1), 0)
        postings = dict.fromkeys(range(self.max_distance + 1), 0)
        for by_distance in self._entries.values():
            for distance, words in by_distance.items():
                subsequences[distance] += 1
                postings[distance] += len(words)
        return [
            {"distance": distance, "subsequences": subsequences[distance], "postings": postings[distance]}
            for distance in sorted(subsequences)
        ]


def build(words: Iterable[str], max_distance: int) -> SubsequenceIndex:
    """Index every subsequence of every word at every deletion count up to `max_distance`"""
    if isinstance(max_distance, bool) or not isinstance(max_distance, int) or max_distance < 0:
        raise ValueError("max_distance must be a non-negative integer, got {!r}".format(max_distance))

    words = list(words)
    entries: dict[str, dict[int, list[str]]] = {}
    start = time.monotonic()

    for distance in range(max_distance + 1):
        log.info("Calculating subsequences with distance %d", distance)
        for i, word in enumerate(words):
            if i % PROGRESS_INTERVAL == 0:
                log.debug("Processing word %d: %s", i, word)

            # deleting every character would only yield the empty string
            if len(word) <= distance:
                continue

            for subsequence in generate(word, distance):
                entries.setdefault(subsequence, {}).setdefault(distance, []).append(word)

    build_time = time.monotonic() - start
    log.info("Finished processing %d words in %.3fs", len(words), build_time)
    return SubsequenceIndex(entries, max_distance=max_distance, word_count=len(words), build_time=build_time)
