# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""Symmetric-delete spelling correction over a SubsequenceIndex"""
from __future__ import annotations

from .index import build, SubsequenceIndex
from .subsequence import generate
from dataclasses import dataclass, field
from typing import Collection, Iterable

DEFAULT_MAX_DISTANCE = 2


@dataclass(frozen=True)
class CorrectionResult:
    """Best corrections for one query; `distance` is None when nothing matched"""

    query: str
    distance: int | None = None
    words: frozenset[str] = field(default_factory=frozenset)

    @property
    def found(self) -> bool:
        return self.distance is not None

    def ranked(self) -> list[str]:
        return rank(self.words)


def normalize(line: str) -> str:
    return line.strip().lower()


def rank(words: Iterable[str]) -> list[str]:
    """Order words by length, then alphabetically"""
    return sorted(words, key=lambda word: (len(word), word))


def _check_max_distance(index: SubsequenceIndex, max_distance: int | None) -> int:
    if max_distance is None:
        return index.max_distance
    if max_distance < 0 or max_distance > index.max_distance:
        raise ValueError(
            "max_distance {} outside of the range indexed (0..{})".format(max_distance, index.max_distance)
        )
    return max_distance


def resolve_all(query: str, index: SubsequenceIndex, max_distance: int | None = None) -> dict[int, set[str]]:
    """Map every combined distance reachable from `query` to the dictionary words at that distance.

    The combined distance through a shared subsequence is the larger of the two
    deletion counts, query side and dictionary side, so a subsequence that is
    itself a dictionary word is not favoured over its one-deletion neighbours.
    """
    max_distance = _check_max_distance(index, max_distance)
    results: dict[int, set[str]] = {}
    for query_distance in range(max_distance + 1):
        # too short to delete this many characters
        if query_distance >= len(query):
            continue

        for subsequence in generate(query, query_distance):
            for word_distance, words in index.lookup(subsequence).items():
                if word_distance > max_distance:
                    continue
                results.setdefault(max(query_distance, word_distance), set()).update(words)
    return results


def resolve(query: str, index: SubsequenceIndex, max_distance: int | None = None) -> CorrectionResult:
    """Return the corrections of `query` at the smallest combined distance found"""
    results = resolve_all(query, index, max_distance=max_distance)
    if not results:
        return CorrectionResult(query=query)

    distance = min(results)
    return CorrectionResult(query=query, distance=distance, words=frozenset(results[distance]))


class Speller:
    """Dictionary indexed once and corrected against many times"""

    def __init__(self, index: SubsequenceIndex) -> None:
        self.index = index

    @classmethod
    def from_words(cls, words: Iterable[str], max_distance: int = DEFAULT_MAX_DISTANCE) -> Speller:
        return cls(build([word for word in map(normalize, words) if word], max_distance))

    @property
    def max_distance(self) -> int:
        return self.index.max_distance

    def correct(self, query: str) -> CorrectionResult:
        return resolve(normalize(query), self.index)

    def suggest(self, query: str) -> list[str]:
        return self.correct(query).ranked()


def suggest(word_to_check: str, known_words: Collection[str], max_distance: int = DEFAULT_MAX_DISTANCE) -> str | None:
    """Closest known word to `word_to_check`, or None when nothing is close enough"""
    suggestions = Speller.from_words(known_words, max_distance=max_distance).suggest(word_to_check)
    return suggestions[0] if suggestions else None
