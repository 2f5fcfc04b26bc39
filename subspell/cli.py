# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from __future__ import annotations

from . import argx
from .cliarg import arg
from .speller import DEFAULT_MAX_DISTANCE, normalize, rank, resolve_all, Speller
from argparse import ArgumentParser
from subspell import envdefault, index, wordlist
from typing import Any, Callable

import codecs

CORRECTION_COLUMNS = ["query", "distance", "corrections"]
STATS_COLUMNS = ["distance", "subsequences", "postings"]

PROMPT = "> Enter a word, can be misspelled: "


class SubspellCLI(argx.CommandLineTool):
    speller: Speller

    def __init__(self) -> None:
        argx.CommandLineTool.__init__(self, "subspell")

    def add_args(self, parser: ArgumentParser) -> None:
        parser.add_argument(
            "--words",
            help="Word list to index: file path, '-' for stdin or http(s) URL [SUBSPELL_WORDS]",
            default=envdefault.SUBSPELL_WORDS,
            metavar="SOURCE",
        )
        parser.add_argument(
            "--max-distance",
            type=int,
            default=None,
            help="Maximum number of deleted characters considered [SUBSPELL_MAX_DISTANCE] (default: {})".format(
                DEFAULT_MAX_DISTANCE
            ),
        )
        parser.add_argument("--encoding", default="utf-8", help="Character encoding of the word list")
        parser.add_argument(
            "--request-timeout",
            type=int,
            default=None,
            help="Wait for up to N seconds when downloading a word list (default: infinite)",
        )

    def get_words_source(self) -> str:
        """Return word list given as cmdline argument or the default from config file"""
        source = self.args.words or self.config.get("words")
        if not source:
            raise argx.UserError(
                "Specify a word list: use --words in the command line, SUBSPELL_WORDS or the words item in the config file."
            )
        return source

    def get_max_distance(self) -> int:
        value: Any = self.args.max_distance
        if value is None:
            value = self.config.get("max_distance", envdefault.SUBSPELL_MAX_DISTANCE)
        if value is None:
            return DEFAULT_MAX_DISTANCE

        # config values may be any JSON type, environment values are strings
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise argx.UserError("Invalid max distance {!r}: expected an integer".format(value))
        try:
            max_distance = int(value)
        except ValueError as ex:
            raise argx.UserError("Invalid max distance {!r}: expected an integer".format(value)) from ex
        if max_distance < 0:
            raise argx.UserError("Invalid max distance {!r}: must not be negative".format(value))
        return max_distance

    def get_encoding(self) -> str:
        try:
            return codecs.lookup(self.args.encoding).name
        except LookupError as ex:
            raise argx.UserError("Unknown word list encoding {!r}".format(self.args.encoding)) from ex

    def pre_run(self, func: Callable[[], int | None]) -> None:
        max_distance = self.get_max_distance()
        encoding = self.get_encoding()
        source = self.get_words_source()
        if func == self.shell and source == wordlist.STDIN_SOURCE:
            # the prompt reads from stdin too, which the word list has already exhausted
            raise argx.UserError("The interactive shell can not read its word list from stdin, use --words FILE")

        words = wordlist.read_words(source, encoding=encoding, timeout=self.args.request_timeout)
        self.speller = Speller(index.build(words, max_distance))

    @arg.json
    @arg.format
    @arg.all_distances
    @arg.word
    def correct(self) -> None:
        """Correct spelling of words"""
        rows = []
        for query in self.args.word:
            if self.args.all_distances:
                query = normalize(query)
                results = resolve_all(query, self.speller.index)
                for distance in sorted(results):
                    rows.append({"query": query, "distance": distance, "corrections": rank(results[distance])})
                if not results:
                    rows.append({"query": query, "distance": None, "corrections": []})
            else:
                result = self.speller.correct(query)
                rows.append({"query": result.query, "distance": result.distance, "corrections": result.ranked()})

        self.print_response(rows, json=self.args.json, format=self.args.format, table_layout=CORRECTION_COLUMNS)

    @arg()
    def shell(self) -> None:
        """Correct words typed at an interactive prompt"""
        while True:
            try:
                line = input("\n" + PROMPT)
            except EOFError:
                print()
                return

            result = self.speller.correct(line)
            if result.found:
                print("\nFound correct spellings with distance {}:".format(result.distance))
                for word in result.ranked():
                    print(word)
            else:
                print("Did not find any corrections for that word")

    @arg.json
    def index__stats(self) -> None:
        """Show size of the subsequence index"""
        subsequence_index = self.speller.index
        layers = subsequence_index.stats()
        if self.args.json:
            self.print_response(
                {
                    "words": subsequence_index.word_count,
                    "subsequences": len(subsequence_index),
                    "max_distance": subsequence_index.max_distance,
                    "build_time": round(subsequence_index.build_time, 3),
                    "distances": layers,
                },
                json=True,
            )
            return

        self.print_response(layers, json=False, table_layout=STATS_COLUMNS)
        print(
            "{} words, {} subsequences, built in {:.3f}s".format(
                subsequence_index.word_count, len(subsequence_index), subsequence_index.build_time
            )
        )


if __name__ == "__main__":
    SubspellCLI().main()
