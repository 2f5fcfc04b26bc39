# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""Deletion subsequences of a string"""
from __future__ import annotations

import itertools


def generate(s: str, n: int) -> frozenset[str]:
    """Return every distinct string formed by deleting exactly `n` characters from `s`.

    Callers must skip counts that would delete the whole string: `n` has to be
    in the range ``0 <= n < len(s)``.
    """
    if n < 0 or n >= len(s):
        raise ValueError("cannot delete {} characters from {!r}".format(n, s))
    if n == 0:
        return frozenset([s])

    # combinations of kept positions come out in order, so relative order is preserved
    return frozenset("".join(kept) for kept in itertools.combinations(s, len(s) - n))
