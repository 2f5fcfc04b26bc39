# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from .index import build, SubsequenceIndex
from .speller import CorrectionResult, normalize, rank, resolve, resolve_all, Speller, suggest
from .subsequence import generate

__all__ = [
    "build",
    "CorrectionResult",
    "generate",
    "normalize",
    "rank",
    "resolve",
    "resolve_all",
    "Speller",
    "SubsequenceIndex",
    "suggest",
]
