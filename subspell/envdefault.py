# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""
Configurable parameters via environment variables
"""

import os

USER_HOME = os.path.expanduser("~")

SUBSPELL_CONFIG_DIR = os.environ.get("SUBSPELL_CONFIG_DIR", os.path.join(USER_HOME, ".config", "subspell"))

SUBSPELL_CONFIG = os.environ.get("SUBSPELL_CONFIG", os.path.join(SUBSPELL_CONFIG_DIR, "subspell.json"))
SUBSPELL_MAX_DISTANCE = os.environ.get("SUBSPELL_MAX_DISTANCE")
SUBSPELL_WORDS = os.environ.get("SUBSPELL_WORDS")
