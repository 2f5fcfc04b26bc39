# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.

from .argx import arg

arg.all_distances = arg(
    "--all",
    dest="all_distances",
    action="store_true",
    default=False,
    help="List corrections at every distance found, not only the closest",
)
arg.format = arg("--format", help="Format string for output, e.g. '{query}: {corrections}'")
arg.json = arg("--json", help="Raw json output", action="store_true", default=False)
arg.word = arg("word", nargs="+", help="Word to correct")
