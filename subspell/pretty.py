# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""Pretty-print command results as JSON or tables"""
from __future__ import annotations

from .speller import rank
from typing import Any, Collection, Iterator, List, Mapping, TextIO, Tuple, Union

import json
import sys

ResultType = Collection[Mapping[str, Any]]
TableLayout = Collection[Union[List[str], Tuple[str], str]]


class CustomJsonEncoder(json.JSONEncoder):
    def default(self, o: Any) -> Any:
        if isinstance(o, (set, frozenset)):
            # word sets come out in presentation order
            return rank(o)

        return json.JSONEncoder.default(self, o)


def format_item(key: str | None, value: Any) -> str:
    if isinstance(value, (set, frozenset)):
        formatted = ", ".join(format_item(None, entry) for entry in rank(value))
    elif isinstance(value, (list, tuple)):
        formatted = ", ".join(format_item(None, entry) for entry in value)
    elif isinstance(value, dict):
        formatted = json.dumps(value, sort_keys=True, cls=CustomJsonEncoder)
    elif value is None:
        formatted = ""
    elif isinstance(value, str):
        # json encode strings, but if the input string is exactly the same
        # as the output without quotes we'll go with the original
        json_v = json.dumps(value)
        quoted_v = '"{}"'.format(value)
        formatted = value if json_v == quoted_v else json_v
    elif isinstance(value, float):
        formatted = "{:.3f}".format(value)
    else:
        formatted = "{}".format(value)

    return formatted


def flatten_list(complex_list: TableLayout | None) -> list[str]:
    """Flatten a multi-dimensional list to 1D list"""
    if complex_list is None:
        return []
    flattened_list: list[str] = []
    for level1 in complex_list:
        if isinstance(level1, (list, tuple)):
            flattened_list.extend(flatten_list(level1))
        else:
            flattened_list.append(level1)
    return flattened_list


def yield_table(
    result: ResultType,
    table_layout: TableLayout | None = None,
    header: bool = True,
) -> Iterator[str]:
    """
    format a list of dicts in a nicer table format yielding string rows

    :param list result: List of dicts to be printed.
    :param list table_layout: Fields to be printed, in order. Nested lists are flattened.
        Defaults to all fields sorted by name.
    :param bool header: True to print the field name
    """
    formatted_values: list[dict[str, str]] = []
    for item in result:
        formatted_values.append({key: format_item(key, value) for key, value in item.items()})

    if table_layout is None:
        fields = sorted({key for row in formatted_values for key in row})
    else:
        fields = flatten_list(table_layout)

    widths = {f: len(f) for f in fields}
    for row in formatted_values:
        for f in fields:
            widths[f] = max(widths[f], len(row.get(f, "")))

    if header:
        yield "  ".join(f.upper().ljust(widths[f]) for f in fields).rstrip()
        yield "  ".join("=" * widths[f] for f in fields)
    for row in formatted_values:
        yield "  ".join(row.get(f, "").ljust(widths[f]) for f in fields).rstrip()


def print_table(
    result: Collection[Any] | ResultType | None,
    table_layout: TableLayout | None = None,
    header: bool = True,
    file: TextIO | None = None,
) -> None:
    """print a list of dicts in a nicer table format"""

    def yield_rows() -> Iterator[str]:
        if not result:
            return
        elif not isinstance(next(iter(result), None), Mapping):
            yield from (format_item(None, item) for item in result)
        else:
            yield from yield_table(result, table_layout=table_layout, header=header)

    for row in yield_rows():
        print(row, file=file or sys.stdout)
