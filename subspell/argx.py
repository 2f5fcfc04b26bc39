# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""Declarative argparse commands, JSON config file and error handling for the subspell CLI"""
from __future__ import annotations

from .pretty import TableLayout
from argparse import Action, Namespace
from os import PathLike
from subspell import envdefault, pretty, wordlist
from typing import Any, Callable, Collection, Mapping, NoReturn, Sequence, TextIO, TYPE_CHECKING, TypeVar, Union

import argparse
import json as jsonlib
import logging
import requests.exceptions
import sys

# Optional shell completions
try:
    import argcomplete  # type: ignore

    ARGCOMPLETE_INSTALLED = True
except ImportError:
    ARGCOMPLETE_INSTALLED = False

try:
    from .version import __version__
except ImportError:
    __version__ = "UNKNOWN"

CLI_ARGS_ATTR = "_cli_args"
LOG_FORMAT = "%(levelname)s\t%(message)s"

EXIT_ERROR = 1
EXIT_INTERRUPTED = 2  # SIGINT
EXIT_BROKEN_PIPE = 13  # SIGPIPE

ResultType = Union[Mapping[str, Any], Collection[Mapping[str, Any]]]


class HelpFormatter(argparse.RawDescriptionHelpFormatter):
    """Append the default to option help when it says something: integers and non-empty strings"""

    def _get_help_string(self, action: Action) -> str:
        help_text = action.help or ""
        default = action.default
        if "%(default)" in help_text or default is argparse.SUPPRESS or not action.option_strings:
            return help_text
        if isinstance(default, bool) or not (isinstance(default, int) or (isinstance(default, str) and default)):
            return help_text
        return help_text + " (default: %(default)s)"


class UserError(Exception):
    """User error"""


F = TypeVar("F", bound=Callable)


class Arg:
    """Declares an argument of a CLI command.

    Accepts the same arguments as `argparse.ArgumentParser.add_argument`. Every
    method carrying at least one (possibly empty) `@arg()` becomes a command
    named after the method, with double underscores separating levels, so
    `index__stats` is run as `index stats`. Its docstring is the command help.
    Parsed arguments are available as `self.args`::

        class CLI(CommandLineTool):

            @arg("word", nargs="+")
            def correct(self):
                \"\"\"Correct spelling of words\"\"\"
                print(self.args.word)
    """

    def __call__(self, *args: Any, **kwargs: Any) -> Callable[[F], F]:
        def wrap(func: F) -> F:
            declared = func.__dict__.setdefault(CLI_ARGS_ATTR, [])
            if args or kwargs:
                # decorators apply bottom-up, keep the order they are written in
                declared.insert(0, (args, kwargs))
            return func

        return wrap

    if TYPE_CHECKING:

        def __getattr__(self, name: str) -> Callable:
            ...

        def __setattr__(self, name: str, value: Callable) -> None:
            ...


arg = Arg()


def name_to_cmd_parts(name: str) -> list[str]:
    return [part.replace("_", "-") for part in name.split("__")]


def is_command(func: Any) -> bool:
    return callable(func) and hasattr(func, CLI_ARGS_ATTR)


class Config(dict):
    """Settings from a JSON object file; a missing file is an empty config"""

    def __init__(self, file_path: PathLike | str):
        dict.__init__(self)
        self.file_path = file_path
        self.load()

    def load(self) -> None:
        self.clear()
        try:
            with open(self.file_path, encoding="utf-8") as fp:
                settings = jsonlib.load(fp)
        except FileNotFoundError:
            return
        except OSError as ex:
            raise UserError("Failed to load configuration file {!r}: {}".format(self.file_path, ex)) from ex
        except ValueError as ex:
            raise UserError("Invalid JSON in configuration file {!r}".format(self.file_path)) from ex

        if not isinstance(settings, dict):
            raise UserError("Configuration file {!r} must contain a JSON object".format(self.file_path))
        self.update(settings)


class CommandLineTool:
    config: Config

    def __init__(self, name: str) -> None:
        self.log = logging.getLogger(name)
        self.parser = argparse.ArgumentParser(prog=name, formatter_class=HelpFormatter)
        self.parser.add_argument(
            "--config",
            help="config file location [SUBSPELL_CONFIG], default %(default)r",
            default=envdefault.SUBSPELL_CONFIG,
        )
        self.parser.add_argument("-v", "--verbose", help="Log debug messages", action="store_true", default=False)
        self.parser.add_argument("--version", action="version", version="%(prog)s {}".format(__version__))
        self.subparsers = self.parser.add_subparsers(title="commands", dest="command", metavar="COMMAND")
        self._groups: dict[tuple[str, ...], argparse._SubParsersAction] = {(): self.subparsers}
        self.args = Namespace()

    def add_args(self, parser: argparse.ArgumentParser) -> None:
        """Add tool-wide options; override in sub-class"""

    def commands(self) -> list[Callable]:
        commands = []
        for name in sorted(dir(self.__class__)):
            # look the attribute up on the class so properties are not evaluated
            if is_command(getattr(self.__class__, name, None)):
                commands.append(getattr(self, name))
        return commands

    def _group(self, path: tuple[str, ...]) -> argparse._SubParsersAction:
        if path not in self._groups:
            parent = self._group(path[:-1])
            title = " ".join(path).title() + " commands"
            group_parser = parent.add_parser(path[-1], help=title, description=title, formatter_class=HelpFormatter)
            self._groups[path] = group_parser.add_subparsers(title="commands", dest="subcommand", metavar="COMMAND")
        return self._groups[path]

    def add_cmd(self, func: Callable) -> None:
        """Add a parser for a single command method"""
        assert func.__doc__, f"Missing docstring for {func.__qualname__}"

        *path, name = name_to_cmd_parts(func.__name__)
        summary = func.__doc__.strip().splitlines()[0]
        parser = self._group(tuple(path)).add_parser(
            name, help=summary, description=func.__doc__, formatter_class=HelpFormatter
        )
        parser.set_defaults(func=func)
        for args, kwargs in getattr(func, CLI_ARGS_ATTR):
            parser.add_argument(*args, **kwargs)

    def build_parser(self) -> argparse.ArgumentParser:
        self.add_args(self.parser)
        for func in self.commands():
            self.add_cmd(func)
        return self.parser

    def parse_args(self, args: Sequence[str]) -> None:
        parser = self.build_parser()
        if ARGCOMPLETE_INSTALLED:
            argcomplete.autocomplete(parser)
        self.args = parser.parse_args(args=args)

    def pre_run(self, func: Callable) -> None:
        """Prepare state shared by commands; override in sub-class"""

    def expected_errors(self) -> tuple[type[BaseException], ...]:
        return (UserError, wordlist.Error, requests.exceptions.ConnectionError)

    def print_response(
        self,
        result: ResultType,
        json: bool = True,
        format: str | None = None,
        table_layout: TableLayout | None = None,
        file: TextIO | None = None,
    ) -> None:
        """print command result as JSON, through a format string or as a table"""
        file = file or sys.stdout
        if json:
            print(jsonlib.dumps(result, indent=4, sort_keys=True, cls=pretty.CustomJsonEncoder), file=file)
            return

        rows = [result] if isinstance(result, Mapping) else list(result)
        if format is not None:
            for row in rows:
                print(format.format(**row), file=file)
        else:
            pretty.print_table(rows, table_layout=table_layout, file=file)

    def run(self, args: Sequence[str] | None = None) -> int | None:
        args = list(args or sys.argv[1:]) or ["--help"]
        self.parse_args(args)
        if self.args.verbose:
            self.log.setLevel(logging.DEBUG)

        func = getattr(self.args, "func", None)
        if func is None:
            # a command group was given without a command under it
            self.parser.parse_args(args + ["--help"])
            return EXIT_ERROR

        try:
            self.config = Config(self.args.config)
            self.pre_run(func)
            return func()
        except self.expected_errors() as ex:
            self.log.error("command failed: %s: %s", ex.__class__.__name__, ex)
            return EXIT_ERROR
        except BrokenPipeError:
            self.log.error("*** output truncated ***")
            return EXIT_BROKEN_PIPE
        except KeyboardInterrupt:
            self.log.error("*** terminated by keyboard ***")
            return EXIT_INTERRUPTED

    def main(self, args: Sequence[str] | None = None) -> NoReturn:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        logging.getLogger("requests").setLevel(logging.WARNING)
        logging.getLogger("urllib3").setLevel(logging.WARNING)
        sys.exit(self.run(args))
