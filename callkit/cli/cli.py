"""
The callkit command: global logging options, then one of the subcommands found in callkit.cli.commands
(indel-rates, score-indels, gvcf-blocks).
"""

__all__ = ['Cli', 'main', 'run']

import argparse
import importlib
import logging
import traceback
import time
import pkgutil
import sys
import os

from typing import Final

from ..common import setup_logging
from .commands import BaseCommand

log = logging.getLogger("callkit")

COMMANDS_PACKAGE: Final = "callkit.cli.commands"
COMMANDS_MODULE_PATH: Final = importlib.import_module(COMMANDS_PACKAGE).__path__


def _add_log_arguments(parser: argparse.ArgumentParser):
    """
    Options shared by every subcommand, given before the subcommand name. They are passed
    straight to setup_logging.
    """
    log_group = parser.add_argument_group("logging")
    log_group.add_argument("--no-log", default=False, action='store_true',
                           help="Do not write a log file.")
    log_group.add_argument("--log-dir", type=str, default=os.getcwd(),
                           help="Directory for the log file (default is the working directory)")
    log_group.add_argument("--log-name", type=str, default=f"{time.time()}_callkit.log",
                           help="Name of the log file")
    log_group.add_argument("--log-level", choices=["DEBUG", "INFO", "WARN", "WARNING", "ERROR"], default="INFO",
                           help="Lowest severity of the messages to report")
    log_group.add_argument("--log-detail", choices=["LOW", "MEDIUM", "HIGH"], default="MEDIUM",
                           help="How much context (time, logger, line) to put in each message")
    log_group.add_argument("--silent-mode", default=False, action="store_true",
                           help="Do not echo log messages to stdout")


class Cli:
    """
    Parser for the callkit command. Every module under callkit.cli.commands that defines a
    Command class becomes a subcommand.
    """

    parser: argparse.ArgumentParser
    subparsers: argparse._SubParsersAction

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog="callkit", description="Indel error rates and gVCF block compression for germline calling"
        )
        _add_log_arguments(self.parser)
        self.subparsers = self.parser.add_subparsers(title="commands")

        for _, module_name, _ in pkgutil.iter_modules(COMMANDS_MODULE_PATH):
            module = importlib.import_module(f"{COMMANDS_PACKAGE}.{module_name}")
            command = getattr(module, "Command", None)
            if command is not None:
                self.register_command(command, command.name or module_name)

    def register_command(self, command: type[BaseCommand], name: str | None):
        """
        Add a subcommand to the parser.

        :param command: The Command class
        :param name: The subcommand name. Falls back to `command.name`
        """
        assert self.subparsers
        command.register_to(self.subparsers, name)


def main(parser: argparse.ArgumentParser, arguments: list[str]) -> int:
    """
    Parse the arguments, set up logging and run the chosen subcommand.

    Exit codes: 2 if the arguments do not parse, 1 if no subcommand was given or the subcommand raised,
    0 on success. Input and config validation failures exit directly with their own codes.

    :param parser: The callkit parser
    :param arguments: The command line arguments, without the program name
    :return: The exit code
    """
    try:
        args = parser.parse_args(arguments)
    except SystemExit:
        return 2

    setup_logging(
        omit_log=args.no_log,
        severity=args.log_level,
        verbosity=args.log_detail,
        directory=args.log_dir,
        filename=args.log_name,
        silent_mode=args.silent_mode
    )

    handler = getattr(args, "cmd_handler", None)
    if handler is None:
        parser.print_help()
        return 1

    name = args.cmd_name
    log.debug(f"Running {name} with {vars(args)}")
    start = time.time()
    try:
        handler(args)
    except Exception as exc:
        log.exception(f"{name} failed, see the traceback below")
        print(f"ERROR: {name} failed, showing the last error")
        traceback.print_exception(exc, chain=False)
        return 1

    log.info(f"{name} finished successfully; execution took {time.time() - start:.2f} s")
    return 0


def run():
    """
    Entry point of the `callkit` console script and `python -m callkit`.
    """
    sys.exit(main(Cli().parser, sys.argv[1:]))
