"""Module with definitions of classes used by CLI."""

__all__ = ["BaseCommand", "Group", "Option"]

import abc
import argparse
from typing import Any


class Option:
    """
    A reusable option, added the same way to any parser or argument group.

    :param args: Either a name or a list of options strings, e.g., 'foo' or '-f, --foo'
    :param kwargs: Any combination of named arguments accepted by argparse.add_argument().
    """

    def __init__(self, *args: str, **kwargs: Any):
        self.args: tuple[str, ...] = args
        self.kwargs: dict[str, Any] = kwargs

    def add_to_parser(self, parser: argparse.ArgumentParser | argparse._ArgumentGroup):
        parser.add_argument(*self.args, **self.kwargs)


class Group:
    """
    A reusable argument group, shared by several subcommands.

    :param name: Name of the group.
    :param description: Description of the group.
    :param required: If set, the options of the group are required. Only used for mutually exclusive groups.
    :param is_mutually_exclusive: If set, only one of the group's options can be given.
    """
    def __init__(
        self,
        name: str | None = None,
        description: str | None = None,
        is_mutually_exclusive: bool = False,
        required: bool = False,
    ):
        self.name = name
        self.description = description
        self.is_mutually_exclusive = is_mutually_exclusive
        self.required = required
        self.options: list[Option] = []

    def add_argument(self, *args: Any, **kwargs: Any):
        self.options.append(Option(*args, **kwargs))

    def add_to_parser(self, parser: argparse.ArgumentParser) -> None:
        group: argparse._ArgumentGroup
        if self.is_mutually_exclusive:
            group = parser.add_mutually_exclusive_group(required=self.required)
        else:
            group = parser.add_argument_group(title=self.name, description=self.description)
        for option in self.options:
            option.add_to_parser(group)


class BaseCommand(abc.ABC):
    """
    A CLI subcommand. All subcommands inherit from this class and are found by the Cli automatically,
    as long as the module defines a class named Command.

    :param parser: The subcommand's own argument parser.
    """
    name: str | None = None
    """
    Name of the subcommand.
    """

    description: str | None = None
    """
    The subcommand's help string. If not given, __doc__ will be used.
    """

    def __init__(self, parser: argparse.ArgumentParser):
        self.add_arguments(parser)

    @abc.abstractmethod
    def add_arguments(self, parser: argparse.ArgumentParser):
        """
        Add arguments to the subcommand's argument parser.

        :param parser: The parser to add arguments to
        """

    @abc.abstractmethod
    def execute(self, arguments: argparse.Namespace):
        """
        Execute the command.

        :param arguments: The namespace with arguments and their values.
        """

    @classmethod
    def register_to(cls, subparsers: argparse._SubParsersAction, name: str | None):
        """
        Register the subcommand's parser with the main command parser.

        :param subparsers: argparse object representing subparsers.
        :param name: Name of the subcommand. Falls back to the class attribute 'name'.
        """
        cmd_name = name or cls.name
        help_text = cls.description or cls.__doc__
        parser = subparsers.add_parser(cmd_name, description=help_text, help=help_text)
        command = cls(parser)
        parser.set_defaults(cmd_handler=command.execute)
        parser.set_defaults(cmd_name=cmd_name)
