"""
Command line interface for writing out an indel error model's rate table
"""

import argparse

from ...indel_rates import indel_rates_runner
from .base import BaseCommand
from .options import output_group, config_option


class Command(BaseCommand):
    """
    Build the configured indel error model and write its rates for every repeat context it defines.
    """
    name = "indel-rates"
    description = "Write the indel error rate table of the configured model."

    def add_arguments(self, parser: argparse.ArgumentParser):
        """
        Add the command's arguments to its parser

        :param parser: The parser to add arguments to
        """
        config_option.add_to_parser(parser)
        parser.add_argument('--candidate',
                            required=False,
                            action='store_true',
                            default=False,
                            help="Write the candidate-generation table (always the log-linear model) "
                                 "instead of the scoring table.")
        output_group.add_to_parser(parser)

    def execute(self, arguments: argparse.Namespace):
        indel_rates_runner(
            arguments.config,
            arguments.output_dir,
            arguments.prefix,
            arguments.candidate
        )
