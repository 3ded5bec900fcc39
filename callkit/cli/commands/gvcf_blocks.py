"""
Command line interface for compressing reference sites into gVCF blocks
"""

import argparse

from ...gvcf_blocks import gvcf_blocks_runner
from .base import BaseCommand
from .options import output_group, config_option


class Command(BaseCommand):
    """
    Merge runs of similar reference sites into blocks, using the block tolerances from the config.
    """
    name = "gvcf-blocks"
    description = "Compress a table of sites into gVCF blocks."

    def add_arguments(self, parser: argparse.ArgumentParser):
        """
        Add the command's arguments to its parser

        :param parser: The parser to add arguments to
        """
        config_option.add_to_parser(parser)
        parser.add_argument('-i', '--sites',
                            type=str,
                            metavar="FILE",
                            dest="sites",
                            required=True,
                            help="Tab separated site table(.gz): "
                                 "chrom pos ref kind gqx dpu dpf nonref ploidy filters [eligible]")
        output_group.add_to_parser(parser)

    def execute(self, arguments: argparse.Namespace):
        gvcf_blocks_runner(
            arguments.config,
            arguments.sites,
            arguments.output_dir,
            arguments.prefix
        )
