"""
Command line interface for scoring the indels of a VCF with the indel error model
"""

import argparse

from ...score_indels import score_indels_runner
from .base import BaseCommand
from .options import output_group, config_option


class Command(BaseCommand):
    """
    Look up the reference-to-indel and indel-to-reference error probabilities of every indel in a VCF.
    The repeat context of each indel is read from the reference fasta.
    """
    name = "score-indels"
    description = "Score the indels of a VCF with the configured indel error model."

    def add_arguments(self, parser: argparse.ArgumentParser):
        """
        Add the command's arguments to its parser

        :param parser: The parser to add arguments to
        """
        config_option.add_to_parser(parser)
        parser.add_argument('-v', '--vcf',
                            type=str,
                            metavar="VCF",
                            dest="vcf",
                            required=True,
                            help="VCF(.gz) of indels to score")
        parser.add_argument('-r', '--reference',
                            type=str,
                            metavar="FASTA",
                            dest="reference",
                            required=True,
                            help="Reference fasta the VCF was called against")
        output_group.add_to_parser(parser)

    def execute(self, arguments: argparse.Namespace):
        score_indels_runner(
            arguments.config,
            arguments.vcf,
            arguments.reference,
            arguments.output_dir,
            arguments.prefix
        )
