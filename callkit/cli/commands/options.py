"""
Definitions of shared subcommand options.
"""

__all__ = ["output_group", "config_option"]

import os

from .base import Group, Option

output_group = Group("output", description="Where to write the output table")
output_group.add_argument(
    "-o",
    "--output_dir",
    dest="output_dir",
    type=str,
    help="Path to the output directory. Will create if not present.",
    default=os.getcwd()
)

output_group.add_argument(
    "-p",
    "--prefix",
    dest="prefix",
    type=str,
    help="Prefix to use to name files",
    default="callkit"
)

config_option = Option(
    "-c", "--config",
    metavar="config",
    dest="config",
    type=str,
    required=False,
    default=None,
    help="Path to the yaml configuration file. Built-in defaults are used if not given."
)
