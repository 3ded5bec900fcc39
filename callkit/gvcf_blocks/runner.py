"""
Compresses a table of sites into gVCF blocks
"""

import logging

from pathlib import Path

from .utils import read_site_table, format_output_row
from ..common import open_output, validate_input_path, BLOCK_COLUMNS, OUTPUT_SUFFIXES
from ..common.options import Options
from ..gvcf import compress_sites

__all__ = [
    "gvcf_blocks_runner"
]

_LOG = logging.getLogger(__name__)


def gvcf_blocks_runner(
        config: str | Path | None,
        sites: str | Path,
        output_dir: str | Path,
        output_prefix: str):
    """
    Read sites in position order and write one row per block or pass-through site.

    :param config: The yaml config with the block tolerances. None uses the defaults.
    :param sites: The site table to compress
    :param output_dir: The directory where to write files
    :param output_prefix: the prefix for filenames
    """
    validate_input_path(sites)
    options = Options.from_cli(output_dir, output_prefix, config)
    output_file = options.output_path(OUTPUT_SUFFIXES["gvcf-blocks"])

    _LOG.info(f"Compressing sites from {sites}")
    rows_written = 0
    with open_output(output_file) as out:
        out.write('\t'.join(BLOCK_COLUMNS) + '\n')
        for record in compress_sites(read_site_table(sites),
                                     options.block_percent_tol,
                                     options.block_abs_tol,
                                     options.block_label):
            out.write(format_output_row(record))
            rows_written += 1

    _LOG.info(f"Wrote {rows_written} rows to {output_file}")
