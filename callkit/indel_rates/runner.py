"""
Writes out the indel error rate table of a configured model
"""

import logging

from pathlib import Path

from ..common import open_output, INDEL_RATE_COLUMNS, OUTPUT_SUFFIXES
from ..common.options import Options
from ..models import IndelErrorModel

__all__ = [
    "indel_rates_runner"
]

_LOG = logging.getLogger(__name__)


def indel_rates_runner(
        config: str | Path | None,
        output_dir: str | Path,
        output_prefix: str,
        candidate: bool = False):
    """
    Build the indel error model and write its finalized rates as a table.

    :param config: The yaml config naming the model (and parameter file, if any). None uses the defaults.
    :param output_dir: The directory where to write files
    :param output_prefix: the prefix for filenames
    :param candidate: Write the candidate-generation table instead of the scoring table
    """
    options = Options.from_cli(output_dir, output_prefix, config)
    output_file = options.output_path(OUTPUT_SUFFIXES["indel-rates"])

    model = IndelErrorModel(options.indel_error_model_name, options.indel_error_model_file)
    rates = model.candidate_error_rates if candidate else model.error_rates
    table_name = "candidate" if candidate else "scoring"

    _LOG.info(f"Writing {table_name} indel error rates to {output_file}")
    rows_written = 0
    with open_output(output_file) as out:
        out.write('\t'.join(INDEL_RATE_COLUMNS) + '\n')
        for pattern_size, repeat_count, insertion_rate, deletion_rate in rates.iter_rates():
            out.write(f'{pattern_size}\t{repeat_count}\t{insertion_rate:.6g}\t{deletion_rate:.6g}\n')
            rows_written += 1

    _LOG.info(f"Wrote {rows_written} repeat contexts for up to pattern size {rates.max_repeating_pattern_size}")
