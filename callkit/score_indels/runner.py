"""
Scores the indels of a VCF with the indel error model
"""

import logging

from pathlib import Path

from Bio import SeqIO

from .utils import read_vcf_indels, ReferenceContigs
from ..common import open_output, validate_input_path, INDEL_SCORE_COLUMNS, OUTPUT_SUFFIXES, MISSING_VALUE
from ..common.options import Options
from ..models import IndelErrorModel, get_rate_type
from ..variants import IndelKey, get_allele_report_info

__all__ = [
    "score_indels_runner"
]

_LOG = logging.getLogger(__name__)


def score_indels_runner(
        config: str | Path | None,
        vcf: str | Path,
        reference: str | Path,
        output_dir: str | Path,
        output_prefix: str):
    """
    For each indel allele in the VCF, derive its repeat context from the reference and write the error
    probabilities from both the scoring and the candidate tables.

    :param config: The yaml config naming the model. None uses the defaults.
    :param vcf: The VCF of indels to score
    :param reference: The reference fasta the VCF was called against
    :param output_dir: The directory where to write files
    :param output_prefix: the prefix for filenames
    """
    validate_input_path(vcf)
    validate_input_path(reference)
    options = Options.from_cli(output_dir, output_prefix, config)
    output_file = options.output_path(OUTPUT_SUFFIXES["score-indels"])

    model = IndelErrorModel(options.indel_error_model_name, options.indel_error_model_file)

    _LOG.info(f"Indexing reference {reference}")
    reference_index = SeqIO.index(str(reference), 'fasta')

    scored = 0
    skipped = 0
    try:
        contigs = ReferenceContigs(reference_index)
        with open_output(output_file) as out:
            out.write('\t'.join(INDEL_SCORE_COLUMNS) + '\n')
            for chrom, pos, ref, alt in read_vcf_indels(vcf):
                if chrom not in contigs:
                    _LOG.warning(f"Skipping indel at {chrom}:{pos} because the chromosome is not in the reference")
                    skipped += 1
                    continue

                indel_key = IndelKey.from_vcf_alleles(pos, ref, alt)
                report_info = get_allele_report_info(indel_key, contigs.get(chrom))
                ref_to_indel, indel_to_ref = model.get_indel_error_rate(indel_key, report_info)
                candidate_ref_to_indel, candidate_indel_to_ref = model.get_indel_error_rate(
                    indel_key, report_info, is_candidate_rates=True)

                rate_type = get_rate_type(indel_key)
                indel_type = rate_type.name if rate_type is not None else "COMPLEX"
                row = [chrom, pos, ref, alt, indel_type,
                       report_info.repeat_unit or MISSING_VALUE,
                       report_info.ref_repeat_count, report_info.indel_repeat_count,
                       f'{ref_to_indel:.6g}', f'{indel_to_ref:.6g}',
                       f'{candidate_ref_to_indel:.6g}', f'{candidate_indel_to_ref:.6g}']
                out.write('\t'.join(str(x) for x in row) + '\n')
                scored += 1
    finally:
        reference_index.close()

    _LOG.info(f"Scored {scored} indel alleles ({skipped} skipped), written to {output_file}")
