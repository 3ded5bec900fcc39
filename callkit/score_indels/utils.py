"""
Helper functions for reading the indels to score out of a VCF file.
"""

import logging
from pathlib import Path
from typing import Iterator

from ..common import open_input, InputFormatError

__all__ = [
    "read_vcf_indels",
    "is_indel_allele",
    "ReferenceContigs"
]

_LOG = logging.getLogger(__name__)


def is_indel_allele(ref: str, alt: str) -> bool:
    """
    True for sequence alleles whose length differs from the reference. Symbolic alleles, breakends,
    spanning deletions and missing alleles are not indels for scoring purposes.
    """
    if alt in ('.', '*') or alt.startswith('<') or '[' in alt or ']' in alt:
        return False
    return len(ref) != len(alt)


def read_vcf_indels(vcf_path: str | Path) -> Iterator[tuple[str, int, str, str]]:
    """
    Read every indel allele out of a VCF. Multi-allelic records yield one entry per indel allele.

    For reference, the VCF columns used here and their indices:
        CHROM [0]
        POS [1]
        REF [3]
        ALT [4]

    :param vcf_path: Path to the (optionally bgzipped) VCF
    :return: (chrom, 1-based pos, ref, alt) for each indel allele
    """
    _LOG.info(f"Reading indels from {vcf_path}")
    records = 0
    skipped = 0
    with open_input(vcf_path) as vcf:
        for line_number, line in enumerate(vcf, start=1):
            if line.startswith('#') or not line.strip():
                continue
            record = line.rstrip('\n').split('\t')
            if len(record) < 5:
                raise InputFormatError(f"VCF line {line_number} has fewer than 5 columns",
                                       {"file": str(vcf_path), "line": line_number})
            try:
                pos = int(record[1])
            except ValueError as err:
                raise InputFormatError(f"VCF line {line_number} has a non-integer position: {record[1]}",
                                       {"file": str(vcf_path), "line": line_number}) from err

            records += 1
            ref = record[3].upper()
            found = False
            for alt in record[4].split(','):
                alt = alt.upper()
                if is_indel_allele(ref, alt):
                    found = True
                    yield record[0], pos, ref, alt
            if not found:
                skipped += 1

    _LOG.debug(f"Read {records} VCF records, {skipped} had no indel alleles")


class ReferenceContigs:
    """
    Sequence access for a position sorted stream of indels. Only the contig currently being scored is
    held in memory, as one string, so each contig is read from the index once.

    :param reference_index: The reference, as returned by SeqIO.index
    """

    def __init__(self, reference_index):
        self.reference_index = reference_index
        self.chrom: str | None = None
        self.sequence: str = ""

    def __contains__(self, chrom: str) -> bool:
        return chrom in self.reference_index

    def get(self, chrom: str) -> str:
        """
        :param chrom: The contig name
        :return: The contig's sequence as a string
        """
        if chrom != self.chrom:
            _LOG.debug(f"Loading reference contig {chrom}")
            self.sequence = str(self.reference_index[chrom].seq)
            self.chrom = chrom
        return self.sequence
