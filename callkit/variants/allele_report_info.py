"""
Repeat context of an indel allele: the repeating unit of the inserted or deleted sequence and how many
copies of that unit sit in the reference and in the indel haplotype.
"""

__all__ = [
    "AlleleReportInfo",
    "get_allele_report_info",
    "get_repeat_unit"
]

import logging

from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord

from .indel_key import IndelKey

_LOG = logging.getLogger(__name__)


class AlleleReportInfo:
    """
    Summary of an indel's short tandem repeat context.

    :param repeat_unit: The minimal repeating unit of the indel sequence, e.g. "A" or "CA"
    :param repeat_unit_length: Length of repeat_unit
    :param ref_repeat_count: Contiguous copies of the unit in the reference at the indel
    :param indel_repeat_count: Contiguous copies of the unit on the indel haplotype
    """

    def __init__(self,
                 repeat_unit: str = "",
                 repeat_unit_length: int = 0,
                 ref_repeat_count: int = 0,
                 indel_repeat_count: int = 0):
        self.repeat_unit = repeat_unit
        self.repeat_unit_length = repeat_unit_length
        self.ref_repeat_count = ref_repeat_count
        self.indel_repeat_count = indel_repeat_count

    def __eq__(self, other):
        if isinstance(other, AlleleReportInfo):
            return (self.repeat_unit, self.repeat_unit_length, self.ref_repeat_count, self.indel_repeat_count) == \
                (other.repeat_unit, other.repeat_unit_length, other.ref_repeat_count, other.indel_repeat_count)
        return False

    def __repr__(self):
        return (f'{self.__class__.__name__}({self.repeat_unit!r}, {self.repeat_unit_length}, '
                f'{self.ref_repeat_count}, {self.indel_repeat_count})')


def get_repeat_unit(sequence: str) -> str:
    """
    Find the shortest unit that tiles the sequence exactly, e.g. "CACACA" -> "CA", "ACG" -> "ACG".

    :param sequence: A non-empty sequence
    :return: The minimal repeating unit
    """
    length = len(sequence)
    for unit_length in range(1, length + 1):
        if length % unit_length:
            continue
        unit = sequence[:unit_length]
        if unit * (length // unit_length) == sequence:
            return unit
    return sequence


def _count_units_left(reference: str, end: int, unit: str) -> int:
    """Copies of unit ending exactly at (exclusive) position end"""
    count = 0
    unit_length = len(unit)
    while end - unit_length >= 0 and reference[end - unit_length:end].upper() == unit:
        count += 1
        end -= unit_length
    return count


def _count_units_right(reference: str, start: int, unit: str) -> int:
    """Copies of unit starting exactly at position start"""
    count = 0
    unit_length = len(unit)
    while start + unit_length <= len(reference) and reference[start:start + unit_length].upper() == unit:
        count += 1
        start += unit_length
    return count


def get_allele_report_info(indel_key: IndelKey, reference: str | Seq | SeqRecord) -> AlleleReportInfo:
    """
    Derive the repeat context of a simple insertion or deletion from the reference sequence.

    Complex indels have no single repeat unit, so they get an empty report; the error model treats
    them separately.

    Only the bases around the indel are read, compared case-insensitively, so a contig string can be
    reused for every indel on the contig without being copied.

    :param indel_key: The indel to describe
    :param reference: The reference sequence for the indel's contig
    :return: The repeat context of the indel
    """
    if isinstance(reference, SeqRecord):
        reference = reference.seq
    if not isinstance(reference, str):
        reference = str(reference)

    if indel_key.is_complex:
        return AlleleReportInfo()

    if indel_key.is_insertion:
        indel_sequence = indel_key.insert_sequence
    else:
        indel_sequence = reference[indel_key.pos:indel_key.pos + indel_key.deletion_length].upper()
        if len(indel_sequence) != indel_key.deletion_length:
            _LOG.warning(f"Deletion {indel_key} runs off the end of the reference")
            if not indel_sequence:
                return AlleleReportInfo()

    unit = get_repeat_unit(indel_sequence)
    unit_length = len(unit)
    indel_units = len(indel_sequence) // unit_length

    # For a deletion the deleted bases are themselves copies of the unit, so counting right from the
    # indel position includes them.
    ref_repeat_count = (_count_units_left(reference, indel_key.pos, unit)
                        + _count_units_right(reference, indel_key.pos, unit))

    if indel_key.is_insertion:
        indel_repeat_count = ref_repeat_count + indel_units
    else:
        indel_repeat_count = max(ref_repeat_count - indel_units, 0)

    return AlleleReportInfo(unit, unit_length, ref_repeat_count, indel_repeat_count)
