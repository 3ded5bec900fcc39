"""
The key identifying a single indel allele relative to the reference.
"""

__all__ = [
    "IndelKey"
]

from Bio.Seq import Seq


class IndelKey:
    """
    An insertion, deletion, or combination of both (a complex indel) at a reference position.

    :param pos: 0-based reference position of the first affected base. For an insertion this is the base
        the new sequence is inserted in front of; for a deletion it is the first deleted base.
    :param deletion_length: Number of reference bases removed.
    :param insert_sequence: The inserted bases (no padding base).
    """

    def __init__(self,
                 pos: int,
                 deletion_length: int = 0,
                 insert_sequence: str | Seq = ""):
        self.pos = pos
        self.deletion_length = deletion_length
        self.insert_sequence = str(insert_sequence).upper()

    @classmethod
    def from_vcf_alleles(cls, pos: int, ref: str | Seq, alt: str | Seq) -> "IndelKey":
        """
        Build a key from a VCF-style REF/ALT pair, trimming the bases the alleles share.

        :param pos: The 1-based VCF position of the first base of ref
        :param ref: The reference allele, including any padding base
        :param alt: The alternate allele, including any padding base
        :return: The IndelKey for the allele
        """
        ref = str(ref).upper()
        alt = str(alt).upper()

        # shared suffix first, so a left-padded allele keeps its padding base for the prefix trim
        while len(ref) > 0 and len(alt) > 0 and ref[-1] == alt[-1]:
            ref = ref[:-1]
            alt = alt[:-1]
        prefix = 0
        while prefix < len(ref) and prefix < len(alt) and ref[prefix] == alt[prefix]:
            prefix += 1

        # 1-based pos of the first ref base is its 0-based index + 1
        return cls(pos - 1 + prefix, len(ref) - prefix, alt[prefix:])

    @property
    def insert_length(self) -> int:
        return len(self.insert_sequence)

    @property
    def is_insertion(self) -> bool:
        return self.insert_length > 0 and self.deletion_length == 0

    @property
    def is_deletion(self) -> bool:
        return self.deletion_length > 0 and self.insert_length == 0

    @property
    def is_complex(self) -> bool:
        return not (self.is_insertion or self.is_deletion)

    def __eq__(self, other):
        if isinstance(other, IndelKey):
            return (self.pos == other.pos and self.deletion_length == other.deletion_length
                    and self.insert_sequence == other.insert_sequence)
        return False

    def __hash__(self):
        return hash((self.pos, self.deletion_length, self.insert_sequence))

    def __repr__(self):
        return f'{self.__class__.__name__}({self.pos}, {self.deletion_length}, {self.insert_sequence!r})'
