import gzip
from pathlib import Path

import pytest
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord

from callkit.common import InputFormatError
from callkit.score_indels.utils import is_indel_allele, read_vcf_indels, ReferenceContigs

VCF = (
    "##fileformat=VCFv4.2\n"
    "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\n"
    "chr1\t3\t.\tg\tga\t50\tPASS\t.\n"
    "chr1\t10\t.\tC\tT\t50\tPASS\t.\n"
    "chr1\t15\t.\tACA\tA,T,<DEL>\t50\tPASS\t.\n"
    "\n"
    "chr2\t7\t.\tA\t*,ATT\t50\tPASS\t.\n"
)


def test_is_indel_allele():
    assert is_indel_allele("A", "AT")
    assert is_indel_allele("AT", "A")
    assert not is_indel_allele("A", "T")
    assert not is_indel_allele("A", "<DEL>")
    assert not is_indel_allele("A", "*")
    assert not is_indel_allele("A", ".")
    assert not is_indel_allele("A", "A[chr2:10[")


def test_read_vcf_indels(tmp_path: Path):
    vcf = tmp_path / "calls.vcf"
    vcf.write_text(VCF, encoding="utf-8")
    assert list(read_vcf_indels(vcf)) == [
        ("chr1", 3, "G", "GA"),
        ("chr1", 15, "ACA", "A"),
        ("chr1", 15, "ACA", "T"),
        ("chr2", 7, "A", "ATT"),
    ]


def test_read_compressed_vcf(tmp_path: Path):
    vcf = tmp_path / "calls.vcf.gz"
    with gzip.open(vcf, "wt", encoding="utf-8") as fh:
        fh.write(VCF)
    assert len(list(read_vcf_indels(vcf))) == 4


@pytest.mark.parametrize("line", [
    "chr1\t3\t.\tG\n",
    "chr1\tthree\t.\tG\tGA\t50\tPASS\t.\n",
])
def test_malformed_vcf_lines(tmp_path: Path, line: str):
    vcf = tmp_path / "bad.vcf"
    vcf.write_text("#CHROM\tPOS\tID\tREF\tALT\n" + line, encoding="utf-8")
    with pytest.raises(InputFormatError) as ei:
        list(read_vcf_indels(vcf))
    assert ei.value.details["line"] == 2


class CountingIndex(dict):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.lookups = []

    def __getitem__(self, chrom):
        self.lookups.append(chrom)
        return super().__getitem__(chrom)


def test_reference_contigs_loads_each_contig_once():
    index = CountingIndex({
        "chr1": SeqRecord(Seq("acgtAC"), id="chr1"),
        "chr2": SeqRecord(Seq("TTTT"), id="chr2"),
    })
    contigs = ReferenceContigs(index)
    assert "chr1" in contigs
    assert "chrUn" not in contigs
    for _ in range(5):
        assert contigs.get("chr1") == "acgtAC"
    assert contigs.get("chr2") == "TTTT"
    assert contigs.get("chr2") is contigs.get("chr2")
    assert index.lookups == ["chr1", "chr2"]
