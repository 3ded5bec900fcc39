import pytest

from callkit.common import InputFormatError
from callkit.gvcf import compress_sites
from callkit.gvcf_blocks.utils import parse_site_line, read_site_table, format_output_row
from callkit.variants import GermlineDiploidSiteLocusInfo, GermlineContinuousSiteLocusInfo

SITE_TABLE = (
    "chrom\tpos\tref\tkind\tgqx\tdpu\tdpf\tnonref\tploidy\tfilters\teligible\n"
    "# comment\n"
    "chr1\t100\tA\tdiploid\t30\t30\t0\t0\t2\tPASS\n"
    "chr1\t101\tC\tdiploid\t32\t30\t0\t0\t2\t.\n"
    "\n"
    "chr1\t102\tG\tdiploid\t.\t12\t1\t1\t2\tLowGQX\tfalse\n"
)


def test_parse_site_line_defaults():
    locus = parse_site_line("chr1\t100\tA\tdiploid\t.\t30\t2\t0\t2\t.")
    assert isinstance(locus, GermlineDiploidSiteLocusInfo)
    assert (locus.chrom, locus.pos, locus.ref) == ("chr1", 100, "A")
    sample = locus.get_sample(0)
    assert sample.gqx is None
    assert (sample.dpu, sample.dpf, sample.ploidy) == (30, 2, 2)
    assert not sample.is_nonref
    assert locus.filters == frozenset()
    assert locus.is_block_eligible


def test_parse_site_line_all_columns():
    locus = parse_site_line("chr2\t7\tT\tcontinuous\t15\t8\t0\ttrue\t1\tLowGQX;LowDepth\tfalse\n")
    assert isinstance(locus, GermlineContinuousSiteLocusInfo)
    assert locus.get_sample(0).gqx == 15
    assert locus.is_nonref(0)
    assert locus.filters == frozenset({"LowGQX", "LowDepth"})
    assert not locus.is_block_eligible


@pytest.mark.parametrize("line", [
    "chr1\t100\tA\tdiploid\t30\t30\t0\t0\t2",
    "chr1\t100\tA\thaploid\t30\t30\t0\t0\t2\t.",
    "chr1\tabc\tA\tdiploid\t30\t30\t0\t0\t2\t.",
    "chr1\t100\tA\tdiploid\t30\t3.5\t0\t0\t2\t.",
])
def test_parse_site_line_errors(line):
    with pytest.raises(InputFormatError):
        parse_site_line(line)


def test_read_site_table_skips_header_comments_and_blanks(tmp_path):
    path = tmp_path / "sites.tsv"
    path.write_text(SITE_TABLE, encoding="utf-8")
    sites = list(read_site_table(path))
    assert [s.pos for s in sites] == [100, 101, 102]


def test_read_site_table_reports_line_number(tmp_path):
    path = tmp_path / "sites.tsv"
    path.write_text("chr1\t100\tA\tdiploid\t30\t30\t0\t0\t2\t.\nchr1\tbad\n", encoding="utf-8")
    with pytest.raises(InputFormatError) as ei:
        list(read_site_table(path))
    assert ei.value.details["line"] == 2


def test_format_output_rows(tmp_path):
    path = tmp_path / "sites.tsv"
    path.write_text(SITE_TABLE, encoding="utf-8")
    rows = [format_output_row(record) for record in compress_sites(read_site_table(path))]
    assert rows == [
        "chr1\t100\t101\t2\t0\tPASS\tBLOCKAVG_min30p3a\t"
        "31.00\t1.41\t30.00\t32.00\t30.00\t0.00\t30.00\t30.00\t0.00\t0.00\t0.00\t0.00\n",
        "chr1\t102\t102\t1\t1\tLowGQX\t.\t"
        ".\t.\t.\t.\t12.00\t.\t12.00\t12.00\t1.00\t.\t1.00\t1.00\n",
    ]


def test_format_single_site_block():
    record = next(compress_sites([parse_site_line("chr1\t5\tA\tdiploid\t.\t10\t0\t0\t2\t.")]))
    fields = format_output_row(record).rstrip("\n").split("\t")
    assert fields[:7] == ["chr1", "5", "5", "1", "0", "PASS", "BLOCKAVG_min30p3a"]
    assert fields[7:11] == [".", ".", ".", "."]
    assert fields[11:15] == ["10.00", ".", "10.00", "10.00"]
