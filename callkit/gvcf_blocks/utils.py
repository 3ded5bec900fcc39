"""
Reading site tables and formatting the block compressor's output rows
"""

import logging
from pathlib import Path
from typing import Iterator

from ..common import open_input, InputFormatError, MISSING_VALUE, TRUE_STRINGS, SITE_COLUMNS
from ..gvcf import BlockSummary, StatSummary
from ..variants import SiteSampleInfo, GermlineSiteLocusInfo, GermlineDiploidSiteLocusInfo, \
    GermlineContinuousSiteLocusInfo

__all__ = [
    "read_site_table",
    "parse_site_line",
    "format_output_row"
]

_LOG = logging.getLogger(__name__)

SITE_KINDS = {
    GermlineDiploidSiteLocusInfo.kind: GermlineDiploidSiteLocusInfo,
    GermlineContinuousSiteLocusInfo.kind: GermlineContinuousSiteLocusInfo,
}


def parse_site_line(line: str) -> GermlineSiteLocusInfo:
    """
    Parse one row of a site table. Columns, tab separated:
        chrom pos ref kind gqx dpu dpf nonref ploidy filters [eligible]

    A "." gqx means GQX is not defined for the site; "." filters means no filters. Filters are separated
    by ";" as in a VCF FILTER column. The eligible column defaults to true.

    :param line: The table row
    :return: The site
    """
    fields = line.rstrip('\n').split('\t')
    if len(fields) not in (len(SITE_COLUMNS) - 1, len(SITE_COLUMNS)):
        raise InputFormatError(f"Expected {len(SITE_COLUMNS) - 1} or {len(SITE_COLUMNS)} columns, "
                               f"found {len(fields)}: {line.strip()}")

    chrom, pos, ref, kind, gqx, dpu, dpf, nonref, ploidy, filters = fields[:10]
    eligible = fields[10] if len(fields) > 10 else "true"

    if kind not in SITE_KINDS:
        raise InputFormatError(f"Unknown site kind '{kind}', must be one of {sorted(SITE_KINDS)}")
    try:
        sample = SiteSampleInfo(gqx=None if gqx == MISSING_VALUE else int(gqx),
                                dpu=int(dpu),
                                dpf=int(dpf),
                                is_nonref=nonref in TRUE_STRINGS,
                                ploidy=int(ploidy))
        pos = int(pos)
    except ValueError as err:
        raise InputFormatError(f"Non-integer value in site row: {line.strip()}") from err

    filter_set = frozenset() if filters in (MISSING_VALUE, "", "PASS") else frozenset(filters.split(';'))
    return SITE_KINDS[kind](chrom, pos, ref, [sample], filters=filter_set,
                            is_block_eligible=eligible in TRUE_STRINGS)


def read_site_table(sites_path: str | Path) -> Iterator[GermlineSiteLocusInfo]:
    """
    Read the sites of a (optionally bgzipped) site table, skipping the header and comment lines.

    :param sites_path: Path to the site table
    :return: The sites, in file order
    """
    with open_input(sites_path) as sites:
        for line_number, line in enumerate(sites, start=1):
            if not line.strip() or line.startswith('#') or line.startswith(SITE_COLUMNS[0] + '\t'):
                continue
            try:
                yield parse_site_line(line)
            except InputFormatError as err:
                raise InputFormatError(f"{sites_path} line {line_number}: {err}",
                                       {"file": str(sites_path), "line": line_number}) from err


def _format_filters(filters: frozenset) -> str:
    return ';'.join(sorted(filters)) if filters else "PASS"


def _format_stat(stat: StatSummary | None) -> list[str]:
    if stat is None:
        return [MISSING_VALUE] * 4
    return [f'{x:.2f}' if x == x else MISSING_VALUE for x in (stat.mean, stat.stddev, stat.min, stat.max)]


def format_output_row(record: BlockSummary | GermlineSiteLocusInfo, sample_index: int = 0) -> str:
    """
    One output table row. A single site is written as a block of one with its own values.

    :param record: A finished block or a pass-through site
    :param sample_index: The sample the blocks were built on
    :return: The tab separated row, with newline
    """
    if isinstance(record, BlockSummary):
        row = [record.chrom, str(record.pos), str(record.end), str(record.count),
               str(int(record.is_nonref)), _format_filters(record.filters), record.label]
        row += _format_stat(record.gqx) + _format_stat(record.dpu) + _format_stat(record.dpf)
    else:
        sample = record.get_sample(sample_index)
        row = [record.chrom, str(record.pos), str(record.pos), "1",
               str(int(sample.is_nonref)), _format_filters(record.filters), MISSING_VALUE]
        for value in (sample.gqx, sample.dpu, sample.dpf):
            single = MISSING_VALUE if value is None else f'{value:.2f}'
            row += [single, MISSING_VALUE, single, single]
    return '\t'.join(row) + '\n'
