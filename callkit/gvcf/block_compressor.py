"""
The gVCF output stage's use of block records: feed sites in position order, get back blocks and
the sites that have to be written on their own.
"""

__all__ = [
    "GvcfBlockCompressor",
    "compress_sites"
]

import logging
from typing import Iterable, Iterator

from ..common import DEFAULT_BLOCK_PERCENT_TOL, DEFAULT_BLOCK_ABS_TOL, DEFAULT_BLOCK_LABEL
from ..variants import GermlineSiteLocusInfo
from .block_site_record import GvcfBlockSiteRecord, BlockSummary

_LOG = logging.getLogger(__name__)


class GvcfBlockCompressor:
    """
    Compresses one sample's stream of sites into gVCF blocks.

    :param block_percent_tol: Relative join tolerance, in percent
    :param block_abs_tol: Absolute join tolerance
    :param block_label: Label attached to finished blocks
    :param sample_index: The sample to block on
    """

    def __init__(self,
                 block_percent_tol: int = DEFAULT_BLOCK_PERCENT_TOL,
                 block_abs_tol: int = DEFAULT_BLOCK_ABS_TOL,
                 block_label: str = DEFAULT_BLOCK_LABEL,
                 sample_index: int = 0):
        self.block = GvcfBlockSiteRecord(block_percent_tol, block_abs_tol, block_label)
        self.sample_index = sample_index
        self.blocks_written = 0
        self.sites_written = 0

    def add_site(self, locus: GermlineSiteLocusInfo) -> list[BlockSummary | GermlineSiteLocusInfo]:
        """
        Add the next site of the stream.

        :param locus: The next site, in position order
        :return: Records that are complete and can be written, in position order
        """
        ready = []
        if not locus.is_block_eligible or locus.is_forced_output:
            ready.extend(self.flush())
            ready.append(locus)
            self.sites_written += 1
            return ready

        if not self.block.test_can_site_join_sample_block(locus, self.sample_index):
            ready.extend(self.flush())
        self.block.join_site_to_sample_block(locus, self.sample_index)
        return ready

    def flush(self) -> list[BlockSummary]:
        """
        Close out the current block, if there is one.
        """
        if self.block.count == 0:
            return []
        summary = self.block.summarize()
        _LOG.debug(f"gVCF block {summary.chrom}:{summary.pos}-{summary.end} ({summary.count} sites)")
        self.block.reset()
        self.blocks_written += 1
        return [summary]


def compress_sites(sites: Iterable[GermlineSiteLocusInfo],
                   block_percent_tol: int = DEFAULT_BLOCK_PERCENT_TOL,
                   block_abs_tol: int = DEFAULT_BLOCK_ABS_TOL,
                   block_label: str = DEFAULT_BLOCK_LABEL,
                   sample_index: int = 0) -> Iterator[BlockSummary | GermlineSiteLocusInfo]:
    """
    Compress a whole stream of sites.

    :param sites: Sites in position order
    :param block_percent_tol: Relative join tolerance, in percent
    :param block_abs_tol: Absolute join tolerance
    :param block_label: Label attached to finished blocks
    :param sample_index: The sample to block on
    :return: Blocks and pass-through sites, in position order
    """
    compressor = GvcfBlockCompressor(block_percent_tol, block_abs_tol, block_label, sample_index)
    for locus in sites:
        yield from compressor.add_site(locus)
    yield from compressor.flush()
    _LOG.info(f"Wrote {compressor.blocks_written} gVCF blocks and {compressor.sites_written} single sites")
