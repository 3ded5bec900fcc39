"""
Manages the compressed site record blocks of a gVCF.

Runs of reference sites with similar quality and depth are written as a single record. A
GvcfBlockSiteRecord accumulates the current run; the output stage asks whether each new site can join,
and either joins it or writes the block out (via summarize()) and resets.
"""

__all__ = [
    "StatSummary",
    "BlockSummary",
    "GvcfBlockSiteRecord"
]

import logging
from dataclasses import dataclass

from ..common import StreamStat, DEFAULT_BLOCK_PERCENT_TOL, DEFAULT_BLOCK_ABS_TOL, DEFAULT_BLOCK_LABEL
from ..variants import GermlineSiteLocusInfo, GermlineDiploidSiteLocusInfo, GermlineContinuousSiteLocusInfo

_LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatSummary:
    mean: float
    stddev: float
    min: float
    max: float

    @classmethod
    def from_stream_stat(cls, stat: StreamStat) -> "StatSummary":
        return cls(stat.mean(), stat.stddev(), stat.min(), stat.max())


@dataclass(frozen=True)
class BlockSummary:
    """
    A finished block, ready to be written out.

    :param chrom: Contig of the block
    :param pos: Position of the first site in the block
    :param end: Position of the last site in the block
    :param count: Number of sites in the block
    :param is_nonref: Whether the block's sites are non-reference
    :param filters: Filters shared by every site in the block
    :param label: The block label, describing the tolerances used to build it
    :param gqx: GQX statistics, or None if the block was built without GQX
    :param dpu: Unfiltered depth statistics
    :param dpf: Filtered depth statistics
    """
    chrom: str
    pos: int
    end: int
    count: int
    is_nonref: bool
    filters: frozenset
    label: str
    gqx: StatSummary | None
    dpu: StatSummary
    dpf: StatSummary


class GvcfBlockSiteRecord:
    """
    The running block for one sample of the output stream.

    :param block_percent_tol: Relative join tolerance, in percent of the block mean
    :param block_abs_tol: Absolute join tolerance
    :param block_label: Label attached to finished blocks
    """

    def __init__(self,
                 block_percent_tol: int = DEFAULT_BLOCK_PERCENT_TOL,
                 block_abs_tol: int = DEFAULT_BLOCK_ABS_TOL,
                 block_label: str = DEFAULT_BLOCK_LABEL):
        self.frac_tol = block_percent_tol / 100.
        self.abs_tol = block_abs_tol
        self.block_label = block_label

        self.block_gqx = StreamStat()
        self.block_dpu = StreamStat()
        self.block_dpf = StreamStat()
        self.reset()

    def reset(self):
        self.count = 0
        self.block_gqx.reset()
        self.block_dpu.reset()
        self.block_dpf.reset()
        self.pos = -1
        self.chrom: str | None = None
        self.filters: frozenset = frozenset()
        self.ploidy: int | None = None
        self.kind: str | None = None
        self.is_block_gqx_defined = False
        self._is_nonref = False

    def is_nonref(self) -> bool:
        return self._is_nonref

    def is_within_tolerance(self, value: float, stat: StreamStat) -> bool:
        """
        Check a new value against the block mean. The allowed band is the larger of the relative and the
        absolute tolerance.

        :param value: The candidate site's value
        :param stat: The block's running statistics for that value
        :return: True if the value is close enough to the block mean
        """
        if stat.empty():
            return True
        block_mean = stat.mean()
        return abs(value - block_mean) <= max(self.frac_tol * block_mean, self.abs_tol)

    def _test_can_site_join_sample_block_shared(self, locus: GermlineSiteLocusInfo, sample_index: int) -> bool:
        """
        Checks common to every site kind.

        :return: False if the site cannot join; True only means the kind-specific checks should run next
        """
        if locus.is_forced_output:
            return False
        if self.count == 0:
            return True

        # the site must extend the block by exactly one position
        if locus.chrom != self.chrom or locus.pos != self.pos + self.count:
            return False
        if locus.filters != self.filters:
            return False

        sample = locus.get_sample(sample_index)
        if sample.is_nonref != self._is_nonref:
            return False

        if self.is_block_gqx_defined:
            if not sample.is_gqx_defined:
                return False
            if not self.is_within_tolerance(sample.gqx, self.block_gqx):
                return False
        return True

    def _test_depths(self, locus: GermlineSiteLocusInfo, sample_index: int) -> bool:
        sample = locus.get_sample(sample_index)
        return (self.is_within_tolerance(sample.dpu, self.block_dpu)
                and self.is_within_tolerance(sample.dpf, self.block_dpf))

    def test_can_site_join_sample_block(self, locus: GermlineSiteLocusInfo, sample_index: int = 0) -> bool:
        """
        Determine if the given site could be joined to this block.

        The caller is expected to pass only block-eligible sites.

        :param locus: The candidate site
        :param sample_index: The sample being blocked
        :return: True if the site can be merged into the current block
        """
        if not self._test_can_site_join_sample_block_shared(locus, sample_index):
            return False
        if self.count == 0:
            return True

        if isinstance(locus, GermlineDiploidSiteLocusInfo):
            if self.kind != GermlineDiploidSiteLocusInfo.kind:
                return False
            if locus.get_sample(sample_index).ploidy != self.ploidy:
                return False
            return self._test_depths(locus, sample_index)

        if isinstance(locus, GermlineContinuousSiteLocusInfo):
            if self.kind != GermlineContinuousSiteLocusInfo.kind:
                return False
            return self._test_depths(locus, sample_index)

        _LOG.warning(f"Unknown site type {type(locus).__name__} cannot join a gVCF block")
        return False

    def join_site_to_sample_block(self, locus: GermlineSiteLocusInfo, sample_index: int = 0):
        """
        Add a site to the current block. The block keeps the first site's position as its start.

        :param locus: The site to add
        :param sample_index: The sample being blocked
        """
        sample = locus.get_sample(sample_index)
        if self.count == 0:
            self.pos = locus.pos
            self.chrom = locus.chrom
            self.filters = locus.filters
            self.ploidy = sample.ploidy
            self.kind = locus.kind
            self.is_block_gqx_defined = sample.is_gqx_defined
            self._is_nonref = sample.is_nonref

        self.count += 1
        if self.is_block_gqx_defined:
            self.block_gqx.add(sample.gqx)
        self.block_dpu.add(sample.dpu)
        self.block_dpf.add(sample.dpf)

    def summarize(self) -> BlockSummary:
        """
        The finished block. Only valid on a block holding at least one site.
        """
        assert self.count > 0, "cannot summarize an empty gVCF block"
        return BlockSummary(
            chrom=self.chrom,
            pos=self.pos,
            end=self.pos + self.count - 1,
            count=self.count,
            is_nonref=self._is_nonref,
            filters=self.filters,
            label=self.block_label,
            gqx=StatSummary.from_stream_stat(self.block_gqx) if self.is_block_gqx_defined else None,
            dpu=StatSummary.from_stream_stat(self.block_dpu),
            dpf=StatSummary.from_stream_stat(self.block_dpf),
        )
