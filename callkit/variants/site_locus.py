"""
Module with definitions of the site records handed to the gVCF output stage.
"""

__all__ = [
    "SiteSampleInfo",
    "GermlineSiteLocusInfo",
    "GermlineDiploidSiteLocusInfo",
    "GermlineContinuousSiteLocusInfo"
]

import abc


class SiteSampleInfo:
    """
    Per-sample values of a site that matter for block compression

    :param gqx: Genotype quality (GQX), or None when it is not defined for the site
    :param dpu: Unfiltered depth
    :param dpf: Filtered depth, i.e. reads removed by basecall/mapping filters
    :param is_nonref: True if the sample's call at this site is not a confident reference call
    :param ploidy: The ploidy of the call
    """

    def __init__(self,
                 gqx: int | None,
                 dpu: int,
                 dpf: int,
                 is_nonref: bool = False,
                 ploidy: int = 2):
        self.gqx = gqx
        self.dpu = dpu
        self.dpf = dpf
        self.is_nonref = is_nonref
        self.ploidy = ploidy

    @property
    def is_gqx_defined(self) -> bool:
        return self.gqx is not None

    def __repr__(self):
        return (f'{self.__class__.__name__}(gqx={self.gqx}, dpu={self.dpu}, dpf={self.dpf}, '
                f'is_nonref={self.is_nonref}, ploidy={self.ploidy})')


class GermlineSiteLocusInfo(abc.ABC):
    """
    A template for a single reference position as seen by the output stage.

    :param chrom: The contig name
    :param pos: The 1-based position of the site
    :param ref: The reference base
    :param samples: Per-sample values, indexed by sample
    :param filters: The set of filters applied to the site
    :param is_forced_output: Sites forced into the output are never compressed into blocks
    :param is_block_eligible: False for sites that must be written on their own (e.g. variant calls)
    """
    kind: str

    @abc.abstractmethod
    def __init__(self,
                 chrom: str,
                 pos: int,
                 ref: str,
                 samples: list[SiteSampleInfo],
                 filters: frozenset[str] | set[str] = frozenset(),
                 is_forced_output: bool = False,
                 is_block_eligible: bool = True):
        self.chrom = chrom
        self.pos = pos
        self.ref = ref
        self.samples = samples
        self.filters = frozenset(filters)
        self.is_forced_output = is_forced_output
        self.is_block_eligible = is_block_eligible

    def get_sample(self, sample_index: int) -> SiteSampleInfo:
        return self.samples[sample_index]

    def is_nonref(self, sample_index: int) -> bool:
        return self.samples[sample_index].is_nonref

    def __repr__(self):
        return f'{self.__class__.__name__}({self.chrom}:{self.pos}, {self.ref})'


class GermlineDiploidSiteLocusInfo(GermlineSiteLocusInfo):
    """
    A site called by the diploid (fixed ploidy) genotyper.
    """
    kind = "diploid"

    def __init__(self, chrom, pos, ref, samples, filters=frozenset(), is_forced_output=False,
                 is_block_eligible=True):
        super().__init__(chrom, pos, ref, samples, filters, is_forced_output, is_block_eligible)


class GermlineContinuousSiteLocusInfo(GermlineSiteLocusInfo):
    """
    A site called by the continuous-frequency caller, where ploidy is not modeled.
    """
    kind = "continuous"

    def __init__(self, chrom, pos, ref, samples, filters=frozenset(), is_forced_output=False,
                 is_block_eligible=True):
        super().__init__(chrom, pos, ref, samples, filters, is_forced_output, is_block_eligible)
