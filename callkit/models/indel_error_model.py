"""
The indel error model. Given an indel and its repeat context, supplies the probability that the reference
was mis-called as the indel and the probability of the reverse error.

Two rate tables are built once, at construction:
    - the scoring table, from the configured model (a built-in model or a named model in a parameter file),
    - the candidate table, always the log-linear homopolymer ramp, used when deciding which indels are
      candidates at all. Keeping it fixed keeps candidate sensitivity the same whatever model is configured.
"""

__all__ = [
    "IndelErrorModelType",
    "IndelErrorModel",
    "get_log_linear_indel_error_model",
    "get_simplified_adaptive_parameters",
    "build_indel_error_rates",
    "get_rate_type"
]

import enum
import logging
from pathlib import Path

import numpy as np

from ..common import IndelErrorModelError
from ..variants import IndelKey, AlleleReportInfo
from .adaptive_indel_error_model import AdaptiveIndelErrorModel, AdaptiveIndelErrorModelLogParams
from .indel_error_rate_set import IndelErrorRateSet, IndelErrorRateType
from .indel_model_file import IndelErrorModelMetadata, load_indel_error_model_file
from .default_indel_error_model import *

_LOG = logging.getLogger(__name__)


class IndelErrorModelType(enum.Enum):
    """The ways a scoring rate table can be built"""
    LOG_LINEAR = "logLinear"
    ADAPTIVE_DEFAULT = "adaptiveDefault"
    FILE = "file"

    @classmethod
    def resolve(cls, model_name: str, model_file: Path | str | None) -> "IndelErrorModelType":
        """
        Pick the model type for a configured name and optional parameter file.

        :param model_name: The configured model name
        :param model_file: The configured parameter file, or None/empty for the built-in models
        :return: The model type
        """
        if model_file:
            return cls.FILE
        if model_name == cls.LOG_LINEAR.value:
            return cls.LOG_LINEAR
        if model_name == cls.ADAPTIVE_DEFAULT.value:
            return cls.ADAPTIVE_DEFAULT
        raise IndelErrorModelError(f"Unrecognized indel error model name: '{model_name}'", model_name)


def get_log_linear_indel_error_model() -> IndelErrorRateSet:
    """
    Simple log-linear error ramp as a function of homopolymer length.

    :return: Unfinalized rates for pattern size 1, repeat counts 1 to switch point + 1
    """
    rates = IndelErrorRateSet()
    switch_point = log_linear_repeat_count_switch_point

    for pattern_repeat_count in range(1, switch_point + 2):
        high_error_frac = min(pattern_repeat_count - 1, switch_point) / switch_point
        log_error_rate = (1. - high_error_frac) * log_linear_low_error_rate + high_error_frac * log_linear_high_error_rate
        error_rate = float(np.exp(log_error_rate))
        rates.add_rate(log_linear_repeating_pattern_size, pattern_repeat_count, error_rate, error_rate)

    return rates


def get_simplified_adaptive_parameters() -> IndelErrorRateSet:
    """
    A single rate for the non-STR state plus a log-linear ramp for each of homopolymers (lengths 2-16)
    and dinucleotide repeats (2-9 copies).

    :return: Unfinalized rates for pattern sizes 1 and 2
    """
    rates = IndelErrorRateSet()

    for repeating_pattern_size, log_low, log_high, switch_point in zip(adaptive_repeating_pattern_sizes,
                                                                      adaptive_log_low_error_rates,
                                                                      adaptive_log_high_error_rates,
                                                                      adaptive_repeat_count_switch_points):
        curve = AdaptiveIndelErrorModel(repeating_pattern_size,
                                        switch_point,
                                        AdaptiveIndelErrorModelLogParams(log_error_rate=log_low),
                                        AdaptiveIndelErrorModelLogParams(log_error_rate=log_high))

        rates.add_rate(repeating_pattern_size, 1, adaptive_non_str_rate, adaptive_non_str_rate)
        for pattern_repeat_count in range(2, switch_point + 1):
            error_rate = curve.error_rate(pattern_repeat_count)
            rates.add_rate(repeating_pattern_size, pattern_repeat_count, error_rate, error_rate)

    return rates


def build_indel_error_rates(model_name: str,
                            model_file: Path | str | None = None
                            ) -> tuple[IndelErrorRateSet, IndelErrorModelMetadata | None]:
    """
    Build and finalize the scoring rate table for the configured model.

    :param model_name: A built-in model name, or the name of a model inside model_file
    :param model_file: Optional parameter file
    :return: The finalized rates, and the file model's metadata (None for built-in models)
    """
    model_type = IndelErrorModelType.resolve(model_name, model_file)
    metadata = None

    if model_type == IndelErrorModelType.LOG_LINEAR:
        rates = get_log_linear_indel_error_model()
    elif model_type == IndelErrorModelType.ADAPTIVE_DEFAULT:
        rates = get_simplified_adaptive_parameters()
    else:
        metadata, rates = load_indel_error_model_file(model_file, model_name)

    try:
        rates.finalize_rates()
    except IndelErrorModelError as err:
        raise IndelErrorModelError(f"{err} (model '{model_name}')", model_name, model_file) from err

    _LOG.info(f"Using indel error model '{model_name}'" + (f" from {model_file}" if model_file else ""))
    return rates, metadata


def get_rate_type(indel_key: IndelKey) -> IndelErrorRateType | None:
    """
    :return: INSERT or DELETE for simple indels, None for complex ones
    """
    if indel_key.is_insertion:
        return IndelErrorRateType.INSERT
    if indel_key.is_deletion:
        return IndelErrorRateType.DELETE
    return None


class IndelErrorModel:
    """
    Indel error probabilities for variant scoring and candidate generation.

    :param model_name: "logLinear", "adaptiveDefault", or a model name in model_file
    :param model_file: Optional JSON parameter file of named models
    """

    def __init__(self,
                 model_name: str,
                 model_file: Path | str | None = None):
        self.model_name = model_name
        self.model_file = model_file
        self.error_rates, self.metadata = build_indel_error_rates(model_name, model_file)

        self.candidate_error_rates = get_log_linear_indel_error_model()
        self.candidate_error_rates.finalize_rates()

    def get_indel_error_rate(self,
                             indel_key: IndelKey,
                             allele_report_info: AlleleReportInfo,
                             is_candidate_rates: bool = False) -> tuple[float, float]:
        """
        Error probabilities for one indel allele.

        :param indel_key: The indel
        :param allele_report_info: The indel's repeat context
        :param is_candidate_rates: Query the candidate-generation table instead of the scoring table
        :return: (reference-to-indel error probability, indel-to-reference error probability)
        """
        error_rates = self.candidate_error_rates if is_candidate_rates else self.error_rates

        indel_type = get_rate_type(indel_key)
        if indel_type is None:
            # TODO: estimate complex indel rates; the baseline maximum is a conservative bound until then
            baseline_insertion_rate = error_rates.get_rate(1, 1, IndelErrorRateType.INSERT)
            baseline_deletion_rate = error_rates.get_rate(1, 1, IndelErrorRateType.DELETE)
            ref_to_indel_error_prob = max(baseline_insertion_rate, baseline_deletion_rate)
            return ref_to_indel_error_prob, ref_to_indel_error_prob

        repeating_pattern_size = max(allele_report_info.repeat_unit_length, 1)
        ref_pattern_repeat_count = max(allele_report_info.ref_repeat_count, 1)
        indel_pattern_repeat_count = max(allele_report_info.indel_repeat_count, 1)

        ref_to_indel_error_prob = error_rates.get_rate(repeating_pattern_size, ref_pattern_repeat_count, indel_type)
        indel_to_ref_error_prob = error_rates.get_rate(repeating_pattern_size, indel_pattern_repeat_count,
                                                       indel_type.reverse())
        return ref_to_indel_error_prob, indel_to_ref_error_prob
