"""
Log-linear indel error curve for one repeat unit size, used by the adaptive indel error models.
"""

__all__ = [
    "AdaptiveIndelErrorModelLogParams",
    "AdaptiveIndelErrorModel"
]

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class AdaptiveIndelErrorModelLogParams:
    """
    Natural-log rates at one end of the curve

    :param log_error_rate: log of the indel error rate
    :param log_noisy_locus_rate: log of the rate at which a locus of this context is noisy
    """
    log_error_rate: float = 0.0
    log_noisy_locus_rate: float = 0.0


class AdaptiveIndelErrorModel:
    """
    Interpolates error rates between a low point at repeat count 2 and a high plateau, linearly in log space.

    Repeat count 1 (the non-STR state) is not covered by the curve; callers hold a separate constant for it.

    :param repeat_pattern_size: The repeat unit length this curve describes
    :param high_repeat_count: Repeat count at which the high rates are reached and held
    :param low_log_params: log rates at repeat count 2
    :param high_log_params: log rates at high_repeat_count and beyond
    """
    low_repeat_count = 2

    def __init__(self,
                 repeat_pattern_size: int,
                 high_repeat_count: int,
                 low_log_params: AdaptiveIndelErrorModelLogParams,
                 high_log_params: AdaptiveIndelErrorModelLogParams):
        assert high_repeat_count > self.low_repeat_count, \
            f"high repeat count must exceed {self.low_repeat_count} (got {high_repeat_count})"
        self.repeat_pattern_size = repeat_pattern_size
        self.high_repeat_count = high_repeat_count
        self.low_log_params = low_log_params
        self.high_log_params = high_log_params

    def error_rate(self, repeat_count: int) -> float:
        assert repeat_count > 1
        return self._interpolate(repeat_count,
                                 self.low_log_params.log_error_rate,
                                 self.high_log_params.log_error_rate)

    def noisy_locus_rate(self, repeat_count: int) -> float:
        assert repeat_count > 1
        return self._interpolate(repeat_count,
                                 self.low_log_params.log_noisy_locus_rate,
                                 self.high_log_params.log_noisy_locus_rate)

    def _interpolate(self, repeat_count: int, low_value: float, high_value: float) -> float:
        if repeat_count >= self.high_repeat_count:
            return float(np.exp(high_value))
        return float(np.exp(self.linear_fit(repeat_count, self.low_repeat_count, low_value,
                                            self.high_repeat_count, high_value)))

    @staticmethod
    def linear_fit(x: float, x1: float, y1: float, x2: float, y2: float) -> float:
        """Value at x of the line through (x1, y1) and (x2, y2)"""
        assert x1 != x2
        return ((y2 - y1) * x + (x2 * y1 - x1 * y2)) / (x2 - x1)
