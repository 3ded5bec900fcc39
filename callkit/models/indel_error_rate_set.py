"""
Storage for indel error rates indexed by repeat context.

Rates are added one (pattern size, repeat count) entry at a time, then finalized into a dense, read-only
array so that every lookup is a clamped index into that array.
"""

__all__ = [
    "IndelErrorRateType",
    "IndelErrorRateSet"
]

import enum
import logging
from typing import Iterator

import numpy as np

from ..common import IndelErrorModelError

_LOG = logging.getLogger(__name__)


class IndelErrorRateType(enum.IntEnum):
    """Which error rate to look up. The value is the column in the finalized rate array."""
    INSERT = 0
    DELETE = 1

    def reverse(self) -> "IndelErrorRateType":
        """The opposite indel type, used for the indel-to-reference direction."""
        return IndelErrorRateType.DELETE if self == IndelErrorRateType.INSERT else IndelErrorRateType.INSERT


class IndelErrorRateSet:
    """
    Insertion and deletion error rates for each repeating pattern size and pattern repeat count.

    The pattern size is the length of the repeat unit (1 for homopolymers, 2 for dinucleotide repeats, ...)
    and the repeat count is the number of contiguous copies of that unit. A repeat count of 1 is the
    non-STR context.

    After finalize_rates():
        - repeat counts above a pattern size's largest entry get that entry's rate (the plateau),
        - a missing repeat count takes the rate of the nearest smaller count present, or the nearest larger
          one if nothing smaller exists,
        - a pattern size with no entries, or above the largest pattern size, uses the non-STR rate at (1, 1).
    """

    def __init__(self):
        self._starting_rates: dict[tuple[int, int], tuple[float, float]] = {}
        self._rates: np.ndarray | None = None
        self._max_repeat_counts: np.ndarray | None = None

    @property
    def is_finalized(self) -> bool:
        return self._rates is not None

    def add_rate(self,
                 repeating_pattern_size: int,
                 pattern_repeat_count: int,
                 insertion_error_rate: float,
                 deletion_error_rate: float):
        """
        Record the rates for one repeat context. Adding the same context again overwrites it.

        :param repeating_pattern_size: Repeat unit length, at least 1
        :param pattern_repeat_count: Number of copies of the unit, at least 1
        :param insertion_error_rate: Probability of an insertion error in this context
        :param deletion_error_rate: Probability of a deletion error in this context
        """
        assert not self.is_finalized, "rates cannot be added after finalize_rates()"
        assert repeating_pattern_size > 0 and pattern_repeat_count > 0
        self._starting_rates[(repeating_pattern_size, pattern_repeat_count)] = \
            (float(insertion_error_rate), float(deletion_error_rate))

    def finalize_rates(self):
        """
        Fill gaps and build the lookup array. Must be called exactly once, before any get_rate call.
        """
        assert not self.is_finalized, "finalize_rates() called twice"
        if (1, 1) not in self._starting_rates:
            raise IndelErrorModelError("Indel error rates must define the non-STR context "
                                       "(pattern size 1, repeat count 1)")

        max_pattern_size = max(size for size, _ in self._starting_rates)
        max_repeat_count = max(count for _, count in self._starting_rates)

        rates = np.zeros((max_pattern_size, max_repeat_count, 2), dtype=float)
        max_repeat_counts = np.zeros(max_pattern_size, dtype=int)
        non_str_rate = self._starting_rates[(1, 1)]

        for pattern_size in range(1, max_pattern_size + 1):
            counts = sorted(count for size, count in self._starting_rates if size == pattern_size)
            if not counts:
                _LOG.debug(f"No indel error rates for pattern size {pattern_size}, using the non-STR rate")
                rates[pattern_size - 1, :, :] = non_str_rate
                max_repeat_counts[pattern_size - 1] = 1
                continue

            # Anything before the first defined count takes the first defined rate
            current = self._starting_rates[(pattern_size, counts[0])]
            for repeat_count in range(1, max_repeat_count + 1):
                if (pattern_size, repeat_count) in self._starting_rates:
                    current = self._starting_rates[(pattern_size, repeat_count)]
                rates[pattern_size - 1, repeat_count - 1, :] = current
            max_repeat_counts[pattern_size - 1] = counts[-1]

        rates.setflags(write=False)
        max_repeat_counts.setflags(write=False)
        self._rates = rates
        self._max_repeat_counts = max_repeat_counts

    @property
    def max_repeating_pattern_size(self) -> int:
        assert self.is_finalized
        return len(self._max_repeat_counts)

    def max_repeat_count(self, repeating_pattern_size: int) -> int:
        """The largest repeat count defined for this pattern size; larger counts plateau at its rate."""
        assert self.is_finalized
        if repeating_pattern_size > self.max_repeating_pattern_size:
            return 1
        return int(self._max_repeat_counts[repeating_pattern_size - 1])

    def get_rate(self,
                 repeating_pattern_size: int,
                 pattern_repeat_count: int,
                 rate_type: IndelErrorRateType) -> float:
        """
        Look up an error rate.

        :param repeating_pattern_size: Repeat unit length, at least 1
        :param pattern_repeat_count: Number of copies of the unit, at least 1. Clamped to the table.
        :param rate_type: INSERT or DELETE
        :return: The error rate for this context
        """
        assert self.is_finalized, "finalize_rates() must be called before get_rate()"
        assert repeating_pattern_size > 0 and pattern_repeat_count > 0

        # repeat sizes the model does not cover are treated as non-STR
        if repeating_pattern_size > self.max_repeating_pattern_size:
            repeating_pattern_size = 1
            pattern_repeat_count = 1

        pattern_repeat_count = min(pattern_repeat_count, self.max_repeat_count(repeating_pattern_size))
        return float(self._rates[repeating_pattern_size - 1, pattern_repeat_count - 1, int(rate_type)])

    def iter_rates(self) -> Iterator[tuple[int, int, float, float]]:
        """
        Every defined context of the finalized table.

        :return: (pattern size, repeat count, insertion rate, deletion rate), ordered by pattern size then count
        """
        assert self.is_finalized
        for pattern_size in range(1, self.max_repeating_pattern_size + 1):
            for repeat_count in range(1, self.max_repeat_count(pattern_size) + 1):
                insertion_rate, deletion_rate = self._rates[pattern_size - 1, repeat_count - 1]
                yield pattern_size, repeat_count, float(insertion_rate), float(deletion_rate)
