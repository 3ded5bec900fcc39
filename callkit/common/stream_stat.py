"""
Streaming summary statistics, used to describe the sites merged into a gVCF block.
"""

__all__ = [
    "StreamStat"
]

import math


class StreamStat:
    """
    Accumulates count, min, max, mean and variance of a stream of values without storing them.

    Mean and variance use Welford's update, which keeps long streams of similar values (e.g. a
    10kb block of depth ~30) free of the cancellation error of a plain sum-of-squares.
    """

    def __init__(self):
        self._n = 0
        self._mean = 0.0
        self._m2 = 0.0
        self._min = math.inf
        self._max = -math.inf

    def add(self, value: float):
        self._n += 1
        delta = value - self._mean
        self._mean += delta / self._n
        self._m2 += delta * (value - self._mean)
        if value < self._min:
            self._min = value
        if value > self._max:
            self._max = value

    def reset(self):
        self.__init__()

    def copy(self) -> "StreamStat":
        other = StreamStat()
        other._n = self._n
        other._mean = self._mean
        other._m2 = self._m2
        other._min = self._min
        other._max = self._max
        return other

    def size(self) -> int:
        return self._n

    def empty(self) -> bool:
        return self._n == 0

    def min(self) -> float:
        return self._min if self._n else math.nan

    def max(self) -> float:
        return self._max if self._n else math.nan

    def mean(self) -> float:
        return self._mean if self._n else math.nan

    def variance(self) -> float:
        """Sample variance, NaN with fewer than two values."""
        if self._n < 2:
            return math.nan
        return self._m2 / (self._n - 1)

    def stddev(self) -> float:
        return math.sqrt(self.variance())

    def __repr__(self):
        return f'{self.__class__.__name__}(n={self._n}, mean={self.mean()}, min={self.min()}, max={self.max()})'
