import math
from collections.abc import Iterable

from ..models import Trade


class PearsonAccumulator:
    """
    Running sums for a Pearson correlation over a stream of (x, y) points.

    Besides the usual sums it remembers whether x or y ever changed, so a
    constant series is recognised exactly instead of through a float sum
    that happens to come out as a tiny non-zero value.
    """

    def __init__(self) -> None:
        self.n = 0
        self.sum_x = 0.0
        self.sum_y = 0.0
        self.sum_xy = 0.0
        self.sum_x2 = 0.0
        self.sum_y2 = 0.0
        self._first: tuple[float, float] | None = None
        self._x_varies = False
        self._y_varies = False

    def add(self, x: float, y: float) -> None:
        if self._first is None:
            self._first = (x, y)
        else:
            if x != self._first[0]:
                self._x_varies = True
            if y != self._first[1]:
                self._y_varies = True

        self.n += 1
        self.sum_x += x
        self.sum_y += y
        self.sum_xy += x * y
        self.sum_x2 += x * x
        self.sum_y2 += y * y

    def result(self) -> float | None:
        """
        r = (nΣXY − ΣXΣY) / sqrt((nΣX² − (ΣX)²)(nΣY² − (ΣY)²))

        None when there are fewer than two points or either series has no
        variance. The value is not clamped to [-1, 1].
        """
        n = self.n
        if n < 2 or not (self._x_varies and self._y_varies):
            return None

        numerator = n * self.sum_xy - self.sum_x * self.sum_y
        denom_left = n * self.sum_x2 - self.sum_x * self.sum_x
        denom_right = n * self.sum_y2 - self.sum_y * self.sum_y
        radicand = denom_left * denom_right
        if radicand <= 0:
            return None

        denominator = math.sqrt(radicand)
        if denominator == 0:
            return None
        return numerator / denominator


def pearson_correlation(points: Iterable[tuple[float, float]]) -> float | None:
    """Pearson correlation coefficient of (x, y) points, or None if undefined."""
    acc = PearsonAccumulator()
    for x, y in points:
        acc.add(x, y)
    return acc.result()


def risk_outcome_correlation(trades: Iterable[Trade]) -> float | None:
    """Correlation between each trade's ordinal risk score and its outcome."""
    return pearson_correlation((t.risk_score, t.outcome) for t in trades)
