"""Per-metric summary statistics over a feature collection."""

import math
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from loguru import logger

from ..core.models import as_features, numeric_value

QUANTILE_LEVELS = (0.2, 0.4, 0.6, 0.8)
DEGENERATE_RANGE = 1.0


@dataclass(frozen=True)
class MetricStatistics:
    """Summary statistics for one metric over one feature collection."""

    min: float
    max: float
    mean: float
    range: float
    count: int = 0
    quantiles: Tuple[float, ...] = QUANTILE_LEVELS

    @property
    def is_default(self) -> bool:
        """True when no valid values were found and defaults were returned."""
        return self.count == 0

    def usable_quantiles(self) -> List[float]:
        return [q for q in self.quantiles if numeric_value(q) is not None]


DEFAULT_STATISTICS = MetricStatistics(
    min=0.0,
    max=1.0,
    mean=0.0,
    range=1.0,
    count=0,
    quantiles=QUANTILE_LEVELS,
)


def metric_values(features: Iterable, metric: str) -> List[float]:
    """Valid numeric values of a metric; missing, NaN and non-numeric values are dropped."""
    values = []
    for feature in as_features(features):
        value = feature.value(metric)
        if value is not None:
            values.append(value)
    return values


def compute_quantiles(values: List[float], levels=QUANTILE_LEVELS) -> Tuple[float, ...]:
    """
    Nearest-rank quantiles of the given values.

    Takes ``sorted(values)[floor(n * level)]`` for each level.
    """
    ordered = sorted(values)
    n = len(ordered)
    return tuple(ordered[min(int(math.floor(n * level)), n - 1)] for level in levels)


def compute_statistics(features, metric: str) -> MetricStatistics:
    """
    Compute statistics for a metric.

    Args:
        features: FeatureCollection, GeoJSON mapping or iterable of features
        metric: Property name to summarise

    Returns:
        MetricStatistics. If no feature carries a valid value the documented
        default (min=0, max=1, mean=0, range=1) is returned so renderers stay
        usable on bad data.
    """
    values = metric_values(features, metric)

    if not values:
        logger.warning(
            "No numeric values for metric '{}'; using default statistics", metric
        )
        return DEFAULT_STATISTICS

    lo = min(values)
    hi = max(values)
    # float summation can drift a few ulps outside [lo, hi]
    mean = min(max(math.fsum(values) / len(values), lo), hi)

    value_range = hi - lo
    if value_range <= 0:
        logger.debug(
            "Metric '{}' has a degenerate range (all values {}); flooring range to {}",
            metric, lo, DEGENERATE_RANGE,
        )
        value_range = DEGENERATE_RANGE

    return MetricStatistics(
        min=lo,
        max=hi,
        mean=mean,
        range=value_range,
        count=len(values),
        quantiles=compute_quantiles(values),
    )
