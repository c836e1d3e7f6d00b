"""Color and height encodings derived from metric statistics."""

import bisect
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from loguru import logger

from ..core.errors import ConfigurationError
from ..core.models import numeric_value
from .colors import get_color_scale_for_metric, get_height_range, is_classified_metric
from .statistics import MetricStatistics, compute_statistics

CONTINUOUS = "continuous"
CLASSIFIED = "classified"

BREAKPOINT_EPSILON = 1e-3
STOP_FRACTIONS = (0.0, 0.25, 0.5, 0.75, 1.0)
REQUIRED_COLORS = 5
MIN_QUANTILES = 4


@dataclass(frozen=True)
class VisualEncoding:
    """
    Renderer-agnostic color/height rules for one metric.

    ``mode`` tells the renderer how to read the rules:

    - continuous: ``color_stops`` are (value, color) control points for
      linear interpolation.
    - classified: values below ``breakpoints[0]`` get ``base_color``;
      values at or above ``breakpoints[i]`` get ``step_colors[i]``.

    ``height_stops`` are always (value, meters) control points for linear
    interpolation.
    """

    mode: str
    metric: str
    height_stops: Tuple[Tuple[float, float], ...]
    color_stops: Tuple[Tuple[float, str], ...] = ()
    base_color: Optional[str] = None
    breakpoints: Tuple[float, ...] = ()
    step_colors: Tuple[str, ...] = ()

    @property
    def is_classified(self) -> bool:
        return self.mode == CLASSIFIED

    def color_for(self, value) -> Optional[str]:
        """Color of a single cell value, or None when the value is missing."""
        number = numeric_value(value)
        if number is None:
            return None

        if self.is_classified:
            index = bisect.bisect_right(self.breakpoints, number)
            if index == 0:
                return self.base_color
            return self.step_colors[index - 1]

        return _interpolate_color(self.color_stops, number)

    def height_for(self, value) -> Optional[float]:
        """Extrusion height of a single cell value, or None when missing."""
        number = numeric_value(value)
        if number is None:
            return None
        return _interpolate(self.height_stops, number)


def derive_visual_encoding(stats: MetricStatistics, color_scale: Sequence[str],
                           metric: str, epsilon: float = BREAKPOINT_EPSILON) -> VisualEncoding:
    """
    Build the color/height encoding for a metric.

    Congestion-style metrics with at least four usable quantiles get a
    classified (step) encoding, everything else a continuous one.

    Args:
        stats: Statistics from compute_statistics
        color_scale: At least five colors, low to high
        metric: Metric name
        epsilon: Minimum spacing between classified breakpoints

    Raises:
        ConfigurationError: If color_scale has fewer than five entries
    """
    if color_scale is None or len(color_scale) < REQUIRED_COLORS:
        raise ConfigurationError(
            f"Color scale must have {REQUIRED_COLORS} entries, "
            f"got {0 if color_scale is None else len(color_scale)}"
        )
    colors = tuple(color_scale[:REQUIRED_COLORS])

    stop_values = _stop_values(stats)
    floor_height, ceiling_height = get_height_range(metric)
    height_stops = tuple(
        (value, floor_height + (ceiling_height - floor_height) * fraction)
        for value, fraction in zip(stop_values, STOP_FRACTIONS)
    )

    quantiles = stats.usable_quantiles()
    if is_classified_metric(metric) and len(quantiles) >= MIN_QUANTILES:
        breakpoints = strictly_ascending_breakpoints(
            quantiles, stats.min, stats.max, epsilon
        )
        count = min(len(breakpoints), len(colors) - 1)
        logger.debug("Classified breakpoints for {}: {}", metric, breakpoints[:count])
        return VisualEncoding(
            mode=CLASSIFIED,
            metric=metric,
            height_stops=height_stops,
            base_color=colors[0],
            breakpoints=tuple(breakpoints[:count]),
            step_colors=colors[1:count + 1],
        )

    return VisualEncoding(
        mode=CONTINUOUS,
        metric=metric,
        height_stops=height_stops,
        color_stops=tuple(zip(stop_values, colors)),
    )


def encode_metric(features, metric: str):
    """
    Statistics, color scale and encoding for a metric in one call.

    Returns:
        (MetricStatistics, ColorScale, VisualEncoding) tuple
    """
    stats = compute_statistics(features, metric)
    colors = get_color_scale_for_metric(metric)
    return stats, colors, derive_visual_encoding(stats, colors, metric)


def strictly_ascending_breakpoints(quantiles, lower: float, upper: float,
                                   epsilon: float = BREAKPOINT_EPSILON) -> List[float]:
    """
    Turn raw quantiles into strictly ascending step breakpoints.

    Every breakpoint ends up at least ``epsilon`` (or one representable
    float step, where ``epsilon`` is below float resolution) above its
    predecessor and above ``lower``. Tied quantiles are nudged apart rather than dropped, so
    each color class keeps a breakpoint. When ``upper - lower`` leaves room
    for all of them, breakpoints pushed to or past ``upper`` are pulled back
    below it.
    """
    result = []
    previous = lower
    for q in sorted(quantiles):
        candidate = q if q - previous >= epsilon else _step_up(previous, epsilon)
        result.append(candidate)
        previous = candidate

    if result and upper - lower > epsilon * (len(result) + 1):
        ceiling = upper
        for i in range(len(result) - 1, -1, -1):
            limit = _step_down(ceiling, epsilon)
            if result[i] > limit:
                result[i] = limit
            ceiling = result[i]

    return result


def _step_up(value: float, epsilon: float) -> float:
    # at large magnitudes value + epsilon can round back to value
    return max(value + epsilon, math.nextafter(value, math.inf))


def _step_down(value: float, epsilon: float) -> float:
    return min(value - epsilon, math.nextafter(value, -math.inf))


def _stop_values(stats: MetricStatistics) -> List[float]:
    # min + range * 1.0 == max except for degenerate ranges, where it keeps stops ascending
    return [stats.min + stats.range * fraction for fraction in STOP_FRACTIONS]


def _interpolate(stops, value: float) -> float:
    if value <= stops[0][0]:
        return stops[0][1]
    for (x0, y0), (x1, y1) in zip(stops, stops[1:]):
        if value <= x1:
            if x1 == x0:
                return y1
            return y0 + (y1 - y0) * (value - x0) / (x1 - x0)
    return stops[-1][1]


def _interpolate_color(stops, value: float) -> str:
    if value <= stops[0][0]:
        return stops[0][1]
    for (x0, c0), (x1, c1) in zip(stops, stops[1:]):
        if value <= x1:
            t = 0.0 if x1 == x0 else (value - x0) / (x1 - x0)
            return _mix(c0, c1, t)
    return stops[-1][1]


def _mix(color_a: str, color_b: str, t: float) -> str:
    a = _hex_to_rgb(color_a)
    b = _hex_to_rgb(color_b)
    mixed = (round(x + (y - x) * t) for x, y in zip(a, b))
    return '#' + ''.join(f'{channel:02x}' for channel in mixed)


def _hex_to_rgb(color: str) -> Tuple[int, int, int]:
    value = color.lstrip('#')
    if len(value) == 3:
        value = ''.join(ch * 2 for ch in value)
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)
