"""Metric categories, color ramps and display formatting."""

from typing import Optional, Tuple

from ..core.models import numeric_value

ColorScale = Tuple[str, str, str, str, str]

# Green to red (red is high congestion)
CONGESTION_COLORS: ColorScale = ('#F2FCE2', '#A4D86E', '#FFD166', '#F17A3A', '#EA384C')
# Cool blue (speed and anything unrecognised)
SPEED_COLORS: ColorScale = ('#cfe2f3', '#9fc5e8', '#6fa8dc', '#3d85c6', '#0b5394')
# Green (vehicle kilometers travelled)
VOLUME_COLORS: ColorScale = ('#d9ead3', '#b6d7a8', '#93c47d', '#6aa84f', '#38761d')
# Purple (urban road length)
LENGTH_COLORS: ColorScale = ('#d9d2e9', '#b4a7d6', '#8e7cc3', '#674ea7', '#351c75')

# Ordered: first substring match wins
CATEGORY_PATTERNS = (
    ('congestion', ('conge',)),
    ('speed', ('speed',)),
    ('volume', ('vktkm',)),
    ('length', ('urban_', 'length', 'segme')),
)

COLOR_SCALES = {
    'congestion': CONGESTION_COLORS,
    'speed': SPEED_COLORS,
    'volume': VOLUME_COLORS,
    'length': LENGTH_COLORS,
    'default': SPEED_COLORS,
}

# Extrusion height (floor, ceiling) in meters per category
HEIGHT_RANGES = {
    'congestion': (500, 2000),
    'speed': (300, 1500),
    'volume': (400, 1800),
    'length': (400, 1800),
    'default': (500, 2000),
}

METRIC_LABELS = {
    'mean_speed': 'Average Speed (km/h)',
    'mean_conge': 'Congestion Level',
    'sum_vktkm': 'Total Vehicle Kilometers',
    'sum_urban_': 'Urban Road Length',
}


def get_metric_category(metric: Optional[str]) -> str:
    """Classify a metric name as congestion, speed, volume, length or default."""
    name = (metric or '').lower()
    for category, patterns in CATEGORY_PATTERNS:
        if any(p in name for p in patterns):
            return category
    return 'default'


def is_classified_metric(metric: Optional[str]) -> bool:
    """Skewed metrics (congestion ratios) use quantile classification."""
    return get_metric_category(metric) == 'congestion'


def get_color_scale_for_metric(metric: Optional[str]) -> ColorScale:
    """Get the 5-color ramp for a metric."""
    return COLOR_SCALES[get_metric_category(metric)]


def get_height_range(metric: Optional[str]) -> Tuple[int, int]:
    return HEIGHT_RANGES[get_metric_category(metric)]


def get_metric_label(metric: str) -> str:
    return METRIC_LABELS.get(metric, metric)


def format_display_value(value, metric: Optional[str]) -> str:
    """
    Format a metric value with units.

    Args:
        value: Raw value (missing and non-numeric values render as "N/A")
        metric: Metric name used to pick units and precision

    Returns:
        Display string
    """
    number = numeric_value(value)
    if number is None:
        return "N/A"

    name = metric or ''
    if 'speed' in name:
        return f"{number:.1f} km/h"
    elif 'conge' in name:
        return f"{number:.2f}"
    elif 'vktkm' in name:
        return f"{number:.0f} km"
    elif 'urban_' in name:
        return f"{number:.0f} m"
    elif 'segme' in name:
        return f"{number:.1f} m"

    return f"{number:.1f}"
