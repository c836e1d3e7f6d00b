"""Legend rows and per-cell inspection text."""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from .colors import format_display_value, get_metric_label
from .encoding import VisualEncoding


@dataclass(frozen=True)
class LegendEntry:
    color: str
    lower: float
    upper: Optional[float]
    label: str


def legend_entries(encoding: VisualEncoding, stats, metric: str) -> List[LegendEntry]:
    """
    One legend row per color class.

    Classified encodings use [min, breakpoints..., max] as class bounds,
    continuous encodings the interpolation stops.
    """
    if encoding.is_classified:
        colors = [encoding.base_color] + list(encoding.step_colors)
        bounds = [stats.min] + list(encoding.breakpoints) + [stats.max]
    else:
        colors = [color for _, color in encoding.color_stops]
        bounds = [value for value, _ in encoding.color_stops]

    entries = []
    for index, color in enumerate(colors):
        lower = bounds[index]
        upper = bounds[index + 1] if index + 1 < len(bounds) else None
        # Last continuous stop is a single "max" row
        if upper is not None:
            label = f"{format_display_value(lower, metric)} - {format_display_value(upper, metric)}"
        else:
            label = format_display_value(lower, metric)
        entries.append(LegendEntry(color=color, lower=lower, upper=upper, label=label))
    return entries


def legend_note(encoding: VisualEncoding) -> Optional[str]:
    if encoding.is_classified:
        return "Using quantile classification"
    return None


def describe_feature(feature, metrics: Iterable[str],
                     encoding: Optional[VisualEncoding] = None) -> Dict[str, str]:
    """
    Formatted metric values of one cell, keyed by metric label.

    If an encoding is given, the cell's color and height under it are added.
    """
    properties = feature.properties if hasattr(feature, 'properties') else feature.get('properties', {})
    details = {}
    for metric in metrics:
        details[get_metric_label(metric)] = format_display_value(properties.get(metric), metric)

    if encoding is not None:
        value = properties.get(encoding.metric)
        details['Color'] = encoding.color_for(value) or 'N/A'
        height = encoding.height_for(value)
        details['Height'] = 'N/A' if height is None else f"{height:.0f} m"
    return details
