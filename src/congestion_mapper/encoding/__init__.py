"""Metric statistics and visual encoding for hexagon grids."""

from .statistics import MetricStatistics, compute_statistics, DEFAULT_STATISTICS
from .colors import (
    get_color_scale_for_metric,
    get_metric_category,
    get_metric_label,
    format_display_value,
)
from .encoding import (
    VisualEncoding,
    derive_visual_encoding,
    encode_metric,
    CONTINUOUS,
    CLASSIFIED,
)
from .legend import LegendEntry, legend_entries, describe_feature
from .renderers import EncodingRenderer, MapboxExpressionRenderer, GeoJSONStyleRenderer

__all__ = [
    "MetricStatistics",
    "compute_statistics",
    "DEFAULT_STATISTICS",
    "get_color_scale_for_metric",
    "get_metric_category",
    "get_metric_label",
    "format_display_value",
    "VisualEncoding",
    "derive_visual_encoding",
    "encode_metric",
    "CONTINUOUS",
    "CLASSIFIED",
    "LegendEntry",
    "legend_entries",
    "describe_feature",
    "EncodingRenderer",
    "MapboxExpressionRenderer",
    "GeoJSONStyleRenderer",
]
