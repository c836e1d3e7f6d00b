"""congestion-mapper - Metric encodings and congested road ranking for hexagon traffic grids."""

__version__ = "0.1.0"

# Expose main entry points for programmatic use
from .core import Config, Feature, FeatureCollection
from .core.errors import ConfigurationError, DataError, LookupFailure
from .encoding import (
    compute_statistics,
    derive_visual_encoding,
    get_color_scale_for_metric,
    format_display_value,
)
from .roads import find_congested_roads, select_hotspots, test_road_query

__all__ = [
    "__version__",
    "Config",
    "Feature",
    "FeatureCollection",
    "ConfigurationError",
    "DataError",
    "LookupFailure",
    "compute_statistics",
    "derive_visual_encoding",
    "get_color_scale_for_metric",
    "format_display_value",
    "find_congested_roads",
    "select_hotspots",
    "test_road_query",
]
