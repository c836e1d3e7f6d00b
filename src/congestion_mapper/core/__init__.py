"""Core utilities for congestion-mapper."""

from .utils import (
    haversine_distance,
    polyline_length,
    ring_centroid,
    geometry_centroid,
    destination_point,
)
from .config import Config
from .errors import (
    CongestionMapperError,
    DataError,
    ConfigurationError,
    LookupFailure,
)
from .models import Feature, FeatureCollection, numeric_value
from .tilequery import TilequeryResult, query_roads, validate_access_token, mask_token

__all__ = [
    "haversine_distance",
    "polyline_length",
    "ring_centroid",
    "geometry_centroid",
    "destination_point",
    "Config",
    "CongestionMapperError",
    "DataError",
    "ConfigurationError",
    "LookupFailure",
    "Feature",
    "FeatureCollection",
    "numeric_value",
    "TilequeryResult",
    "query_roads",
    "validate_access_token",
    "mask_token",
]
