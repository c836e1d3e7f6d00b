"""GeoJSON data models for hexagon grids and road features."""

import copy
import json
import math
import numbers
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from loguru import logger
from shapely.errors import GEOSException
from shapely.geometry import shape

from .errors import DataError

POLYGON_TYPES = ('Polygon', 'MultiPolygon')
LINE_TYPES = ('LineString', 'MultiLineString')


def numeric_value(value) -> Optional[float]:
    """Return value as float if it is a real, finite number, else None."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return None
    value = float(value)
    if math.isnan(value) or math.isinf(value):
        return None
    return value


@dataclass
class Feature:
    """One grid cell (hexagon) or one road segment."""

    geometry: Optional[Dict[str, Any]]
    properties: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_geojson(cls, data: Dict[str, Any]) -> 'Feature':
        """Build a Feature from a GeoJSON feature mapping (deep copied)."""
        return cls(
            geometry=copy.deepcopy(data.get('geometry')),
            properties=copy.deepcopy(data.get('properties') or {}),
        )

    @property
    def geometry_type(self) -> Optional[str]:
        if not self.geometry:
            return None
        return self.geometry.get('type')

    @property
    def is_polygon(self) -> bool:
        return self.geometry_type in POLYGON_TYPES

    @property
    def is_line(self) -> bool:
        return self.geometry_type in LINE_TYPES

    @property
    def shape(self):
        """Geometry as a shapely object (None if the feature has no geometry)."""
        if not self.geometry:
            return None
        return shape(self.geometry)

    def has_area(self) -> bool:
        """True for a polygon cell whose geometry parses to a non-empty area."""
        if not self.is_polygon:
            return False
        try:
            polygon = self.shape
        except (GEOSException, ValueError, TypeError, IndexError, KeyError, AttributeError):
            return False
        return not polygon.is_empty and polygon.area > 0

    def value(self, metric: str) -> Optional[float]:
        """Numeric value of a metric, or None if absent or non-numeric."""
        return numeric_value(self.properties.get(metric))

    def to_geojson(self) -> Dict[str, Any]:
        return {
            "type": "Feature",
            "geometry": copy.deepcopy(self.geometry),
            "properties": copy.deepcopy(self.properties),
        }


class FeatureCollection:
    """Ordered sequence of WGS84 features."""

    def __init__(self, features: Optional[Iterable] = None, crs: Optional[Dict] = None):
        """
        Initialize collection.

        Args:
            features: Feature objects or GeoJSON feature mappings
            crs: Optional legacy GeoJSON ``crs`` member
        """
        self.features: List[Feature] = [as_feature(f) for f in (features or [])]
        self.crs = copy.deepcopy(crs)

    def __len__(self) -> int:
        return len(self.features)

    def __iter__(self):
        return iter(self.features)

    def __getitem__(self, index):
        return self.features[index]

    @classmethod
    def from_geojson(cls, data: Dict[str, Any]) -> 'FeatureCollection':
        """
        Build a collection from a parsed GeoJSON FeatureCollection.

        Raises:
            DataError: If the mapping is not a FeatureCollection
        """
        if not isinstance(data, dict) or not isinstance(data.get('features'), list):
            raise DataError("GeoJSON data must be a FeatureCollection with a 'features' list")

        collection = cls(data['features'], crs=data.get('crs'))
        if not collection.is_wgs84():
            logger.warning(
                "GeoJSON CRS {} is not WGS84; cells may render in the wrong place",
                collection.crs_name,
            )
        return collection

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'FeatureCollection':
        """
        Load a GeoJSON FeatureCollection from disk.

        Raises:
            FileNotFoundError: If the file does not exist
            DataError: If the file is not valid GeoJSON
        """
        geojson_path = Path(path)
        if not geojson_path.exists():
            raise FileNotFoundError(f"GeoJSON file not found: {path}")

        try:
            with open(geojson_path, encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise DataError(f"Invalid GeoJSON in {path}: {e}")

        collection = cls.from_geojson(data)
        logger.debug("Loaded {} features from {}", len(collection), geojson_path)
        return collection

    @property
    def crs_name(self) -> Optional[str]:
        if not self.crs:
            return None
        return (self.crs.get('properties') or {}).get('name')

    def is_wgs84(self) -> bool:
        """GeoJSON without a CRS member is WGS84 by definition."""
        if not self.crs:
            return True
        name = self.crs_name
        if not name:
            return False
        return 'CRS84' in name or '4326' in name

    def property_names(self) -> List[str]:
        """Property keys of the first feature (the selectable metrics)."""
        if not self.features:
            return []
        return list(self.features[0].properties.keys())

    def copy(self) -> 'FeatureCollection':
        return FeatureCollection(self.features, crs=self.crs)

    def to_geojson(self) -> Dict[str, Any]:
        data = {
            "type": "FeatureCollection",
            "features": [f.to_geojson() for f in self.features],
        }
        if self.crs:
            data["crs"] = copy.deepcopy(self.crs)
        return data


def as_feature(item) -> Feature:
    """Coerce a Feature or GeoJSON feature mapping into a Feature copy."""
    if isinstance(item, Feature):
        return copy.deepcopy(item)
    if isinstance(item, dict):
        return Feature.from_geojson(item)
    raise DataError(f"Unsupported feature type: {type(item).__name__}")


def as_features(features) -> List[Feature]:
    """Defensive copy of any supported feature container as a list of Features."""
    if features is None:
        return []
    if isinstance(features, FeatureCollection):
        return features.copy().features
    if isinstance(features, dict):
        return FeatureCollection.from_geojson(features).features
    return [as_feature(f) for f in features]
