"""Exporters for ranked road segments."""

from .geojson import roads_to_geojson, export_roads_to_geojson
from .gpx import roads_to_gpx, export_roads_to_gpx

__all__ = [
    "roads_to_geojson",
    "export_roads_to_geojson",
    "roads_to_gpx",
    "export_roads_to_gpx",
]
