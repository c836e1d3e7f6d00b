"""GeoJSON export of ranked road segments."""

import json
from pathlib import Path
from typing import Dict, List

from loguru import logger

from ..roads.models import RoadSegment


def roads_to_geojson(segments: List[RoadSegment]) -> Dict:
    """
    Build a FeatureCollection of ranked roads, styled by congestion.

    Coordinates stay in (lon, lat) order.
    """
    features = []
    for rank, segment in enumerate(segments, start=1):
        features.append({
            "type": "Feature",
            "geometry": {
                "type": "LineString",
                "coordinates": [[lon, lat] for lon, lat in segment.coordinates],
            },
            "properties": {
                "type": "synthetic_road" if segment.synthetic else "congested_road",
                "rank": rank,
                "id": segment.id,
                "name": segment.name,
                "road_class": segment.road_class,
                "congestion_level": round(segment.congestion_level, 3),
                "congestion_label": segment.congestion_label,
                "speed_kmh": None if segment.speed is None else round(segment.speed, 1),
                "length_m": round(segment.length, 1),
                "synthetic": segment.synthetic,
                "stroke": segment.color,
                "stroke-width": 4,
                "stroke-opacity": 0.6 if segment.synthetic else 1.0,
            },
        })

    return {
        "type": "FeatureCollection",
        "features": features,
    }


def export_roads_to_geojson(segments: List[RoadSegment], output_path: str) -> Path:
    """
    Write ranked roads to a GeoJSON file.

    Args:
        segments: Ranked RoadSegment list
        output_path: Path to output GeoJSON file

    Returns:
        Path of the written file
    """
    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    with open(output_file, 'w', encoding='utf-8') as f:
        json.dump(roads_to_geojson(segments), f, indent=2)

    logger.debug("Wrote {} road segments to {}", len(segments), output_file)
    return output_file
