"""GPX export of ranked road segments."""

from pathlib import Path
from typing import List
from xml.etree import ElementTree as ET

import gpxpy.gpx
from loguru import logger

from ..roads.models import RoadSegment

GPX_NS = 'http://www.topografix.com/GPX/1/1'
GPXX_NS = 'http://www.garmin.com/xmlschemas/GpxExtensions/v3'

# Garmin display colors per congestion label
GARMIN_COLORS = {
    'severe': 'Red',
    'heavy': 'DarkYellow',
    'moderate': 'Yellow',
    'light': 'Green',
    'free-flow': 'DarkGreen',
}


def roads_to_gpx(segments: List[RoadSegment]) -> gpxpy.gpx.GPX:
    """One GPX track per road segment, in ranking order."""
    gpx = gpxpy.gpx.GPX()
    gpx.name = "Congested Roads"
    gpx.description = f"{len(segments)} road segments ranked by congestion level"

    for rank, segment in enumerate(segments, start=1):
        track = gpxpy.gpx.GPXTrack()
        track.name = f"{rank}. {segment.name} ({segment.congestion_level:.2f})"
        speed = "N/A" if segment.speed is None else f"{segment.speed:.1f} km/h"
        track.description = (
            f"Class: {segment.road_class} | "
            f"Congestion: {segment.congestion_label} ({segment.congestion_level:.2f}) | "
            f"Speed: {speed} | Length: {segment.length:.0f} m"
        )
        track.type = "Synthetic" if segment.synthetic else "Road"

        track_segment = gpxpy.gpx.GPXTrackSegment()
        for lon, lat in segment.coordinates:
            track_segment.points.append(gpxpy.gpx.GPXTrackPoint(lat, lon))

        track.segments.append(track_segment)
        gpx.tracks.append(track)

    return gpx


def _inject_display_colors(gpx_xml: str, segments: List[RoadSegment]) -> str:
    """Add Garmin DisplayColor extensions to each track."""
    ET.register_namespace('', GPX_NS)
    ET.register_namespace('gpxx', GPXX_NS)
    root = ET.fromstring(gpx_xml)

    tracks = root.findall(f'{{{GPX_NS}}}trk')
    for track, segment in zip(tracks, segments):
        extensions = track.find(f'{{{GPX_NS}}}extensions')
        if extensions is None:
            extensions = ET.SubElement(track, f'{{{GPX_NS}}}extensions')
        garmin_ext = ET.SubElement(extensions, f'{{{GPXX_NS}}}TrackExtension')
        display_color = ET.SubElement(garmin_ext, f'{{{GPXX_NS}}}DisplayColor')
        display_color.text = GARMIN_COLORS[segment.congestion_label]

    xml_str = ET.tostring(root, encoding='unicode', method='xml')
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + xml_str


def export_roads_to_gpx(segments: List[RoadSegment], output_path: str) -> Path:
    """
    Write ranked roads to a GPX file with Garmin color extensions.

    Args:
        segments: Ranked RoadSegment list
        output_path: Path to output GPX file

    Returns:
        Path of the written file
    """
    gpx_xml = _inject_display_colors(roads_to_gpx(segments).to_xml(), segments)

    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    with open(output_file, 'w', encoding='utf-8') as f:
        f.write(gpx_xml)

    logger.debug("Wrote {} road tracks to {}", len(segments), output_file)
    return output_file
