"""Congested road discovery and ranking around hotspot cells."""

from .models import RoadSegment, RoadApiDiagnostics
from .criteria import RoadCriteria
from .hotspots import select_hotspots, rank_congested_cells
from .analyzer import CongestedRoadAnalyzer, RoadAnalysis, find_congested_roads, rank_roads
from .diagnostics import test_road_query

__all__ = [
    "RoadSegment",
    "RoadApiDiagnostics",
    "RoadCriteria",
    "select_hotspots",
    "rank_congested_cells",
    "CongestedRoadAnalyzer",
    "RoadAnalysis",
    "find_congested_roads",
    "rank_roads",
    "test_road_query",
]
