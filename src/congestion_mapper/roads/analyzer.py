"""Congested road discovery and ranking around hotspot cells."""

import random
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import requests
from loguru import logger

from ..core.errors import LookupFailure
from ..core.models import LINE_TYPES, as_features, numeric_value
from ..core.tilequery import build_query_url, query_roads, validate_access_token
from ..core.utils import geometry_centroid, polyline_length
from .criteria import RoadCriteria
from .hotspots import DEFAULT_METRIC, hotspot_congestion
from .models import RoadApiDiagnostics, RoadSegment, UNNAMED_ROAD
from .synthetic import clamp_unit, jittered_congestion, slugify, synthesize_road


@dataclass
class RoadAnalysis:
    """Ranked roads plus one lookup record per processed hotspot."""

    roads: List[RoadSegment] = field(default_factory=list)
    lookups: List[RoadApiDiagnostics] = field(default_factory=list)

    @property
    def synthetic_count(self) -> int:
        return sum(1 for road in self.roads if road.synthetic)

    @property
    def failed_lookups(self) -> int:
        return sum(1 for lookup in self.lookups if not lookup.success)


class CongestedRoadAnalyzer:
    """Find and rank congested roads near hotspot cells."""

    def __init__(
        self,
        criteria: Optional[RoadCriteria] = None,
        metric: str = DEFAULT_METRIC,
        max_workers: int = 1,
        session: Optional[requests.Session] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize analyzer.

        Args:
            criteria: RoadCriteria configuration object (uses defaults if None)
            metric: Congestion property on hotspot cells
            max_workers: Parallel lookups; 1 processes hotspots sequentially
            session: Optional requests session shared by all lookups
            rng: Random source for jitter and synthetic roads
        """
        self.criteria = criteria or RoadCriteria()
        self.metric = metric
        self.max_workers = max(1, int(max_workers))
        self.session = session
        self.rng = rng or random.Random()

    def find_congested_roads(self, hotspots, credential: str, limit: int = 10,
                             radius: Optional[float] = None) -> List[RoadSegment]:
        """
        Discover roads around hotspots and rank them by congestion.

        Args:
            hotspots: Pre-filtered hotspot cells (FeatureCollection or features)
            credential: Mapbox access token
            limit: Maximum number of roads returned
            radius: Search radius in meters (criteria default if None)

        Returns:
            Roads sorted by congestion level (descending), unique by name

        Raises:
            ConfigurationError: If the credential is malformed
        """
        return self.analyze(hotspots, credential, limit=limit, radius=radius).roads

    def analyze(self, hotspots, credential: str, limit: int = 10,
                radius: Optional[float] = None) -> RoadAnalysis:
        """Same as find_congested_roads, also returning per-hotspot lookup records."""
        token = validate_access_token(credential)
        cells = as_features(hotspots)
        if not cells:
            return RoadAnalysis()

        cells.sort(key=lambda f: hotspot_congestion(f, self.metric), reverse=True)

        tasks = []
        for index, cell in enumerate(cells):
            center = geometry_centroid(cell.geometry) if cell.has_area() else None
            if center is None:
                logger.warning(
                    "Skipping hotspot {} without usable polygon geometry ({})",
                    index + 1, cell.geometry_type,
                )
                continue
            # Per-task random streams keep results independent of scheduling
            seed = self.rng.getrandbits(64)
            tasks.append((index + 1, center, hotspot_congestion(cell, self.metric), seed))

        radius = self.criteria.tilequery['radius'] if radius is None else radius
        logger.info("Looking up roads around {} hotspots", len(tasks))

        if self.max_workers > 1 and len(tasks) > 1:
            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(tasks))) as executor:
                futures = [
                    executor.submit(self._process_hotspot, task, token, radius)
                    for task in tasks
                ]
                # Gather in hotspot order so tie-breaking stays deterministic
                results = [future.result() for future in futures]
        else:
            results = [self._process_hotspot(task, token, radius) for task in tasks]

        analysis = RoadAnalysis()
        all_roads = []
        for roads, lookup in results:
            all_roads.extend(roads)
            analysis.lookups.append(lookup)

        unique_roads = self._deduplicate_roads(all_roads)
        analysis.roads = rank_roads(unique_roads, limit)

        if analysis.failed_lookups:
            logger.warning(
                "{} of {} road lookups failed; synthetic roads substituted",
                analysis.failed_lookups, len(analysis.lookups),
            )
        return analysis

    def _process_hotspot(self, task: Tuple, token: str,
                         radius: float) -> Tuple[List[RoadSegment], RoadApiDiagnostics]:
        """Look up roads for one hotspot, substituting a synthetic road on failure."""
        sequence, center, congestion, seed = task
        rng = random.Random(seed)
        tilequery = self.criteria.tilequery
        lookup = RoadApiDiagnostics(
            success=False,
            location=center,
            radius=radius,
            layer=tilequery['layer'],
            request_url=build_query_url(center, radius, tilequery['limit'],
                                        tilequery['layer'], token),
        )

        roads = []
        try:
            result = query_roads(
                center,
                token,
                radius=radius,
                limit=tilequery['limit'],
                layer=tilequery['layer'],
                timeout=tilequery['timeout'],
                session=self.session,
            )
        except LookupFailure as e:
            lookup.error_message = str(e)
            lookup.response_status = e.status_code
            lookup.response_status_text = e.status_text
            logger.warning(
                "Road lookup failed for hotspot {} at ({:.5f}, {:.5f}): {}",
                sequence, center[0], center[1], e,
            )
        else:
            features = result.data.get('features') or []
            lookup.response_status = result.status_code
            lookup.response_status_text = result.status_text
            if isinstance(features, list):
                lookup.success = True
                lookup.features_count = len(features)
                roads = self._roads_from_features(features, center, congestion, rng)
                lookup.road_features_count = len(roads)
            else:
                lookup.error_message = "Tilequery response 'features' is not a list"
                logger.warning(
                    "Road lookup for hotspot {} returned malformed features: {!r}",
                    sequence, type(features).__name__,
                )

        if not roads:
            if lookup.success:
                logger.info(
                    "No roads found near ({:.5f}, {:.5f}); generating synthetic road",
                    center[0], center[1],
                )
            roads = [synthesize_road(center, congestion, sequence, self.criteria, rng)]

        return roads, lookup

    def _roads_from_features(self, features: List[Dict], center: Tuple[float, float],
                             congestion: float, rng: random.Random) -> List[RoadSegment]:
        """Convert tilequery line features into scored road segments."""
        roads = []
        for i, feature in enumerate(features):
            if not isinstance(feature, dict):
                continue
            geometry = feature.get('geometry')
            if not isinstance(geometry, dict) or geometry.get('type') not in LINE_TYPES:
                continue

            try:
                coordinates = line_coordinates(geometry)
            except (TypeError, ValueError, IndexError) as e:
                logger.warning(
                    "Skipping road feature {} near ({:.5f}, {:.5f}) with bad coordinates: {}",
                    i, center[0], center[1], e,
                )
                continue
            if len(coordinates) < 2:
                continue

            properties = feature.get('properties')
            if not isinstance(properties, dict):
                properties = {}
            name = str(properties.get('name') or UNNAMED_ROAD)
            road_class = str(properties.get('class') or 'street')

            base = clamp_unit(congestion * self.criteria.get_class_multiplier(road_class))
            level = jittered_congestion(base, self.criteria.jitter, rng)

            roads.append(RoadSegment(
                id=f"road-{road_class}-{slugify(name)}-{round(center[0] * 10000)}-{i}",
                name=name,
                coordinates=coordinates,
                length=polyline_length(coordinates),
                congestion_level=level,
                speed=self.criteria.estimate_speed(road_class, level),
                road_class=road_class,
            ))
        return roads

    def _deduplicate_roads(self, roads: List[RoadSegment]) -> List[RoadSegment]:
        """Keep the most congested segment per road name (first one wins ties)."""
        by_name = {}
        for road in roads:
            existing = by_name.get(road.name)
            if existing is None or road.congestion_level > existing.congestion_level:
                by_name[road.name] = road
        return list(by_name.values())


def line_coordinates(geometry: Dict) -> Tuple[Tuple[float, float], ...]:
    """
    (lon, lat) vertices of a LineString, or of the first line of a MultiLineString.

    Raises:
        ValueError: If a coordinate is not a finite number
        TypeError, IndexError: If the coordinate nesting is malformed
    """
    coordinates = geometry.get('coordinates') or []
    if geometry.get('type') == 'MultiLineString':
        # Take first line from MultiLineString
        coordinates = coordinates[0] if coordinates else []

    points = []
    for p in coordinates:
        lon, lat = numeric_value(p[0]), numeric_value(p[1])
        if lon is None or lat is None:
            raise ValueError(f"Invalid coordinate: {p!r}")
        points.append((lon, lat))
    return tuple(points)


def rank_roads(roads: List[RoadSegment], limit: int) -> List[RoadSegment]:
    """Sort roads by congestion level (descending) and keep the top ``limit``."""
    ranked = sorted(roads, key=lambda road: road.congestion_level, reverse=True)
    return ranked[:max(0, limit)]


def find_congested_roads(hotspots, credential: str, limit: int = 10,
                         criteria: Optional[RoadCriteria] = None, **kwargs) -> List[RoadSegment]:
    """Module-level shortcut for CongestedRoadAnalyzer.find_congested_roads."""
    radius = kwargs.pop('radius', None)
    analyzer = CongestedRoadAnalyzer(criteria=criteria, **kwargs)
    return analyzer.find_congested_roads(hotspots, credential, limit=limit, radius=radius)
