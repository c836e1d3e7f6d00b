"""Procedurally generated stand-in roads for hotspots without road data."""

import random
import re
from typing import Optional, Tuple

from ..core.utils import destination_point, polyline_length
from .criteria import RoadCriteria
from .models import RoadSegment, SYNTHETIC_PREFIX


def clamp_unit(value: float) -> float:
    return max(0.0, min(1.0, value))


def jittered_congestion(base: float, jitter: float, rng: random.Random) -> float:
    """Scale a congestion value by a random factor in [1 - jitter, 1 + jitter]."""
    return clamp_unit(base * rng.uniform(1 - jitter, 1 + jitter))


def slugify(text: str) -> str:
    return re.sub(r'\s+', '-', text.strip())


def synthesize_road(center: Tuple[float, float], congestion: float, sequence: int,
                    criteria: Optional[RoadCriteria] = None,
                    rng: Optional[random.Random] = None) -> RoadSegment:
    """
    Generate a plausible road segment anchored at a hotspot centroid.

    The segment starts at ``center``, runs on a random bearing for a random
    length within the configured band, and bends slightly at interior
    vertices.

    Args:
        center: (lon, lat) hotspot centroid
        congestion: Hotspot congestion value (0-1)
        sequence: Hotspot position, used to keep names and ids unique
        criteria: Road criteria (uses defaults if None)
        rng: Random source (module random if None)

    Returns:
        RoadSegment whose id starts with ``synthetic-``
    """
    criteria = criteria or RoadCriteria()
    rng = rng or random.Random()
    settings = criteria.synthetic

    bearing = rng.uniform(0, 360)
    target_length = rng.uniform(settings['min_length'], settings['max_length'])
    points = settings['points']
    lateral = settings['lateral_jitter']

    coordinates = [tuple(center)]
    for i in range(1, points):
        along = destination_point(center, bearing, target_length * i / (points - 1))
        if i < points - 1 and lateral > 0:
            offset = rng.uniform(-lateral, lateral)
            along = destination_point(along, bearing + 90, offset)
        coordinates.append(along)

    template = rng.choice(criteria.name_templates)
    name = f"{template} (segment {sequence})"
    road_class = settings['road_class']

    level = jittered_congestion(clamp_unit(congestion), criteria.jitter, rng)

    return RoadSegment(
        id=f"{SYNTHETIC_PREFIX}{sequence}-{slugify(template)}",
        name=name,
        coordinates=tuple(coordinates),
        length=polyline_length(coordinates),
        congestion_level=level,
        speed=criteria.estimate_speed(road_class, level),
        road_class=road_class,
    )
