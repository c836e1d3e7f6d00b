"""Shared geometry helpers. Coordinates are (longitude, latitude) pairs."""

from math import radians, degrees, sin, cos, asin, sqrt, atan2

EARTH_RADIUS_M = 6371000


def haversine_distance(lat1, lon1, lat2, lon2):
    """
    Calculate distance between two points in meters using Haversine formula.
    
    Args:
        lat1, lon1: Coordinates of first point
        lat2, lon2: Coordinates of second point
        
    Returns:
        Distance in meters
    """
    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    
    a = sin(dlat/2)**2 + cos(lat1) * cos(lat2) * sin(dlon/2)**2
    c = 2 * atan2(sqrt(a), sqrt(1-a))
    
    return EARTH_RADIUS_M * c


def polyline_length(coordinates):
    """
    Calculate length of a polyline in meters.
    
    Args:
        coordinates: Sequence of (lon, lat) pairs
        
    Returns:
        Sum of great-circle distances between consecutive vertices
    """
    total = 0.0
    for i in range(len(coordinates) - 1):
        lon1, lat1 = coordinates[i][0], coordinates[i][1]
        lon2, lat2 = coordinates[i+1][0], coordinates[i+1][1]
        total += haversine_distance(lat1, lon1, lat2, lon2)
    return total


def ring_centroid(ring):
    """Arithmetic mean of the ring's vertices as (lon, lat)."""
    if not ring:
        raise ValueError("Cannot compute centroid of an empty ring")
    
    lon = sum(p[0] for p in ring) / len(ring)
    lat = sum(p[1] for p in ring) / len(ring)
    return lon, lat


def geometry_centroid(geometry):
    """
    Centroid of a Polygon or MultiPolygon geometry mapping.
    
    Uses the outer ring; a MultiPolygon uses its first part.
    
    Returns:
        (lon, lat) tuple, or None for other geometry types and empty rings
    """
    if not geometry:
        return None

    geom_type = geometry.get('type')
    coords = geometry.get('coordinates') or []

    ring = None
    if geom_type == 'Polygon' and coords:
        ring = coords[0]
    elif geom_type == 'MultiPolygon' and coords and coords[0]:
        ring = coords[0][0]

    if not ring:
        return None
    return ring_centroid(ring)


def destination_point(start, bearing, distance):
    """
    Point reached from start after travelling distance meters on a bearing.
    
    Args:
        start: (lon, lat) origin
        bearing: Degrees clockwise from north
        distance: Meters
        
    Returns:
        (lon, lat) tuple
    """
    angular = distance / EARTH_RADIUS_M
    bearing_rad = radians(bearing)
    lon1 = radians(start[0])
    lat1 = radians(start[1])
    
    lat2 = asin(
        sin(lat1) * cos(angular) +
        cos(lat1) * sin(angular) * cos(bearing_rad)
    )
    lon2 = lon1 + atan2(
        sin(bearing_rad) * sin(angular) * cos(lat1),
        cos(angular) - sin(lat1) * sin(lat2)
    )
    
    return degrees(lon2), degrees(lat2)
