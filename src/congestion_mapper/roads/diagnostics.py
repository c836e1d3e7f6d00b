"""Single-point road lookup probe for debugging road discovery."""

from collections import Counter
from typing import Any, Dict, Optional

import requests
from loguru import logger

from ..core.errors import ConfigurationError, LookupFailure
from ..core.models import LINE_TYPES
from ..core.tilequery import build_query_url, query_roads, validate_access_token
from .models import RoadApiDiagnostics

MAX_SUMMARY_FEATURES = 5
MAX_PROPERTY_CHARS = 200


def summarize_response(data: Dict[str, Any], max_features: int = MAX_SUMMARY_FEATURES) -> Dict[str, Any]:
    """
    Truncated view of a tilequery response.

    Keeps the first ``max_features`` features with their geometry type and
    properties (long values shortened) and drops coordinates.
    """
    features = data.get('features') or []
    summary = {
        'type': data.get('type'),
        'feature_count': len(features),
        'features': [],
        'truncated': len(features) > max_features,
    }
    for feature in features[:max_features]:
        properties = {}
        for key, value in (feature.get('properties') or {}).items():
            text = value if isinstance(value, (int, float, bool)) or value is None else str(value)
            if isinstance(text, str) and len(text) > MAX_PROPERTY_CHARS:
                text = text[:MAX_PROPERTY_CHARS] + '...'
            properties[key] = text
        summary['features'].append({
            'geometry_type': (feature.get('geometry') or {}).get('type'),
            'properties': properties,
        })
    return summary


def test_road_query(point, credential: str, radius: float = 25, limit: int = 10,
                    layer: str = "road", timeout: float = 10,
                    session: Optional[requests.Session] = None):
    """
    Probe road data availability at one point.

    Never raises: failures are reported through ``success`` and
    ``error_message`` on the returned record.

    Args:
        point: (lon, lat) to query
        credential: Mapbox access token (never included in the record)
        radius: Search radius in meters
        limit: Maximum number of features
        layer: Tile layer to query

    Returns:
        RoadApiDiagnostics
    """
    try:
        location = (float(point[0]), float(point[1]))
    except (TypeError, ValueError, IndexError):
        return RoadApiDiagnostics(
            success=False,
            location=(float('nan'), float('nan')),
            radius=radius,
            layer=layer,
            request_url="",
            error_message=f"Invalid coordinates: {point!r}",
        )

    diagnostics = RoadApiDiagnostics(
        success=False,
        location=location,
        radius=radius,
        layer=layer,
        request_url=build_query_url(location, radius, limit, layer, credential or None),
    )

    try:
        token = validate_access_token(credential)
        result = query_roads(location, token, radius=radius, limit=limit,
                             layer=layer, timeout=timeout, session=session)
    except ConfigurationError as e:
        diagnostics.error_message = str(e)
        logger.warning("Road query diagnostics rejected credential: {}", e)
        return diagnostics
    except LookupFailure as e:
        diagnostics.error_message = str(e)
        diagnostics.response_status = e.status_code
        diagnostics.response_status_text = e.status_text
        logger.warning("Road query diagnostics failed at {}: {}", location, e)
        return diagnostics

    features = result.data.get('features') or []
    geometry_types = Counter(
        (feature.get('geometry') or {}).get('type') or 'None' for feature in features
    )

    diagnostics.success = True
    diagnostics.response_status = result.status_code
    diagnostics.response_status_text = result.status_text
    diagnostics.features_count = len(features)
    diagnostics.road_features_count = sum(geometry_types[t] for t in LINE_TYPES)
    diagnostics.geometry_types = dict(geometry_types)
    diagnostics.raw_response = summarize_response(result.data)

    logger.debug(
        "Road query diagnostics at {}: {} features, {} roads",
        location, diagnostics.features_count, diagnostics.road_features_count,
    )
    return diagnostics


# not a pytest test
test_road_query.__test__ = False
