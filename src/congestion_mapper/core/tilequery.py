"""Mapbox Tilequery API integration for nearby road lookups."""

import re
from typing import Any, Dict, NamedTuple, Optional, Tuple

import requests

from .errors import ConfigurationError, LookupFailure

TILEQUERY_URL = "https://api.mapbox.com/v4/mapbox.mapbox-streets-v8/tilequery/{lon},{lat}.json"
MASKED_TOKEN = "API_KEY_HIDDEN"

_TOKEN_PARAM = re.compile(r"(access_token=)[^&\s]+")


class TilequeryResult(NamedTuple):
    status_code: int
    status_text: str
    data: Dict[str, Any]


def validate_access_token(token) -> str:
    """
    Check that a Mapbox access token has the expected three-part format.

    Raises:
        ConfigurationError: If the token is empty or malformed
    """
    if not token or not str(token).strip():
        raise ConfigurationError("Mapbox access token is empty")

    token = str(token).strip()
    if len(token.split('.')) != 3:
        raise ConfigurationError(
            "Mapbox access token has an invalid format (expected three dot-separated parts)"
        )
    return token


def mask_token(url: str) -> str:
    """Replace any access_token query value with a placeholder."""
    return _TOKEN_PARAM.sub(rf"\g<1>{MASKED_TOKEN}", url)


def build_query_params(radius, limit, layer, token=None) -> Dict:
    params = {
        "radius": int(radius),
        "limit": int(limit),
        "layers": layer,
        "dedupe": "true",
        "geometry": "linestring",
    }
    if token is not None:
        params["access_token"] = token
    return params


def build_query_url(point: Tuple[float, float], radius, limit, layer,
                    token: Optional[str] = None) -> str:
    """
    Full tilequery URL with the token masked (safe to log or display).

    Args:
        point: (lon, lat) to query around
    """
    base = TILEQUERY_URL.format(lon=point[0], lat=point[1])
    params = build_query_params(radius, limit, layer, MASKED_TOKEN if token else None)
    query = "&".join(f"{key}={value}" for key, value in params.items())
    return f"{base}?{query}"


def query_roads(point, token, radius=500, limit=5, layer="road",
                timeout=10, session: Optional[requests.Session] = None) -> TilequeryResult:
    """
    Query vector-tile features around a point.

    Args:
        point: (lon, lat) center of the query
        token: Mapbox access token
        radius: Search radius in meters
        limit: Maximum number of features returned
        layer: Tile layer name to query
        timeout: Request timeout in seconds
        session: Optional requests session to reuse connections

    Returns:
        TilequeryResult with the HTTP status and parsed GeoJSON response

    Raises:
        LookupFailure: On network errors, non-2xx responses or invalid JSON
    """
    url = TILEQUERY_URL.format(lon=point[0], lat=point[1])
    params = build_query_params(radius, limit, layer, token)
    http = session or requests

    try:
        response = http.get(url, params=params, timeout=timeout)
    except requests.RequestException as e:
        raise LookupFailure(f"Tilequery request failed: {mask_token(str(e))}")

    if not 200 <= response.status_code < 300:
        raise LookupFailure(
            f"Mapbox API error: {response.status_code} {response.reason or ''}".strip(),
            status_code=response.status_code,
            status_text=response.reason,
        )

    try:
        data = response.json()
    except ValueError as e:
        raise LookupFailure(
            f"Tilequery returned invalid JSON: {e}",
            status_code=response.status_code,
        )

    if not isinstance(data, dict):
        raise LookupFailure(
            "Tilequery response is not a JSON object",
            status_code=response.status_code,
        )
    return TilequeryResult(response.status_code, response.reason or "", data)
