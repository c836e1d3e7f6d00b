"""Shared fixtures for congestion-mapper tests."""

import math
import re

import pytest
import requests

# Riyadh downtown
BASE_LON = 46.6908
BASE_LAT = 24.7204

VALID_TOKEN = "pk.eyJ1IjoidGVzdCJ9.c2lnbmF0dXJl"

_POINT_IN_URL = re.compile(r"tilequery/(-?[\d.]+),(-?[\d.]+)\.json")


def hexagon_ring(lon, lat, radius_deg=0.005):
    """Closed hexagon ring around a center point."""
    ring = []
    for i in range(6):
        angle = math.radians(60 * i)
        ring.append([lon + radius_deg * math.cos(angle), lat + radius_deg * math.sin(angle)])
    ring.append(list(ring[0]))
    return ring


def make_cell(lon=BASE_LON, lat=BASE_LAT, **properties):
    return {
        "type": "Feature",
        "geometry": {"type": "Polygon", "coordinates": [hexagon_ring(lon, lat)]},
        "properties": properties,
    }


def road_feature(name, coordinates, road_class="street", geometry_type="LineString"):
    properties = {"class": road_class}
    if name is not None:
        properties["name"] = name
    return {
        "type": "Feature",
        "geometry": {"type": geometry_type, "coordinates": coordinates},
        "properties": properties,
    }


class FakeResponse:
    def __init__(self, data=None, status_code=200, reason="OK", invalid_json=False):
        self._data = data
        self.status_code = status_code
        self.reason = reason
        self.invalid_json = invalid_json

    def json(self):
        if self.invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._data


class FakeSession:
    """
    Stand-in for requests.Session.

    ``handler(lon, lat)`` returns a FakeResponse or raises a requests exception.
    """

    def __init__(self, handler):
        self.handler = handler
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, dict(params or {})))
        match = _POINT_IN_URL.search(url)
        return self.handler(float(match.group(1)), float(match.group(2)))


def feature_collection(*features):
    return {"type": "FeatureCollection", "features": list(features)}


@pytest.fixture
def congestion_grid():
    """Ten cells with congestion 0.0 - 0.9 and matching speeds."""
    cells = []
    for i in range(10):
        cells.append(make_cell(
            BASE_LON + 0.01 * i,
            BASE_LAT,
            GRID_ID=f"G{i:03d}",
            mean_conge=i / 10,
            mean_speed=80 - 7 * i,
        ))
    return feature_collection(*cells)


@pytest.fixture
def failing_session():
    def handler(lon, lat):
        raise requests.ConnectionError("connection refused")
    return FakeSession(handler)


@pytest.fixture
def empty_session():
    return FakeSession(lambda lon, lat: FakeResponse({"type": "FeatureCollection", "features": []}))


@pytest.fixture
def loguru_messages():
    """Collect loguru records at WARNING and above."""
    from loguru import logger

    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]),
                            level="WARNING")
    yield messages
    logger.remove(handler_id)

