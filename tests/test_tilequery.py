"""Tests for the Mapbox tilequery client."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from congestion_mapper.core.errors import ConfigurationError, LookupFailure
from congestion_mapper.core.tilequery import (
    MASKED_TOKEN,
    build_query_params,
    build_query_url,
    mask_token,
    query_roads,
    validate_access_token,
)

from conftest import VALID_TOKEN, FakeResponse, FakeSession


class TestAccessToken:

    def test_valid_token(self):
        assert validate_access_token(f"  {VALID_TOKEN} ") == VALID_TOKEN

    @pytest.mark.parametrize("token", [None, "", "   ", "pk.onlytwo", "a.b.c.d", "plain"])
    def test_invalid_tokens(self, token):
        with pytest.raises(ConfigurationError):
            validate_access_token(token)

    def test_mask_token(self):
        url = f"https://api.mapbox.com/x.json?radius=25&access_token={VALID_TOKEN}&limit=3"
        masked = mask_token(url)
        assert VALID_TOKEN not in masked
        assert f"access_token={MASKED_TOKEN}&limit=3" in masked

    def test_mask_token_without_token(self):
        assert mask_token("https://example.com/?a=1") == "https://example.com/?a=1"


class TestQueryUrl:

    def test_params(self):
        params = build_query_params(500.0, 5, "road", "tok")
        assert params == {
            "radius": 500,
            "limit": 5,
            "layers": "road",
            "dedupe": "true",
            "geometry": "linestring",
            "access_token": "tok",
        }
        assert "access_token" not in build_query_params(500, 5, "road")

    def test_url_is_masked(self):
        url = build_query_url((46.7, 24.7), 500, 5, "road", VALID_TOKEN)
        assert url.startswith(
            "https://api.mapbox.com/v4/mapbox.mapbox-streets-v8/tilequery/46.7,24.7.json?"
        )
        assert "layers=road" in url
        assert VALID_TOKEN not in url
        assert f"access_token={MASKED_TOKEN}" in url


class TestQueryRoads:

    def test_success(self):
        data = {"type": "FeatureCollection", "features": []}
        session = FakeSession(lambda lon, lat: FakeResponse(data))
        result = query_roads((46.7, 24.7), VALID_TOKEN, radius=300, limit=3, session=session)

        assert result.status_code == 200
        assert result.status_text == "OK"
        assert result.data == data
        url, params = session.calls[0]
        assert "tilequery/46.7,24.7.json" in url
        assert params["access_token"] == VALID_TOKEN
        assert params["radius"] == 300
        assert params["limit"] == 3

    def test_uses_requests_without_session(self):
        response = MagicMock(status_code=200, reason="OK")
        response.json.return_value = {"features": []}
        with patch("congestion_mapper.core.tilequery.requests.get", return_value=response) as get:
            query_roads((46.7, 24.7), VALID_TOKEN, timeout=3)
        assert get.call_args.kwargs["timeout"] == 3

    def test_http_error(self):
        session = FakeSession(lambda lon, lat: FakeResponse(status_code=401, reason="Unauthorized"))
        with pytest.raises(LookupFailure) as exc_info:
            query_roads((46.7, 24.7), VALID_TOKEN, session=session)
        assert exc_info.value.status_code == 401
        assert exc_info.value.status_text == "Unauthorized"
        assert "401" in str(exc_info.value)

    def test_network_error_masks_token(self):
        def handler(lon, lat):
            raise requests.ConnectionError(f"failed for ?access_token={VALID_TOKEN}")

        with pytest.raises(LookupFailure) as exc_info:
            query_roads((46.7, 24.7), VALID_TOKEN, session=FakeSession(handler))
        assert VALID_TOKEN not in str(exc_info.value)
        assert exc_info.value.status_code is None

    def test_invalid_json(self):
        session = FakeSession(lambda lon, lat: FakeResponse(invalid_json=True))
        with pytest.raises(LookupFailure):
            query_roads((46.7, 24.7), VALID_TOKEN, session=session)

    def test_non_object_json(self):
        session = FakeSession(lambda lon, lat: FakeResponse(["not", "an", "object"]))
        with pytest.raises(LookupFailure):
            query_roads((46.7, 24.7), VALID_TOKEN, session=session)
