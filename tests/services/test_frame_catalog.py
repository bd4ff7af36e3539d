"""
Tests for FrameCatalog and metadata parsing (httpx.MockTransport as the source).
"""

import httpx
import pytest

from models.errors import FetchError
from services.frame_catalog import FrameCatalog, parse_metadata

URL = "https://api.example.test/public/weather-maps.json"

DOCUMENT = {
    "version": "2.0",
    "generated": 1718001000,
    "host": "https://tilecache.rainviewer.com",
    "radar": {
        "past": [
            {"time": 1718000000, "path": "/v2/radar/1718000000"},
            {"time": 1718000600, "path": "/v2/radar/1718000600"},
        ],
        "nowcast": [
            {"time": 1718001200, "path": "/v2/radar/nowcast_1"},
        ],
    },
    "satellite": {
        "infrared": [
            {"time": 1718000000, "path": "/v2/satellite/a"},
            {"time": 1718000600, "path": "/v2/satellite/b"},
        ]
    },
}


def make_catalog(handler, **kwargs) -> FrameCatalog:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return FrameCatalog(URL, client=client, **kwargs)


def json_handler(payload, status_code=200):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=payload)
    return handler


class TestParseMetadata:

    def test_radar_is_past_then_nowcast(self):
        host, radar, satellite = parse_metadata(DOCUMENT)

        assert host == "https://tilecache.rainviewer.com"
        assert [f.path for f in radar] == [
            "/v2/radar/1718000000", "/v2/radar/1718000600", "/v2/radar/nowcast_1",
        ]
        assert [f.time for f in satellite] == [1718000000, 1718000600]

    def test_missing_sections_are_empty(self):
        host, radar, satellite = parse_metadata({})
        assert host == ""
        assert radar == []
        assert satellite == []

    def test_missing_host_uses_fallback(self):
        host, _, _ = parse_metadata({"radar": {}}, fallback_host="https://fallback.test")
        assert host == "https://fallback.test"

    def test_entries_without_path_are_skipped(self):
        data = {"radar": {"past": [{"time": 1}, {"path": "", "time": 2}, {"path": "/ok", "time": 3}, "junk"]}}
        _, radar, _ = parse_metadata(data)
        assert [f.path for f in radar] == ["/ok"]

    def test_infrared_wrapped_in_past(self):
        data = {"satellite": {"infrared": {"past": [{"path": "/sat/1", "time": 1}]}}}
        _, _, satellite = parse_metadata(data)
        assert [f.path for f in satellite] == ["/sat/1"]

    def test_non_object_root_is_fetch_error(self):
        with pytest.raises(FetchError):
            parse_metadata([1, 2, 3])


class TestFrameCatalogLoad:

    @pytest.mark.asyncio
    async def test_load_success(self):
        catalog = make_catalog(json_handler(DOCUMENT))

        radar, satellite = await catalog.load()

        assert len(radar) == 3
        assert len(satellite) == 2
        assert catalog.loaded
        assert catalog.host == "https://tilecache.rainviewer.com"
        assert catalog.frame_count == 2

    @pytest.mark.asyncio
    async def test_requests_configured_url(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200, json={})

        await make_catalog(handler).load()
        assert seen == [URL]

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        catalog = make_catalog(json_handler({"error": "nope"}, status_code=503))

        with pytest.raises(FetchError) as exc_info:
            await catalog.load()

        assert exc_info.value.url == URL
        assert not catalog.loaded

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(FetchError):
            await make_catalog(handler).load()

    @pytest.mark.asyncio
    async def test_malformed_json(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"{not json", headers={"content-type": "application/json"})

        with pytest.raises(FetchError):
            await make_catalog(handler).load()

    @pytest.mark.asyncio
    async def test_empty_document_loads_empty(self):
        catalog = make_catalog(json_handler({}), fallback_host="https://fallback.test")

        radar, satellite = await catalog.load()

        assert radar == [] and satellite == []
        assert catalog.host == "https://fallback.test"
        assert catalog.frame_count == 0

    @pytest.mark.asyncio
    async def test_close_leaves_shared_client_open(self):
        client = httpx.AsyncClient(transport=httpx.MockTransport(json_handler({})))
        catalog = FrameCatalog(URL, client=client)

        await catalog.close()

        assert not client.is_closed
        await client.aclose()
