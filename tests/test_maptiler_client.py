import asyncio
import logging

import httpx
import pytest

from maptiler_cloud.exceptions import ConfigurationError, HTTPStatusError, RequestError, TransportError
from maptiler_cloud.models.client_settings import ClientSettings
from maptiler_cloud.models.tile_request import TileRequest
from maptiler_cloud.models.tile_set import TileSet
from maptiler_cloud.services.maptiler_client import ConstructedRequest, Maptiler

API_KEY = "test-key"
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF" + b"\x00" * 16
SATELLITE_URL = "https://api.maptiler.com/tiles/satellite/2/2/1.jpg?key=test-key"


def run_session(handler, body, api_key=API_KEY, settings=None):
    """Run body(maptiler) against a session whose transport is a mock handler"""
    async def main():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            maptiler = Maptiler(api_key, client=client, settings=settings)
            return await body(maptiler)
    return asyncio.run(main())


def satellite_tile() -> TileRequest:
    return TileRequest.create(TileSet.SATELLITE, x=2, y=1, zoom=2)


def test_returns_body_for_expected_url():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        if str(request.url) == SATELLITE_URL:
            return httpx.Response(200, content=JPEG_BYTES, headers={"Content-Type": "image/jpeg"})
        return httpx.Response(404)

    tile = run_session(handler, lambda m: m.request(satellite_tile()))

    assert tile == JPEG_BYTES
    assert tile[:3] == b"\xff\xd8\xff"
    assert seen == [SATELLITE_URL]


def test_forbidden_raises_status_error():
    def handler(request):
        return httpx.Response(403, content=b'{"message": "Invalid key"}')

    with pytest.raises(HTTPStatusError) as exc:
        run_session(handler, lambda m: m.request(satellite_tile()))

    assert exc.value.status_code == 403
    assert exc.value.reason == "Forbidden"
    assert API_KEY not in str(exc.value)
    assert "key=***" in exc.value.url


def test_success_body_is_not_inspected():
    """A JSON body with 200 is handed back as-is"""
    payload = b'{"message": "not an image"}'

    def handler(request):
        return httpx.Response(200, content=payload)

    assert run_session(handler, lambda m: m.request(satellite_tile())) == payload


def test_any_2xx_is_success():
    def handler(request):
        return httpx.Response(204)

    assert run_session(handler, lambda m: m.request(satellite_tile())) == b""


def test_connection_failure_raises_transport_error():
    def handler(request):
        raise httpx.ConnectError(f"Connection refused for {request.url}", request=request)

    with pytest.raises(TransportError) as exc:
        run_session(handler, lambda m: m.request(satellite_tile()))

    assert isinstance(exc.value, RequestError)
    assert isinstance(exc.value.__cause__, httpx.ConnectError)
    assert API_KEY not in str(exc.value)


def test_timeout_raises_transport_error():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(TransportError) as exc:
        run_session(handler, lambda m: m.request(satellite_tile()))
    assert isinstance(exc.value.__cause__, httpx.TimeoutException)


def test_concurrent_requests_share_one_session():
    def handler(request):
        return httpx.Response(200, content=request.url.path.encode())

    tiles = [TileRequest.create(TileSet.TERRAIN_RGB, x, y, 3) for x in range(4) for y in range(2)]

    async def body(maptiler):
        return await asyncio.gather(*(maptiler.request(t) for t in tiles))

    results = run_session(handler, body)

    assert results == [f"/tiles/{t.path}".encode() for t in tiles]


def test_cancellation_propagates():
    async def handler(request):
        await asyncio.sleep(10)
        return httpx.Response(200, content=b"late")

    async def body(maptiler):
        return await asyncio.wait_for(maptiler.request(satellite_tile()), timeout=0.05)

    with pytest.raises(asyncio.TimeoutError):
        run_session(handler, body)


def test_constructed_request_executes_later():
    def handler(request):
        return httpx.Response(200, content=JPEG_BYTES)

    async def body(maptiler):
        constructed = maptiler.create_request(satellite_tile())
        assert isinstance(constructed, ConstructedRequest)
        assert constructed.url == SATELLITE_URL
        return await constructed.execute()

    assert run_session(handler, body) == JPEG_BYTES


def test_build_url_is_deterministic_and_encodes_key():
    def handler(request):
        return httpx.Response(500)

    async def body(maptiler):
        a = maptiler.build_url(satellite_tile())
        b = maptiler.build_url(satellite_tile())
        return a, b, maptiler.redacted_url(satellite_tile()), repr(maptiler)

    a, b, redacted, text = run_session(handler, body, api_key="a b&c")

    assert a == b == "https://api.maptiler.com/tiles/satellite/2/2/1.jpg?key=a+b%26c"
    assert redacted == "https://api.maptiler.com/tiles/satellite/2/2/1.jpg?key=***"
    assert "a b&c" not in text


def test_custom_base_url():
    def handler(request):
        return httpx.Response(200, content=str(request.url).encode())

    settings = ClientSettings(base_url="http://localhost:8080/tiles/")
    url = run_session(handler, lambda m: m.request(satellite_tile()), settings=settings)

    assert url == b"http://localhost:8080/tiles/satellite/2/2/1.jpg?key=test-key"


def test_debug_log_never_contains_key(caplog):
    caplog.set_level(logging.DEBUG, logger="maptiler_cloud")

    def handler(request):
        return httpx.Response(200, content=JPEG_BYTES)

    run_session(handler, lambda m: m.request(satellite_tile()))

    assert "satellite/2/2/1.jpg?key=***" in caplog.text
    assert API_KEY not in caplog.text


def test_owned_client_is_closed_but_supplied_client_is_not():
    async def main():
        async with Maptiler(API_KEY) as owned:
            inner = owned._client
        supplied = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        async with Maptiler(API_KEY, client=supplied):
            pass
        result = (inner.is_closed, supplied.is_closed)
        await supplied.aclose()
        return result

    assert asyncio.run(main()) == (True, False)


@pytest.mark.parametrize("api_key", ["", "   ", None])
def test_rejects_missing_api_key(api_key):
    with pytest.raises(ConfigurationError):
        Maptiler(api_key)


def test_from_env(monkeypatch):
    monkeypatch.setenv("MAPTILER_KEY", "env-key")
    monkeypatch.setenv("MAPTILER_BASE_URL", "https://tiles.example.com/v1")

    def handler(request):
        return httpx.Response(200, content=str(request.url).encode())

    async def main():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            maptiler = Maptiler.from_env(client=client)
            return await maptiler.request(satellite_tile())

    assert asyncio.run(main()) == b"https://tiles.example.com/v1/satellite/2/2/1.jpg?key=env-key"
