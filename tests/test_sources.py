import httpx
import pytest

from profilesync.config import Settings
from profilesync.errors import FetchError, ParseError
from profilesync.sources import decode_csv_bytes, fetch_csv_text


def _transport(status_code: int, body: bytes = b"") -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, content=body)

    return httpx.MockTransport(handler)


def test_decode_strips_byte_order_mark():
    assert decode_csv_bytes("\ufeffprofile_name\nalpha\n".encode("utf-8")) == "profile_name\nalpha\n"


def test_decode_rejects_invalid_utf8():
    with pytest.raises(ParseError):
        decode_csv_bytes(b"\xff\xfe\x00bad")


@pytest.mark.anyio
async def test_fetch_returns_body_text():
    text = await fetch_csv_text(
        "https://sheets.example.com/export?format=csv",
        Settings(),
        transport=_transport(200, b"profile_name\nalpha\n"),
    )
    assert text == "profile_name\nalpha\n"


@pytest.mark.anyio
async def test_fetch_non_2xx_is_fetch_error():
    with pytest.raises(FetchError) as excinfo:
        await fetch_csv_text(
            "https://sheets.example.com/missing", Settings(), transport=_transport(404)
        )
    assert "404" in str(excinfo.value)


@pytest.mark.anyio
async def test_fetch_transport_error_is_fetch_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(FetchError):
        await fetch_csv_text(
            "https://sheets.example.com/export",
            Settings(),
            transport=httpx.MockTransport(handler),
        )


@pytest.mark.anyio
async def test_fetch_enforces_size_limit():
    settings = Settings(max_csv_bytes=1024)
    with pytest.raises(FetchError):
        await fetch_csv_text(
            "https://sheets.example.com/export",
            settings,
            transport=_transport(200, b"x" * 2048),
        )


@pytest.mark.anyio
async def test_fetch_enforces_size_limit_on_streamed_body():
    async def chunks():
        for _ in range(4):
            yield b"x" * 512

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=chunks())

    with pytest.raises(FetchError) as excinfo:
        await fetch_csv_text(
            "https://sheets.example.com/export",
            Settings(max_csv_bytes=1024),
            transport=httpx.MockTransport(handler),
        )
    assert "1024 byte limit" in str(excinfo.value)


@pytest.mark.anyio
async def test_fetch_rejects_declared_oversize_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"tiny", headers={"Content-Length": "999999"})

    with pytest.raises(FetchError):
        await fetch_csv_text(
            "https://sheets.example.com/export",
            Settings(max_csv_bytes=1024),
            transport=httpx.MockTransport(handler),
        )
