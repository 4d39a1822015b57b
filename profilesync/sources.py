"""Retrieval of CSV text from remote spreadsheet exports."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from profilesync.config import Settings
from profilesync.errors import FetchError, ParseError

logger = logging.getLogger(__name__)


def decode_csv_bytes(data: bytes) -> str:
    """Decode uploaded or fetched CSV bytes, dropping a UTF-8 byte order mark."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ParseError(f"CSV content is not valid UTF-8: {exc}") from exc


def _check_size(header_length: Optional[str], limit: int) -> None:
    if not header_length:
        return
    try:
        content_length = int(header_length)
    except ValueError:
        return
    if content_length > limit:
        raise FetchError(f"Remote CSV exceeds the {limit} byte limit")


async def fetch_csv_text(
    url: str,
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """
    GET ``url`` and return its body as CSV text.

    Non-2xx responses, transport errors and bodies over ``max_csv_bytes``
    surface as FetchError; nothing is retried. The size limit is checked
    against ``content-length`` first and again while the body streams in.
    """
    limit = settings.max_csv_bytes
    timeout = httpx.Timeout(
        settings.fetch_connect_timeout_s, read=settings.fetch_read_timeout_s
    )
    async with httpx.AsyncClient(
        timeout=timeout, transport=transport, follow_redirects=True
    ) as client:
        try:
            async with client.stream("GET", url) as response:
                response.raise_for_status()
                _check_size(response.headers.get("content-length"), limit)

                body = bytearray()
                async for chunk in response.aiter_bytes():
                    body.extend(chunk)
                    if len(body) > limit:
                        raise FetchError(f"Remote CSV exceeds the {limit} byte limit")
        except httpx.HTTPStatusError as exc:
            logger.warning(f"CSV fetch from {url} returned {exc.response.status_code}")
            raise FetchError(
                f"Remote source returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning(f"CSV fetch from {url} failed: {exc}")
            raise FetchError(f"Remote source could not be reached: {exc}") from exc

    return decode_csv_bytes(bytes(body))
