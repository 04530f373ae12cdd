"""HTTP(S) transport for the BeeClear local API.

The transport performs exactly one request/response cycle per call and knows
nothing about sessions, cookies or JSON. Session handling lives in
:mod:`pybeeclear.client`.

Cookies are never stored automatically: the aiohttp session is created with a
:class:`aiohttp.DummyCookieJar` so the caller stays in control of the session
cookie it sends. An injected session may carry its own cookie jar, so any
cookies it holds for the device host are dropped around every exchange.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import aiohttp
from aiohttp import ClientTimeout

from pybeeclear.constants import DEFAULT_TIMEOUT_MS
from pybeeclear.exceptions import BeeclearConnectionError, BeeclearTimeoutError

if TYPE_CHECKING:
    from multidict import CIMultiDictProxy

_LOGGER = logging.getLogger(__name__)


@dataclass
class RawResponse:
    """Complete response of a single exchange.

    Attributes:
        status: HTTP status code
        headers: Response headers (case-insensitive, repeated headers kept)
        body: Full response body decoded as text
    """

    status: int
    headers: CIMultiDictProxy[str]
    body: str


def build_url(host: str, port: int, path: str, use_tls: bool = False) -> str:
    """Build the request URL, leaving out the port when it is the scheme default.

    Example:
        >>> build_url("192.168.1.50", 80, "/bc_status")
        'http://192.168.1.50/bc_status'
        >>> build_url("192.168.1.50", 8443, "/bc_status", use_tls=True)
        'https://192.168.1.50:8443/bc_status'
    """
    scheme = "https" if use_tls else "http"
    default_port = 443 if use_tls else 80
    netloc = host if port == default_port else f"{host}:{port}"
    return f"{scheme}://{netloc}{path}"


def _decode_body(content: bytes, charset: str | None) -> str:
    """Decode a response body, falling back to utf-8 for unknown charsets."""
    try:
        return content.decode(charset or "utf-8", errors="replace")
    except LookupError:
        _LOGGER.debug("Unknown charset %s, decoding as utf-8", charset)
        return content.decode("utf-8", errors="replace")


class HTTPTransport:
    """Plain and encrypted HTTP exchanges with a local device.

    The device serves a self-signed certificate, so certificate validation is
    disabled for HTTPS. One connector is created on first use and reused for
    all following requests.
    """

    def __init__(self, session: aiohttp.ClientSession | None = None) -> None:
        """Initialize the transport.

        Args:
            session: Optional aiohttp ClientSession for session injection.
                An injected session is never closed by the transport. HTTPS
                requests through it still skip certificate validation.
        """
        self._session: aiohttp.ClientSession | None = session
        self._owns_session: bool = session is None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session."""
        if self._session is not None and not self._owns_session:
            return self._session

        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(ssl=False)
            self._session = aiohttp.ClientSession(
                connector=connector,
                cookie_jar=aiohttp.DummyCookieJar(),
            )
            self._owns_session = True

        return self._session

    async def close(self) -> None:
        """Close the session if it was created by this transport."""
        if self._session and not self._session.closed and self._owns_session:
            await self._session.close()

    async def exchange(
        self,
        host: str,
        port: int,
        path: str,
        *,
        method: str = "GET",
        headers: dict[str, str] | None = None,
        body: str = "",
        timeout: int = DEFAULT_TIMEOUT_MS,
        use_tls: bool = False,
    ) -> RawResponse:
        """Execute one request and collect the complete response.

        Args:
            host: IP address or hostname
            port: TCP port
            path: Request path, including any query string
            method: HTTP method
            headers: Request headers
            body: Request body (empty for all device endpoints)
            timeout: Milliseconds before the request is aborted
            use_tls: Use HTTPS instead of HTTP

        Returns:
            RawResponse with status, headers and full body

        Raises:
            BeeclearTimeoutError: If no complete response arrived in time
            BeeclearConnectionError: On socket level failures
        """
        session = await self._get_session()
        url = build_url(host, port, path, use_tls)
        request_kwargs: dict[str, Any] = {
            "headers": headers,
            "timeout": ClientTimeout(total=timeout / 1000),
        }
        if body:
            request_kwargs["data"] = body
        if use_tls:
            request_kwargs["ssl"] = False

        _LOGGER.debug("%s %s", method, build_url(host, port, path.split("?")[0], use_tls))

        if not self._owns_session:
            session.cookie_jar.clear_domain(host)

        try:
            async with session.request(method, url, **request_kwargs) as response:
                content = await response.read()
                text = _decode_body(content, response.charset)
                _LOGGER.debug("Response %d (%d bytes) from %s", response.status, len(content), host)
                return RawResponse(status=response.status, headers=response.headers, body=text)

        except asyncio.TimeoutError as err:
            raise BeeclearTimeoutError(
                f"Request to {host}:{port} timed out after {timeout} ms"
            ) from err

        except aiohttp.ClientError as err:
            raise BeeclearConnectionError(f"Connection error: {err}") from err

        finally:
            if not self._owns_session:
                session.cookie_jar.clear_domain(host)


__all__ = [
    "HTTPTransport",
    "RawResponse",
    "build_url",
]
