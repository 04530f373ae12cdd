"""BeeClear Energy Manager API Client.

This module provides an async client for the local HTTP(S) API of a BeeClear
Energy Manager, the P1 smart meter reader.

Key Features:
- Async/await support with aiohttp
- Device discovery via local DNS and the public beeclear.nl lookup
- Cookie based session management
- HTTPS with self-signed device certificates
- Support for injected aiohttp.ClientSession

A client instance holds mutable session state (cookie, login flag). Calls on
one instance must not run concurrently; use one instance per concurrent task.
"""

from __future__ import annotations

import base64
import json
import logging
from typing import Any
from urllib.parse import urlencode

import aiohttp

from .config import SessionConfig
from .constants import (
    DEFAULT_HOST,
    DEFAULT_PASSWORD,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT_MS,
    DEFAULT_USERNAME,
    DEVICE_INFO_PATH,
    EXPECTED_CONTENT_TYPE,
    FIRMWARE_LIST_PATH,
    LOGIN_PATH,
    LOGOUT_PATH,
    NETWORK_INTERFACES,
    NETWORK_PATH,
    READINGS_PATH,
    REBOOT_PATH,
    SETTINGS_KEY,
    STATUS_PATH,
    TLS_PORT,
    USER_AGENT,
)
from .discovery import discover_address
from .exceptions import (
    BeeclearAuthError,
    BeeclearConnectionError,
    BeeclearContentTypeError,
    BeeclearDecodeError,
    BeeclearHTTPError,
    P1NotConnectedError,
)
from .models import MeterReadingsShort
from .readings import to_short_readings
from .transport import HTTPTransport

_LOGGER = logging.getLogger(__name__)


def _encode_credential(value: str) -> str:
    """Encode a credential the way the device web interface does (base64)."""
    return base64.b64encode(value.encode("utf-8")).decode("ascii")


class BeeclearClient:
    """BeeClear Energy Manager API Client.

    Example:
        ```python
        async with BeeclearClient(host="192.168.1.50", password="energie") as client:
            readings = await client.get_meter_readings(short=True)
            print(f"Power: {readings.pwr}W, gas: {readings.gas}m³")
        ```
    """

    def __init__(
        self,
        *,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        use_tls: bool | None = None,
        timeout: int = DEFAULT_TIMEOUT_MS,
        username: str = DEFAULT_USERNAME,
        password: str = DEFAULT_PASSWORD,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """Initialize the BeeClear API client.

        Args:
            host: IP address or hostname of the device. The default
                "beeclear.local" triggers discovery on login.
            port: TCP port (default 80). Port 443 implies HTTPS.
            use_tls: Force HTTPS. Defaults to True when port is 443.
            timeout: Request timeout in milliseconds (default 4000)
            username: Device user name (factory default "beeclear")
            password: Device password (factory default "energie")
            session: Optional aiohttp ClientSession for session injection
        """
        self.host = host
        self.port = port
        self.use_tls = use_tls if use_tls is not None else port == TLS_PORT
        self.timeout = timeout
        self.username = username
        self.password = password

        # Session state
        self.cookie: str | None = None
        self.logged_in: bool = False
        self.last_response: Any = None

        self._transport = HTTPTransport(session)

    @classmethod
    def from_config(
        cls,
        config: SessionConfig,
        session: aiohttp.ClientSession | None = None,
    ) -> BeeclearClient:
        """Create a client from a SessionConfig."""
        config.validate()
        return cls(
            host=config.host,
            port=config.port,
            use_tls=config.use_tls,
            timeout=config.timeout,
            username=config.username,
            password=config.password,
            session=session,
        )

    async def __aenter__(self) -> BeeclearClient:
        """Async context manager entry."""
        try:
            await self.login()
        except Exception:
            await self.close()
            raise
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    async def close(self) -> None:
        """Close the HTTP session if we own it."""
        await self._transport.close()

    async def _request(
        self,
        path: str,
        *,
        force: bool = False,
        timeout: int | None = None,
    ) -> Any:
        """Make an authenticated request to the device.

        Args:
            path: Endpoint path, including any query string
            force: Send even when not logged in (used by login itself)
            timeout: Timeout override in milliseconds

        Returns:
            Decoded JSON response

        Raises:
            BeeclearAuthError: If not logged in and force is not set
            BeeclearConnectionError: If the device cannot be reached
            BeeclearHTTPError: If the device answers with a status other than 200
            BeeclearContentTypeError: If the response is not JSON text
            BeeclearDecodeError: If the response body is not valid JSON
        """
        if not self.logged_in and not force:
            raise BeeclearAuthError("Not logged in")

        headers = {
            "cache-control": "no-cache",
            "user-agent": USER_AGENT,
            "content-length": "0",
            "connection": "Keep-Alive",
        }
        if self.cookie:
            headers["cookie"] = self.cookie

        try:
            response = await self._transport.exchange(
                self.host,
                self.port,
                path,
                headers=headers,
                timeout=timeout or self.timeout,
                use_tls=self.use_tls,
            )
        except BeeclearConnectionError as err:
            self.last_response = err
            _LOGGER.warning("Request to %s failed: %s", self.host, err)
            raise

        self.last_response = response.body

        cookies = response.headers.getall("Set-Cookie", [])
        if cookies:
            self.cookie = "; ".join(cookies)

        if response.status != 200:
            self.last_response = response.status
            raise BeeclearHTTPError(response.status)

        content_type = response.headers.get("Content-Type")
        if not content_type or not content_type.startswith(EXPECTED_CONTENT_TYPE):
            raise BeeclearContentTypeError(content_type)

        try:
            return json.loads(response.body)
        except ValueError as err:
            raise BeeclearDecodeError(f"Invalid JSON response: {err}", response.body) from err

    # Authentication

    async def login(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        use_tls: bool | None = None,
        timeout: int | None = None,
        username: str | None = None,
        password: str | None = None,
    ) -> dict[str, Any]:
        """Log in to the device. Passed options override the session settings.

        Runs discovery first when the host is still "beeclear.local".

        Returns:
            Login response, e.g. {"status": 200, "message": "Welkom", ...}

        Raises:
            BeeclearError: If the login request fails
        """
        self.host = host or self.host
        self.port = port or self.port
        if use_tls is not None:
            self.use_tls = use_tls
        elif port is not None:
            self.use_tls = self.use_tls or port == TLS_PORT
        self.timeout = timeout or self.timeout
        self.username = username or self.username
        self.password = password or self.password

        try:
            if not self.host or self.host == DEFAULT_HOST:
                await self.discover()

            _LOGGER.info("Logging in to %s as %s", self.host, self.username)
            query = urlencode(
                {
                    "username": _encode_credential(self.username),
                    "password": _encode_credential(self.password),
                }
            )
            result = await self._request(f"{LOGIN_PATH}?{query}", force=True)
        except Exception:
            self.logged_in = False
            raise

        self.logged_in = True
        if isinstance(result, dict):
            result.pop(SETTINGS_KEY, None)
        _LOGGER.info("Login to %s successful", self.host)
        return result

    async def logout(self) -> bool:
        """End the session."""
        await self._request(LOGOUT_PATH)
        self.logged_in = False
        self.cookie = None
        _LOGGER.info("Logged out from %s", self.host)
        return True

    async def reboot(self) -> bool:
        """Reboot the device. The session ends with the reboot."""
        await self._request(REBOOT_PATH)
        self.logged_in = False
        self.cookie = None
        _LOGGER.info("Rebooting %s", self.host)
        return True

    # Discovery

    async def discover(self) -> str:
        """Discover the device in the local network.

        The host is only updated when an address was found.

        Returns:
            The (possibly unchanged) host
        """
        address = await discover_address(
            self._transport, self.timeout, on_error=self._record_discovery_error
        )
        if address:
            self.host = address
        else:
            _LOGGER.debug("No BeeClear device discovered, keeping host %s", self.host)
        return self.host

    def _record_discovery_error(self, err: BeeclearConnectionError) -> None:
        self.last_response = err

    # Device data

    async def get_network(self) -> dict[str, Any]:
        """Get the Ethernet and WiFi interface information.

        Returns:
            Dict keyed by interface name: {"eth": {...}, "wifi": {...}}
        """
        network: dict[str, Any] = {}
        for interface in NETWORK_INTERFACES:
            network[interface] = await self._request(f"{NETWORK_PATH}?type={interface}")
        return network

    async def get_device_info(self) -> dict[str, Any]:
        """Get the device information and settings."""
        info: dict[str, Any] = await self._request(DEVICE_INFO_PATH)
        return info

    async def get_status(self) -> dict[str, Any]:
        """Get the P1 and SD card status, e.g. {"p1": 1, "sdcard": 1, ...}."""
        status: dict[str, Any] = await self._request(STATUS_PATH)
        return status

    async def get_firmware_list(self) -> dict[str, Any]:
        """Get the installed and downloadable firmware versions."""
        firmware = await self._request(FIRMWARE_LIST_PATH)
        if isinstance(firmware, dict):
            firmware.pop(SETTINGS_KEY, None)
        return firmware

    async def get_meter_readings(
        self, short: bool = False
    ) -> dict[str, Any] | MeterReadingsShort:
        """Get the power and gas meter readings.

        Args:
            short: Return the short form summary instead of the raw payload

        Returns:
            Raw reading dict, or MeterReadingsShort when short is True

        Raises:
            P1NotConnectedError: If the device reports no usable meter data
            MeterReadingError: If the short form could not be derived
        """
        try:
            raw = await self._request(READINGS_PATH)
        except BeeclearDecodeError as err:
            raise P1NotConnectedError("P1 is not connected") from err

        if not short:
            return raw
        return to_short_readings(raw)


__all__ = [
    "BeeclearClient",
]
