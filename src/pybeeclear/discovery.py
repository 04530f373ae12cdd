"""Discovery of a BeeClear device on the local network.

Discovery is best-effort and runs in two steps:

1. Resolve the well-known local hostname ``beeclear.local`` (mDNS/DNS).
2. Ask the public ``beeclear.nl/mijnmeter/`` page, where a device that has
   published its local address answers with a redirect script::

       <script language="javascript"> window.location.href = "http://10.0.0.22" </script>

Failures of either step mean "not found" and are never raised.

Example:
    >>> transport = HTTPTransport()
    >>> address = await discover_address(transport)
    >>> if address:
    ...     print(f"BeeClear found at {address}")
"""

from __future__ import annotations

import asyncio
import logging
import re
import socket
from collections.abc import Callable

from pybeeclear.constants import (
    DEFAULT_TIMEOUT_MS,
    DISCOVERY_HOST,
    DISCOVERY_PATH,
    DISCOVERY_PORT,
    DISCOVERY_REDIRECT_MARKER,
    LOCAL_HOSTNAME,
)
from pybeeclear.exceptions import BeeclearConnectionError
from pybeeclear.transport import HTTPTransport

_LOGGER = logging.getLogger(__name__)

_REDIRECT_URL_RE = re.compile(r'"http://(.*)"')


async def lookup_local_address(hostname: str = LOCAL_HOSTNAME) -> str | None:
    """Resolve a hostname to an IPv4 address.

    Returns:
        The first resolved address, or None if the name does not resolve
    """
    loop = asyncio.get_running_loop()
    try:
        infos = await loop.getaddrinfo(hostname, None, family=socket.AF_INET)
    except OSError as err:
        _LOGGER.debug("Local lookup of %s failed: %s", hostname, err)
        return None

    if not infos:
        return None
    sockaddr = infos[0][4]
    return str(sockaddr[0])


def parse_discovery_page(status: int, body: str) -> str | None:
    """Extract the device address from the public discovery page.

    Example:
        >>> parse_discovery_page(200, 'window.location.href = "http://10.0.0.22" ')
        '10.0.0.22'
        >>> parse_discovery_page(404, "") is None
        True
    """
    if status != 200 or DISCOVERY_REDIRECT_MARKER not in body:
        return None
    match = _REDIRECT_URL_RE.search(body)
    if match is None:
        return None
    return match.group(1)


async def discover_address(
    transport: HTTPTransport,
    timeout: int = DEFAULT_TIMEOUT_MS,
    on_error: Callable[[BeeclearConnectionError], None] | None = None,
) -> str | None:
    """Find the local address of a BeeClear device.

    Args:
        transport: Transport used for the public discovery request
        timeout: Timeout of the public discovery request in milliseconds
        on_error: Called with the error when the public discovery request
            fails; the error itself is not raised

    Returns:
        Hostname or IP address of the device, or None if nothing was found
    """
    address = await lookup_local_address(LOCAL_HOSTNAME)
    if address:
        _LOGGER.debug("Resolved %s to %s", LOCAL_HOSTNAME, address)
        return address

    try:
        response = await transport.exchange(
            DISCOVERY_HOST,
            DISCOVERY_PORT,
            DISCOVERY_PATH,
            timeout=timeout,
        )
    except BeeclearConnectionError as err:
        _LOGGER.debug("Online discovery via %s failed: %s", DISCOVERY_HOST, err)
        if on_error is not None:
            on_error(err)
        return None

    address = parse_discovery_page(response.status, response.body)
    if address:
        _LOGGER.debug("Online discovery found device at %s", address)
    else:
        _LOGGER.debug("Online discovery returned no device address")
    return address


__all__ = [
    "discover_address",
    "lookup_local_address",
    "parse_discovery_page",
]
