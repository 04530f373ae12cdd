"""Python client library for the BeeClear Energy Manager local API.

Usage:
    Basic client usage:
        from pybeeclear import BeeclearClient

        async with BeeclearClient(host="192.168.1.50") as client:
            status = await client.get_status()
            readings = await client.get_meter_readings(short=True)

    Discovery:
        client = BeeclearClient()  # host "beeclear.local" triggers discovery
        await client.login()
        print(client.host)
"""

from __future__ import annotations

from .client import BeeclearClient
from .config import SessionConfig
from .exceptions import (
    BeeclearAPIError,
    BeeclearAuthError,
    BeeclearConnectionError,
    BeeclearContentTypeError,
    BeeclearDecodeError,
    BeeclearDeviceError,
    BeeclearError,
    BeeclearHTTPError,
    BeeclearTimeoutError,
    MeterReadingError,
    P1NotConnectedError,
)
from .models import MeterReadingsShort

__version__ = "0.1.0"
__all__ = [
    "BeeclearClient",
    "SessionConfig",
    "MeterReadingsShort",
    "BeeclearError",
    "BeeclearAPIError",
    "BeeclearAuthError",
    "BeeclearConnectionError",
    "BeeclearContentTypeError",
    "BeeclearDecodeError",
    "BeeclearDeviceError",
    "BeeclearHTTPError",
    "BeeclearTimeoutError",
    "MeterReadingError",
    "P1NotConnectedError",
]
