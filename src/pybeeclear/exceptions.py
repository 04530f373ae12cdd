"""Exceptions raised by pybeeclear.

All exceptions inherit from :class:`BeeclearError` so callers can use a single
``except BeeclearError`` to catch any failure of the device API.
"""

from __future__ import annotations


class BeeclearError(Exception):
    """Base exception for all BeeClear errors."""

    pass


class BeeclearAuthError(BeeclearError):
    """Request attempted without a logged in session."""

    pass


class BeeclearConnectionError(BeeclearError):
    """Failed to reach the device (refused, reset, DNS failure)."""

    pass


class BeeclearTimeoutError(BeeclearConnectionError):
    """Request was aborted because the device did not answer in time."""

    pass


class BeeclearAPIError(BeeclearError):
    """The device answered, but the response was not usable."""

    pass


class BeeclearHTTPError(BeeclearAPIError):
    """The device answered with a status code other than 200."""

    def __init__(self, status_code: int) -> None:
        """Initialize with the received status code.

        Args:
            status_code: HTTP status code returned by the device
        """
        self.status_code = status_code
        super().__init__(f"HTTP request failed. Status code: {status_code}")


class BeeclearContentTypeError(BeeclearAPIError):
    """The response body was not served as JSON text."""

    def __init__(self, content_type: str | None) -> None:
        self.content_type = content_type
        super().__init__(
            f"Invalid content-type. Expected text/json but received {content_type}"
        )


class BeeclearDecodeError(BeeclearAPIError):
    """The response body could not be decoded as JSON."""

    def __init__(self, message: str, body: str) -> None:
        self.body = body
        super().__init__(message)


class BeeclearDeviceError(BeeclearError):
    """The device is reachable but its meter data is not usable."""

    pass


class P1NotConnectedError(BeeclearDeviceError):
    """No smart meter is connected to the P1 port of the device."""

    pass


class MeterReadingError(BeeclearDeviceError):
    """A short-form meter reading could not be derived from the raw payload."""

    pass


__all__ = [
    "BeeclearAPIError",
    "BeeclearAuthError",
    "BeeclearConnectionError",
    "BeeclearContentTypeError",
    "BeeclearDecodeError",
    "BeeclearDeviceError",
    "BeeclearError",
    "BeeclearHTTPError",
    "BeeclearTimeoutError",
    "MeterReadingError",
    "P1NotConnectedError",
]
