"""Constants for the BeeClear local HTTP API.

Endpoint paths were taken from the web interface served by the BeeClear
Energy Manager itself. All endpoints answer GET requests with an empty body.
"""

from __future__ import annotations

from typing import Final

# Device endpoints
LOGIN_PATH: Final = "/bc_login"
LOGOUT_PATH: Final = "/bc_logout"
REBOOT_PATH: Final = "/bc_reboot"
READINGS_PATH: Final = "/bc_current"
NETWORK_PATH: Final = "/bc_getNetwork"  # ?type=eth or ?type=wifi
STATUS_PATH: Final = "/bc_status"  # SD card and P1 info
DEVICE_INFO_PATH: Final = "/bc_softwareVersion"  # includes the settings block
FIRMWARE_LIST_PATH: Final = "/bc_firmware?type=list"

# Network interface types accepted by NETWORK_PATH
NETWORK_INTERFACES: Final = ("eth", "wifi")

# Discovery
LOCAL_HOSTNAME: Final = "beeclear.local"
DISCOVERY_HOST: Final = "beeclear.nl"
DISCOVERY_PORT: Final = 80
DISCOVERY_PATH: Final = "/mijnmeter/"
# '<script language="javascript"> window.location.href = "http://10.0.0.22" </script>'
DISCOVERY_REDIRECT_MARKER: Final = "window.location.href"

# Session defaults (factory values of the device)
DEFAULT_HOST: Final = LOCAL_HOSTNAME
DEFAULT_PORT: Final = 80
TLS_PORT: Final = 443
DEFAULT_USERNAME: Final = "beeclear"
DEFAULT_PASSWORD: Final = "energie"
DEFAULT_TIMEOUT_MS: Final = 4000

# Request/response handling
USER_AGENT: Final = "pybeeclear"
EXPECTED_CONTENT_TYPE: Final = "text/json"
SETTINGS_KEY: Final = "setting"

# Meter counters are reported in Wh (power) and litre (gas)
METER_SCALE: Final = 1000
NET_ROUNDING_DIGITS: Final = 4

__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PASSWORD",
    "DEFAULT_PORT",
    "DEFAULT_TIMEOUT_MS",
    "DEFAULT_USERNAME",
    "DEVICE_INFO_PATH",
    "DISCOVERY_HOST",
    "DISCOVERY_PATH",
    "DISCOVERY_PORT",
    "DISCOVERY_REDIRECT_MARKER",
    "EXPECTED_CONTENT_TYPE",
    "FIRMWARE_LIST_PATH",
    "LOCAL_HOSTNAME",
    "LOGIN_PATH",
    "LOGOUT_PATH",
    "METER_SCALE",
    "NETWORK_INTERFACES",
    "NETWORK_PATH",
    "NET_ROUNDING_DIGITS",
    "READINGS_PATH",
    "REBOOT_PATH",
    "SETTINGS_KEY",
    "STATUS_PATH",
    "TLS_PORT",
    "USER_AGENT",
]
