"""Pytest configuration and fixtures for pybeeclear tests."""

from __future__ import annotations

import json
from collections.abc import Callable, Generator
from typing import Any

import pytest
from aioresponses import aioresponses


@pytest.fixture
def login_response() -> dict[str, Any]:
    """Sample login response, including the settings block the client strips."""
    return {
        "status": 200,
        "message": "Welkom",
        "access_token": "toegang gegeven",
        "security": 0,
        "setting": {"landcode": "NL", "user": "beeclear", "auth": "admin"},
    }


@pytest.fixture
def readings_response() -> dict[str, Any]:
    """Sample full meter readings (/bc_current)."""
    return {
        "d": 1600798993,
        "ed": 1600798989,
        "tariefStatus": 2,
        "ul": 12637314,
        "uh": 8553028,
        "gl": 4288455,
        "gh": 10048153,
        "verbruik0": 814,
        "leveren0": 0,
        "verbruik1": -1,
        "leveren1": -1,
        "verbruik2": -1,
        "leveren2": -1,
        "u": 812,
        "g": 0,
        "gas": [{"slot": 0, "val": 6399475, "time": 1600797600}],
    }


@pytest.fixture
def status_response() -> dict[str, Any]:
    """Sample P1 and SD card status (/bc_status)."""
    return {"p1": 1, "sdcard": 1, "sdcardFree": "99.9%", "sdcardTotal": "15.47 GB"}


@pytest.fixture
def device_info_response() -> dict[str, Any]:
    """Sample device info and settings (/bc_softwareVersion)."""
    return {
        "info": "ok",
        "name": "KFM5KAIFA-METER",
        "serialElec": "98109215        ",
        "gas": [{"slot": 0, "serial": "28011001147028281"}],
        "protocolVersion": "42",
        "uptime": 1018445,
        "hardware": "2",
        "firmware": "49.10_NL",
        "timeSync": 2,
        "setting": {
            "landcode": "NL",
            "user": "beeclear",
            "auth": "admin",
            "enableHttps": True,
            "mijnmeter": True,
        },
    }


@pytest.fixture
def network_eth_response() -> dict[str, Any]:
    """Sample Ethernet interface info (/bc_getNetwork?type=eth)."""
    return {
        "status": "ok",
        "proto": "dhcp",
        "hostname": "beeclear",
        "status_ethernet": {
            "ip": "192.168.1.50",
            "netmask": "255.255.255.0",
            "link": "up",
            "mac": "64:51:7e:63:2b:a5",
        },
    }


@pytest.fixture
def network_wifi_response() -> dict[str, Any]:
    """Sample WiFi interface info (/bc_getNetwork?type=wifi)."""
    return {
        "status": "ok",
        "ip": "192.168.111.1",
        "proto": "off",
        "mode": "ap",
        "ssid": "BeeClear",
        "status_info": {"aan": 1, "wstatus": "down", "mac": "64:51:7e:63:2b:a4"},
    }


@pytest.fixture
def firmware_list_response() -> dict[str, Any]:
    """Sample firmware list (/bc_firmware?type=list)."""
    return {
        "info": "ok",
        "firmware": [{"file": "BeeClear_49.10_NL.bin", "version": "49.10_NL"}],
        "firmwareNew": "49.10_NL",
        "firmwareTest": "soult_NL",
        "current": "49.10_NL",
        "setting": {"testfirmware": False},
    }


@pytest.fixture
def mocked_api() -> Generator[aioresponses, None, None]:
    """Create aioresponses mock for HTTP requests."""
    with aioresponses() as m:
        yield m


@pytest.fixture
def mock_json(mocked_api: aioresponses) -> Callable[..., None]:
    """Register a JSON response served the way the device serves it (text/json)."""

    def _add(
        url: Any,
        data: Any,
        *,
        status: int = 200,
        headers: dict[str, str] | None = None,
        repeat: bool = False,
    ) -> None:
        mocked_api.get(
            url,
            status=status,
            body=json.dumps(data),
            content_type="text/json",
            headers=headers,
            repeat=repeat,
        )

    return _add
