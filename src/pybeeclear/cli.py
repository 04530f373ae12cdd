#!/usr/bin/env python3
"""Smoke test tool for pybeeclear.

Runs every read operation against a real BeeClear device and prints a report
with the responses, elapsed times and an error count.

Usage:
    pybeeclear-test                                  # discover, factory credentials
    pybeeclear-test password=energie
    pybeeclear-test host=192.168.1.50 port=443 short=true
    pybeeclear-test --help
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import platform
import sys
import time
from collections.abc import Awaitable, Callable
from pprint import pformat
from typing import Any

from pybeeclear import __version__
from pybeeclear.client import BeeclearClient
from pybeeclear.config import SessionConfig
from pybeeclear.exceptions import BeeclearError


def _key_value(item: str) -> tuple[str, str]:
    key, sep, value = item.partition("=")
    if not sep or not key or not value:
        raise argparse.ArgumentTypeError(f"expected key=value, got {item!r}")
    return key, value


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog="pybeeclear-test",
        description="Test the connection to a BeeClear Energy Manager.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Options (key=value):
  host=<address>     Device address (default: discover beeclear.local)
  port=<port>        TCP port (default: 80, 443 implies HTTPS)
  useTLS=true        Force HTTPS
  timeout=<ms>       Request timeout in milliseconds (default: 4000)
  username=<name>    Device user name (default: beeclear)
  password=<secret>  Device password (default: energie)
  short=true         Request short form meter readings
""",
    )
    parser.add_argument(
        "options",
        nargs="*",
        type=_key_value,
        metavar="key=value",
        help="Session options, see below",
    )
    parser.add_argument(
        "--debug",
        "-d",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


class SmokeTest:
    """Sequential run of all client operations, collecting a text report."""

    def __init__(self, client: BeeclearClient, short: bool = False) -> None:
        self.client = client
        self.short = short
        self.log: list[str] = []
        self.error_count = 0
        self._t0 = time.monotonic()

    def _elapsed(self) -> None:
        self.log.append(f"t = {time.monotonic() - self._t0:.3f}")

    async def _step(self, title: str, call: Callable[[], Awaitable[Any]]) -> Any:
        self.log.append(title)
        try:
            result = await call()
        except BeeclearError as err:
            self.log.append(f"error: {err}")
            self.error_count += 1
            result = None
        else:
            self.log.append(pformat(result))
        self._elapsed()
        return result

    def _session_state(self) -> dict[str, Any]:
        client = self.client
        return {
            "host": client.host,
            "port": client.port,
            "use_tls": client.use_tls,
            "timeout": client.timeout,
            "username": client.username,
            "password": "*****",
            "cookie": client.cookie,
            "logged_in": client.logged_in,
        }

    async def run(self) -> list[str]:
        """Run all steps and return the report lines."""
        self.log = [
            "========== STARTING TEST ==========",
            f"Python version: {platform.python_version()}",
            f"pybeeclear version: {__version__}",
            f"OS: {platform.system()} {platform.release()}",
        ]
        self._t0 = time.monotonic()
        self.error_count = 0
        self.log.append("t = 0")

        address = await self._step("trying to discover BeeClear...", self.client.discover)
        self.log.append(f"Local IP address: {address}")

        try:
            self.log.append("trying to login:")
            self.log.append(pformat(await self.client.login()))
            self._elapsed()
        except BeeclearError as err:
            self.log.append(f"error: {err}")
            self.log.append(pformat({"last_response": self.client.last_response}))
            self.log.append(pformat(self._session_state()))
            self.error_count += 1
            self.log.append(f"test finished with {self.error_count} errors")
            return self.log

        await self._step(
            "trying to get device information and settings:", self.client.get_device_info
        )
        await self._step("trying to get device status:", self.client.get_status)
        await self._step("trying to get network interface status:", self.client.get_network)
        await self._step(
            "trying to get meter readings:",
            lambda: self.client.get_meter_readings(self.short),
        )
        await self._step("trying to get online firmware list:", self.client.get_firmware_list)
        await self._step("trying to logout:", self.client.logout)

        self.log.append(pformat(self._session_state()))
        if self.error_count:
            self.log.append(f"test finished with {self.error_count} errors")
        else:
            self.log.append("test finished without errors :)")
        return self.log


async def run_test(options: dict[str, str]) -> int:
    """Run the smoke test with parsed key=value options."""
    config = SessionConfig.from_options(options)
    short = options.get("short", "").strip("'\"").lower() == "true"

    print("Testing now. Hang on.....")
    client = BeeclearClient.from_config(config)
    try:
        test = SmokeTest(client, short=short)
        for line in await test.run():
            print(line)
    finally:
        await client.close()

    return 1 if test.error_count else 0


def main() -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return asyncio.run(run_test(dict(args.options)))
    except ValueError as err:
        parser.error(str(err))


if __name__ == "__main__":
    sys.exit(main())
