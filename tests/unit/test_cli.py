"""Tests for the pybeeclear-test smoke test CLI."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from pybeeclear.cli import SmokeTest, create_parser, main, run_test
from pybeeclear.exceptions import BeeclearAuthError, BeeclearHTTPError, P1NotConnectedError


def _mock_client(**overrides: Any) -> MagicMock:
    client = MagicMock()
    client.host = "192.168.1.50"
    client.port = 80
    client.use_tls = False
    client.timeout = 4000
    client.username = "beeclear"
    client.password = "energie"
    client.cookie = "session=abc"
    client.logged_in = True
    client.last_response = None
    client.discover = AsyncMock(return_value="192.168.1.50")
    client.login = AsyncMock(return_value={"status": 200, "message": "Welkom"})
    client.get_device_info = AsyncMock(return_value={"firmware": "49.10_NL"})
    client.get_status = AsyncMock(return_value={"p1": 1})
    client.get_network = AsyncMock(return_value={"eth": {}, "wifi": {}})
    client.get_meter_readings = AsyncMock(return_value={"u": 812})
    client.get_firmware_list = AsyncMock(return_value={"current": "49.10_NL"})
    client.logout = AsyncMock(return_value=True)
    for name, value in overrides.items():
        setattr(client, name, value)
    return client


class TestParser:
    """Tests for the argument parser."""

    def test_key_value_options(self) -> None:
        """Test key=value pairs are parsed into tuples."""
        args = create_parser().parse_args(["host=192.168.1.50", "password=a=b"])

        assert dict(args.options) == {"host": "192.168.1.50", "password": "a=b"}
        assert args.debug is False

    def test_malformed_option(self) -> None:
        """Test options without a value are rejected."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["host"])


class TestSmokeTest:
    """Tests for the SmokeTest runner."""

    @pytest.mark.asyncio
    async def test_all_steps_succeed(self) -> None:
        """Test a clean run reports no errors and masks the password."""
        client = _mock_client()

        test = SmokeTest(client, short=True)
        log = await test.run()

        assert test.error_count == 0
        assert log[-1] == "test finished without errors :)"
        client.get_meter_readings.assert_awaited_once_with(True)
        client.logout.assert_awaited_once()
        report = "\n".join(log)
        assert "'password': '*****'" in report
        assert "energie" not in report

    @pytest.mark.asyncio
    async def test_failed_steps_are_counted(self) -> None:
        """Test failing read operations are reported and the run continues."""
        client = _mock_client(
            get_status=AsyncMock(side_effect=BeeclearHTTPError(500)),
            get_meter_readings=AsyncMock(side_effect=P1NotConnectedError("P1 is not connected")),
        )

        test = SmokeTest(client)
        log = await test.run()

        assert test.error_count == 2
        assert "error: P1 is not connected" in log
        assert log[-1] == "test finished with 2 errors"
        client.get_firmware_list.assert_awaited_once()
        client.logout.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_login_failure_ends_run(self) -> None:
        """Test nothing else is attempted when login fails."""
        client = _mock_client(login=AsyncMock(side_effect=BeeclearAuthError("denied")))

        test = SmokeTest(client)
        log = await test.run()

        assert test.error_count == 1
        assert log[-1] == "test finished with 1 errors"
        client.get_status.assert_not_awaited()
        client.logout.assert_not_awaited()


class TestRunTest:
    """Tests for run_test() and main()."""

    @pytest.mark.asyncio
    async def test_exit_code(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test the exit code reflects the error count."""
        client = _mock_client(get_status=AsyncMock(side_effect=BeeclearHTTPError(500)))
        client.close = AsyncMock()

        with patch("pybeeclear.cli.BeeclearClient.from_config", return_value=client) as factory:
            assert await run_test({"host": "192.168.1.50", "short": "true"}) == 1

        config = factory.call_args.args[0]
        assert config.host == "192.168.1.50"
        client.get_meter_readings.assert_awaited_once_with(True)
        client.close.assert_awaited_once()
        assert "Testing now" in capsys.readouterr().out

    def test_main_invalid_option(self) -> None:
        """Test an invalid port is reported as a usage error."""
        with patch("sys.argv", ["pybeeclear-test", "port=http"]), pytest.raises(SystemExit):
            main()
