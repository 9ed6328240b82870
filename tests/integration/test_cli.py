"""
Integration tests for the command-line entry point.
"""

import asyncio
import json
import logging
import os
import signal
from unittest.mock import AsyncMock, patch

import pytest

from eww_workspaces.cli import build_parser, main, main_async
from eww_workspaces.config import COMMAND_ENV
from eww_workspaces.errors import CommandError, ErrorCode, FileTimeoutError, MonitorNotFoundError


class TestParser:

    def test_defaults(self):
        args = build_parser().parse_args(["--monitor", "DP-1"])

        assert args.monitor == "DP-1"
        assert args.monitors_file == "/tmp/monitors.json"
        assert args.command is None
        assert args.resolve_timeout is None

    def test_log_level_case_insensitive(self):
        args = build_parser().parse_args(["--monitor", "DP-1", "--log-level", "debug"])
        assert args.log_level == "DEBUG"


class TestMain:

    def test_missing_monitor_exits_with_usage(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 2
        assert "--monitor" in capsys.readouterr().err

    def test_empty_monitor_rejected(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["--monitor", ""])
        assert exc_info.value.code == 2

    def test_invalid_timeout_is_usage_error(self, monkeypatch):
        monkeypatch.delenv(COMMAND_ENV, raising=False)
        with pytest.raises(SystemExit) as exc_info:
            main(["--monitor", "DP-1", "--resolve-timeout", "-1"])
        assert exc_info.value.code == 2

    def test_monitor_not_found_exits_non_zero(self, monkeypatch):
        monkeypatch.delenv(COMMAND_ENV, raising=False)
        failing = AsyncMock(side_effect=MonitorNotFoundError("DP-1", "/tmp/monitors.json", ["DP-2"]))

        with patch("eww_workspaces.cli.run", failing):
            assert main(["--monitor", "DP-1"]) == 1

    def test_file_timeout_exits_non_zero(self, monkeypatch):
        monkeypatch.delenv(COMMAND_ENV, raising=False)
        failing = AsyncMock(side_effect=FileTimeoutError("/tmp/monitors.json", 5.0))

        with patch("eww_workspaces.cli.run", failing):
            assert main(["--monitor", "DP-1"]) == 1

    def test_subscription_closed_exits_non_zero(self, monkeypatch):
        monkeypatch.delenv(COMMAND_ENV, raising=False)
        failing = AsyncMock(side_effect=CommandError("swaymsg", "event subscription closed", code=ErrorCode.SUBSCRIPTION_CLOSED))

        with patch("eww_workspaces.cli.run", failing):
            assert main(["--monitor", "DP-1"]) == 1

    def test_flags_reach_run(self, monkeypatch, tmp_path):
        monkeypatch.delenv(COMMAND_ENV, raising=False)
        monitors = str(tmp_path / "monitors.json")
        failing = AsyncMock(side_effect=FileTimeoutError(monitors, 2.0))

        with patch("eww_workspaces.cli.run", failing) as run:
            main([
                "--monitor", "DP-1",
                "--monitors-file", monitors,
                "--command", "i3-msg",
                "--resolve-timeout", "2",
            ])

        monitor, path, config = run.call_args.args
        assert monitor == "DP-1"
        assert path == monitors
        assert config.forced_command == "i3-msg"
        assert config.resolve_timeout == 2.0


class TestFatalErrorLogging:

    def test_error_details_logged_at_debug(self, monkeypatch, caplog):
        monkeypatch.delenv(COMMAND_ENV, raising=False)
        caplog.set_level(logging.DEBUG, logger="eww_workspaces.cli")
        failing = AsyncMock(side_effect=MonitorNotFoundError("DP-1", "/tmp/monitors.json", ["DP-2"]))

        with patch("eww_workspaces.cli.run", failing):
            assert main(["--monitor", "DP-1"]) == 1

        details = [r.getMessage() for r in caplog.records if r.getMessage().startswith("Error details: ")]
        assert len(details) == 1
        data = json.loads(details[0][len("Error details: "):])
        assert data["code"] == ErrorCode.MONITOR_NOT_FOUND.value
        assert data["context"] == {"monitor": "DP-1", "path": "/tmp/monitors.json"}


class TestSignalShutdown:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("signum", [signal.SIGTERM, signal.SIGINT])
    async def test_signal_exits_cleanly(self, config, signum):
        running = asyncio.Event()

        async def run_forever(*_args):
            running.set()
            await asyncio.sleep(3600)

        with patch("eww_workspaces.cli.run", run_forever):
            task = asyncio.create_task(main_async("DP-1", "/tmp/monitors.json", config))
            await running.wait()
            os.kill(os.getpid(), signum)
            result = await asyncio.wait_for(task, timeout=5.0)

        assert result == 0

    @pytest.mark.asyncio
    async def test_cancellation_without_signal_propagates(self, config):
        running = asyncio.Event()

        async def run_forever(*_args):
            running.set()
            await asyncio.sleep(3600)

        with patch("eww_workspaces.cli.run", run_forever):
            task = asyncio.create_task(main_async("DP-1", "/tmp/monitors.json", config))
            await running.wait()
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task
