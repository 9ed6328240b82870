"""
Pytest configuration and fixtures for eww-workspaces tests.
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict, List
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add repository root to Python path BEFORE test collection
package_root = Path(__file__).parent.parent
if str(package_root) not in sys.path:
    sys.path.insert(0, str(package_root))

from eww_workspaces.config import WidgetConfig
from eww_workspaces.models import DetectedCommand


@pytest.fixture
def config() -> WidgetConfig:
    """Default widget configuration."""
    return WidgetConfig()


@pytest.fixture
def swaymsg() -> DetectedCommand:
    """swaymsg resolved on PATH."""
    return DetectedCommand(name="swaymsg", path="/usr/bin/swaymsg")


@pytest.fixture
def monitors_file(tmp_path):
    """Write a monitors file and return its path."""
    def _write(bindings: List[Dict[str, str]]) -> Path:
        path = tmp_path / "monitors.json"
        path.write_text(json.dumps(bindings))
        return path
    return _write


@pytest.fixture
def workspace():
    """Build a get_workspaces reply entry."""
    def _workspace(num: int, output: str = "eDP-1", focused: bool = False, urgent: bool = False, **extra: Any) -> Dict[str, Any]:
        data = {
            "name": str(num),
            "num": num,
            "focused": focused,
            "urgent": urgent,
            "output": output,
        }
        data.update(extra)
        return data
    return _workspace


@pytest.fixture
def mock_process():
    """Build a finished subprocess mock for asyncio.create_subprocess_exec."""
    def _process(stdout: bytes = b"", stderr: bytes = b"", returncode: int = 0) -> MagicMock:
        process = MagicMock()
        process.communicate = AsyncMock(return_value=(stdout, stderr))
        process.wait = AsyncMock(return_value=returncode)
        process.returncode = returncode
        process.pid = 4242
        return process
    return _process


@pytest.fixture
def subscriber():
    """Build a running subscriber mock that emits ``lines`` then EOF."""
    def _subscriber(lines: List[bytes]) -> MagicMock:
        process = MagicMock()
        process.stdout = MagicMock()
        process.stdout.readline = AsyncMock(side_effect=list(lines) + [b""])
        process.returncode = None
        process.pid = 4343
        return process
    return _subscriber
