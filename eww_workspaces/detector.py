"""Pick the window manager CLI once at startup."""

import logging
import os
import shutil

from .config import WidgetConfig
from .errors import CommandError
from .models import DetectedCommand
from .wm_client import run_message

logger = logging.getLogger(__name__)


async def _responds(command: DetectedCommand, timeout: float) -> bool:
    """True if ``<command> -t get_version`` succeeds within ``timeout``."""
    try:
        await run_message(command, "get_version", timeout)
    except CommandError as e:
        logger.debug(f"{command.name} probe failed: {e.message}")
        return False
    return True


async def detect_command(config: WidgetConfig) -> DetectedCommand:
    """
    Return the window manager CLI to use for the rest of the process.

    Precedence: a forced command if configured; else the preferred command
    (swaymsg) when it is on PATH and answers ``get_version``; else the
    fallback (i3-msg) when on PATH. If neither is found the fallback name
    is returned unresolved and the first query reports the failure.
    """
    logger.debug(f"PATH: {os.environ.get('PATH', '')}")

    if config.forced_command:
        path = shutil.which(config.forced_command)
        if path is None:
            logger.warning(f"Forced command {config.forced_command} not found on PATH")
        return DetectedCommand(name=config.forced_command, path=path)

    preferred = shutil.which(config.preferred_command)
    if preferred:
        candidate = DetectedCommand(name=config.preferred_command, path=preferred)
        if await _responds(candidate, config.detect_timeout):
            return candidate

    fallback = shutil.which(config.fallback_command)
    if fallback is None:
        logger.warning(
            f"Neither {config.preferred_command} nor {config.fallback_command} is usable; "
            f"falling back to {config.fallback_command}"
        )
    return DetectedCommand(name=config.fallback_command, path=fallback)
