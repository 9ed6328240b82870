"""
Event loop: detect -> resolve -> initial render -> re-render per event.

The subscription is never restarted. When the subscriber's stream closes
the loop ends with a CommandError and the process exits non-zero, leaving
restarts to the service manager (eww relaunches deflisten scripts).
"""

import logging
from pathlib import Path
from typing import Optional, TextIO, Union

from .config import WidgetConfig
from .detector import detect_command
from .errors import CommandError, ErrorCode, WorkspacesError
from .models import DetectedCommand
from .renderer import render
from .resolver import resolve_monitor_output
from .wm_client import iter_events, start_subscription, stop_subscription

logger = logging.getLogger(__name__)


async def render_cycle(
    command: DetectedCommand,
    output: str,
    config: WidgetConfig,
    stream: Optional[TextIO] = None,
    reason: str = "event",
) -> bool:
    """Render once, logging and skipping the cycle on failure.

    Returns:
        True if a widget line was printed
    """
    try:
        await render(command, output, config, stream=stream)
    except WorkspacesError as e:
        logger.warning(f"Render ({reason}) skipped: {e.message}")
        return False
    return True


async def run(
    monitor: str,
    monitors_file: Union[str, Path],
    config: Optional[WidgetConfig] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Run the widget until the event subscription ends.

    Args:
        monitor: Monitor name to look up in the monitors file
        monitors_file: Path of the monitors file
        config: Widget configuration (defaults if None)
        stream: Where markup lines go (stdout if None)

    Raises:
        FileTimeoutError: Monitors file never became usable
        MonitorNotFoundError: Monitor missing from the monitors file
        CommandError: Subscription could not start, or its stream closed
    """
    config = config or WidgetConfig()

    command = await detect_command(config)
    logger.info(f"Using {command.executable}")

    output = await resolve_monitor_output(
        monitors_file,
        monitor,
        timeout=config.resolve_timeout,
        interval=config.poll_interval,
    )
    logger.info(f"Monitor {monitor} is on output {output}")

    await render_cycle(command, output, config, stream=stream, reason="initial")

    process = await start_subscription(command, config.event_types)
    events = 0
    try:
        async for _ in iter_events(process, command.name):
            events += 1
            await render_cycle(command, output, config, stream=stream)
    finally:
        await stop_subscription(process)

    raise CommandError(
        command.name,
        f"event subscription closed after {events} events (exit status {process.returncode})",
        code=ErrorCode.SUBSCRIPTION_CLOSED,
        returncode=process.returncode,
    )
