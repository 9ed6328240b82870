"""
Window manager CLI client.

Talks to sway or i3 through ``swaymsg``/``i3-msg``, which share the same
``-t <message type>`` interface and JSON replies.
"""

import asyncio
import json
import logging
from typing import AsyncIterator, List, Sequence

from pydantic import ValidationError

from .errors import CommandError, ErrorCode, ParseError
from .models import DetectedCommand, WorkspaceRecord, WorkspaceRecordList

logger = logging.getLogger(__name__)

# i3 window events carry the full container tree and can exceed the 64 KiB default
EVENT_LINE_LIMIT = 4 * 1024 * 1024


async def _kill(process: asyncio.subprocess.Process) -> None:
    """Kill a child that has not exited and reap it."""
    if process.returncode is None:
        try:
            process.kill()
        except ProcessLookupError:
            pass
    await process.wait()


async def run_message(command: DetectedCommand, message_type: str, timeout: float) -> bytes:
    """
    Run ``<command> -t <message_type>`` and return its stdout.

    Args:
        command: Detected window manager CLI
        message_type: IPC message type (e.g. "get_workspaces")
        timeout: Bound in seconds; the process is killed when exceeded

    Returns:
        Raw stdout bytes

    Raises:
        CommandError: Process could not start, timed out or exited non-zero
    """
    argv = [command.executable, "-t", message_type]

    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise CommandError(command.name, f"cannot execute: {e}") from e

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        await _kill(process)
        raise CommandError(
            command.name,
            f"{message_type} timed out after {timeout:.1f}s",
            code=ErrorCode.COMMAND_TIMEOUT,
        )
    except asyncio.CancelledError:
        await _kill(process)
        raise

    if process.returncode != 0:
        detail = (stderr or b"").decode(errors="replace").strip() or "no error output"
        raise CommandError(
            command.name,
            f"{message_type} exited with status {process.returncode}: {detail}",
            returncode=process.returncode,
        )

    return stdout


async def fetch_workspaces(command: DetectedCommand, timeout: float) -> List[WorkspaceRecord]:
    """Query the live workspace list.

    Raises:
        CommandError: The query failed
        ParseError: The reply is not a JSON array of workspaces
    """
    raw = await run_message(command, "get_workspaces", timeout)
    try:
        return WorkspaceRecordList.validate_json(raw)
    except ValidationError as e:
        reason = e.errors()[0].get("msg", str(e)) if e.errors() else str(e)
        raise ParseError(f"{command.name} get_workspaces reply", reason) from e


async def start_subscription(
    command: DetectedCommand, event_types: Sequence[str]
) -> asyncio.subprocess.Process:
    """Start ``<command> -t subscribe -m '[...]'`` with stdout piped.

    Raises:
        CommandError: The subscriber could not be started
    """
    payload = json.dumps(list(event_types), separators=(",", ":"))
    try:
        process = await asyncio.create_subprocess_exec(
            command.executable, "-t", "subscribe", "-m", payload,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.DEVNULL,
            limit=EVENT_LINE_LIMIT,
        )
    except OSError as e:
        raise CommandError(command.name, f"cannot start subscription: {e}") from e

    logger.info(f"Subscribed to {payload} events via {command.name} (pid={process.pid})")
    return process


async def iter_events(process: asyncio.subprocess.Process, command_name: str) -> AsyncIterator[bytes]:
    """Yield raw event lines until the subscriber's stdout closes.

    Raises:
        CommandError: A line could not be read
    """
    if process.stdout is None:
        raise CommandError(command_name, "subscription has no stdout pipe")

    while True:
        try:
            line = await process.stdout.readline()
        except (ValueError, asyncio.LimitOverrunError) as e:
            raise CommandError(
                command_name, f"error reading event stream: {e}",
                code=ErrorCode.SUBSCRIPTION_CLOSED,
            ) from e

        if not line:
            return
        yield line


async def stop_subscription(process: asyncio.subprocess.Process, grace: float = 1.0) -> None:
    """Terminate the subscriber if still running and reap it."""
    if process.returncode is None:
        try:
            process.terminate()
        except ProcessLookupError:
            pass
        try:
            await asyncio.wait_for(process.wait(), timeout=grace)
        except asyncio.TimeoutError:
            logger.warning(f"Subscriber pid={process.pid} ignored SIGTERM, killing")
            process.kill()
            await process.wait()
