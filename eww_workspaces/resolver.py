"""
Monitor resolution: map a monitor name to its output via the monitors file.

The file is written by another process (the bar launcher) which may not
have run yet, or may be halfway through writing it, so reads and parses are
retried until a shared deadline.
"""

import asyncio
import logging
from pathlib import Path
from typing import List, Union

from pydantic import ValidationError

from .errors import FileTimeoutError, MonitorNotFoundError, ParseError
from .models import MonitorBinding, MonitorBindingList
from .polling import poll_until

logger = logging.getLogger(__name__)


class _EmptyFile(Exception):
    """File exists but has no content yet."""


def parse_monitor_bindings(raw: Union[bytes, str], source: str = "monitors file") -> List[MonitorBinding]:
    """Parse a JSON array of ``{"monitor", "output"}`` objects.

    Raises:
        ParseError: If the content is not valid JSON or has the wrong shape
    """
    try:
        return MonitorBindingList.validate_json(raw)
    except ValidationError as e:
        reason = e.errors()[0].get("msg", str(e)) if e.errors() else str(e)
        raise ParseError(source, reason) from e


async def resolve_monitor_output(
    path: Union[str, Path],
    monitor: str,
    *,
    timeout: float = 5.0,
    interval: float = 0.2,
) -> str:
    """
    Return the output bound to ``monitor`` in the monitors file at ``path``.

    Waits for the file to be readable and non-empty, then re-reads it until
    it parses. Both waits share one ``timeout`` deadline. A file that parses
    but lacks the monitor fails at once.

    Args:
        path: Monitors file path
        monitor: Monitor name (exact match)
        timeout: Overall bound in seconds
        interval: Poll interval in seconds

    Returns:
        The output identifier (e.g. "eDP-1")

    Raises:
        FileTimeoutError: File not readable, empty or unparseable at the deadline
        MonitorNotFoundError: File parsed but has no entry for ``monitor``
    """
    path = Path(path)
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout

    async def read_nonempty() -> bytes:
        data = path.read_bytes()
        if not data:
            raise _EmptyFile(str(path))
        return data

    try:
        data = await poll_until(
            read_nonempty,
            interval=interval,
            timeout=timeout,
            retry_on=(OSError, _EmptyFile),
        )
    except asyncio.TimeoutError as e:
        raise FileTimeoutError(str(path), timeout) from e

    pending = [data]

    async def read_and_parse() -> List[MonitorBinding]:
        raw = pending.pop() if pending else path.read_bytes()
        return parse_monitor_bindings(raw, source=str(path))

    try:
        bindings = await poll_until(
            read_and_parse,
            interval=interval,
            timeout=max(deadline - loop.time(), 0.0),
            retry_on=(OSError, ParseError),
        )
    except asyncio.TimeoutError as e:
        raise FileTimeoutError(str(path), timeout, stage="parsing") from e

    for binding in bindings:
        if binding.monitor == monitor:
            logger.debug(f"Resolved monitor {monitor} -> {binding.output} from {path}")
            return binding.output

    raise MonitorNotFoundError(monitor, str(path), [binding.monitor for binding in bindings])
