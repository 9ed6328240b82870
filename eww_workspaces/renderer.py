"""
Workspace renderer: live workspaces -> slot states -> eww yuck markup.

Output (one line per render):
    (box :class "workspaces" ... (button :onclick "swaymsg 'workspace 1'"
        :visible true :class "focused" "1") ... )
"""

import logging
import sys
from typing import Iterable, List, Optional, TextIO

from .config import WidgetConfig
from .models import DetectedCommand, Slot, SlotRange, WorkspaceRecord
from .wm_client import fetch_workspaces

logger = logging.getLogger(__name__)


def compute_slots(
    workspaces: Iterable[WorkspaceRecord],
    output: str,
    slot_range: Optional[SlotRange] = None,
) -> List[Slot]:
    """
    Derive one Slot per number in ``slot_range`` from the workspaces on ``output``.

    Slots without a workspace stay unoccupied. A later record with the same
    number overwrites an earlier one. Numbers outside the range are ignored.
    """
    slot_range = slot_range or SlotRange()
    slots = {number: Slot(number=number) for number in slot_range.numbers()}

    for ws in workspaces:
        if ws.output != output:
            continue
        if ws.num not in slot_range:
            logger.debug(f"Ignoring workspace {ws.name!r} (num={ws.num}) outside slot range")
            continue
        slots[ws.num] = Slot(number=ws.num, state=ws.slot_state(), visible=True)

    return [slots[number] for number in slot_range.numbers()]


def format_button(slot: Slot, command: DetectedCommand, config: WidgetConfig) -> str:
    return config.button_format.format(
        command=command.executable,
        number=slot.number,
        visible="true" if slot.visible else "false",
        state=slot.state.value,
    )


def format_widget(slots: Iterable[Slot], command: DetectedCommand, config: WidgetConfig) -> str:
    """Join the slot buttons with single spaces inside the container box."""
    buttons = " ".join(format_button(slot, command, config) for slot in slots)
    return config.box_format.format(buttons=buttons)


async def render(
    command: DetectedCommand,
    output: str,
    config: WidgetConfig,
    stream: Optional[TextIO] = None,
) -> str:
    """
    Fetch workspaces, build the widget and print it as one line.

    Nothing is printed when the fetch fails; the error propagates.

    Returns:
        The markup line that was printed

    Raises:
        CommandError: The workspace query failed
        ParseError: The workspace reply was malformed
    """
    workspaces = await fetch_workspaces(command, config.fetch_timeout)
    slots = compute_slots(workspaces, output, config.slot_range)
    widget = format_widget(slots, command, config)

    print(widget, file=stream or sys.stdout, flush=True)
    return widget
