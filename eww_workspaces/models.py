"""
Data models for the eww workspace widget.

All models use Pydantic v2 for validation of the monitors file and of
window manager replies.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, TypeAdapter, field_validator, model_validator


# ============================================================================
# Enums
# ============================================================================

class SlotState(str, Enum):
    """Rendered state of a workspace slot (doubles as the eww CSS class)"""
    UNOCCUPIED = "unoccupied"
    OCCUPIED = "occupied"
    FOCUSED = "focused"
    URGENT = "urgent"


# ============================================================================
# External records
# ============================================================================

class MonitorBinding(BaseModel):
    """One row of the monitors file: monitor name -> output identifier

    Missing or null fields read as "" so one incomplete row does not
    invalidate the rest of the file.
    """
    monitor: str = ""
    output: str = ""

    @field_validator('monitor', 'output', mode='before')
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class WorkspaceRecord(BaseModel):
    """A live workspace as reported by `get_workspaces`

    A missing number reads as 0, which falls outside the slot range.
    """
    name: str = ""
    num: int = 0
    focused: bool = False
    urgent: bool = False
    output: str = ""

    @field_validator('name', 'output', mode='before')
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator('num', mode='before')
    @classmethod
    def null_as_zero(cls, v: Any) -> Any:
        return 0 if v is None else v

    @field_validator('focused', 'urgent', mode='before')
    @classmethod
    def null_as_false(cls, v: Any) -> Any:
        return False if v is None else v

    def slot_state(self) -> SlotState:
        """State for this workspace's slot. Urgent takes priority over focused."""
        if self.urgent:
            return SlotState.URGENT
        if self.focused:
            return SlotState.FOCUSED
        return SlotState.OCCUPIED


MonitorBindingList = TypeAdapter(list[MonitorBinding])
WorkspaceRecordList = TypeAdapter(list[WorkspaceRecord])


# ============================================================================
# Derived state
# ============================================================================

class SlotRange(BaseModel):
    """Inclusive range of slot numbers rendered as buttons"""
    min_slot: int = Field(default=1, ge=0)
    max_slot: int = Field(default=10, ge=0)

    @model_validator(mode='after')
    def validate_bounds(self) -> 'SlotRange':
        """Ensure the range is not empty"""
        if self.max_slot < self.min_slot:
            raise ValueError(
                f"max_slot ({self.max_slot}) must be >= min_slot ({self.min_slot})"
            )
        return self

    def __contains__(self, number: int) -> bool:
        return self.min_slot <= number <= self.max_slot

    def numbers(self) -> range:
        return range(self.min_slot, self.max_slot + 1)


class Slot(BaseModel):
    """One fixed button position in the widget"""
    number: int
    state: SlotState = SlotState.UNOCCUPIED
    visible: bool = True


class DetectedCommand(BaseModel):
    """Window manager CLI chosen once at startup"""
    name: str
    path: Optional[str] = None

    @property
    def executable(self) -> str:
        """Resolved path when found on PATH, otherwise the bare name"""
        return self.path or self.name

    @property
    def resolved(self) -> bool:
        return self.path is not None
