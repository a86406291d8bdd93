"""Task models."""

from enum import Enum
from typing import Any, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator

from finishing_timeline.models.property import PropertyRef, property_id_of
from finishing_timeline.utils.dates import format_date


class TaskStatus(str, Enum):
    """Task status values."""
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    ON_HOLD = "on-hold"
    CANCELLED = "cancelled"


class TaskPriority(str, Enum):
    """Task priority values."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


def enum_or_default(enum_cls, value: Any, default):
    """Known enum member for ``value``, otherwise ``default``."""
    try:
        return enum_cls(value)
    except (TypeError, ValueError):
        return default


def _clamp_progress(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        progress = int(float(value))
    except (TypeError, ValueError):
        return None
    return max(0, min(100, progress))


class Task(BaseModel):
    """Scheduled unit of work on a property.

    Start and end dates are kept exactly as the API sent them; projections
    normalize them.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    id: Optional[str] = Field(None, alias="_id", description="Task ID")
    title: str = Field(default="", description="Task title")
    description: Optional[str] = Field(None, description="Task description")
    start_date: Any = Field(None, alias="startDate", description="Raw start date")
    end_date: Any = Field(None, alias="endDate", description="Raw end date")
    status: Union[TaskStatus, str] = Field(
        default=TaskStatus.PENDING,
        union_mode="left_to_right",
        description="Task status; values outside TaskStatus are kept as plain strings"
    )
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="Task priority")
    progress: Optional[int] = Field(None, ge=0, le=100, description="Completion percentage")
    property_ref: Optional[Union[PropertyRef, str]] = Field(
        None,
        alias="property",
        description="Associated property (ID or populated record)"
    )

    @field_validator("title", mode="before")
    @classmethod
    def _title_not_null(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("status", mode="before")
    @classmethod
    def _status_default(cls, value: Any) -> Any:
        if isinstance(value, str) and value:
            return value
        return TaskStatus.PENDING

    @field_validator("priority", mode="before")
    @classmethod
    def _tolerant_priority(cls, value: Any) -> TaskPriority:
        return enum_or_default(TaskPriority, value, TaskPriority.MEDIUM)

    @field_validator("progress", mode="before")
    @classmethod
    def _normalize_progress(cls, value: Any) -> Optional[int]:
        return _clamp_progress(value)

    @property
    def status_value(self) -> str:
        """Status as its wire string, known or not."""
        if isinstance(self.status, TaskStatus):
            return self.status.value
        return self.status

    @property
    def property_id(self) -> Optional[str]:
        return property_id_of(self.property_ref)


class TaskPayload(BaseModel):
    """Body sent to the API when creating or updating a task."""
    model_config = ConfigDict(populate_by_name=True)

    property_id: str = Field(..., alias="property", min_length=1, description="Property ID")
    title: str = Field(..., min_length=1, description="Task title")
    description: str = Field(default="", description="Task description")
    start_date: str = Field(..., alias="startDate", description="Start date (YYYY-MM-DD)")
    end_date: str = Field(..., alias="endDate", description="End date (YYYY-MM-DD)")
    status: TaskStatus = Field(default=TaskStatus.PENDING)
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM)
    progress: int = Field(default=0, ge=0, le=100)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _format_dates(cls, value: Any) -> str:
        formatted = format_date(value)
        if not formatted:
            raise ValueError("must be a valid date")
        return formatted

    @classmethod
    def from_task(cls, task: Task) -> "TaskPayload":
        """Prefill a payload from an existing task, as the edit form does."""
        return cls(
            property_id=task.property_id or "",
            title=task.title,
            description=task.description or "",
            start_date=task.start_date,
            end_date=task.end_date,
            status=enum_or_default(TaskStatus, task.status, TaskStatus.PENDING),
            priority=task.priority,
            progress=task.progress or 0,
        )

    def to_api(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")
