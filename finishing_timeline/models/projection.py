"""Derived view models for the calendar and Gantt renderers.

None of these are persisted; they are rebuilt from the task and milestone
collections on every refresh.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from finishing_timeline.models.milestone import Milestone
from finishing_timeline.models.property import Property
from finishing_timeline.models.task import Task


class EventKind(str, Enum):
    """Which kind of record a calendar event was projected from."""
    TASK = "task"
    MILESTONE = "milestone"


class _ViewModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_api(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class CalendarEvent(_ViewModel):
    """Displayable interval for the month/week/day/agenda calendar."""
    id: str
    title: str
    start: datetime
    end: datetime
    all_day: bool = False
    kind: EventKind
    source: Union[Task, Milestone]
    style_class: str

    @model_validator(mode="after")
    def _end_after_start(self) -> "CalendarEvent":
        if self.end <= self.start:
            raise ValueError("calendar event must end after it starts")
        return self


class GanttRowStyles(_ViewModel):
    """Bar colors for the unselected and selected states."""
    progress_color: str
    progress_selected_color: str


class GanttRow(_ViewModel):
    """One task bar in the Gantt chart."""
    id: str
    name: str
    start: datetime
    end: datetime
    type: Literal["task"] = "task"
    progress: int = Field(default=0, ge=0, le=100)
    is_disabled: bool = False
    display_order: int = Field(..., ge=0)
    styles: GanttRowStyles

    @model_validator(mode="after")
    def _end_after_start(self) -> "GanttRow":
        if self.end <= self.start:
            raise ValueError("gantt row must end after it starts")
        return self


class TimelineView(_ViewModel):
    """Everything the timeline screen renders after a refresh."""
    tasks: list[Task] = Field(default_factory=list)
    milestones: list[Milestone] = Field(default_factory=list)
    properties: list[Property] = Field(default_factory=list)
    calendar_events: list[CalendarEvent] = Field(default_factory=list)
    gantt_rows: list[GanttRow] = Field(default_factory=list)
    errors: dict[str, str] = Field(default_factory=dict, description="Collection name -> fetch error")
    hidden_tasks: int = Field(default=0, description="Tasks without drawable dates")
    hidden_milestones: int = Field(default=0, description="Milestones without a drawable date")
    generated_at: Optional[datetime] = None

    @property
    def hidden_count(self) -> int:
        return self.hidden_tasks + self.hidden_milestones
