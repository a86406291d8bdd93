"""Calendar projection - tasks and milestones to calendar events."""

from typing import Iterable, Optional
from pydantic import BaseModel, Field

from finishing_timeline.models.milestone import Milestone
from finishing_timeline.models.projection import CalendarEvent, EventKind
from finishing_timeline.models.task import Task, TaskStatus
from finishing_timeline.utils.dates import add_days, to_datetime
from finishing_timeline.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

MILESTONE_MARKER = "🎯"
MILESTONE_STYLE = "milestone"

EVENT_COLORS = {
    TaskStatus.PENDING.value: "#94a3b8",
    TaskStatus.IN_PROGRESS.value: "#3b82f6",
    TaskStatus.COMPLETED.value: "#10b981",
    TaskStatus.ON_HOLD.value: "#f59e0b",
    TaskStatus.CANCELLED.value: "#ef4444",
    MILESTONE_STYLE: "#8b5cf6",
}


class CalendarProjection(BaseModel):
    """Projected events plus how many records could not be drawn."""
    events: list[CalendarEvent] = Field(default_factory=list)
    skipped_tasks: int = 0
    skipped_milestones: int = 0


def task_event(task: Task) -> Optional[CalendarEvent]:
    """Project one task, or None when it has no drawable range."""
    start = to_datetime(task.start_date)
    end = to_datetime(task.end_date)
    if start is None or end is None:
        return None

    # Zero-length or inverted ranges collapse in the renderer
    if end <= start:
        end = add_days(start, 1)

    return CalendarEvent(
        id=f"task-{task.id}",
        title=task.title,
        start=start,
        end=end,
        kind=EventKind.TASK,
        source=task,
        style_class=task.status_value,
    )


def milestone_event(milestone: Milestone) -> Optional[CalendarEvent]:
    """Project one milestone as a single all-day event."""
    start = to_datetime(milestone.date)
    if start is None:
        return None

    return CalendarEvent(
        id=f"milestone-{milestone.id}",
        title=f"{MILESTONE_MARKER} {milestone.title}",
        start=start,
        end=add_days(start, 1),
        all_day=True,
        kind=EventKind.MILESTONE,
        source=milestone,
        style_class=TaskStatus.COMPLETED.value if milestone.is_completed else MILESTONE_STYLE,
    )


def project_calendar_events(
    tasks: Iterable[Task],
    milestones: Iterable[Milestone]
) -> CalendarProjection:
    """
    Build the calendar event list.

    Task events come first, then milestone events. Records whose dates are
    missing or unparseable are dropped and counted.
    """
    projection = CalendarProjection()

    for task in tasks:
        event = task_event(task)
        if event is None:
            projection.skipped_tasks += 1
            continue
        projection.events.append(event)

    for milestone in milestones:
        event = milestone_event(milestone)
        if event is None:
            projection.skipped_milestones += 1
            continue
        projection.events.append(event)

    if projection.skipped_tasks or projection.skipped_milestones:
        logger.debug(
            "Calendar records without drawable dates",
            skipped_tasks=projection.skipped_tasks,
            skipped_milestones=projection.skipped_milestones
        )

    return projection


def event_style(event: CalendarEvent) -> dict[str, str]:
    """Inline style for an event; empty for unknown style classes."""
    color = EVENT_COLORS.get(event.style_class)
    if color is None:
        return {}
    return {"backgroundColor": color, "color": "white"}
