"""Gantt projection - tasks to ordered chart rows."""

from typing import Iterable
from pydantic import BaseModel, Field

from finishing_timeline.models.projection import GanttRow, GanttRowStyles
from finishing_timeline.models.task import Task
from finishing_timeline.services.progress_color import progress_color
from finishing_timeline.utils.dates import add_days, to_datetime
from finishing_timeline.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

# "Untitled task"
UNTITLED_TASK_LABEL = "مهمة بدون عنوان"


class GanttProjection(BaseModel):
    """Projected rows plus how many tasks could not be drawn."""
    rows: list[GanttRow] = Field(default_factory=list)
    skipped: int = 0


def project_gantt_rows(tasks: Iterable[Task]) -> GanttProjection:
    """
    Build Gantt rows in task order.

    display_order counts emitted rows only, so it stays contiguous
    (0..k-1) no matter how many tasks are skipped.
    """
    projection = GanttProjection()
    display_order = 0

    for task in tasks:
        start = to_datetime(task.start_date)
        end = to_datetime(task.end_date)

        if start is None or end is None:
            logger.warning(
                "Skipping task with invalid dates",
                task_id=task.id,
                start_date=str(task.start_date),
                end_date=str(task.end_date)
            )
            projection.skipped += 1
            continue

        if end <= start:
            end = add_days(start, 1)

        color = progress_color(task.progress)
        projection.rows.append(GanttRow(
            id=task.id or f"task-{display_order}",
            name=task.title or UNTITLED_TASK_LABEL,
            start=start,
            end=end,
            progress=task.progress or 0,
            display_order=display_order,
            styles=GanttRowStyles(
                progress_color=color,
                progress_selected_color=color,
            ),
        ))
        display_order += 1

    return projection
