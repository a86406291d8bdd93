"""Timeline service - fetch, project, and mutate tasks and milestones."""

import asyncio
from datetime import datetime, timezone
from typing import Awaitable, Optional, Type, TypeVar
from pydantic import BaseModel, ValidationError

from finishing_timeline.models.milestone import Milestone, MilestonePayload
from finishing_timeline.models.projection import TimelineView
from finishing_timeline.models.property import Property
from finishing_timeline.models.task import Task, TaskPayload
from finishing_timeline.services.api_client import TimelineApi
from finishing_timeline.services.calendar_projector import project_calendar_events
from finishing_timeline.services.gantt_projector import project_gantt_rows
from finishing_timeline.utils.errors import ApiRequestError, AuthenticationError, MutationError
from finishing_timeline.utils.logging import get_structured_logger, log_timing, timed

logger = get_structured_logger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


def parse_records(model: Type[RecordT], records: list, collection: str) -> tuple[list[RecordT], int]:
    """Validate raw API records, dropping (and counting) the ones that do not fit ``model``."""
    parsed: list[RecordT] = []
    invalid = 0
    for record in records:
        try:
            parsed.append(model.model_validate(record))
        except ValidationError as e:
            invalid += 1
            logger.warning(
                f"Skipping malformed {collection} record",
                collection=collection,
                record_id=record.get("_id") if isinstance(record, dict) else None,
                error_count=e.error_count()
            )
    return parsed, invalid


def build_view(
    tasks: list[Task],
    milestones: list[Milestone],
    properties: list[Property],
    errors: Optional[dict[str, str]] = None,
    invalid_tasks: int = 0,
    invalid_milestones: int = 0,
) -> TimelineView:
    """Project already-parsed collections into the timeline view model."""
    calendar = project_calendar_events(tasks, milestones)
    gantt = project_gantt_rows(tasks)

    view = TimelineView(
        tasks=tasks,
        milestones=milestones,
        properties=properties,
        calendar_events=calendar.events,
        gantt_rows=gantt.rows,
        errors=errors or {},
        hidden_tasks=invalid_tasks + calendar.skipped_tasks,
        hidden_milestones=invalid_milestones + calendar.skipped_milestones,
        generated_at=datetime.now(timezone.utc),
    )

    if view.hidden_count:
        logger.warning(
            "Timeline records could not be displayed",
            hidden_tasks=view.hidden_tasks,
            hidden_milestones=view.hidden_milestones
        )
    return view


class TimelineService:
    """Timeline screen operations over an open ``TimelineApi``."""

    def __init__(self, api: TimelineApi):
        self.api = api

    async def refresh(self) -> TimelineView:
        """
        Fetch tasks, milestones and properties concurrently and project them.

        A failed collection is logged and falls back to an empty list; its
        error text lands in ``TimelineView.errors``. Never raises for fetch
        failures.
        """
        with log_timing("timeline refresh", logger=logger):
            results = await asyncio.gather(
                self.api.list_tasks(),
                self.api.list_milestones(),
                self.api.list_properties(),
                return_exceptions=True,
            )

        collections: dict[str, list] = {}
        errors: dict[str, str] = {}
        for name, result in zip(("tasks", "milestones", "properties"), results):
            if isinstance(result, Exception):
                logger.error(
                    f"Error fetching {name}",
                    collection=name,
                    error=str(result),
                    error_type=type(result).__name__
                )
                errors[name] = str(result)
                collections[name] = []
            elif isinstance(result, BaseException):
                raise result
            else:
                collections[name] = result

        tasks, invalid_tasks = parse_records(Task, collections["tasks"], "tasks")
        milestones, invalid_milestones = parse_records(Milestone, collections["milestones"], "milestones")
        properties, _ = parse_records(Property, collections["properties"], "properties")

        logger.info(
            "Timeline data loaded",
            tasks=len(tasks),
            milestones=len(milestones),
            properties=len(properties),
            failed_collections=sorted(errors)
        )

        return build_view(
            tasks,
            milestones,
            properties,
            errors=errors,
            invalid_tasks=invalid_tasks,
            invalid_milestones=invalid_milestones,
        )

    @timed("timeline mutation", logger=logger)
    async def _mutate(self, operation: str, call: Awaitable) -> TimelineView:
        """Run a mutation, then refresh. Failures raise before any refresh."""
        try:
            await call
        except AuthenticationError:
            raise
        except ApiRequestError as e:
            logger.error(
                f"Error during {operation}",
                operation=operation,
                reason=e.message,
                status_code=e.status_code
            )
            raise MutationError(operation, e.message) from e

        logger.info("Timeline mutation succeeded", operation=operation)
        return await self.refresh()

    async def save_task(self, payload: TaskPayload, task_id: Optional[str] = None) -> TimelineView:
        """Create the task, or update it when ``task_id`` is given."""
        if task_id:
            return await self._mutate("save task", self.api.update_task(task_id, payload))
        return await self._mutate("save task", self.api.create_task(payload))

    async def delete_task(self, task_id: str) -> TimelineView:
        return await self._mutate("delete task", self.api.delete_task(task_id))

    async def update_task_progress(self, task_id: str, progress: int) -> TimelineView:
        if not 0 <= progress <= 100:
            raise MutationError("update task progress", "progress must be between 0 and 100")
        return await self._mutate("update task progress", self.api.update_task_progress(task_id, progress))

    async def save_milestone(self, payload: MilestonePayload, milestone_id: Optional[str] = None) -> TimelineView:
        """Create the milestone, or update it when ``milestone_id`` is given."""
        if milestone_id:
            return await self._mutate("save milestone", self.api.update_milestone(milestone_id, payload))
        return await self._mutate("save milestone", self.api.create_milestone(payload))

    async def delete_milestone(self, milestone_id: str) -> TimelineView:
        return await self._mutate("delete milestone", self.api.delete_milestone(milestone_id))

    async def toggle_milestone(self, milestone_id: str) -> TimelineView:
        return await self._mutate("toggle milestone", self.api.toggle_milestone(milestone_id))
