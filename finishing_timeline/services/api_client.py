"""REST client for the finishing business API (tasks, milestones, properties)."""

import os
from typing import Any, Optional
import httpx
from pydantic import BaseModel, ConfigDict

from finishing_timeline.models.milestone import MilestonePayload
from finishing_timeline.models.task import TaskPayload
from finishing_timeline.utils.errors import ApiRequestError, AuthenticationError, ConfigurationError
from finishing_timeline.utils.logging import get_structured_logger, mask_sensitive_data

logger = get_structured_logger(__name__)

DEFAULT_API_URL = "http://localhost:5000/api"
DEFAULT_TIMEOUT_SECONDS = "10"


def unwrap_list(payload: Any) -> list:
    """
    Extract a record list from any of the API's response envelopes.

    Accepts a bare array, ``{"data": [...]}`` or ``{"data": {"data": [...]}}``.
    Anything else yields an empty list.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        data = payload.get("data")
        if isinstance(data, list):
            return data
        if isinstance(data, dict) and isinstance(data.get("data"), list):
            return data["data"]
    return []


def unwrap_record(payload: Any) -> Any:
    """Extract a single record; auth responses carrying a token are returned whole."""
    if isinstance(payload, dict):
        if payload.get("token"):
            return payload
        if "data" in payload:
            return payload["data"]
    return payload


class RequestContext(BaseModel):
    """Where and as whom API calls are made. Passed explicitly, never global."""
    model_config = ConfigDict(frozen=True)

    base_url: str = DEFAULT_API_URL
    token: Optional[str] = None
    timeout_seconds: float = float(DEFAULT_TIMEOUT_SECONDS)

    @classmethod
    def from_env(cls, token: Optional[str] = None) -> "RequestContext":
        """Build a context from TIMELINE_API_* variables; ``token`` overrides the env token."""
        raw_timeout = os.environ.get("TIMELINE_API_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigurationError(f"TIMELINE_API_TIMEOUT_SECONDS must be a number, got {raw_timeout!r}")
        if timeout <= 0:
            raise ConfigurationError("TIMELINE_API_TIMEOUT_SECONDS must be positive")

        return cls(
            base_url=os.environ.get("TIMELINE_API_URL", DEFAULT_API_URL),
            token=token or os.environ.get("TIMELINE_API_TOKEN") or None,
            timeout_seconds=timeout,
        )

    def headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers


def _error_message(response: httpx.Response) -> str:
    """Prefer the server's ``message`` field over the bare status line."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {response.status_code} {response.reason_phrase}".strip()


class TimelineApi:
    """Async context manager wrapping an httpx client bound to one request context."""

    def __init__(self, context: RequestContext, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.context = context
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "TimelineApi":
        self._client = httpx.AsyncClient(
            base_url=self.context.base_url,
            headers=self.context.headers(),
            timeout=self.context.timeout_seconds,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            logger.error(
                "Timeline API operation error",
                error=mask_sensitive_data(str(exc_val)),
                error_type=exc_type.__name__
            )
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        return False

    async def _request(self, operation: str, method: str, path: str, json: Optional[dict] = None) -> Any:
        if self._client is None:
            raise ApiRequestError(operation, "client is not open; use 'async with TimelineApi(...)'")

        try:
            response = await self._client.request(method, path, json=json)
        except httpx.HTTPError as e:
            raise ApiRequestError(operation, mask_sensitive_data(str(e)) or type(e).__name__)

        if response.status_code == 401:
            raise AuthenticationError(operation, _error_message(response), status_code=401)
        if response.is_error:
            raise ApiRequestError(operation, _error_message(response), status_code=response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            raise ApiRequestError(operation, "response is not valid JSON", status_code=response.status_code)

    # Tasks
    async def list_tasks(self) -> list[dict]:
        return unwrap_list(await self._request("list tasks", "GET", "/tasks"))

    async def get_task(self, task_id: str) -> Any:
        return unwrap_record(await self._request("get task", "GET", f"/tasks/{task_id}"))

    async def create_task(self, payload: TaskPayload) -> Any:
        return unwrap_record(await self._request("create task", "POST", "/tasks", json=payload.to_api()))

    async def update_task(self, task_id: str, payload: TaskPayload) -> Any:
        return unwrap_record(
            await self._request("update task", "PUT", f"/tasks/{task_id}", json=payload.to_api())
        )

    async def delete_task(self, task_id: str) -> None:
        await self._request("delete task", "DELETE", f"/tasks/{task_id}")

    async def update_task_progress(self, task_id: str, progress: int) -> Any:
        return unwrap_record(
            await self._request(
                "update task progress", "PUT", f"/tasks/{task_id}/progress", json={"progress": progress}
            )
        )

    # Milestones
    async def list_milestones(self) -> list[dict]:
        return unwrap_list(await self._request("list milestones", "GET", "/milestones"))

    async def get_milestone(self, milestone_id: str) -> Any:
        return unwrap_record(await self._request("get milestone", "GET", f"/milestones/{milestone_id}"))

    async def create_milestone(self, payload: MilestonePayload) -> Any:
        return unwrap_record(
            await self._request("create milestone", "POST", "/milestones", json=payload.to_api())
        )

    async def update_milestone(self, milestone_id: str, payload: MilestonePayload) -> Any:
        return unwrap_record(
            await self._request("update milestone", "PUT", f"/milestones/{milestone_id}", json=payload.to_api())
        )

    async def delete_milestone(self, milestone_id: str) -> None:
        await self._request("delete milestone", "DELETE", f"/milestones/{milestone_id}")

    async def toggle_milestone(self, milestone_id: str) -> Any:
        return unwrap_record(
            await self._request("toggle milestone", "PUT", f"/milestones/{milestone_id}/toggle")
        )

    # Properties
    async def list_properties(self) -> list[dict]:
        return unwrap_list(await self._request("list properties", "GET", "/properties"))
