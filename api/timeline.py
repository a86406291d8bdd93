"""Timeline view endpoint for Vercel.

Returns the calendar events, Gantt rows and source collections the admin
timeline screen renders, fetched with the caller's own API token.
"""

from http.server import BaseHTTPRequestHandler
import asyncio
import json
from typing import Optional

from finishing_timeline.services.api_client import RequestContext, TimelineApi
from finishing_timeline.services.timeline_service import TimelineService
from finishing_timeline.utils.errors import ConfigurationError
from finishing_timeline.utils.logging import correlation_context, get_structured_logger
from finishing_timeline.utils.logging_config import LoggingConfig

LoggingConfig.setup_logging()
logger = get_structured_logger(__name__)

CORRELATION_ID_HEADER = "X-Correlation-ID"


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def load_timeline(context: RequestContext) -> dict:
    """Open an API session for ``context`` and return the serialized view."""
    async with TimelineApi(context) as api:
        view = await TimelineService(api).refresh()
    return view.to_api()


class handler(BaseHTTPRequestHandler):
    """Vercel serverless function handler for the timeline view."""

    def _send_json(self, status: int, body: dict) -> None:
        self.send_response(status)
        self.send_header('Content-Type', 'application/json')
        self.end_headers()
        self.wfile.write(json.dumps(body, ensure_ascii=False).encode('utf-8'))

    def do_GET(self):
        """Handle GET request."""
        with correlation_context(self.headers.get(CORRELATION_ID_HEADER)) as correlation_id:
            token = bearer_token(self.headers.get("Authorization"))
            if token is None:
                logger.warning("Timeline request without bearer token")
                self._send_json(401, {"error": "missing bearer token", "correlationId": correlation_id})
                return

            try:
                context = RequestContext.from_env(token=token)
                body = asyncio.run(load_timeline(context))
            except ConfigurationError as e:
                logger.error("Timeline endpoint misconfigured", error=str(e))
                self._send_json(500, {"error": "service misconfigured", "correlationId": correlation_id})
                return
            except Exception as e:
                logger.exception("Error building timeline view", error=str(e))
                self._send_json(500, {"error": "internal server error", "correlationId": correlation_id})
                return

            self._send_json(200, body)
            logger.info(
                "Timeline view served",
                calendar_events=len(body["calendarEvents"]),
                gantt_rows=len(body["ganttRows"])
            )
