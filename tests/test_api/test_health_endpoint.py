"""Tests for health check endpoint."""

import json
import pytest
from http.server import BaseHTTPRequestHandler
from api.health import handler
from tests.utils.helpers import make_handler


@pytest.mark.unit
def test_health_handler_class():
    """Test that handler is a BaseHTTPRequestHandler subclass."""
    assert issubclass(handler, BaseHTTPRequestHandler)


@pytest.mark.unit
@pytest.mark.parametrize("method", ["GET", "POST"])
def test_health_request(method):
    h = make_handler(handler, method, "/api/health")

    getattr(h, f"do_{method}")()

    assert h.send_response.call_args[0][0] == 200
    h.wfile.seek(0)
    response_data = json.loads(h.wfile.read().decode('utf-8'))
    assert response_data == {"status": "ok", "service": "finishing-timeline"}
