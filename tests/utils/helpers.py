"""Test helper functions."""

from io import BytesIO
from typing import Dict, Optional
from unittest.mock import Mock


class MockSocket:
    """Just enough socket for BaseHTTPRequestHandler to parse one request."""

    def __init__(self, raw: bytes):
        self.raw = raw

    def makefile(self, *args, **kwargs):
        return BytesIO(self.raw)

    def sendall(self, data):
        pass

    def close(self):
        pass


def make_handler(handler_class, method: str, path: str, headers: Optional[Dict[str, str]] = None):
    """Instantiate a serverless handler with captured response output."""
    header_lines = "".join(f"{name}: {value}\r\n" for name, value in (headers or {}).items())
    raw = f"{method} {path} HTTP/1.1\r\n{header_lines}\r\n".encode("utf-8")

    h = handler_class(MockSocket(raw), ("127.0.0.1", 8000), None)
    h.wfile = BytesIO()
    h.send_response = Mock()
    h.send_header = Mock()
    h.end_headers = Mock()
    return h
