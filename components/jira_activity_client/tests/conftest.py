"""Shared fixtures: a local HTTP server standing in for Jira."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest


@dataclass
class CannedResponse:
    status: int
    body: bytes
    content_type: str = "application/json"


@dataclass
class FakeJira:
    """Routes are keyed by path without the query string."""

    base_url: str
    routes: dict[str, CannedResponse] = field(default_factory=dict)
    requests: list[dict] = field(default_factory=list)

    def add_route(self, path: str, status: int, body: bytes, content_type: str = "application/json") -> None:
        self.routes[path] = CannedResponse(status, body, content_type)


def _handler_for(fake: FakeJira) -> type[BaseHTTPRequestHandler]:
    class Handler(BaseHTTPRequestHandler):
        def do_GET(self) -> None:
            path = self.path.split("?", 1)[0]
            fake.requests.append({"path": self.path, "authorization": self.headers.get("Authorization")})
            canned = fake.routes.get(path, CannedResponse(404, b'{"errorMessages":["Not routed"]}'))
            self.send_response(canned.status)
            self.send_header("Content-Type", canned.content_type)
            self.send_header("Content-Length", str(len(canned.body)))
            self.end_headers()
            self.wfile.write(canned.body)

        def log_message(self, format, *args) -> None:
            pass

    return Handler


@pytest.fixture
def fake_jira():
    """Yield a FakeJira bound to a server on a free local port."""
    fake = FakeJira(base_url="")
    server = ThreadingHTTPServer(("127.0.0.1", 0), _handler_for(fake))
    fake.base_url = f"http://127.0.0.1:{server.server_address[1]}"
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield fake
    server.shutdown()
    server.server_close()
