"""Unit tests for request audit helpers."""

import pytest

from app.application.services.user_activity_service import activity_page
from app.domain.entities import ActivityStatus
from app.infrastructure.activity_logging import (
    ActivityLoggingMiddleware,
    build_description,
    describe_path,
)


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/api/v1/payments/12", ("payments", "12")),
        ("/api/v2/clients/3/stats", ("clients", "3")),
        ("/api/dictionaries/deal-types/7/toggle-active", ("dictionaries", "7")),
        ("/api/auth/login", ("auth", None)),
        ("/api", ("root", None)),
    ],
)
def test_describe_path(path, expected):
    assert describe_path(path) == expected


def test_build_description_joins_parts():
    assert build_description("payments", "PUT", "12", 200) == "payments.PUT | Id=12 | HTTP 200"
    assert build_description("auth", "POST", None, None) == "auth.POST"


@pytest.mark.parametrize(
    ("code", "status"),
    [
        (None, ActivityStatus.INFO),
        (101, ActivityStatus.INFO),
        (204, ActivityStatus.SUCCESS),
        (302, ActivityStatus.SUCCESS),
        (404, ActivityStatus.WARNING),
        (503, ActivityStatus.FAILURE),
    ],
)
def test_status_from_http_code(code, status):
    assert ActivityStatus.from_http_status(code) == status


def test_activity_page_size_is_clamped():
    assert activity_page(1, 1).page_size == 10
    assert activity_page(1, 1000).page_size == 200
    assert activity_page(0, 50).page == 1


class RecordingMiddleware(ActivityLoggingMiddleware):
    """Keeps audit rows in memory and notes when each one was written."""

    def __init__(self, app, events: list):
        super().__init__(app, session_factory=object(), token_service=object())
        self.events = events
        self.rows = []

    async def _write(self, request, status_code, started, outcome):
        self.events.append("audit")
        self.rows.append((request.method, request.url.path, status_code, outcome))


def _scope(method: str, path: str) -> dict:
    return {
        "type": "http",
        "method": method,
        "path": path,
        "raw_path": path.encode(),
        "query_string": b"",
        "headers": [],
        "client": ("127.0.0.1", 5000),
        "server": ("test", 80),
        "scheme": "http",
        "root_path": "",
        "http_version": "1.1",
    }


async def _receive():
    return {"type": "http.request", "body": b"", "more_body": False}


def _app(events: list, status_code: int = 201, fail: bool = False):
    async def app(scope, receive, send):
        await send({"type": "http.response.start", "status": status_code, "headers": []})
        await send({"type": "http.response.body", "body": b"{}"})
        if fail:
            raise RuntimeError("boom")
        # Stands in for the request session committing once the response is out.
        events.append("commit")

    return app


@pytest.mark.asyncio
async def test_audit_row_is_written_after_the_app_finishes():
    events: list = []
    sent: list = []
    middleware = RecordingMiddleware(_app(events), events)

    async def send(message):
        sent.append(message["type"])

    await middleware(_scope("POST", "/api/v2/payments"), _receive, send)

    assert events == ["commit", "audit"]
    assert sent == ["http.response.start", "http.response.body"]
    assert middleware.rows == [("POST", "/api/v2/payments", 201, ActivityStatus.SUCCESS)]


@pytest.mark.asyncio
async def test_failing_request_is_audited_and_reraised():
    events: list = []
    middleware = RecordingMiddleware(_app(events, status_code=500, fail=True), events)

    async def send(message):
        pass

    with pytest.raises(RuntimeError):
        await middleware(_scope("PUT", "/api/payments/4"), _receive, send)

    assert middleware.rows == [("PUT", "/api/payments/4", 500, ActivityStatus.FAILURE)]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("OPTIONS", "/api/v1/payments"),
        ("GET", "/api/user-activity"),
        ("GET", "/health"),
    ],
)
async def test_unaudited_requests_pass_through(method, path):
    events: list = []
    middleware = RecordingMiddleware(_app(events, status_code=200), events)

    async def send(message):
        pass

    await middleware(_scope(method, path), _receive, send)

    assert events == ["commit"]
    assert middleware.rows == []
