"""Request audit middleware: writes one activity log row per API call."""

import json
import logging
import time

from starlette.requests import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.domain.entities import ActivityStatus, UserActivityLog
from app.infrastructure.database.session import async_session_factory

logger = logging.getLogger(__name__)

_SKIPPED_PREFIXES = ("/api/user-activity",)
_VERSION_SEGMENTS = frozenset({"v1", "v2"})


def describe_path(path: str) -> tuple[str, str | None]:
    """Split ``/api/v1/payments/12`` into the section (``payments``) and object id (``12``)."""
    segments = [s for s in path.split("/") if s]
    if segments and segments[0] == "api":
        segments = segments[1:]
    if segments and segments[0] in _VERSION_SEGMENTS:
        segments = segments[1:]
    if not segments:
        return "root", None
    section = segments[0]
    object_id = next((s for s in segments[1:] if s.isdigit()), None)
    return section, object_id


def build_description(section: str, method: str, object_id: str | None, status_code: int | None) -> str:
    parts = [f"{section}.{method}"]
    if object_id:
        parts.append(f"Id={object_id}")
    if status_code is not None:
        parts.append(f"HTTP {status_code}")
    return " | ".join(parts)


def _is_audited(scope: Scope) -> bool:
    path = scope["path"]
    return (
        path.startswith("/api")
        and not path.startswith(_SKIPPED_PREFIXES)
        and scope["method"] != "OPTIONS"
    )


class ActivityLoggingMiddleware:
    """Audit every ``/api`` request except preflights and the audit endpoints themselves.

    The row is written once the wrapped app has returned, so the request's
    own database session has already committed and released its lock.
    The caller is taken from the bearer token when one is present and valid.
    A failure to write the audit row is logged and never affects the response.
    """

    def __init__(self, app: ASGIApp, session_factory=None, token_service=None):
        self.app = app
        self._session_factory = session_factory or async_session_factory
        self._token_service = token_service

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not _is_audited(scope):
            await self.app(scope, receive, send)
            return

        status_code: int | None = None

        async def send_and_capture(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        started = time.perf_counter()
        try:
            await self.app(scope, receive, send_and_capture)
        except Exception:
            await self._write(Request(scope), status_code, started, ActivityStatus.FAILURE)
            raise

        await self._write(
            Request(scope),
            status_code,
            started,
            ActivityStatus.from_http_status(status_code),
        )

    async def _write(
        self,
        request: Request,
        status_code: int | None,
        started: float,
        outcome: ActivityStatus,
    ) -> None:
        section, object_id = describe_path(request.url.path)
        claims = self._claims(request)
        entry = UserActivityLog(
            category=section,
            action=request.method,
            section=section,
            object_type=section,
            object_id=object_id,
            description=build_description(section, request.method, object_id, status_code),
            status=outcome,
            user_id=_int_or_none(claims.get("sub")),
            user_email=claims.get("email"),
            user_full_name=claims.get("name"),
            ip_address=request.client.host if request.client else None,
            user_agent=request.headers.get("user-agent"),
            http_method=request.method,
            path=request.url.path,
            query_string=request.url.query or None,
            http_status_code=status_code,
            duration_ms=int((time.perf_counter() - started) * 1000),
            metadata=json.dumps(dict(request.path_params), ensure_ascii=False)
            if request.path_params
            else None,
        )

        from app.infrastructure.database.repositories import SQLAlchemyUserActivityRepository

        try:
            async with self._session_factory() as session:
                await SQLAlchemyUserActivityRepository(session).create(entry)
                await session.commit()
        except Exception:
            logger.exception("Failed to write activity log for %s %s", request.method, request.url.path)

    def _claims(self, request: Request) -> dict:
        header = request.headers.get("authorization", "")
        scheme, _, token = header.partition(" ")
        if scheme.lower() != "bearer" or not token:
            return {}
        if self._token_service is None:
            from app.infrastructure.dependencies import get_token_service

            self._token_service = get_token_service()
        return self._token_service.decode(token.strip()) or {}


def _int_or_none(value) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
