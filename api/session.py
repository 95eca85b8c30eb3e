"""
Anonymous session resolution.

The session id travels in a cookie. Scoped endpoints require it; creating a
meal without one starts a new session and hands the id back to the client.
"""

import logging
from typing import Any, Callable, Coroutine, Optional
from uuid import UUID, uuid4

from fastapi import Request, Response
from fastapi.routing import APIRoute

from app.config import settings
from app.exceptions import UnauthorizedError

logger = logging.getLogger("dailydiet.session")


def parse_session_id(raw: Optional[str]) -> Optional[UUID]:
    """Turn a cookie value into a session id; None when absent or malformed"""
    if not raw:
        return None
    try:
        return UUID(raw)
    except (ValueError, TypeError):
        return None


def read_session_id(request: Request) -> Optional[UUID]:
    return parse_session_id(request.cookies.get(settings.session_cookie_name))


def issue_session_cookie(response: Response, session_id: UUID) -> None:
    """Attach the session cookie, valid for the whole service"""
    response.set_cookie(
        key=settings.session_cookie_name,
        value=str(session_id),
        max_age=settings.session_cookie_max_age_sec,
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )


def require_session(request: Request) -> UUID:
    """
    Dependency for every scoped endpoint except create.

    Raises:
        UnauthorizedError: If no valid session cookie is present
    """
    session_id = read_session_id(request)
    if session_id is None:
        raise UnauthorizedError()
    return session_id


def resolve_or_issue_session(request: Request, response: Response) -> UUID:
    """Dependency for create: reuse the caller's session or start a new one"""
    session_id = read_session_id(request)
    if session_id is None:
        session_id = uuid4()
        issue_session_cookie(response, session_id)
        logger.info(f"Issued new session {session_id}")
    return session_id


class SessionScopedRoute(APIRoute):
    """
    Route class that checks the session before the request body is read.

    FastAPI parses the JSON body before it resolves dependencies, so a
    sessionless request with a broken body would otherwise be answered with
    422. Routes that declare ``Depends(require_session)`` get the check run
    up front and answer 401 instead; other routes (create) are left as is.
    """

    def requires_session(self) -> bool:
        return any(dep.call is require_session for dep in self.dependant.dependencies)

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        route_handler = super().get_route_handler()
        if not self.requires_session():
            return route_handler

        async def session_checked_handler(request: Request) -> Response:
            require_session(request)
            return await route_handler(request)

        return session_checked_handler
