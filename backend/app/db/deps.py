from __future__ import annotations

from fastapi import Request

from app.services.user_service import UserService


def get_user_service(request: Request) -> UserService:
    """FastAPI dependency returning the service built once at startup.

    The service (and the repository and session factory behind it) is shared
    by every request and never mutated per request.
    """
    return request.app.state.user_service
