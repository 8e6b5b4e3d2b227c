from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from app.db.deps import get_user_service
from app.schemas.users import ApiResponse
from app.services.user_service import UserService


router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
def root() -> str:
    """Liveness text."""
    return "[GET] Hello, World"


@router.get("/health", response_model=ApiResponse[dict[str, object]], response_model_exclude_none=True)
def health(service: UserService = Depends(get_user_service)) -> ApiResponse[dict[str, object]]:
    """Health check; also proves the database answers."""
    return ApiResponse.ok("Service is healthy", {"status": "ok", "users": service.count_users()})
