from fastapi import APIRouter, Depends

from app.api.endpoints import health, users
from app.auth import require_bearer_token

api_router = APIRouter()

api_router.include_router(
    users.router,
    prefix="/users",
    tags=["users"],
    dependencies=[Depends(require_bearer_token)],
)

# Mounted at the application root, outside the auth gate.
root_router = APIRouter()

root_router.include_router(health.router, tags=["health"])
