from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, status

from app.db.deps import get_user_service
from app.schemas.users import ApiResponse, CreateUserRequest, UpdateUserRequest, UserOut
from app.services.user_service import UserService


router = APIRouter()


@router.get("", response_model=ApiResponse[list[UserOut]], response_model_exclude_none=True)
def api_list_users(service: UserService = Depends(get_user_service)) -> ApiResponse[list[UserOut]]:
    rows = service.get_all_users()
    return ApiResponse.ok("Users retrieved successfully", [UserOut.model_validate(r) for r in rows])


@router.post(
    "",
    response_model=ApiResponse[UserOut],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def api_create_user(
    req: CreateUserRequest,
    service: UserService = Depends(get_user_service),
) -> ApiResponse[UserOut]:
    rec = service.create_user(req)
    return ApiResponse.ok("User created successfully", UserOut.model_validate(rec))


@router.get("/{user_id}", response_model=ApiResponse[UserOut], response_model_exclude_none=True)
def api_get_user(user_id: uuid.UUID, service: UserService = Depends(get_user_service)) -> ApiResponse[UserOut]:
    rec = service.get_user_by_id(user_id)
    return ApiResponse.ok("User retrieved successfully", UserOut.model_validate(rec))


@router.put("/{user_id}", response_model=ApiResponse[UserOut], response_model_exclude_none=True)
def api_update_user(
    user_id: uuid.UUID,
    req: UpdateUserRequest,
    service: UserService = Depends(get_user_service),
) -> ApiResponse[UserOut]:
    rec = service.update_user(user_id, req)
    return ApiResponse.ok("User updated successfully", UserOut.model_validate(rec))


@router.delete("/{user_id}", response_model=ApiResponse[None], response_model_exclude_none=True)
def api_delete_user(user_id: uuid.UUID, service: UserService = Depends(get_user_service)) -> ApiResponse[None]:
    service.delete_user(user_id)
    return ApiResponse.ok("User deleted successfully")
