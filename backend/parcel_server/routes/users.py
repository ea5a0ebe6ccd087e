"""
Parcel Server — User Route Handlers
====================================

What:  Sign-in registration, admin user search, role lookup and role changes.

    POST  /users                 public   (idempotent on email)
    GET   /users/search?email=   admin
    GET   /users/{email}/role    public
    PATCH /users/{id}/role       admin

POST /users answers 201 when a user was created and 200 when the email was
already known, so the frontend can call it after every sign-in.
"""

from typing import List

from fastapi import APIRouter, Depends, Query, Response, status

from parcel_server.auth import require_admin
from parcel_server.schemas.common import ErrorResponse, UpdatedResponse
from parcel_server.schemas.user import (
    RoleResponse,
    RoleUpdate,
    UserCreate,
    UserCreateResponse,
    UserResponse,
)
from parcel_server.services.provider_base import Identity
from parcel_server.services.user_service import user_service
from parcel_server.store import DocumentStore, get_store

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "",
    response_model=UserCreateResponse,
    status_code=status.HTTP_201_CREATED,
    responses={200: {"description": "User already existed", "model": UserCreateResponse}},
    summary="Register a user on first sign-in",
)
async def create_user(
    body: UserCreate,
    response: Response,
    store: DocumentStore = Depends(get_store),
) -> UserCreateResponse:
    user, inserted = await user_service.create_user(store, body)
    if not inserted:
        response.status_code = status.HTTP_200_OK
        return UserCreateResponse(message="User already exists", inserted=False)
    return UserCreateResponse(message="User created", inserted=True, inserted_id=user.id)


@router.get(
    "/search",
    response_model=List[UserResponse],
    summary="Search users by email (admin)",
)
async def search_users(
    email: str = Query(min_length=1, max_length=320, description="Substring of the email"),
    _admin: Identity = Depends(require_admin),
    store: DocumentStore = Depends(get_store),
) -> List[UserResponse]:
    users = await user_service.search_users(store, email)
    return [UserResponse.model_validate(u) for u in users]


@router.get(
    "/{email}/role",
    response_model=RoleResponse,
    responses={404: {"description": "No such user", "model": ErrorResponse}},
    summary="Get a user's role",
)
async def get_user_role(
    email: str,
    store: DocumentStore = Depends(get_store),
) -> RoleResponse:
    role = await user_service.get_role(store, email)
    return RoleResponse(role=role)


@router.patch(
    "/{user_id}/role",
    response_model=UpdatedResponse,
    responses={
        400: {"description": "Malformed id or unknown role", "model": ErrorResponse},
        404: {"description": "No such user", "model": ErrorResponse},
    },
    summary="Change a user's role (admin)",
)
async def update_user_role(
    user_id: str,
    body: RoleUpdate,
    _admin: Identity = Depends(require_admin),
    store: DocumentStore = Depends(get_store),
) -> UpdatedResponse:
    modified = await user_service.update_role(store, user_id, body.role)
    return UpdatedResponse(message=f"Role updated to {body.role}", modified_count=modified)
