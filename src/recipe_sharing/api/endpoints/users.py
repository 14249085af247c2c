"""User endpoints."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Path, status

from recipe_sharing.api.dependencies import get_user_repository
from recipe_sharing.repositories import UserRepository  # noqa: TC001
from recipe_sharing.schemas import MessageResponse, User, UserEnvelope


router = APIRouter(prefix="/users", tags=["Users"])

UserId = Annotated[str, Path(alias="userId", description="User identifier")]
Payload = Annotated[Any, Body(description="User fields (camelCase)")]
Users = Annotated[UserRepository, Depends(get_user_repository)]


@router.post(
    "",
    response_model=UserEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
    responses={400: {"description": "Validation error"}},
)
async def create_user(payload: Payload, users: Users) -> UserEnvelope:
    user = users.create(payload)
    return UserEnvelope(message="User successfully created", user=user)


@router.get("", response_model=list[User], summary="List all users")
async def list_users(users: Users) -> list[User]:
    return users.list_all()


@router.get(
    "/{userId}",
    response_model=User,
    summary="Get a user",
    responses={404: {"description": "User not found"}},
)
async def get_user(user_id: UserId, users: Users) -> User:
    return users.get_by_id(user_id)


@router.put(
    "/{userId}",
    response_model=UserEnvelope,
    summary="Update a user",
    description="Supplied favorites are added to the existing ones.",
    responses={
        400: {"description": "Validation error"},
        404: {"description": "User not found"},
    },
)
async def update_user(user_id: UserId, payload: Payload, users: Users) -> UserEnvelope:
    user = users.update(user_id, payload)
    return UserEnvelope(message="User successfully updated", user=user)


@router.delete(
    "/{userId}",
    response_model=MessageResponse,
    summary="Delete a user",
    responses={404: {"description": "User not found"}},
)
async def delete_user(user_id: UserId, users: Users) -> MessageResponse:
    users.delete(user_id)
    return MessageResponse(message="User successfully deleted")
