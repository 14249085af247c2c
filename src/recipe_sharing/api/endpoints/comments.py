"""Comment endpoints.

Reads are open; creating, updating and deleting a comment requires an actor
under the strict policy.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Path, Query, status

from recipe_sharing.api.dependencies import get_comment_repository
from recipe_sharing.auth import CurrentActor
from recipe_sharing.repositories import CommentRepository  # noqa: TC001
from recipe_sharing.schemas import Comment, CommentEnvelope, MessageResponse


router = APIRouter(prefix="/comments", tags=["Comments"])

CommentId = Annotated[str, Path(alias="commentId", description="Comment identifier")]
Payload = Annotated[Any, Body(description="Comment fields (camelCase)")]
Comments = Annotated[CommentRepository, Depends(get_comment_repository)]

_NOT_FOUND = {404: {"description": "Comment (or referenced recipe) not found"}}


@router.post(
    "",
    response_model=CommentEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create a comment",
    responses={
        400: {"description": "Validation error"},
        401: {"description": "Missing or unknown actor (strict policy)"},
        **_NOT_FOUND,
    },
)
async def create_comment(
    payload: Payload,
    comments: Comments,
    actor: CurrentActor,  # noqa: ARG001
) -> CommentEnvelope:
    comment = comments.create(payload)
    return CommentEnvelope(message="Comment successfully created", comment=comment)


@router.get("", response_model=list[Comment], summary="List comments")
async def list_comments(
    comments: Comments,
    recipe_id: Annotated[
        str | None, Query(alias="recipeId", description="Only comments on this recipe")
    ] = None,
    user_id: Annotated[
        str | None, Query(alias="userId", description="Only comments by this user")
    ] = None,
) -> list[Comment]:
    return comments.list_all(recipe_id=recipe_id, user_id=user_id)


@router.get(
    "/{commentId}",
    response_model=Comment,
    summary="Get a comment",
    responses=_NOT_FOUND,
)
async def get_comment(comment_id: CommentId, comments: Comments) -> Comment:
    return comments.get_by_id(comment_id)


@router.put(
    "/{commentId}",
    response_model=CommentEnvelope,
    summary="Update a comment",
    responses={
        400: {"description": "Validation error"},
        401: {"description": "Missing or unknown actor (strict policy)"},
        **_NOT_FOUND,
    },
)
async def update_comment(
    comment_id: CommentId,
    payload: Payload,
    comments: Comments,
    actor: CurrentActor,  # noqa: ARG001
) -> CommentEnvelope:
    comment = comments.update(comment_id, payload)
    return CommentEnvelope(message="Comment successfully updated", comment=comment)


@router.delete(
    "/{commentId}",
    response_model=MessageResponse,
    summary="Delete a comment",
    responses={401: {"description": "Missing or unknown actor"}, **_NOT_FOUND},
)
async def delete_comment(
    comment_id: CommentId,
    comments: Comments,
    actor: CurrentActor,  # noqa: ARG001
) -> MessageResponse:
    comments.delete(comment_id)
    return MessageResponse(message="Comment successfully deleted")
