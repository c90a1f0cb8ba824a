from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from recipe_hub.api.dependencies.permissions import require_login
from recipe_hub.api.dependencies.services import get_comment_service
from recipe_hub.core.api_response import response_success, StandardResponse
from recipe_hub.schemas.recipes.comment_schemas import CommentCreate, CommentRead
from recipe_hub.schemas.users.user_context import UserContext
from recipe_hub.services.recipes.comment_service import CommentService

router = APIRouter()


@router.get("/{recipe_id}/comments", response_model=StandardResponse[List[CommentRead]])
async def list_comments(
    recipe_id: UUID,
    service: CommentService = Depends(get_comment_service),
    current_user: UserContext = Depends(require_login),
):
    comments = await service.list_comments(recipe_id, current_user)
    return response_success(data=comments)


@router.post(
    "/{recipe_id}/comments",
    response_model=StandardResponse[CommentRead],
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    recipe_id: UUID,
    comment_in: CommentCreate,
    service: CommentService = Depends(get_comment_service),
    current_user: UserContext = Depends(require_login),
):
    comment = await service.add_comment(recipe_id, comment_in.text, current_user)
    return response_success(data=comment, http_status=status.HTTP_201_CREATED)


@router.delete("/{recipe_id}/comments/{comment_id}", response_model=StandardResponse[None])
async def delete_comment(
    recipe_id: UUID,
    comment_id: UUID,
    service: CommentService = Depends(get_comment_service),
    current_user: UserContext = Depends(require_login),
):
    await service.delete_comment(recipe_id, comment_id, current_user)
    return response_success(message="评论已删除")
