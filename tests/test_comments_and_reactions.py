import uuid

import pytest
from sqlalchemy import func, select

from helpers import make_recipe
from recipe_hub.core.exceptions import InvalidArgumentException, NotFoundException, PermissionDeniedException
from recipe_hub.models.recipe import RecipeLike, RecipeFavorite
from recipe_hub.schemas.recipes.recipe_schemas import RecipeUpdate
from recipe_hub.services.recipes.comment_service import CommentService
from recipe_hub.services.recipes.reaction_service import ReactionService
from recipe_hub.services.recipes.recipe_service import RecipeService
from recipe_hub.services.recipes.share_service import ShareService


async def count_rows(session, model) -> int:
    result = await session.execute(select(func.count()).select_from(model))
    return result.scalar_one()


# ==========================
# 评论
# ==========================

async def test_comments_require_view_access(factory, session, alice, bob):
    recipe = await make_recipe(session, alice)
    service = CommentService(factory)

    with pytest.raises(NotFoundException):
        await service.add_comment(recipe.id, "你好", bob)
    with pytest.raises(NotFoundException):
        await service.list_comments(recipe.id, bob)


async def test_comment_text_is_trimmed_and_validated(factory, session, alice, bob):
    recipe = await make_recipe(session, alice, is_public=True)
    service = CommentService(factory)

    comment = await service.add_comment(recipe.id, "  很好吃  ", bob)
    assert comment.text == "很好吃"
    assert comment.user.email == "bob@example.com"

    with pytest.raises(InvalidArgumentException):
        await service.add_comment(recipe.id, "   ", bob)
    with pytest.raises(InvalidArgumentException):
        await service.add_comment(recipe.id, "x" * 2001, bob)


async def test_comments_listed_oldest_first(factory, session, alice, bob):
    recipe = await make_recipe(session, alice, is_public=True)
    service = CommentService(factory)
    await service.add_comment(recipe.id, "第一条", bob)
    await service.add_comment(recipe.id, "第二条", alice)

    comments = await service.list_comments(recipe.id, alice)
    assert [c.text for c in comments] == ["第一条", "第二条"]


async def test_only_author_can_delete_comment(factory, session, alice, bob):
    recipe = await make_recipe(session, alice, is_public=True)
    other = await make_recipe(session, alice, name="另一个", is_public=True)
    service = CommentService(factory)
    comment = await service.add_comment(recipe.id, "Bob 的评论", bob)

    # 菜谱所有者也不能删别人的评论
    with pytest.raises(PermissionDeniedException):
        await service.delete_comment(recipe.id, comment.id, alice)
    # 评论不在这个菜谱上
    with pytest.raises(NotFoundException):
        await service.delete_comment(other.id, comment.id, bob)
    with pytest.raises(NotFoundException):
        await service.delete_comment(recipe.id, uuid.uuid4(), bob)

    await service.delete_comment(recipe.id, comment.id, bob)
    assert await service.list_comments(recipe.id, bob) == []


# ==========================
# 点赞
# ==========================

async def test_like_twice_keeps_one_row(factory, session, alice, bob):
    recipe = await make_recipe(session, alice, is_public=True)
    service = ReactionService(factory)

    first = await service.like(recipe.id, bob)
    second = await service.like(recipe.id, bob)

    assert first.count == second.count == 1
    assert await count_rows(session, RecipeLike) == 1

    status = await service.like_status(recipe.id, bob)
    assert status.liked is True
    assert (await service.like_status(recipe.id, alice)).liked is False


async def test_cannot_like_own_recipe(factory, session, alice):
    recipe = await make_recipe(session, alice)
    with pytest.raises(InvalidArgumentException):
        await ReactionService(factory).like(recipe.id, alice)


async def test_unlike_is_idempotent(factory, session, alice, bob):
    recipe = await make_recipe(session, alice, is_public=True)
    service = ReactionService(factory)
    await service.like(recipe.id, bob)

    assert (await service.unlike(recipe.id, bob)).count == 0
    assert (await service.unlike(recipe.id, bob)).count == 0


async def test_like_hidden_recipe_is_not_found(factory, session, alice, bob):
    recipe = await make_recipe(session, alice)
    with pytest.raises(NotFoundException):
        await ReactionService(factory).like(recipe.id, bob)


# ==========================
# 收藏
# ==========================

async def test_favorite_twice_keeps_one_row(factory, session, alice, bob):
    recipe = await make_recipe(session, alice, is_public=True)
    service = ReactionService(factory)

    await service.favorite(recipe.id, bob)
    await service.favorite(recipe.id, bob)
    assert await count_rows(session, RecipeFavorite) == 1

    await service.unfavorite(recipe.id, bob)
    await service.unfavorite(recipe.id, bob)
    assert await count_rows(session, RecipeFavorite) == 0


async def test_favorites_hide_recipes_no_longer_visible(factory, session, alice, bob):
    service = ReactionService(factory)
    shared = await make_recipe(session, alice, name="分享的")
    public = await make_recipe(session, alice, name="公开的", is_public=True)
    await ShareService(factory).grant_share(shared.id, "bob@example.com", False, alice)

    await service.favorite(public.id, bob)
    await service.favorite(shared.id, bob)
    favorites = await service.list_favorites(bob)
    assert [r.name for r in favorites] == ["分享的", "公开的"]

    # 取消分享、改为私密之后，收藏列表里不再出现
    await ShareService(factory).revoke_share(shared.id, bob.id, alice)
    await RecipeService(factory).update_recipe(public.id, RecipeUpdate(is_public=False), alice)
    assert await service.list_favorites(bob) == []
