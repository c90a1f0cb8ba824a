import uuid

import pytest
from sqlalchemy import func, select

from helpers import make_recipe
from recipe_hub.core.exceptions import InvalidArgumentException, NotFoundException, UserNotFoundException
from recipe_hub.models.recipe import RecipeShare
from recipe_hub.services.recipes.share_service import ShareService


async def share_count(session) -> int:
    result = await session.execute(select(func.count()).select_from(RecipeShare))
    return result.scalar_one()


async def test_grant_twice_keeps_one_row_and_updates_can_edit(factory, session, alice, bob):
    service = ShareService(factory)
    recipe = await make_recipe(session, alice)

    first = await service.grant_share(recipe.id, "bob@example.com", False, alice)
    second = await service.grant_share(recipe.id, "bob@example.com", True, alice)

    assert await share_count(session) == 1
    assert first.id == second.id
    assert second.can_edit is True
    assert second.shared_with_email == "bob@example.com"


async def test_grant_to_unknown_email_is_not_found(factory, session, alice):
    recipe = await make_recipe(session, alice)
    with pytest.raises(UserNotFoundException):
        await ShareService(factory).grant_share(recipe.id, "nobody@example.com", False, alice)


async def test_grant_to_self_is_rejected(factory, session, alice):
    recipe = await make_recipe(session, alice)
    with pytest.raises(InvalidArgumentException):
        await ShareService(factory).grant_share(recipe.id, "alice@example.com", False, alice)


async def test_non_owner_cannot_manage_shares(factory, session, alice, bob, carol):
    service = ShareService(factory)
    recipe = await make_recipe(session, alice, is_public=True)
    await service.grant_share(recipe.id, "bob@example.com", True, alice)

    # 即使有编辑权限，分享管理也只对所有者可见
    with pytest.raises(NotFoundException):
        await service.grant_share(recipe.id, "carol@example.com", False, bob)
    with pytest.raises(NotFoundException):
        await service.list_shares(recipe.id, bob)
    with pytest.raises(NotFoundException):
        await service.revoke_share(recipe.id, bob.id, carol)


async def test_revoke_is_idempotent_and_removes_access(factory, session, alice, bob):
    service = ShareService(factory)
    recipe = await make_recipe(session, alice)
    await service.grant_share(recipe.id, "bob@example.com", False, alice)

    await service.revoke_share(recipe.id, bob.id, alice)
    await service.revoke_share(recipe.id, bob.id, alice)
    await service.revoke_share(recipe.id, uuid.uuid4(), alice)

    assert await share_count(session) == 0
    assert await service.list_shares(recipe.id, alice) == []
    with pytest.raises(NotFoundException):
        await service.load_viewable(recipe.id, bob)


async def test_list_shares_includes_target_details(factory, session, alice, bob, carol):
    service = ShareService(factory)
    recipe = await make_recipe(session, alice)
    await service.grant_share(recipe.id, "bob@example.com", False, alice)
    await service.grant_share(recipe.id, "carol@example.com", True, alice)

    shares = await service.list_shares(recipe.id, alice)
    by_email = {s.shared_with_email: s for s in shares}
    assert set(by_email) == {"bob@example.com", "carol@example.com"}
    assert by_email["bob@example.com"].shared_with_name == "Bob"
    assert by_email["carol@example.com"].can_edit is True
