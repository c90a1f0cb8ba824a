import uuid

import pytest
from sqlalchemy import func, select

from helpers import make_recipe, make_user
from recipe_hub.core.exceptions import (
    InvalidCredentialsException,
    PermissionDeniedException,
    UserAlreadyExistsException,
    UserDisabledException,
    UserNotFoundException,
)
from recipe_hub.core.security.jwt_utils import decode_token
from recipe_hub.enums.user_enums import UserRole
from recipe_hub.models import (
    Friend, FriendRequest, Notification, Recipe, RecipeComment, RecipeFavorite, RecipeLike, RecipeShare, User,
)
from recipe_hub.repo.crud.users.user_repo import UserRepository
from recipe_hub.schemas.users.user_schemas import UserRegister, UserLogin, UserUpdateProfile
from recipe_hub.services.admin.admin_service import AdminService
from recipe_hub.services.auth.auth_service import AuthService
from recipe_hub.services.recipes.comment_service import CommentService
from recipe_hub.services.recipes.reaction_service import ReactionService
from recipe_hub.services.recipes.share_service import ShareService
from recipe_hub.services.social.friend_service import FriendService
from recipe_hub.services.users.user_service import UserService


async def count_rows(session, model) -> int:
    result = await session.execute(select(func.count()).select_from(model))
    return result.scalar_one()


# ==========================
# 注册 / 登录
# ==========================

async def test_register_and_login(factory):
    service = AuthService(factory)
    user = await service.register_user(UserRegister(email="New@Example.com", password="password123", name="New"))
    assert user.email == "new@example.com"
    assert user.hashed_password != "password123"

    token = await service.login_user(UserLogin(email="new@example.com", password="password123"))
    payload = decode_token(token.access_token)
    assert payload["sub"] == str(user.id)
    assert payload["type"] == "access"
    assert token.expires_in > 0


async def test_register_duplicate_email_ignores_case(factory):
    service = AuthService(factory)
    await service.register_user(UserRegister(email="dup@example.com", password="password123"))
    with pytest.raises(UserAlreadyExistsException):
        await service.register_user(UserRegister(email="DUP@example.com", password="password123"))


async def test_login_failures(factory, session):
    service = AuthService(factory)
    await service.register_user(UserRegister(email="x@example.com", password="password123"))

    with pytest.raises(InvalidCredentialsException):
        await service.login_user(UserLogin(email="x@example.com", password="wrong-password"))
    with pytest.raises(InvalidCredentialsException):
        await service.login_user(UserLogin(email="nobody@example.com", password="password123"))

    user = (await session.execute(select(User).where(User.email == "x@example.com"))).scalar_one()
    user.disabled = True
    await session.flush()
    with pytest.raises(UserDisabledException):
        await service.login_user(UserLogin(email="x@example.com", password="password123"))


# ==========================
# 个人资料
# ==========================

async def test_update_profile_and_public_profile(factory, session, alice):
    service = UserService(factory)
    await service.update_profile(alice, UserUpdateProfile(name="  Alice W  ", image="me.png"))
    await make_recipe(session, alice, name="公开的", is_public=True)
    await make_recipe(session, alice, name="私密的")

    profile = await service.get_user_profile(alice.id)
    assert profile.user.name == "Alice W"
    assert profile.user.image == "me.png"
    assert [r.name for r in profile.recipes] == ["公开的"]

    with pytest.raises(UserNotFoundException):
        await service.get_user_profile(uuid.uuid4())


async def test_ensure_admin_creates_or_promotes(factory, session, alice):
    service = UserService(factory)
    created = await service.ensure_admin("root@example.com", "password123")
    assert created.role == UserRole.ADMIN

    promoted = await service.ensure_admin("alice@example.com", "configured-admin-pw")
    assert promoted.id == alice.id
    assert promoted.role == UserRole.ADMIN
    assert promoted.hashed_password != "not-a-real-hash"


async def test_ensure_admin_takes_back_preregistered_email(factory):
    auth = AuthService(factory)
    squatter = await auth.register_user(UserRegister(email="admin@admin.com", password="squatter-pw-123"))
    await factory.get_repo_by_type(UserRepository).update(squatter, {"disabled": True})

    admin_user = await UserService(factory).ensure_admin("admin@admin.com", "configured-admin-pw")
    assert admin_user.id == squatter.id
    assert admin_user.disabled is False

    with pytest.raises(InvalidCredentialsException):
        await auth.login_user(UserLogin(email="admin@admin.com", password="squatter-pw-123"))
    token = await auth.login_user(UserLogin(email="admin@admin.com", password="configured-admin-pw"))
    assert token.access_token


# ==========================
# 管理后台
# ==========================

async def test_admin_operations_require_admin(factory, alice, bob):
    service = AdminService(factory)
    with pytest.raises(PermissionDeniedException):
        await service.list_users(alice)
    with pytest.raises(PermissionDeniedException):
        await service.set_user_disabled(bob.id, True, alice)
    with pytest.raises(PermissionDeniedException):
        await service.list_comments(alice)


async def test_admin_cannot_modify_other_admins(factory, session, admin):
    other_admin = await make_user(session, "second@admin.com", role=UserRole.ADMIN)
    service = AdminService(factory)

    with pytest.raises(PermissionDeniedException):
        await service.set_user_disabled(other_admin.id, True, admin)
    with pytest.raises(PermissionDeniedException):
        await service.delete_user(other_admin.id, admin)

    # 对自己的操作是允许的
    me = await service.set_user_disabled(admin.id, False, admin)
    assert me.disabled is False


async def test_admin_lists_users_with_recipe_counts(factory, session, admin, alice):
    await make_recipe(session, alice)
    await make_recipe(session, alice, name="第二个")

    users = {u.email: u for u in await AdminService(factory).list_users(admin)}
    assert users["alice@example.com"].recipe_count == 2
    assert users["admin@admin.com"].recipe_count == 0


async def test_admin_lists_recipes_and_comments(factory, session, admin, alice, bob):
    recipe = await make_recipe(session, alice, is_public=True)
    await CommentService(factory).add_comment(recipe.id, "不错", bob)
    await ReactionService(factory).like(recipe.id, bob)
    service = AdminService(factory)

    recipes = await service.list_recipes(admin)
    assert recipes[0].comment_count == 1
    assert recipes[0].like_count == 1
    assert recipes[0].owner.email == "alice@example.com"

    comments = await service.list_comments(admin)
    assert comments[0].recipe_name == recipe.name

    await service.delete_comment(comments[0].id, admin)
    assert await service.list_comments(admin) == []


async def test_admin_delete_user_removes_everything(factory, session, admin, alice, bob):
    own = await make_recipe(session, bob, name="Bob 的菜谱")
    alices = await make_recipe(session, alice, name="Alice 的菜谱", is_public=True)

    await ShareService(factory).grant_share(own.id, "alice@example.com", False, bob)
    await ShareService(factory).grant_share(alices.id, "bob@example.com", True, alice)
    await CommentService(factory).add_comment(alices.id, "Bob 的评论", bob)
    await CommentService(factory).add_comment(own.id, "Alice 在 Bob 菜谱上的评论", alice)
    await ReactionService(factory).like(alices.id, bob)
    await ReactionService(factory).favorite(alices.id, bob)
    friends = FriendService(factory)
    sent = await friends.send_request(bob, user_id=alice.id)
    await friends.accept_request(sent.request_id, alice)

    await AdminService(factory).delete_user(bob.id, admin)

    assert await count_rows(session, User) == 2
    assert [r.id for r in (await session.execute(select(Recipe))).scalars().all()] == [alices.id]
    for model in (RecipeShare, RecipeComment, RecipeLike, RecipeFavorite, Friend, FriendRequest, Notification):
        assert await count_rows(session, model) == 0, model.__name__
