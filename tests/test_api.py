"""
通过 HTTP 驱动整个应用：检查响应信封和业务异常到 HTTP 状态码的映射。
这里不使用 session 夹具，所有数据都通过接口（或单独提交的会话）写入。
"""
import uuid

from recipe_hub.db.repository_factory import RepositoryFactory
from recipe_hub.services.users.user_service import UserService

API = "/api/v1"


async def register_and_login(client, email: str, password: str = "password123") -> dict:
    resp = await client.post(f"{API}/auth/register", json={"email": email, "password": password})
    assert resp.status_code == 201, resp.text
    resp = await client.post(f"{API}/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    token = resp.json()["data"]["access_token"]
    return {"Authorization": f"Bearer {token}"}


async def test_health(client):
    resp = await client.get(f"{API}/auth/health")
    assert resp.status_code == 200
    assert resp.json() == {"code": 0, "message": "请求成功", "data": {"status": "ok"}}


async def test_requires_authentication(client):
    resp = await client.get(f"{API}/recipes")
    assert resp.status_code == 401
    assert resp.json()["data"] is None

    resp = await client.get(f"{API}/recipes", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


async def test_register_validation_and_conflict(client):
    resp = await client.post(f"{API}/auth/register", json={"email": "a@example.com", "password": "short"})
    assert resp.status_code == 400
    assert resp.json()["code"] == 40001

    await register_and_login(client, "a@example.com")
    resp = await client.post(f"{API}/auth/register", json={"email": "A@example.com", "password": "password123"})
    assert resp.status_code == 409


async def test_wrong_password_is_unauthorized(client):
    await register_and_login(client, "a@example.com")
    resp = await client.post(f"{API}/auth/login", json={"email": "a@example.com", "password": "wrong-password"})
    assert resp.status_code == 401


async def test_me(client):
    headers = await register_and_login(client, "me@example.com")
    resp = await client.get(f"{API}/auth/me", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["email"] == "me@example.com"


async def test_recipe_sharing_flow(client):
    alice = await register_and_login(client, "alice@example.com")
    bob = await register_and_login(client, "bob@example.com")

    resp = await client.post(f"{API}/recipes", json={"name": "宫保鸡丁", "ingredients": ["鸡肉", "花生"]}, headers=alice)
    assert resp.status_code == 201
    recipe_id = resp.json()["data"]["id"]

    # 私密菜谱：对 Bob 来说不存在
    resp = await client.get(f"{API}/recipes/{recipe_id}", headers=bob)
    assert resp.status_code == 404

    resp = await client.post(
        f"{API}/recipes/{recipe_id}/share",
        json={"shared_with_email": "bob@example.com", "can_edit": False},
        headers=alice,
    )
    assert resp.status_code == 201
    bob_id = resp.json()["data"]["shared_with_id"]

    resp = await client.get(f"{API}/recipes/{recipe_id}", headers=bob)
    assert resp.status_code == 200
    assert resp.json()["data"]["access_level"] == "VIEW_ONLY"

    resp = await client.patch(f"{API}/recipes/{recipe_id}", json={"name": "改名"}, headers=bob)
    assert resp.status_code == 403

    # 非所有者看不到分享列表
    resp = await client.get(f"{API}/recipes/{recipe_id}/share", headers=bob)
    assert resp.status_code == 404

    resp = await client.post(
        f"{API}/recipes/{recipe_id}/share",
        json={"shared_with_email": "bob@example.com", "can_edit": True},
        headers=alice,
    )
    assert resp.status_code == 201
    resp = await client.patch(f"{API}/recipes/{recipe_id}", json={"name": "改名"}, headers=bob)
    assert resp.status_code == 200
    assert resp.json()["data"]["name"] == "改名"

    resp = await client.get(f"{API}/recipes", params={"include_shared": "true"}, headers=bob)
    assert [r["id"] for r in resp.json()["data"]["shared"]] == [recipe_id]

    resp = await client.delete(f"{API}/recipes/{recipe_id}/share", params={"user_id": bob_id}, headers=alice)
    assert resp.status_code == 200
    resp = await client.get(f"{API}/recipes/{recipe_id}", headers=bob)
    assert resp.status_code == 404

    resp = await client.delete(f"{API}/recipes/{recipe_id}", headers=alice)
    assert resp.status_code == 200
    resp = await client.get(f"{API}/recipes/{recipe_id}", headers=alice)
    assert resp.status_code == 404


async def test_share_with_self_is_rejected(client):
    alice = await register_and_login(client, "alice@example.com")
    resp = await client.post(f"{API}/recipes", json={"name": "私房菜"}, headers=alice)
    recipe_id = resp.json()["data"]["id"]

    resp = await client.post(
        f"{API}/recipes/{recipe_id}/share",
        json={"shared_with_email": "alice@example.com"},
        headers=alice,
    )
    assert resp.status_code == 400
    resp = await client.get(f"{API}/recipes/{recipe_id}/share", headers=alice)
    assert resp.json()["data"] == []


async def test_comments_likes_and_favorites(client):
    alice = await register_and_login(client, "alice@example.com")
    bob = await register_and_login(client, "bob@example.com")
    resp = await client.post(f"{API}/recipes", json={"name": "公开菜谱", "is_public": True}, headers=alice)
    recipe_id = resp.json()["data"]["id"]

    resp = await client.post(f"{API}/recipes/{recipe_id}/comments", json={"text": "  好吃 "}, headers=bob)
    assert resp.status_code == 201
    comment_id = resp.json()["data"]["id"]
    assert resp.json()["data"]["text"] == "好吃"

    resp = await client.post(f"{API}/recipes/{recipe_id}/comments", json={"text": "   "}, headers=bob)
    assert resp.status_code == 400

    resp = await client.delete(f"{API}/recipes/{recipe_id}/comments/{comment_id}", headers=alice)
    assert resp.status_code == 403

    resp = await client.post(f"{API}/recipes/{recipe_id}/likes", headers=bob)
    assert resp.json()["data"] == {"count": 1, "liked": True}
    resp = await client.post(f"{API}/recipes/{recipe_id}/likes", headers=bob)
    assert resp.json()["data"] == {"count": 1, "liked": True}
    resp = await client.post(f"{API}/recipes/{recipe_id}/likes", headers=alice)
    assert resp.status_code == 400

    resp = await client.post(f"{API}/recipes/{recipe_id}/favorite", headers=bob)
    assert resp.json()["data"] == {"favorited": True}
    resp = await client.get(f"{API}/favorites", headers=bob)
    assert [r["id"] for r in resp.json()["data"]] == [recipe_id]


async def test_friend_request_flow(client):
    alice = await register_and_login(client, "alice@example.com")
    bob = await register_and_login(client, "bob@example.com")

    resp = await client.post(f"{API}/friends", json={"email": "bob@example.com"}, headers=alice)
    assert resp.status_code == 201
    request_id = resp.json()["data"]["request_id"]
    bob_id = resp.json()["data"]["to_user"]["id"]

    resp = await client.post(f"{API}/friends", json={"email": "bob@example.com"}, headers=alice)
    assert resp.status_code == 409

    resp = await client.post(f"{API}/friends", json={}, headers=alice)
    assert resp.status_code == 400

    resp = await client.get(f"{API}/friend-requests/status", params={"user_id": bob_id}, headers=alice)
    assert resp.json()["data"]["status"] == "sent"

    resp = await client.post(f"{API}/friend-requests/{request_id}/accept", headers=alice)
    assert resp.status_code == 404

    resp = await client.get(f"{API}/friend-requests", headers=bob)
    assert [r["id"] for r in resp.json()["data"]] == [request_id]

    resp = await client.post(f"{API}/friend-requests/{request_id}/accept", headers=bob)
    assert resp.status_code == 200

    resp = await client.get(f"{API}/friends", headers=alice)
    assert [f["friend"]["email"] for f in resp.json()["data"]] == ["bob@example.com"]

    resp = await client.get(f"{API}/notifications", headers=alice)
    notifications = resp.json()["data"]
    assert [n["type"] for n in notifications] == ["FRIEND_ACCEPTED"]

    resp = await client.patch(f"{API}/notifications/{notifications[0]['id']}", json={"read": True}, headers=alice)
    assert resp.json()["data"]["read"] is True
    resp = await client.patch(f"{API}/notifications/{notifications[0]['id']}", json={"read": True}, headers=bob)
    assert resp.status_code == 404

    resp = await client.delete(f"{API}/friends/{bob_id}", headers=alice)
    assert resp.status_code == 200
    resp = await client.get(f"{API}/friends", headers=bob)
    assert resp.json()["data"] == []


async def test_profiles(client):
    alice = await register_and_login(client, "alice@example.com")
    resp = await client.patch(f"{API}/me/profile", json={"name": "Alice"}, headers=alice)
    assert resp.status_code == 200
    user_id = resp.json()["data"]["id"]

    await client.post(f"{API}/recipes", json={"name": "公开的", "is_public": True}, headers=alice)
    await client.post(f"{API}/recipes", json={"name": "私密的"}, headers=alice)

    resp = await client.get(f"{API}/users/{user_id}/profile", headers=alice)
    data = resp.json()["data"]
    assert data["user"]["name"] == "Alice"
    assert [r["name"] for r in data["recipes"]] == ["公开的"]

    resp = await client.get(f"{API}/users/{uuid.uuid4()}/profile", headers=alice)
    assert resp.status_code == 404


async def test_admin_endpoints(client, session_maker):
    admin = await register_and_login(client, "root@example.com")
    alice = await register_and_login(client, "alice@example.com")

    resp = await client.get(f"{API}/admin/users", headers=admin)
    assert resp.status_code == 403

    # 用种子脚本同样的方式提升为管理员；角色在每次请求时从数据库读取
    async with session_maker() as session:
        await UserService(RepositoryFactory(session)).ensure_admin("root@example.com", "root-password-123")
        await session.commit()

    resp = await client.get(f"{API}/admin/users", headers=admin)
    assert resp.status_code == 200
    users = {u["email"]: u for u in resp.json()["data"]}
    alice_id = users["alice@example.com"]["id"]

    resp = await client.get(f"{API}/admin/users", headers=alice)
    assert resp.status_code == 403

    # 被禁用的用户，已签发的 token 也立即失效
    resp = await client.patch(f"{API}/admin/users/{alice_id}", json={"disabled": True}, headers=admin)
    assert resp.json()["data"]["disabled"] is True
    resp = await client.get(f"{API}/auth/me", headers=alice)
    assert resp.status_code == 401
    resp = await client.post(f"{API}/auth/login", json={"email": "alice@example.com", "password": "password123"})
    assert resp.status_code == 401

    resp = await client.delete(f"{API}/admin/users/{alice_id}", headers=admin)
    assert resp.status_code == 200
    resp = await client.get(f"{API}/admin/users", headers=admin)
    assert [u["email"] for u in resp.json()["data"]] == ["root@example.com"]

    resp = await client.delete(f"{API}/admin/recipes/{uuid.uuid4()}", headers=admin)
    assert resp.status_code == 404
    resp = await client.get(f"{API}/admin/comments", headers=admin)
    assert resp.json()["data"] == []
