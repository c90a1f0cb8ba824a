"""测试数据构造工具：直接写库，绕过服务层的校验"""
from recipe_hub.enums.user_enums import UserRole
from recipe_hub.models.recipe import Recipe
from recipe_hub.models.user import User
from recipe_hub.schemas.users.user_context import UserContext


async def make_user(session, email: str, role: UserRole = UserRole.USER, name: str = None) -> UserContext:
    user = User(email=email, hashed_password="not-a-real-hash", role=role, name=name)
    session.add(user)
    await session.flush()
    return UserContext.model_validate(user)


async def make_recipe(session, owner: UserContext, name: str = "番茄炒蛋", **fields) -> Recipe:
    recipe = Recipe(
        user_id=owner.id,
        name=name,
        ingredients=fields.pop("ingredients", ["番茄", "鸡蛋"]),
        instructions=fields.pop("instructions", "先炒蛋，再炒番茄"),
        **fields,
    )
    session.add(recipe)
    await session.flush()
    return recipe
