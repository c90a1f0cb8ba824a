from pydantic import BaseModel


class LikeStatusRead(BaseModel):
    count: int
    liked: bool


class FavoriteStatusRead(BaseModel):
    favorited: bool
