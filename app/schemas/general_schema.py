from typing import List

from pydantic import BaseModel

from app.schemas.user_schema import User


class UserResponse(BaseModel):
    data: User


class UserListResponse(BaseModel):
    data: List[User]


class ErrorResponse(BaseModel):
    error: str
