"""DTO for an authenticated user"""

from scriptshare.schemas.base import BaseSchema


class UserSchema(BaseSchema):
    email: str
    admin: bool = False
