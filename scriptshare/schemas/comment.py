"""DTO for Comment"""

from scriptshare.schemas.base import BaseReadSchema, BaseSchema


class CommentSchema(BaseReadSchema):
    id: int
    script_permalink: str
    author: str
    body: str


class CommentFormSchema(BaseSchema):
    """Raw form input, required fields are checked by the service"""

    author: str | None = None
    body: str | None = None
    captcha_response: str | None = None
