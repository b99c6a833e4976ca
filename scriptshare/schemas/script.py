"""DTO for Script"""

from scriptshare.schemas.base import BaseFilterSchema, BaseReadSchema, BaseSchema
from scriptshare.schemas.comment import CommentSchema


class ScriptSummarySchema(BaseReadSchema):
    permalink: str
    author: str
    title: str
    tags: list[str]


class ScriptSchema(ScriptSummarySchema):
    source: str


class ScriptViewSchema(ScriptSchema):
    comments: list[CommentSchema] = []
    # set for administrators, enables the delete button
    admin: bool = False


class ScriptFormSchema(BaseSchema):
    """Raw form input, required fields are checked by the service"""

    author: str | None = None
    source: str | None = None
    title: str | None = None
    tags: str | None = None
    captcha_response: str | None = None
    method: str | None = None


class ScriptFiltersSchema(BaseFilterSchema):
    tag: str | None = None
    author: str | None = None
