"""DTO for Tag"""

from scriptshare.schemas.base import BaseFilterSchema, BaseReadSchema


class TagSchema(BaseReadSchema):
    name: str
    count: int


class TagFiltersSchema(BaseFilterSchema):
    name: str | None = None
