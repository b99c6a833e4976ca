"""API routes for reading tag counters"""

from fastapi import APIRouter, Depends

from scriptshare.schemas.base import PaginationSchema
from scriptshare.schemas.tag import TagFiltersSchema, TagSchema
from scriptshare.services.tag import TagService

tag_router = APIRouter(prefix="/tags", tags=["Tags"])


@tag_router.get("", response_model=PaginationSchema[TagSchema])
def read_tags(
    filters: TagFiltersSchema = Depends(),
    skip: int = 0,
    limit: int = 100,
    tag_service: TagService = Depends(),
):
    """Tags with the number of scripts using them, most used first"""
    return tag_service.get_all(filters, skip, limit)


@tag_router.get("/{name}", response_model=TagSchema)
def read_tag(
    name: str,
    tag_service: TagService = Depends(),
):
    return tag_service.get_by_name(name)
