"""Tag service. Keeps a usage counter per tag name."""

import logging
import re
from typing import Iterable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query

from scriptshare.errors.common import NotFoundError
from scriptshare.models.tag import Tag
from scriptshare.schemas.tag import TagFiltersSchema
from scriptshare.services.base import BaseService

logger = logging.getLogger(__name__)


def parse_tags(tag_string: str | None) -> list[str]:
    """Split a whitespace/comma separated string into distinct tag names."""
    names: list[str] = []
    for name in re.split(r"[\s,]+", tag_string or ""):
        if name and name not in names:
            names.append(name)
    return names


class TagService(BaseService[Tag]):
    model = Tag

    def _apply_filters(
        self, query: Query[Tag], filters: TagFiltersSchema
    ) -> Query[Tag]:
        if filters.name is not None:
            query = query.filter(self.model.name.ilike(f"%{filters.name}%"))
        return query

    def _apply_ordering(self, query: Query[Tag]) -> Query[Tag]:
        return query.order_by(self.model.count.desc(), self.model.name)

    def get_by_name(self, name: str) -> Tag:
        db_obj = self.db.query(self.model).filter(self.model.name == name).first()
        if not db_obj:
            raise NotFoundError(f"{self.model.__name__} {name=}")
        return db_obj

    def _bump(self, name: str) -> int:
        """Increment in the database, returns the number of rows touched"""
        return (
            self.db.query(self.model)
            .filter(self.model.name == name)
            .update({self.model.count: self.model.count + 1}, synchronize_session=False)
        )

    def increment(self, name: str) -> Tag:
        if not self._bump(name):
            try:
                with self.db.begin_nested():
                    self.db.add(self.model(name=name, count=1))
                    self.db.flush()
            except IntegrityError:
                # another request created the tag between our update and insert
                logger.info("Tag %r created concurrently, incrementing instead", name)
                self._bump(name)
        tag = self.get_by_name(name)
        self.db.refresh(tag)
        return tag

    def increment_all(self, names: Iterable[str]) -> list[Tag]:
        return [self.increment(name) for name in names]
