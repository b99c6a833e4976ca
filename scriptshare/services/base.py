"""Base service that incorporates business logic and CRUD operations."""

from typing import Generic, Type, TypeVar

from fastapi import Depends
from sqlalchemy.orm import Query, Session

from scriptshare.errors.common import NotFoundError
from scriptshare.models.base import BaseModel
from scriptshare.schemas.base import BaseFilterSchema, PaginationSchema
from scriptshare.uow import get_uow

M = TypeVar("M", bound=BaseModel)  # model
K = TypeVar("K", int, str)  # primary key
BFS = TypeVar("BFS", bound=BaseFilterSchema)


class BaseService(Generic[M]):
    model: Type[M]
    db: Session

    def __init__(self, db: Session = Depends(get_uow)):
        self.db = db

    def create(self, obj: M) -> M:
        self.db.add(obj)
        self.db.flush()
        self.db.refresh(obj)
        return obj

    def get(self, obj_id: K) -> M:
        db_obj = self.db.get(self.model, obj_id)
        if not db_obj:
            raise NotFoundError(f"{self.model.__name__} {obj_id}")
        return db_obj

    def _apply_base_filters(self, query: Query[M], filters: BFS) -> Query[M]:
        """Common filters that are present for any database model"""
        if filters.created_after is not None:
            query = query.filter(self.model.created_at >= filters.created_after)
        if filters.created_before is not None:
            query = query.filter(self.model.created_at <= filters.created_before)
        return query

    def _apply_filters(self, query: Query[M], filters: BFS) -> Query[M]:
        """Filters for a particular model. To be overridden by child class."""
        return query

    def _apply_ordering(self, query: Query[M]) -> Query[M]:
        return query.order_by(self.model.created_at.desc())

    def get_all(
        self, filters: BFS | None = None, skip=0, limit=100
    ) -> PaginationSchema[M]:
        query = self.db.query(self.model)
        if filters:
            query = self._apply_base_filters(query, filters)
            query = self._apply_filters(query, filters)
        query = self._apply_ordering(query)
        total = query.count()
        items = query.offset(skip).limit(limit).all()
        return PaginationSchema[M](items=items, total=total, skip=skip, limit=limit)

    def delete(self, obj_id: K) -> K:
        obj = self.get(obj_id)
        self.db.delete(obj)
        self.db.flush()
        return obj_id
