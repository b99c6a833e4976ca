"""Script model. A shared piece of source code addressed by its permalink."""

from typing import TYPE_CHECKING, List

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from scriptshare.models.base import BaseModel

if TYPE_CHECKING:
    from scriptshare.models.comment import Comment


class Script(BaseModel):
    __tablename__ = "scripts"

    permalink: Mapped[str] = mapped_column(String(80), primary_key=True)
    author: Mapped[str]
    title: Mapped[str]
    source: Mapped[str] = mapped_column(Text)

    # tag names in submission order, counted separately in the tags table
    tags: Mapped[list[str]] = mapped_column(JSON, default=list)

    # comments are removed by the database (ON DELETE CASCADE), not by the ORM
    comments: Mapped[List["Comment"]] = relationship(
        back_populates="script",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Comment.id",
    )
