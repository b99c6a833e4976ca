"""Comment model, always owned by a Script"""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from scriptshare.models.base import BaseModel

if TYPE_CHECKING:
    from scriptshare.models.script import Script


class Comment(BaseModel):
    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(primary_key=True)
    script_permalink: Mapped[str] = mapped_column(
        ForeignKey("scripts.permalink", ondelete="CASCADE"), index=True
    )
    author: Mapped[str]
    body: Mapped[str] = mapped_column(Text)

    script: Mapped["Script"] = relationship(back_populates="comments")
