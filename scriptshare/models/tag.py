"""Tag model"""

from sqlalchemy.orm import Mapped, mapped_column

from scriptshare.models.base import BaseModel


class Tag(BaseModel):
    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(unique=True)
    # number of scripts submitted with this tag
    count: Mapped[int] = mapped_column(default=0)
