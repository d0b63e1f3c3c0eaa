import datetime as dt
from typing import Optional

import sqlalchemy as sa
from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gem_finder.db.base import Base


class Place(Base):
    """A user-submitted gem; location is stored as a canonical "lat,lng"."""

    __tablename__ = "places"
    __table_args__ = (
        sa.Index("idx_place_user", "user_id"),
        sa.Index("idx_place_category", "category"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    location: Mapped[str] = mapped_column(String(64), nullable=False)
    image_path: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=dt.datetime.utcnow
    )

    # Dependent rows are removed explicitly by the service, not by cascade
    owner = relationship("User")

    def __repr__(self):
        return f"<Place(id={self.id}, title={self.title!r}, user_id={self.user_id})>"
