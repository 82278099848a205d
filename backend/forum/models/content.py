"""Columns shared by every content kind (trad, post, comment)."""

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, Text, String, DateTime, ForeignKey
from sqlalchemy.orm import declared_attr


class ContentMixin:
    id = Column(Integer, primary_key=True, autoincrement=True)
    content = Column(Text, nullable=False, default="")
    image_path = Column(String(500), nullable=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    @declared_attr
    def user_id(cls):
        return Column(
            Integer,
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id} user_id={self.user_id}>"
