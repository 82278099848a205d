"""Post model — a reply inside a trad."""

from sqlalchemy import Column, Integer, ForeignKey

from forum.database import Base
from forum.models.content import ContentMixin


class Post(ContentMixin, Base):
    __tablename__ = "posts"

    # Set at creation, never reassigned
    trad_id = Column(Integer, ForeignKey("trads.id", ondelete="CASCADE"), nullable=False, index=True)
