"""Comment model — a reply to a post."""

from sqlalchemy import Column, Integer, ForeignKey

from forum.database import Base
from forum.models.content import ContentMixin


class Comment(ContentMixin, Base):
    __tablename__ = "comments"

    # Set at creation, never reassigned
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
