"""Like models, one table per content kind.

The composite primary key (user_id, <content>_id) is what prevents a user
from liking the same item twice.
"""

from sqlalchemy import Column, Integer, ForeignKey

from forum.database import Base


class TradLike(Base):
    __tablename__ = "trad_likes"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    trad_id = Column(Integer, ForeignKey("trads.id", ondelete="CASCADE"), primary_key=True, index=True)


class PostLike(Base):
    __tablename__ = "post_likes"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True, index=True)


class CommentLike(Base):
    __tablename__ = "comment_likes"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    comment_id = Column(Integer, ForeignKey("comments.id", ondelete="CASCADE"), primary_key=True, index=True)
