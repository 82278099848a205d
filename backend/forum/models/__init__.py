"""SQLAlchemy ORM models."""

from forum.models.user import User, UserRole
from forum.models.trad import Trad
from forum.models.post import Post
from forum.models.comment import Comment
from forum.models.like import TradLike, PostLike, CommentLike

__all__ = [
    "User",
    "UserRole",
    "Trad",
    "Post",
    "Comment",
    "TradLike",
    "PostLike",
    "CommentLike",
]
