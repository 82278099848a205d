"""Comment store — every comment belongs to an existing post, for good."""

import logging
from typing import Optional

from sqlalchemy.orm import Session, sessionmaker

from forum.database import SessionLocal
from forum.errors import ValidationError
from forum.models.comment import Comment
from forum.models.like import CommentLike
from forum.models.post import Post
from forum.services.identity import UserDirectory
from forum.stores.base import ContentKind, ContentStore

logger = logging.getLogger(__name__)


def validate_post(db: Session, comment: Comment) -> None:
    """Raise ValidationError unless the comment's post exists."""
    if db.query(Post.id).filter(Post.id == comment.post_id).first() is None:
        logger.warning("comment rejected: post %s not found", comment.post_id)
        raise ValidationError("post not found")


COMMENT = ContentKind(
    name="comment",
    model=Comment,
    like_model=CommentLike,
    like_key="comment_id",
    parent_key="post_id",
    parent_name="post",
    validate_parent=validate_post,
)


def comment_store(
    session_factory: Optional[sessionmaker] = None,
    users: Optional[UserDirectory] = None,
) -> ContentStore[Comment]:
    session_factory = session_factory or SessionLocal
    return ContentStore(COMMENT, session_factory, users or UserDirectory(session_factory))
