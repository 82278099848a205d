"""Post store — every post belongs to an existing trad, for good."""

import logging
from typing import Optional

from sqlalchemy.orm import Session, sessionmaker

from forum.database import SessionLocal
from forum.errors import ValidationError
from forum.models.like import PostLike
from forum.models.post import Post
from forum.models.trad import Trad
from forum.services.identity import UserDirectory
from forum.stores.base import ContentKind, ContentStore

logger = logging.getLogger(__name__)


def validate_trad(db: Session, post: Post) -> None:
    """Raise ValidationError unless the post's trad exists."""
    if db.query(Trad.id).filter(Trad.id == post.trad_id).first() is None:
        logger.warning("post rejected: trad %s not found", post.trad_id)
        raise ValidationError("trad not found")


POST = ContentKind(
    name="post",
    model=Post,
    like_model=PostLike,
    like_key="post_id",
    parent_key="trad_id",
    parent_name="trad",
    validate_parent=validate_trad,
)


def post_store(
    session_factory: Optional[sessionmaker] = None,
    users: Optional[UserDirectory] = None,
) -> ContentStore[Post]:
    session_factory = session_factory or SessionLocal
    return ContentStore(POST, session_factory, users or UserDirectory(session_factory))
