"""Seed data — main admin account and a starter trad on first startup.

Both steps are idempotent: the account is skipped when the main user exists,
the content is skipped when any trad exists.
"""

import logging
import time
from typing import Optional

from sqlalchemy.orm import sessionmaker

from forum.config import Settings, settings as default_settings
from forum.models import Comment, CommentLike, Post, PostLike, Trad, TradLike, User, UserRole
from forum.services.identity import UserDirectory

logger = logging.getLogger(__name__)


def _ensure_main_user(users: UserDirectory, settings: Settings) -> User:
    user = users.find_user_by_name(settings.MAIN_USER_NAME)
    if user:
        logger.info("Main user '%s' already exists, skipping", settings.MAIN_USER_NAME)
        return user
    return users.create_user(
        username=settings.MAIN_USER_NAME,
        display_name=settings.MAIN_USER_DISPLAY_NAME,
        role=UserRole.ADMIN,
        profile_picture_path=settings.MAIN_USER_PICTURE,
    )


def _ensure_main_content(session_factory: sessionmaker, settings: Settings) -> Optional[Trad]:
    """Create the main trad, post and comment, each liked by the first user."""
    with session_factory() as db:
        if db.query(Trad.id).first() is not None:
            logger.info("Trads already present, skipping forum seed")
            return None

        user = db.query(User).order_by(User.id).first()
        if user is None:
            logger.warning("No user to own the seed content, skipping forum seed")
            return None

        trad = Trad(
            content=settings.MAIN_TRAD_CONTENT,
            user_id=user.id,
            image_path=settings.MAIN_TRAD_PICTURE,
        )
        db.add(trad)
        db.flush()

        post = Post(
            content=settings.MAIN_POST_CONTENT,
            user_id=user.id,
            trad_id=trad.id,
            image_path=settings.MAIN_POST_PICTURE,
        )
        db.add(post)
        db.flush()

        comment = Comment(
            content=settings.MAIN_COMMENT_CONTENT,
            user_id=user.id,
            post_id=post.id,
            image_path=settings.MAIN_COMMENT_PICTURE,
        )
        db.add(comment)
        db.flush()

        db.add_all([
            TradLike(user_id=user.id, trad_id=trad.id),
            PostLike(user_id=user.id, post_id=post.id),
            CommentLike(user_id=user.id, comment_id=comment.id),
        ])
        db.commit()
        db.refresh(trad)

    logger.info("Seeded trad id=%s, post id=%s, comment id=%s", trad.id, post.id, comment.id)
    return trad


def initialize(session_factory: sessionmaker, settings: Optional[Settings] = None) -> None:
    """Run the seed steps; safe to call on every startup."""
    settings = settings or default_settings
    started = time.perf_counter()

    users = UserDirectory(session_factory)
    _ensure_main_user(users, settings)
    _ensure_main_content(session_factory, settings)

    logger.info("Seed finished in %.3fs", time.perf_counter() - started)
