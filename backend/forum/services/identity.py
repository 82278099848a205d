"""User directory — the identity capability the content stores consume.

Credential checks, password hashing and token issuance belong to the
authentication layer in front of the application; this module only owns the
user rows, their role and their profile fields.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from forum.config import settings
from forum.errors import ValidationError
from forum.models.user import User, UserRole

logger = logging.getLogger(__name__)


class UserDirectory:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    # ── Lookups ──────────────────────────────────────────────────────────────

    def find_user_by_id(self, user_id: int) -> Optional[User]:
        with self._session_factory() as db:
            return db.query(User).filter(User.id == user_id).first()

    def find_user_by_name(self, username: str) -> Optional[User]:
        if not username or not username.strip():
            return None
        with self._session_factory() as db:
            return db.query(User).filter(User.username == username).first()

    def user_exists(self, user_id: Optional[int], db: Optional[Session] = None) -> bool:
        """Whether a user row with ``user_id`` exists.

        Pass ``db`` to run the check inside a caller's open session.
        """
        if user_id is None:
            return False
        if db is not None:
            return db.query(User.id).filter(User.id == user_id).first() is not None
        with self._session_factory() as own_db:
            return own_db.query(User.id).filter(User.id == user_id).first() is not None

    def is_user_banned(self, user: Optional[User]) -> bool:
        if user is None:
            return False
        return user.role == UserRole.BANNED

    def list_users(self) -> list[User]:
        with self._session_factory() as db:
            return db.query(User).order_by(User.id).all()

    # ── Mutations ────────────────────────────────────────────────────────────

    def create_user(
        self,
        username: str,
        display_name: str,
        role: str = UserRole.USER,
        profile_picture_path: Optional[str] = None,
    ) -> User:
        """Create a user with ``role``; raises ValidationError on a taken name."""
        if not username or not username.strip():
            raise ValidationError("username is required")
        if role not in UserRole.ALL:
            raise ValidationError(f"Unknown role '{role}'")

        user = User(
            username=username,
            display_name=display_name,
            role=role,
            profile_picture_path=profile_picture_path or settings.DEFAULT_USER_PICTURE,
        )
        with self._session_factory() as db:
            if db.query(User.id).filter(User.username == username).first() is not None:
                raise ValidationError(f"Username '{username}' already registered")
            db.add(user)
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                raise ValidationError(f"Username '{username}' already registered")
            db.refresh(user)

        logger.info("Created user id=%s username=%s role=%s", user.id, user.username, user.role)
        return user

    def set_role(self, username: str, role: str) -> Optional[User]:
        """Replace the user's role (admin, user or banned)."""
        if role not in UserRole.ALL:
            raise ValidationError(f"Unknown role '{role}'")
        return self._update_field(username, "role", role)

    def update_image(self, username: str, image_path: str) -> Optional[User]:
        return self._update_field(username, "profile_picture_path", image_path)

    def update_display_name(self, username: str, display_name: str) -> Optional[User]:
        return self._update_field(username, "display_name", display_name)

    def delete_user(self, user_id: int) -> bool:
        """Delete a user; their content and likes go with them."""
        with self._session_factory() as db:
            user = db.query(User).filter(User.id == user_id).first()
            if not user:
                return False
            db.delete(user)
            db.commit()
        logger.info("Deleted user id=%s", user_id)
        return True

    def _update_field(self, username: str, field: str, value) -> Optional[User]:
        if not username:
            return None
        with self._session_factory() as db:
            user = db.query(User).filter(User.username == username).first()
            if not user:
                logger.info("User %s not found, %s not updated", username, field)
                return None
            setattr(user, field, value)
            db.commit()
            db.refresh(user)
        logger.info("Updated %s of user %s", field, username)
        return user
