"""Generic content store — CRUD and like lifecycle for one content kind.

A ``ContentKind`` describes what differs between trads, posts and comments:
the model, its like table, and (for posts and comments) the parent column
plus a validator that checks the parent row exists. ``ContentStore`` applies
the same rules to any kind:

- every operation opens its own session and commits before returning;
- returned entities are detached snapshots, mutating them changes nothing
  until they are passed back to ``update``;
- a missing target is reported as ``None``/``False``, a missing owner or
  parent raises ``ValidationError``, and changing the owner or parent of an
  existing item raises ``OwnershipError``.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Iterator, Optional, Protocol, TypeVar

from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from forum.errors import OwnershipError, ValidationError
from forum.services.identity import UserDirectory

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Columns an update never copies from the incoming item
_NON_UPDATABLE = ("id", "created_at")


class Store(Protocol[T]):
    """Operations every content store exposes, whatever the kind."""

    def add(self, item: T) -> T: ...

    def delete(self, content_id: int) -> bool: ...

    def get(self, content_id: int) -> Optional[T]: ...

    def get_all(self) -> Iterator[T]: ...

    def update(self, item: T) -> Optional[T]: ...

    def update_image(self, content_id: int, image_path: Optional[str]) -> Optional[T]: ...

    def update_content(self, content_id: int, content: str) -> Optional[T]: ...

    def like_content(self, content_id: int, user_id: int) -> bool: ...

    def unlike_content(self, content_id: int, user_id: int) -> bool: ...

    def toggle_like_content(self, content_id: int, user_id: int) -> bool: ...


@dataclass(frozen=True)
class ContentKind:
    name: str
    model: type
    like_model: type
    like_key: str  # column on like_model referencing model.id
    parent_key: Optional[str] = None  # column on model referencing the parent
    parent_name: Optional[str] = None
    validate_parent: Optional[Callable[[Session, object], None]] = None

    @property
    def immutable_fields(self) -> tuple[tuple[str, str], ...]:
        """(attribute, error message) pairs, parent first, then owner."""
        fields = []
        if self.parent_key:
            fields.append((self.parent_key, f"cannot change {self.parent_name}"))
        fields.append(("user_id", "cannot change owner"))
        return tuple(fields)


class ContentStore(Generic[T]):
    def __init__(self, kind: ContentKind, session_factory: sessionmaker, users: UserDirectory):
        self.kind = kind
        self._session_factory = session_factory
        self._users = users
        self._updatable = [
            attr.key for attr in inspect(kind.model).column_attrs if attr.key not in _NON_UPDATABLE
        ]

    # ── Queries ──────────────────────────────────────────────────────────────

    def _query(self, db: Session):
        model = self.kind.model
        return db.query(model).order_by(model.created_at.desc(), model.id.desc())

    def _find(self, db: Session, content_id: Optional[int]):
        if content_id is None:
            return None
        model = self.kind.model
        return db.query(model).filter(model.id == content_id).first()

    def _find_like(self, db: Session, content_id: int, user_id: int):
        like_model = self.kind.like_model
        return (
            db.query(like_model)
            .filter(
                getattr(like_model, self.kind.like_key) == content_id,
                like_model.user_id == user_id,
            )
            .first()
        )

    def get(self, content_id: int) -> Optional[T]:
        with self._session_factory() as db:
            return self._find(db, content_id)

    def get_all(self) -> Iterator[T]:
        """Iterate over every item of this kind, newest first.

        The query runs when iteration starts. Rows are fetched in one go and
        the session is closed before the first item is yielded, so an
        abandoned iterator holds no connection.
        """
        with self._session_factory() as db:
            rows = self._query(db).all()
        yield from rows

    def list_by_parent(self, parent_id: int) -> Iterator[T]:
        """Iterate over the items under one parent (posts of a trad, comments of a post)."""
        if self.kind.parent_key is None:
            raise TypeError(f"{self.kind.name} has no parent")
        parent_column = getattr(self.kind.model, self.kind.parent_key)
        with self._session_factory() as db:
            rows = self._query(db).filter(parent_column == parent_id).all()
        yield from rows

    # ── Validation ───────────────────────────────────────────────────────────

    def _validate_owner(self, db: Session, item, operation: str) -> None:
        if item is None:
            logger.warning("%s %s rejected: item is None", operation, self.kind.name)
            raise ValidationError("item is None")
        if not self._users.user_exists(item.user_id, db=db):
            logger.warning(
                "%s %s rejected: user %s not found", operation, self.kind.name, item.user_id
            )
            raise ValidationError("user not found")

    def _validate_parent(self, db: Session, item) -> None:
        if self.kind.validate_parent is not None:
            self.kind.validate_parent(db, item)

    # ── Mutations ────────────────────────────────────────────────────────────

    def add(self, item: T) -> T:
        """Insert ``item``; if a row with its id already exists, return that row instead.

        A detached instance whose row is gone was deleted and is rejected;
        deleted content is never restored under its old id.
        """
        with self._session_factory() as db:
            self._validate_owner(db, item, "add")
            self._validate_parent(db, item)

            existing = self._find(db, item.id)
            if existing is not None:
                logger.info("%s id=%s already exists, not re-inserted", self.kind.name, item.id)
                return existing

            if inspect(item).detached:
                logger.warning(
                    "add %s rejected: id=%s was deleted", self.kind.name, item.id
                )
                raise ValidationError(f"{self.kind.name} {item.id} was deleted")
            db.add(item)
            db.commit()
            db.refresh(item)

        logger.info("Added %s id=%s user_id=%s", self.kind.name, item.id, item.user_id)
        return item

    def delete(self, content_id: int) -> bool:
        """Delete an item; its children and likes are removed by the database cascade."""
        with self._session_factory() as db:
            existing = self._find(db, content_id)
            if existing is None:
                logger.info("%s id=%s not found, nothing deleted", self.kind.name, content_id)
                return False
            db.delete(existing)
            db.commit()

        logger.info("Deleted %s id=%s", self.kind.name, content_id)
        return True

    def update(self, item: T) -> Optional[T]:
        """Copy every column but id and created_at from ``item`` onto the stored row.

        A changed parent or owner is rejected before the parent is looked up,
        so re-parenting fails with OwnershipError even onto a missing parent.
        """
        with self._session_factory() as db:
            self._validate_owner(db, item, "update")

            existing = self._find(db, item.id)
            if existing is None:
                logger.info("%s id=%s not found, nothing updated", self.kind.name, item.id)
                return None

            for field, message in self.kind.immutable_fields:
                if getattr(item, field) != getattr(existing, field):
                    logger.warning(
                        "update %s id=%s rejected: %s", self.kind.name, item.id, message
                    )
                    raise OwnershipError(message)
            self._validate_parent(db, item)

            for attr in self._updatable:
                setattr(existing, attr, getattr(item, attr))
            db.commit()
            db.refresh(existing)

        logger.info("Updated %s id=%s", self.kind.name, existing.id)
        return existing

    def update_image(self, content_id: int, image_path: Optional[str]) -> Optional[T]:
        item = self.get(content_id)
        if item is None:
            return None
        item.image_path = image_path
        return self.update(item)

    def update_content(self, content_id: int, content: str) -> Optional[T]:
        item = self.get(content_id)
        if item is None:
            return None
        item.content = content
        return self.update(item)

    # ── Likes ────────────────────────────────────────────────────────────────

    def like_content(self, content_id: int, user_id: int) -> bool:
        """Like an item; False when it is already liked or does not exist."""
        with self._session_factory() as db:
            if self._find(db, content_id) is None:
                logger.info("%s id=%s not found, like skipped", self.kind.name, content_id)
                return False
            if self._find_like(db, content_id, user_id) is not None:
                logger.info(
                    "%s id=%s already liked by user %s", self.kind.name, content_id, user_id
                )
                return False

            db.add(self.kind.like_model(**{self.kind.like_key: content_id, "user_id": user_id}))
            try:
                db.commit()
            except IntegrityError:
                # The composite key is the authoritative guard against a concurrent like
                db.rollback()
                logger.info(
                    "Like on %s id=%s by user %s rejected by the database",
                    self.kind.name,
                    content_id,
                    user_id,
                )
                return False

        logger.info("User %s liked %s id=%s", user_id, self.kind.name, content_id)
        return True

    def unlike_content(self, content_id: int, user_id: int) -> bool:
        """Remove a like; False when there was none."""
        with self._session_factory() as db:
            like = self._find_like(db, content_id, user_id)
            if like is None:
                logger.info(
                    "%s id=%s not liked by user %s, nothing removed",
                    self.kind.name,
                    content_id,
                    user_id,
                )
                return False
            db.delete(like)
            db.commit()

        logger.info("User %s unliked %s id=%s", user_id, self.kind.name, content_id)
        return True

    def toggle_like_content(self, content_id: int, user_id: int) -> bool:
        with self._session_factory() as db:
            liked = self._find_like(db, content_id, user_id) is not None
        if liked:
            return self.unlike_content(content_id, user_id)
        return self.like_content(content_id, user_id)

    def count_likes(self, content_id: int) -> int:
        like_model = self.kind.like_model
        with self._session_factory() as db:
            return (
                db.query(like_model)
                .filter(getattr(like_model, self.kind.like_key) == content_id)
                .count()
            )

    def is_liked(self, content_id: int, user_id: int) -> bool:
        with self._session_factory() as db:
            return self._find_like(db, content_id, user_id) is not None
