"""Trad store — threads are root items, nothing to validate above them."""

from typing import Optional

from sqlalchemy.orm import sessionmaker

from forum.database import SessionLocal
from forum.models.like import TradLike
from forum.models.trad import Trad
from forum.services.identity import UserDirectory
from forum.stores.base import ContentKind, ContentStore

TRAD = ContentKind(name="trad", model=Trad, like_model=TradLike, like_key="trad_id")


def trad_store(
    session_factory: Optional[sessionmaker] = None,
    users: Optional[UserDirectory] = None,
) -> ContentStore[Trad]:
    session_factory = session_factory or SessionLocal
    return ContentStore(TRAD, session_factory, users or UserDirectory(session_factory))
