"""Application bootstrap — logging, tables, seed data and the content stores.

A transport layer (HTTP controllers, CLI) calls ``startup()`` once before it
accepts traffic and then works against the returned ``Forum``.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import sessionmaker

from forum.config import Settings, settings as default_settings
from forum.database import SessionLocal, engine as default_engine, init_db, make_engine, make_session_factory
from forum.models import Comment, Post, Trad
from forum.services import seed
from forum.services.identity import UserDirectory
from forum.stores import ContentStore, comment_store, post_store, trad_store

logger = logging.getLogger(__name__)


@dataclass
class Forum:
    users: UserDirectory
    trads: ContentStore[Trad]
    posts: ContentStore[Post]
    comments: ContentStore[Comment]


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format=settings.LOG_FORMAT)


def build_forum(session_factory: sessionmaker) -> Forum:
    users = UserDirectory(session_factory)
    return Forum(
        users=users,
        trads=trad_store(session_factory, users),
        posts=post_store(session_factory, users),
        comments=comment_store(session_factory, users),
    )


def startup(settings: Optional[Settings] = None) -> Forum:
    """Create tables, seed on first run, and wire the stores."""
    settings = settings or default_settings
    configure_logging(settings)

    if settings is default_settings:
        engine, session_factory = default_engine, SessionLocal
    else:
        engine = make_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)
        session_factory = make_session_factory(engine)

    init_db(engine)
    if settings.SEED_ON_STARTUP:
        seed.initialize(session_factory, settings)

    logger.info("Forum ready on %s", engine.url.render_as_string(hide_password=True))
    return build_forum(session_factory)


if __name__ == "__main__":
    forum = startup()
    for trad in forum.trads.get_all():
        print(f"  trad {trad.id}: {trad.content} ({forum.trads.count_likes(trad.id)} likes)")
