"""Shared fixtures: a fresh in-memory database and the three stores per test."""

import pytest

from forum.database import init_db, make_engine, make_session_factory
from forum.main import build_forum
from forum.models import Comment, Post, Trad


@pytest.fixture
def engine():
    engine = make_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def db(session_factory):
    with session_factory() as session:
        yield session


@pytest.fixture
def forum(session_factory):
    return build_forum(session_factory)


@pytest.fixture
def user(forum):
    return forum.users.create_user("alice", "Alice")


@pytest.fixture
def other_user(forum):
    return forum.users.create_user("bob", "Bob")


@pytest.fixture
def trad(forum, user):
    return forum.trads.add(Trad(user_id=user.id, content="hello"))


@pytest.fixture
def post(forum, user, trad):
    return forum.posts.add(Post(user_id=user.id, trad_id=trad.id, content="world"))


@pytest.fixture
def comment(forum, user, post):
    return forum.comments.add(Comment(user_id=user.id, post_id=post.id, content="first!"))
