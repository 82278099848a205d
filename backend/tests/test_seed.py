"""Tests for the startup seed routine and application bootstrap."""

import dataclasses

from forum.config import Settings
from forum.main import build_forum, startup
from forum.models import Comment, CommentLike, Post, PostLike, Trad, TradLike, User, UserRole
from forum.services import seed


class TestSeed:
    """First-run seed data."""

    def test_creates_main_user_and_content(self, session_factory, db):
        seed.initialize(session_factory, Settings())

        main = db.query(User).one()
        assert main.username == "main"
        assert main.role == UserRole.ADMIN

        trad = db.query(Trad).one()
        post = db.query(Post).one()
        comment = db.query(Comment).one()
        assert post.trad_id == trad.id
        assert comment.post_id == post.id
        assert db.query(TradLike).count() == 1
        assert db.query(PostLike).count() == 1
        assert db.query(CommentLike).count() == 1

    def test_is_idempotent(self, session_factory, db):
        seed.initialize(session_factory, Settings())
        seed.initialize(session_factory, Settings())

        assert db.query(User).count() == 1
        assert db.query(Trad).count() == 1
        assert db.query(Post).count() == 1

    def test_skips_content_when_trads_exist(self, forum, session_factory, db, trad):
        """Existing forum content is never touched."""
        seed.initialize(session_factory, Settings())

        assert db.query(Trad).count() == 1
        assert db.query(Post).count() == 0
        assert forum.users.find_user_by_name("main").role == UserRole.ADMIN

    def test_uses_configured_names(self, session_factory, forum):
        seed.initialize(session_factory, Settings(MAIN_USER_NAME="root", MAIN_TRAD_CONTENT="Welcome"))

        assert forum.users.find_user_by_name("root") is not None
        assert [t.content for t in forum.trads.get_all()] == ["Welcome"]


class TestStartup:
    """Wiring the application."""

    def test_startup_builds_seeded_forum(self):
        forum = startup(Settings(DATABASE_URL="sqlite://", LOG_LEVEL="WARNING"))

        trads = list(forum.trads.get_all())
        assert len(trads) == 1
        assert forum.trads.count_likes(trads[0].id) == 1
        assert len(list(forum.posts.list_by_parent(trads[0].id))) == 1

    def test_startup_without_seed(self):
        forum = startup(Settings(DATABASE_URL="sqlite://", SEED_ON_STARTUP=False))

        assert list(forum.trads.get_all()) == []
        assert forum.users.list_users() == []

    def test_build_forum_shares_one_database(self, session_factory):
        """Users and every store work against the same session factory."""
        forum = build_forum(session_factory)

        assert {f.name for f in dataclasses.fields(forum)} == {"users", "trads", "posts", "comments"}
        user = forum.users.create_user("carol", "Carol")
        trad = forum.trads.add(Trad(user_id=user.id, content="shared"))
        assert forum.posts.add(Post(user_id=user.id, trad_id=trad.id, content="p")).trad_id == trad.id
