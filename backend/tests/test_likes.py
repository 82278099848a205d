"""Tests for the like lifecycle shared by all three content kinds."""

import pytest

from forum.models import CommentLike, PostLike, Trad, TradLike


class TestLikeUnlike:
    """Like and unlike report whether anything changed."""

    def test_like_unlike_scenario(self, forum, db, user, trad):
        """Like, like again, unlike, unlike again."""
        assert forum.trads.like_content(trad.id, user.id) is True
        assert db.query(TradLike).filter_by(trad_id=trad.id, user_id=user.id).count() == 1

        assert forum.trads.like_content(trad.id, user.id) is False
        assert db.query(TradLike).count() == 1

        assert forum.trads.unlike_content(trad.id, user.id) is True
        assert db.query(TradLike).count() == 0

        assert forum.trads.unlike_content(trad.id, user.id) is False

    def test_like_missing_content_returns_false(self, forum, user, db):
        assert forum.posts.like_content(5, user.id) is False
        assert db.query(PostLike).count() == 0

    def test_like_by_missing_user_returns_false(self, forum, trad, db):
        """The database rejects a like from a user who does not exist."""
        assert forum.trads.like_content(trad.id, 9999) is False
        assert db.query(TradLike).count() == 0

    def test_likes_are_per_user(self, forum, user, other_user, post):
        assert forum.posts.like_content(post.id, user.id) is True
        assert forum.posts.like_content(post.id, other_user.id) is True

        assert forum.posts.count_likes(post.id) == 2
        assert forum.posts.is_liked(post.id, user.id)
        assert forum.posts.unlike_content(post.id, user.id) is True
        assert not forum.posts.is_liked(post.id, user.id)
        assert forum.posts.is_liked(post.id, other_user.id)

    def test_kinds_do_not_share_likes(self, forum, user, trad, post, comment):
        """Liking a comment says nothing about its post or trad."""
        forum.comments.like_content(comment.id, user.id)

        assert forum.comments.is_liked(comment.id, user.id)
        assert not forum.posts.is_liked(post.id, user.id)
        assert not forum.trads.is_liked(trad.id, user.id)

    def test_concurrent_duplicate_like_returns_false(self, forum, db, user, comment, monkeypatch):
        """When the pre-check misses an existing like, the composite key still wins."""
        assert forum.comments.like_content(comment.id, user.id) is True
        monkeypatch.setattr(forum.comments, "_find_like", lambda *args: None)

        assert forum.comments.like_content(comment.id, user.id) is False
        assert db.query(CommentLike).count() == 1


class TestToggle:
    """Toggling flips the like state every time."""

    @pytest.mark.parametrize("toggles", [1, 2, 3, 4, 7])
    def test_odd_toggles_leave_a_like(self, forum, db, user, trad, toggles):
        for _ in range(toggles):
            assert forum.trads.toggle_like_content(trad.id, user.id) is True

        expected = 1 if toggles % 2 else 0
        assert db.query(TradLike).count() == expected
        assert forum.trads.is_liked(trad.id, user.id) == bool(expected)

    def test_toggle_after_explicit_like_unlikes(self, forum, user, post):
        forum.posts.like_content(post.id, user.id)

        assert forum.posts.toggle_like_content(post.id, user.id) is True
        assert forum.posts.count_likes(post.id) == 0


class TestLikeCleanup:
    """Likes disappear with their content or their user."""

    def test_deleting_content_removes_its_likes(self, forum, db, user, other_user):
        trad = forum.trads.add(Trad(user_id=user.id, content="liked"))
        forum.trads.like_content(trad.id, user.id)
        forum.trads.like_content(trad.id, other_user.id)

        forum.trads.delete(trad.id)

        assert db.query(TradLike).count() == 0

    def test_deleting_user_removes_their_likes(self, forum, db, user, other_user, post):
        forum.posts.like_content(post.id, other_user.id)

        assert forum.users.delete_user(other_user.id) is True

        assert db.query(PostLike).count() == 0
        assert forum.posts.get(post.id) is not None
