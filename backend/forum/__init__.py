"""Forum content backend: trads, posts, comments and likes."""
