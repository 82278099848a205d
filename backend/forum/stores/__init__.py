"""Content stores, one per content kind."""

from forum.stores.base import ContentKind, ContentStore, Store
from forum.stores.trads import TRAD, trad_store
from forum.stores.posts import POST, post_store
from forum.stores.comments import COMMENT, comment_store

__all__ = [
    "ContentKind",
    "ContentStore",
    "Store",
    "TRAD",
    "POST",
    "COMMENT",
    "trad_store",
    "post_store",
    "comment_store",
]
