"""Trad model — a forum thread, the root content item."""

from forum.database import Base
from forum.models.content import ContentMixin


class Trad(ContentMixin, Base):
    __tablename__ = "trads"
