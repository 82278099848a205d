"""Business-rule errors raised by the stores and the user directory.

Absence of the target row is not an error: lookups return ``None`` and
delete/like operations return ``False``. These exceptions are reserved for a
missing *required* relationship or an attempt to change an immutable one.
"""


class ForumError(ValueError):
    """Base class for forum business-rule failures."""


class ValidationError(ForumError):
    """A required reference is missing (item, owner, parent thread or post)."""


class OwnershipError(ForumError):
    """An update tried to change the owner or the parent of a content item."""
