"""User model."""

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime

from forum.database import Base


class UserRole:
    ADMIN = "admin"
    USER = "user"
    BANNED = "banned"

    ALL = (ADMIN, USER, BANNED)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), unique=True, nullable=False, index=True)
    display_name = Column(String(255), nullable=False)
    profile_picture_path = Column(String(500), nullable=False, default="")
    role = Column(String(20), nullable=False, default=UserRole.USER)  # admin | user | banned
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r} role={self.role}>"
