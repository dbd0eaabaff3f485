"""User ORM model for authentication."""

from sqlalchemy import Boolean, ForeignKey, Integer, String, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin
from app.infrastructure.persistence.models.role import Role


class User(CuidMixin, TimestampMixin, Base):
    """User model. Table: app_user. Username and email are globally unique.

    is_active stays false until the invitation is redeemed. The role is
    loaded with the user (joined) so mapping to UserResult never lazy-loads.
    """

    __tablename__ = "app_user"

    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    role_id: Mapped[int] = mapped_column(Integer, ForeignKey("role.id"), nullable=False)

    role: Mapped[Role] = relationship(lazy="joined")
