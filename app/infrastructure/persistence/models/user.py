"""User ORM model (searchable by name and bio).

The pg_trgm index on name is created by the initial migration only when the
extension is available, so it is not declared here; metadata.create_all must
work on a server without pg_trgm.
"""

from sqlalchemy import String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import UserStatus
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class User(CuidMixin, TimestampMixin, Base):
    """User model. Table: users. avatar_url holds a storage reference, signed on read."""

    __tablename__ = "users"

    name: Mapped[str | None] = mapped_column(String(120), nullable=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    avatar_url: Mapped[str | None] = mapped_column(String, nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        server_default=text(f"'{UserStatus.ACTIVE.value}'"),
        index=True,
    )
