"""Activity ORM model (short status updates with optional images)."""

from sqlalchemy import ForeignKey, Index, String, Text, text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import (
    CuidMixin,
    SoftDeleteMixin,
    TimestampMixin,
    search_vector_column,
)


class Activity(CuidMixin, TimestampMixin, SoftDeleteMixin, Base):
    """Activity model. Table: activities."""

    __tablename__ = "activities"

    content: Mapped[str] = mapped_column(Text, nullable=False)
    image_urls: Mapped[list[str]] = mapped_column(
        ARRAY(String), nullable=False, server_default=text("'{}'")
    )
    author_id: Mapped[str] = mapped_column(
        String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    search_vector: Mapped[str | None] = search_vector_column("content")

    __table_args__ = (
        Index("ix_activities_search_vector", "search_vector", postgresql_using="gin"),
    )
