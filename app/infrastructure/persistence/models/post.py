"""Post ORM model with a stored full-text vector over title, excerpt and content."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import (
    CuidMixin,
    SoftDeleteMixin,
    TimestampMixin,
    search_vector_column,
)


class Post(CuidMixin, TimestampMixin, SoftDeleteMixin, Base):
    """Blog post. Table: posts. Drafts have published = false and no published_at."""

    __tablename__ = "posts"

    slug: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    excerpt: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("''"))
    cover_image: Mapped[str | None] = mapped_column(String, nullable=True)
    published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )
    published_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    author_id: Mapped[str] = mapped_column(
        String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    search_vector: Mapped[str | None] = search_vector_column("title", "excerpt", "content")

    __table_args__ = (
        Index("ix_posts_search_vector", "search_vector", postgresql_using="gin"),
        Index("ix_posts_published_published_at", "published", "published_at"),
    )
