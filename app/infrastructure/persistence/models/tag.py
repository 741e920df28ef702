"""Tag and post-tag association ORM models."""

from sqlalchemy import ForeignKey, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Tag(CuidMixin, TimestampMixin, Base):
    """Tag model. Table: tags. posts_count is maintained by the content service."""

    __tablename__ = "tags"

    name: Mapped[str] = mapped_column(String(60), nullable=False, unique=True)
    slug: Mapped[str] = mapped_column(String(80), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    color: Mapped[str | None] = mapped_column(String(20), nullable=True)
    posts_count: Mapped[int] = mapped_column(
        Integer, nullable=False, server_default=text("0"), index=True
    )


class PostTag(Base):
    """Association between posts and tags. Table: post_tags."""

    __tablename__ = "post_tags"

    post_id: Mapped[str] = mapped_column(
        String, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True
    )
    tag_id: Mapped[str] = mapped_column(
        String, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True, index=True
    )
