"""SQLAlchemy mixins for common model patterns (DRY).

Provides: CuidMixin, TimestampMixin, SoftDeleteMixin and the tsvector
column helper shared by the searchable models.
"""

from datetime import datetime

from sqlalchemy import Computed, DateTime, String
from sqlalchemy.dialects.postgresql import TSVECTOR
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from app.core.constants import SEARCH_TS_CONFIG
from app.shared.utils.generators import generate_cuid


class CuidMixin:
    """Mixin for models using CUID as primary key. Provides id with default generate_cuid."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class TimestampMixin:
    """Mixin for created_at and updated_at (server defaults, timezone-aware)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        )


class SoftDeleteMixin:
    """Mixin for soft delete (deleted_at). Null means not deleted."""

    @declared_attr
    def deleted_at(cls) -> Mapped[datetime | None]:
        return mapped_column(DateTime(timezone=True), nullable=True, index=True)


def search_vector_column(*columns: str) -> Mapped[str | None]:
    """Stored generated tsvector over the given text columns ('simple' config).

    Columns are concatenated with coalesce so a null column does not null
    the whole vector.
    """
    parts = " || ' ' || ".join(f"coalesce({c}, '')" for c in columns)
    return mapped_column(
        TSVECTOR,
        Computed(f"to_tsvector('{SEARCH_TS_CONFIG}'::regconfig, {parts})", persisted=True),
        nullable=True,
    )
