"""Filter clauses for entity search, built as SQLAlchemy Core expressions.

Optional author, tag and date filters are added only when set; every value
is a bound parameter.
"""

from __future__ import annotations

from sqlalchemy import distinct, func, or_, select, true
from sqlalchemy.sql.elements import ColumnElement

from app.application.dtos.search import EntitySearchParams
from app.domain.enums import UserStatus
from app.infrastructure.persistence.models import Activity, Post, PostTag, User

LIKE_ESCAPE = "\\"


def escape_like(text: str) -> str:
    """Escape LIKE wildcards % and _ (and the escape char) so text matches literally."""
    return (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def build_ilike_pattern(text: str) -> str:
    return f"%{escape_like(text)}%"


def ilike_any(text: str, *columns: ColumnElement) -> ColumnElement:
    """Case-insensitive substring match on any of the columns."""
    pattern = build_ilike_pattern(text)
    return or_(*(column.ilike(pattern, escape=LIKE_ESCAPE) for column in columns))


def post_effective_timestamp() -> ColumnElement:
    """published_at, falling back to created_at for drafts."""
    return func.coalesce(Post.published_at, Post.created_at)


def has_all_tags(tag_ids: tuple[str, ...]) -> ColumnElement:
    """Post must carry every requested tag (grouped count-distinct equals the request size)."""
    tagged = (
        select(PostTag.post_id)
        .where(PostTag.tag_id.in_(tag_ids))
        .group_by(PostTag.post_id)
        .having(func.count(distinct(PostTag.tag_id)) == len(tag_ids))
    )
    return Post.id.in_(tagged)


def post_filters(params: EntitySearchParams, match: ColumnElement) -> list[ColumnElement]:
    clauses: list[ColumnElement] = [Post.deleted_at.is_(None), match]
    if params.only_published:
        clauses.append(Post.published.is_(true()))
    if params.author_id:
        clauses.append(Post.author_id == params.author_id)
    if params.tag_ids:
        clauses.append(has_all_tags(params.tag_ids))
    effective = post_effective_timestamp()
    if params.date_from:
        clauses.append(effective >= params.date_from)
    if params.date_to:
        clauses.append(effective <= params.date_to)
    return clauses


def activity_filters(params: EntitySearchParams, match: ColumnElement) -> list[ColumnElement]:
    clauses: list[ColumnElement] = [Activity.deleted_at.is_(None), match]
    if params.author_id:
        clauses.append(Activity.author_id == params.author_id)
    if params.date_from:
        clauses.append(Activity.created_at >= params.date_from)
    if params.date_to:
        clauses.append(Activity.created_at <= params.date_to)
    return clauses


def user_filters(match: ColumnElement) -> list[ColumnElement]:
    return [User.status == UserStatus.ACTIVE.value, match]
