"""Rank and ordering expressions for entity search.

Full-text rank is ts_rank weighted by an exponential recency decay:
rank = ts_rank(vector, query) * 0.5 ^ (age_days / half_life_days).
All user input enters as bound parameters.
"""

from sqlalchemy import Float, String, cast, extract, func, literal
from sqlalchemy.dialects.postgresql import REGCONFIG
from sqlalchemy.sql.elements import ColumnElement, UnaryExpression

from app.core.constants import SECONDS_PER_DAY, SEARCH_TS_CONFIG
from app.domain.enums import SearchSort


def build_ts_query(text: str) -> ColumnElement:
    """plainto_tsquery('simple'::regconfig, :text)."""
    return func.plainto_tsquery(
        cast(literal(SEARCH_TS_CONFIG, String), REGCONFIG),
        literal(text, String),
    )


def age_in_days(timestamp: ColumnElement) -> ColumnElement:
    """Non-negative age of timestamp in fractional days (future timestamps count as 0)."""
    seconds = cast(extract("epoch", func.now() - timestamp), Float)
    return func.greatest(seconds / SECONDS_PER_DAY, 0.0)


def recency_decay(timestamp: ColumnElement, half_life_days: float) -> ColumnElement:
    return func.power(0.5, age_in_days(timestamp) / half_life_days)


def ts_rank_expression(
    vector: ColumnElement,
    ts_query: ColumnElement,
    timestamp: ColumnElement,
    half_life_days: float,
) -> ColumnElement:
    """ts_rank(vector, query) scaled by the recency decay of timestamp."""
    return cast(func.ts_rank(vector, ts_query), Float) * recency_decay(
        timestamp, half_life_days
    )


def trigram_similarity(name: ColumnElement, bio: ColumnElement, text: str) -> ColumnElement:
    """GREATEST(similarity(name, q), similarity(bio, q)); requires pg_trgm."""
    query = literal(text, String)
    return func.greatest(
        func.similarity(func.coalesce(name, ""), query),
        func.similarity(func.coalesce(bio, ""), query),
    )


def recency_order_by(
    timestamp: ColumnElement, id_column: ColumnElement
) -> list[UnaryExpression]:
    """Timestamp desc (nulls last), id desc."""
    return [timestamp.desc().nulls_last(), id_column.desc()]


def ts_order_by(
    rank: ColumnElement,
    timestamp: ColumnElement,
    id_column: ColumnElement,
    sort: SearchSort,
) -> list[UnaryExpression]:
    """Ordering for full-text mode.

    relevance: rank desc, timestamp desc, id desc. latest: timestamp desc, id desc.
    """
    if sort is SearchSort.LATEST:
        return recency_order_by(timestamp, id_column)
    return [rank.desc(), *recency_order_by(timestamp, id_column)]


def ordinal_rank(offset: int, index: int) -> float:
    """Rank of a hit without a continuous score: its 1-based position in the full result."""
    return float(offset + index + 1)
