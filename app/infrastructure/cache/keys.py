"""Cache key builders. Single place for key format (DRY).

Search keys hash the normalized query so free text never ends up in the
key and cannot contain CACHE_KEY_SEP.
"""

import hashlib
import json

from app.application.dtos.search import SearchQuery
from app.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_SEARCH


def search_response_key(query: SearchQuery, can_view_drafts: bool) -> str:
    """Cache key for a unified search response (normalized query + draft visibility)."""
    payload = {
        "q": query.text,
        "type": query.type.value,
        "page": query.page,
        "limit": query.limit,
        "sort": query.sort.value,
        "author_id": query.author_id,
        "tag_ids": list(query.tag_ids),
        "date_from": query.date_from.isoformat() if query.date_from else None,
        "date_to": query.date_to.isoformat() if query.date_to else None,
        "only_published": query.only_published or not can_view_drafts,
        "drafts": can_view_drafts,
    }
    digest = hashlib.sha256(
        json.dumps(payload, sort_keys=True, separators=(",", ":")).encode()
    ).hexdigest()
    return f"{CACHE_PREFIX_SEARCH}{CACHE_KEY_SEP}v1{CACHE_KEY_SEP}{digest}"
