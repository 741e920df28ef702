"""Core constants: search limits, text-search config and cache key structure.

Single source of truth for literal values shared by the normalizer,
the search repositories and the cache layer.
"""

import re

# Query text bounds and rejected sequences (comment and statement terminators)
SEARCH_QUERY_MIN_LENGTH = 1
SEARCH_QUERY_MAX_LENGTH = 100
SEARCH_BANNED_QUERY_PATTERN = re.compile(r"(--|/\*|\*/|;)")
# C0 controls and DEL; tab, newline and carriage return are ordinary whitespace
SEARCH_CONTROL_CHAR_PATTERN = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

# Pagination
SEARCH_DEFAULT_PAGE = 1
SEARCH_DEFAULT_LIMIT = 10
SEARCH_MIN_LIMIT = 1
SEARCH_MAX_LIMIT = 10
# Keeps (page - 1) * limit well inside a bigint OFFSET
SEARCH_MAX_PAGE = 100_000

# Post suggestions (typeahead)
SEARCH_SUGGESTION_MIN_LENGTH = 2
SEARCH_SUGGESTION_DEFAULT_LIMIT = 5

# Tag filter
SEARCH_MAX_TAG_IDS = 10
SEARCH_MAX_TAG_ID_LENGTH = 64

# PostgreSQL text search configuration used for both vectors and queries.
# 'simple' avoids stemming so names, handles and CJK text still match.
SEARCH_TS_CONFIG = "simple"

SECONDS_PER_DAY = 86400.0

# Cache key prefixes
CACHE_PREFIX_SEARCH = "search"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"
