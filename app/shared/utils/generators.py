"""Primary key generator for search tables (CUID2)."""

from cuid2 import cuid_wrapper

_next_cuid = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new collision-resistant id; used as the default for CuidMixin.id."""
    return str(_next_cuid())
