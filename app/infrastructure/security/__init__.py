"""Security: viewer token verification."""

from app.infrastructure.security.jwt import (
    create_access_token,
    verify_token,
    viewer_role_from_token,
)

__all__ = ["create_access_token", "verify_token", "viewer_role_from_token"]
