"""JWT verification for viewer tokens.

Tokens are issued by the surrounding application; this service only reads
the role claim to decide draft visibility. create_access_token exists for
scripts and tests that need a signed token.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from app.core.config import get_settings
from app.domain.enums import ViewerRole


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta = timedelta(hours=1),
) -> str:
    """Create a JWT with the given claims (e.g. sub, role).

    Args:
        data: Claims to encode.
        expires_delta: Token lifetime.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    to_encode = data.copy()
    to_encode["exp"] = datetime.now(UTC) + expires_delta
    encoded = jwt.encode(
        to_encode,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Enforces presence of exp and sub.

    Raises:
        ValueError: If token is invalid, expired, or missing required claims.
    """
    settings = get_settings()
    secret = settings.secret_key.get_secret_value()
    if not secret:
        raise ValueError("Token verification is not configured (SECRET_KEY unset)")
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if "sub" not in payload:
        raise ValueError("Token missing required claim: sub")
    return payload


def viewer_role_from_token(token: str | None) -> ViewerRole:
    """Role claim of a valid token; ANONYMOUS for missing, invalid or expired tokens."""
    if not token:
        return ViewerRole.ANONYMOUS
    try:
        payload = verify_token(token)
    except ValueError:
        return ViewerRole.ANONYMOUS
    role = str(payload.get("role", ViewerRole.USER.value)).lower()
    try:
        return ViewerRole(role)
    except ValueError:
        return ViewerRole.USER
