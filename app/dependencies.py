"""Authentication dependencies for FastAPI routes."""

from fastapi import Request

from app.services.jwt import TokenClaims, get_jwt_service

CurrentUser = TokenClaims


def get_bearer_token(request: Request) -> str | None:
    """Token from an ``Authorization: Bearer <token>`` header, if present."""
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def get_current_user(request: Request) -> CurrentUser:
    """Validate the bearer token. Raises TokenMissing (401) or TokenInvalid (403)."""
    return get_jwt_service().verify_token(get_bearer_token(request))
