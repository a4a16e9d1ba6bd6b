"""JWT Token Service."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from app.config import get_settings
from app.exceptions import TokenInvalid, TokenMissing


@dataclass(frozen=True)
class TokenClaims:
    """Identity asserted by a verified session token."""

    user_id: int
    email: str


class JWTService:
    """Handles session token creation and validation."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 1440) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def create_token(self, user_id: int, email: str) -> str:
        """Create a signed token for the given user."""
        now = datetime.now(UTC)
        payload = {
            "id": user_id,
            "email": email,
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode_token(self, token: str) -> dict | None:
        """Decode and validate a token. Returns None if invalid or expired."""
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None

    def verify_token(self, token: str | None) -> TokenClaims:
        """Verify a bearer token and return its claims.

        Raises TokenMissing when no token was supplied and TokenInvalid when
        the signature, format, or expiry check fails.
        """
        if not token:
            raise TokenMissing()

        payload = self.decode_token(token)
        if not payload:
            raise TokenInvalid()

        user_id = payload.get("id")
        email = payload.get("email")
        if not isinstance(user_id, int) or not isinstance(email, str):
            raise TokenInvalid()

        return TokenClaims(user_id=user_id, email=email)


_jwt_service: JWTService | None = None


def get_jwt_service() -> JWTService:
    """Get singleton JWT service instance."""
    global _jwt_service
    if _jwt_service is None:
        settings = get_settings()
        _jwt_service = JWTService(
            secret_key=settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.JWT_EXPIRE_MINUTES,
        )
    return _jwt_service
