"""JWT token utilities."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from federated.config import AuthSettings


class TokenPayload(BaseModel):
    """JWT token payload."""

    account_id: str
    jti: str
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    account_id: str, token_id: str, ttl: int, settings: AuthSettings
) -> str:
    """Create a signed token for the account.

    Args:
        account_id: Account ID
        token_id: Unique ID for this token (jti claim)
        ttl: Lifetime in seconds
        settings: Authentication settings

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + timedelta(seconds=ttl)

    payload = {
        "account_id": account_id,
        "jti": token_id,
        "exp": expiry,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")
