"""Access token domain service."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire

from federated.config import AuthSettings
from federated.domain.model import AccessToken, Account
from federated.domain.repository import AccessTokenRepository
from federated.util.jwt import TokenPayload, create_token, verify_token

from .base import Service


class TokenService(Service):
    """Issues and verifies access tokens for accounts."""

    def __init__(
        self,
        access_token_repository: AccessTokenRepository,
        auth_settings: AuthSettings,
    ) -> None:
        """Initialize token service.

        Args:
            access_token_repository: Access token repository
            auth_settings: Authentication settings (TTL bounds, signing key)
        """
        self.access_token_repository = access_token_repository
        self.auth_settings = auth_settings

    def resolve_ttl(self, ttl: int | None = None) -> int:
        """TTL to use for a token: requested or default, capped at the maximum."""
        return min(
            ttl or self.auth_settings.token_default_ttl,
            self.auth_settings.token_max_ttl,
        )

    async def issue(self, account: Account, ttl: int | None = None) -> AccessToken:
        """Mint and store an access token for an account.

        Args:
            account: Account the token authenticates
            ttl: Requested lifetime in seconds (default one year)

        Returns:
            Stored access token
        """
        effective_ttl = self.resolve_ttl(ttl)
        with logfire.span(
            "token_service.issue", account_id=str(account.id), ttl=effective_ttl
        ):
            token = AccessToken(
                id=create_token(
                    str(account.id), uuid4().hex, effective_ttl, self.auth_settings
                ),
                account_id=account.id,
                ttl=effective_ttl,
                created_at=datetime.now(timezone.utc),
            )
            saved = await self.access_token_repository.save(token)
            logfire.info(
                "Access token issued", account_id=str(account.id), ttl=effective_ttl
            )
            return saved

    def verify(self, token_id: str) -> TokenPayload:
        """Verify a token string and extract its payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("token_service.verify"):
            try:
                payload = verify_token(token_id, self.auth_settings)
            except Exception as e:
                logfire.error("Token verification failed", error=str(e))
                raise
            logfire.info("Token verified", account_id=payload.account_id)
            return payload
