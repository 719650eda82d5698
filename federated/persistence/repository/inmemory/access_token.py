"""In-memory access token repository for testing."""

from typing import Optional

from federated.domain.model.access_token import AccessToken
from federated.domain.repository.access_token import AccessTokenRepository


class InMemoryAccessTokenRepository(AccessTokenRepository):
    """In-memory implementation of AccessTokenRepository for testing."""

    def __init__(self) -> None:
        self._tokens: dict[str, AccessToken] = {}

    async def save(self, token: AccessToken) -> AccessToken:
        self._tokens[token.id] = token
        return token

    async def find_by_id(self, token_id: str) -> Optional[AccessToken]:
        return self._tokens.get(token_id)
