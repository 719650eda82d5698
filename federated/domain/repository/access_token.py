"""Access token repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from federated.domain.model.access_token import AccessToken


class AccessTokenRepository(ABC):
    """Repository for access tokens."""

    @abstractmethod
    async def save(self, token: AccessToken) -> AccessToken:
        """Store a newly issued token.

        Args:
            token: The token to store

        Returns:
            The stored token
        """
        pass

    @abstractmethod
    async def find_by_id(self, token_id: str) -> Optional[AccessToken]:
        """Find a token by its token string.

        Args:
            token_id: The token string

        Returns:
            The token if found, None otherwise
        """
        pass
