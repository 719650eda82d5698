"""In-memory repository implementations for testing."""

from .access_token import InMemoryAccessTokenRepository
from .account import InMemoryAccountRepository
from .external_identity import InMemoryExternalIdentityRepository

__all__ = [
    "InMemoryAccessTokenRepository",
    "InMemoryAccountRepository",
    "InMemoryExternalIdentityRepository",
]
