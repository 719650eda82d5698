"""PostgreSQL repository implementations."""

from federated.persistence.repository.access_token import PostgresAccessTokenRepository
from federated.persistence.repository.account import PostgresAccountRepository
from federated.persistence.repository.external_identity import (
    PostgresExternalIdentityRepository,
)

__all__ = [
    "PostgresAccessTokenRepository",
    "PostgresAccountRepository",
    "PostgresExternalIdentityRepository",
]
