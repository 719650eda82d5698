"""Repository interfaces for federated login.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from federated.domain.repository.access_token import AccessTokenRepository
from federated.domain.repository.account import AccountRepository
from federated.domain.repository.external_identity import ExternalIdentityRepository

__all__ = [
    "AccessTokenRepository",
    "AccountRepository",
    "ExternalIdentityRepository",
]
