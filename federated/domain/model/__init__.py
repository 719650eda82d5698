"""Domain models for federated login."""

from federated.domain.model.access_token import AccessToken
from federated.domain.model.account import Account
from federated.domain.model.external_identity import ExternalIdentity

__all__ = [
    "AccessToken",
    "Account",
    "ExternalIdentity",
]
