"""Domain value objects for federated login."""

from federated.domain.value.account import AccountCandidate, AccountQuery
from federated.domain.value.credentials import (
    AuthScheme,
    Credentials,
    OAuth1Credentials,
    OAuth2Credentials,
    OpenIdConnectCredentials,
    OpenIdCredentials,
    parse_credentials,
)
from federated.domain.value.identifiers import AccountId, ExternalIdentityId
from federated.domain.value.profile import ProfileEmail, ProfilePhoto, ProviderProfile

__all__ = [
    # Identifiers
    "AccountId",
    "ExternalIdentityId",
    # Credentials
    "AuthScheme",
    "Credentials",
    "OAuth1Credentials",
    "OAuth2Credentials",
    "OpenIdCredentials",
    "OpenIdConnectCredentials",
    "parse_credentials",
    # Profiles
    "ProfileEmail",
    "ProfilePhoto",
    "ProviderProfile",
    # Accounts
    "AccountCandidate",
    "AccountQuery",
]
