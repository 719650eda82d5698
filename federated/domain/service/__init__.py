"""Domain services."""

from .account_service import AccountService, EnrichmentOutcome, merge_if_absent
from .base import Service
from .enrichment import FacebookProfileEnricher, ProfileEnricher
from .identity_service import ExternalIdentityService
from .profile_mapper import ProfileMapper
from .token_service import TokenService

__all__ = [
    "AccountService",
    "EnrichmentOutcome",
    "ExternalIdentityService",
    "FacebookProfileEnricher",
    "ProfileEnricher",
    "ProfileMapper",
    "Service",
    "TokenService",
    "merge_if_absent",
]
