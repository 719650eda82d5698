"""Maps provider profiles to candidate local accounts."""

from typing import Any

import logfire

from federated.config import LoginSettings
from federated.domain.service.enrichment import FacebookProfileEnricher, ProfileEnricher
from federated.domain.value import AccountCandidate, ProviderProfile
from federated.util.keys import generate_key

from .base import Service


class ProfileMapper(Service):
    """Derives the account a first-time login should resolve to.

    The derivation is deterministic apart from the throwaway password:
    the same provider and profile always give the same username and email.
    """

    def __init__(
        self,
        login_settings: LoginSettings,
        enrichers: dict[str, ProfileEnricher] | None = None,
    ) -> None:
        """Initialize profile mapper.

        Args:
            login_settings: Email, alias and language policy
            enrichers: Provider name to enricher; defaults to the Facebook
                enricher for "facebook" and "facebook-token"
        """
        self.login_settings = login_settings
        if enrichers is None:
            facebook = FacebookProfileEnricher(login_settings)
            enrichers = {"facebook": facebook, "facebook-token": facebook}
        self.enrichers = enrichers

    def register_enricher(self, provider: str, enricher: ProfileEnricher) -> None:
        """Add or replace the enricher used for a provider."""
        self.enrichers[provider] = enricher

    def username_for(self, provider: str, profile: ProviderProfile) -> str:
        """Username: ``<provider>.<username or id>``, using the provider alias."""
        base = self.login_settings.provider_aliases.get(provider, provider)
        return f"{base}.{profile.handle}"

    def placeholder_email(self, provider: str, profile: ProviderProfile) -> str:
        """Deterministic email for providers that don't supply a trusted one."""
        domain = self.login_settings.placeholder_email_domain
        return f"{profile.handle}@{domain}.{profile.provider or provider}.com"

    def email_for(self, provider: str, profile: ProviderProfile) -> str:
        """Trusted provider email when available, otherwise the placeholder."""
        profile_email = profile.primary_email
        if provider in self.login_settings.verified_email_providers and profile_email:
            return profile_email
        return self.placeholder_email(provider, profile)

    def map_profile_to_account(
        self,
        provider: str,
        profile: ProviderProfile,
        options: Any = None,
    ) -> AccountCandidate:
        """Build the candidate account for a provider profile.

        Args:
            provider: Provider name
            profile: Provider profile
            options: Login options (unused by the default mapping; passed so
                custom mappers share the signature)

        Returns:
            Candidate account with username, email, password and any
            provider-specific attributes
        """
        with logfire.span("profile_mapper.map_profile_to_account", provider=provider):
            fields: dict[str, Any] = {
                "username": self.username_for(provider, profile),
                "email": self.email_for(provider, profile),
                "password": generate_key("password"),
            }

            enricher = self.enrichers.get(provider)
            if enricher is not None:
                fields.update(enricher.enrich(profile))

            candidate = AccountCandidate(**fields)
            logfire.info(
                "Profile mapped",
                provider=provider,
                username=candidate.username,
                enriched=enricher is not None,
            )
            return candidate
