"""External identity domain service."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire

from federated.domain.error import CreateFailure, LookupFailure, UpdateFailure
from federated.domain.model import Account, ExternalIdentity
from federated.domain.repository import ExternalIdentityRepository
from federated.domain.value import (
    AccountId,
    AuthScheme,
    Credentials,
    ExternalIdentityId,
    ProviderProfile,
)

from .base import Service


class ExternalIdentityService(Service):
    """Domain service for looking up, refreshing and linking identities."""

    def __init__(self, identity_repository: ExternalIdentityRepository) -> None:
        """Initialize external identity service.

        Args:
            identity_repository: External identity repository
        """
        self.identity_repository = identity_repository

    async def find_identity(
        self, provider: str, external_id: str
    ) -> ExternalIdentity | None:
        """Find the identity for a provider account.

        Args:
            provider: Provider name
            external_id: Provider-scoped user ID

        Returns:
            Identity if this provider account has logged in before, None otherwise

        Raises:
            LookupFailure: If the query fails
        """
        with logfire.span(
            "identity_service.find_identity",
            provider=provider,
            external_id=external_id,
        ):
            try:
                identity = await self.identity_repository.find_by_provider(
                    provider, external_id
                )
            except Exception as e:
                logfire.error(
                    "Identity lookup failed",
                    provider=provider,
                    external_id=external_id,
                    error=str(e),
                )
                raise LookupFailure(provider, external_id, str(e)) from e

            if identity:
                logfire.info(
                    "Identity found",
                    provider=provider,
                    external_id=external_id,
                    account_id=str(identity.account_id),
                )
            else:
                logfire.info(
                    "Identity not found", provider=provider, external_id=external_id
                )
            return identity

    async def refresh_identity(
        self,
        identity: ExternalIdentity,
        profile: ProviderProfile,
        credentials: Credentials,
    ) -> ExternalIdentity:
        """Overwrite an identity with the latest login's assertion.

        The provider may have refreshed tokens or profile fields, so the
        newest profile and credentials always win.

        Args:
            identity: Existing identity
            profile: Profile from this login
            credentials: Credentials from this login

        Returns:
            Updated identity

        Raises:
            UpdateFailure: If the update cannot be persisted
        """
        with logfire.span(
            "identity_service.refresh_identity", identity_id=str(identity.id)
        ):
            refreshed = identity.model_copy(
                update={
                    "profile": profile,
                    "credentials": credentials,
                    "modified_at": datetime.now(timezone.utc),
                }
            )
            try:
                saved = await self.identity_repository.update(refreshed)
            except Exception as e:
                logfire.error(
                    "Identity refresh failed",
                    identity_id=str(identity.id),
                    error=str(e),
                )
                raise UpdateFailure(identity.provider, identity.external_id, str(e)) from e

            logfire.info(
                "Identity refreshed",
                identity_id=str(saved.id),
                provider=saved.provider,
            )
            return saved

    async def link_identity(
        self,
        provider: str,
        auth_scheme: AuthScheme,
        external_id: str,
        profile: ProviderProfile,
        credentials: Credentials,
        account: Account,
    ) -> tuple[ExternalIdentity, bool]:
        """Find or create the identity linking a provider account to an account.

        The lookup is by external ID only. An existing link is returned as-is
        and never re-pointed at another account.

        Args:
            provider: Provider name
            auth_scheme: Scheme of the login
            external_id: Provider-scoped user ID
            profile: Profile from this login
            credentials: Credentials from this login
            account: Account to link to

        Returns:
            Tuple of (identity, whether it was created)

        Raises:
            CreateFailure: If the lookup or insert fails
        """
        with logfire.span(
            "identity_service.link_identity",
            provider=provider,
            external_id=external_id,
            account_id=str(account.id),
        ):
            now = datetime.now(timezone.utc)
            defaults = ExternalIdentity(
                id=ExternalIdentityId(uuid4()),
                account_id=account.id,
                provider=provider,
                auth_scheme=auth_scheme,
                external_id=external_id,
                profile=profile,
                credentials=credentials,
                created_at=now,
                modified_at=now,
            )
            try:
                (
                    identity,
                    created,
                ) = await self.identity_repository.find_or_create_by_external_id(
                    external_id, defaults
                )
            except Exception as e:
                logfire.error(
                    "Identity link failed",
                    provider=provider,
                    external_id=external_id,
                    error=str(e),
                )
                raise CreateFailure("identity", provider, external_id, str(e)) from e

            logfire.info(
                "Identity linked" if created else "Identity already linked",
                identity_id=str(identity.id),
                provider=provider,
                account_id=str(identity.account_id),
            )
            return identity, created

    async def get_identities_for_account(
        self, account_id: AccountId
    ) -> list[ExternalIdentity]:
        """Get all identities linked to an account.

        Args:
            account_id: Account ID

        Returns:
            List of identities (may be empty)
        """
        with logfire.span(
            "identity_service.get_identities_for_account", account_id=str(account_id)
        ):
            identities = await self.identity_repository.find_all_by_account_id(
                account_id
            )
            logfire.info(
                "Identities retrieved for account",
                account_id=str(account_id),
                count=len(identities),
            )
            return identities
