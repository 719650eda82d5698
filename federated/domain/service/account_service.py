"""Account domain service: find-or-create and profile enrichment."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

import logfire

from federated.domain.error import (
    CreateFailure,
    MergeFailure,
    NotFoundError,
    OrphanedIdentityError,
)
from federated.domain.model import Account, ExternalIdentity
from federated.domain.repository import AccountRepository
from federated.domain.value import AccountCandidate, AccountId, AccountQuery
from federated.util.keys import hash_secret

from .base import Service


def merge_if_absent(account: Account, candidate: AccountCandidate) -> dict[str, Any]:
    """Merge candidate data into an account without clobbering it.

    Starts from a deep copy of the account's persisted state and fills only
    the mergeable fields the account does not have yet (``None``).
    ``external_refs`` is merged key by key under the same rule. ``id`` and
    ``password`` are stripped from the result so they are never written back.

    Args:
        account: Account as currently persisted
        candidate: Candidate derived from the provider profile

    Returns:
        Field changes to persist
    """
    merged = account.snapshot()
    for field in Account.MERGEABLE_FIELDS:
        incoming = getattr(candidate, field)
        if field == "external_refs":
            refs = dict(merged.get("external_refs") or {})
            for key, value in incoming.items():
                refs.setdefault(key, value)
            merged["external_refs"] = refs
        elif merged.get(field) is None and incoming is not None:
            merged[field] = incoming

    for field in Account.PROTECTED_FIELDS:
        merged.pop(field, None)
    return merged


@dataclass
class EnrichmentOutcome:
    """Result of a best-effort enrichment.

    ``account`` is the enriched account on success, or the untouched
    account when the merge failed; ``warning`` carries the failure.
    """

    account: Account
    warning: MergeFailure | None = None

    @property
    def merged(self) -> bool:
        return self.warning is None


class AccountService(Service):
    """Domain service for reconciling provider logins with local accounts."""

    def __init__(self, account_repository: AccountRepository) -> None:
        """Initialize account service.

        Args:
            account_repository: Repository of the active account store
        """
        self.account_repository = account_repository

    async def get_by_id(self, account_id: AccountId) -> Account:
        """Get account by ID.

        Raises:
            NotFoundError: If account not found
        """
        with logfire.span("account_service.get_by_id", account_id=str(account_id)):
            account = await self.account_repository.find_by_id(account_id)
            if not account:
                logfire.warn("Account not found", account_id=str(account_id))
                raise NotFoundError("Account", str(account_id))
            return account

    async def get_owner(self, identity: ExternalIdentity) -> Account:
        """Resolve the account an identity belongs to.

        Args:
            identity: Linked external identity

        Returns:
            Owning account

        Raises:
            OrphanedIdentityError: If the owning account no longer exists
        """
        with logfire.span(
            "account_service.get_owner",
            identity_id=str(identity.id),
            account_id=str(identity.account_id),
        ):
            account = await self.account_repository.find_by_id(identity.account_id)
            if not account:
                logfire.error(
                    "Identity has no owning account",
                    identity_id=str(identity.id),
                    account_id=str(identity.account_id),
                )
                raise OrphanedIdentityError(
                    identity.provider, identity.external_id, str(identity.account_id)
                )
            return account

    async def find_or_create(
        self, candidate: AccountCandidate, provider: str, external_id: str
    ) -> tuple[Account, bool]:
        """Find the account matching the candidate, creating it if absent.

        Matches on username or email (see ``AccountQuery.for_candidate``).
        Atomicity under concurrent logins is the repository's guarantee.

        Args:
            candidate: Candidate account from the profile mapper
            provider: Provider of the login (for error reporting)
            external_id: Provider user ID (for error reporting)

        Returns:
            Tuple of (account, whether it was created)

        Raises:
            CreateFailure: If the lookup or insert fails
        """
        with logfire.span(
            "account_service.find_or_create",
            username=candidate.username,
            email=candidate.email,
        ):
            try:
                query = AccountQuery.for_candidate(candidate)
                defaults = Account(
                    id=AccountId(uuid4()),
                    username=candidate.username,
                    email=candidate.email,
                    password=hash_secret(candidate.password),
                    name=candidate.name,
                    gender=candidate.gender,
                    prefered_language=candidate.prefered_language,
                    avatar_url=candidate.avatar_url,
                    external_refs=dict(candidate.external_refs),
                )
                account, created = await self.account_repository.find_or_create(
                    query, defaults
                )
            except Exception as e:
                logfire.error(
                    "Account find-or-create failed",
                    provider=provider,
                    external_id=external_id,
                    error=str(e),
                )
                raise CreateFailure("account", provider, external_id, str(e)) from e

            logfire.info(
                "Account created" if created else "Existing account matched",
                account_id=str(account.id),
                provider=provider,
            )
            return account, created

    async def enrich(
        self,
        account: Account,
        candidate: AccountCandidate,
        provider: str,
        external_id: str,
    ) -> EnrichmentOutcome:
        """Merge provider data into the account, best effort.

        A failed update is not an error for the login: the account stays
        usable, it just lacks the provider attributes this time.

        Args:
            account: Account returned by find-or-create
            candidate: Candidate account from the profile mapper
            provider: Provider of the login
            external_id: Provider user ID

        Returns:
            Outcome with the enriched account, or the original account and
            a MergeFailure warning
        """
        with logfire.span("account_service.enrich", account_id=str(account.id)):
            changes = merge_if_absent(account, candidate)
            changes["updated_at"] = datetime.now(timezone.utc)
            try:
                updated = await self.account_repository.update(account.id, changes)
            except Exception as e:
                logfire.warn(
                    "Account enrichment skipped",
                    account_id=str(account.id),
                    provider=provider,
                    error=str(e),
                )
                return EnrichmentOutcome(
                    account=account,
                    warning=MergeFailure(provider, external_id, str(account.id), str(e)),
                )

            logfire.info("Account enriched", account_id=str(account.id))
            return EnrichmentOutcome(account=updated)
