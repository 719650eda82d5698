"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ReconciliationError(DomainError):
    """Base error for a federated login that could not be reconciled.

    Carries the provider and external ID of the login being processed.
    """

    def __init__(self, message: str, provider: str, external_id: str | None):
        self.provider = provider
        self.external_id = external_id
        super().__init__(message)


class LookupFailure(ReconciliationError):
    """Querying identities or accounts failed. Nothing has been written."""

    def __init__(self, provider: str, external_id: str | None, reason: str):
        super().__init__(
            f"Lookup failed for {provider}:{external_id}: {reason}",
            provider,
            external_id,
        )


class OrphanedIdentityError(LookupFailure):
    """An identity exists but its owning account does not."""

    def __init__(self, provider: str, external_id: str | None, account_id: str):
        self.account_id = account_id
        super().__init__(provider, external_id, f"account {account_id} not found")


class MissingEmailError(ReconciliationError):
    """The mapped account has no email and email is not optional."""

    def __init__(self, provider: str, external_id: str | None):
        super().__init__(
            "email is missing from the user profile", provider, external_id
        )


class CreateFailure(ReconciliationError):
    """Find-or-create of an account or identity failed."""

    def __init__(
        self, resource: str, provider: str, external_id: str | None, reason: str
    ):
        self.resource = resource
        super().__init__(
            f"Could not find or create {resource} for {provider}:{external_id}: {reason}",
            provider,
            external_id,
        )


class UpdateFailure(ReconciliationError):
    """Refreshing an existing identity with the latest assertion failed."""

    def __init__(self, provider: str, external_id: str | None, reason: str):
        super().__init__(
            f"Could not update identity {provider}:{external_id}: {reason}",
            provider,
            external_id,
        )


class MergeFailure(ReconciliationError):
    """Enriching an account with provider data failed.

    Never raised out of a login: it is returned as a warning and the login
    proceeds with the account as it was before the merge.
    """

    def __init__(
        self, provider: str, external_id: str | None, account_id: str, reason: str
    ):
        self.account_id = account_id
        self.reason = reason
        super().__init__(
            f"Could not merge profile into account {account_id}: {reason}",
            provider,
            external_id,
        )


class TokenIssuanceFailure(ReconciliationError):
    """An access token was requested but could not be issued."""

    def __init__(self, provider: str, external_id: str | None, reason: str):
        super().__init__(
            f"Could not issue access token for {provider}:{external_id}: {reason}",
            provider,
            external_id,
        )
