"""Federated login use case."""

from collections.abc import Awaitable, Callable
from typing import Any, Optional

import logfire
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from federated.application.usecase.base import BaseUseCase
from federated.domain.error import (
    MergeFailure,
    MissingEmailError,
    TokenIssuanceFailure,
    ValidationError,
)
from federated.domain.model import AccessToken, Account, ExternalIdentity
from federated.domain.service import (
    AccountService,
    ExternalIdentityService,
    ProfileMapper,
    TokenService,
)
from federated.domain.value import (
    AccountCandidate,
    AuthScheme,
    Credentials,
    ProviderProfile,
    parse_credentials,
)

# (provider, profile, options) -> candidate
ProfileToAccount = Callable[..., AccountCandidate]
# (account, ttl) -> token
CreateAccessToken = Callable[..., Awaitable[AccessToken]]


class LoginOptions(BaseModel):
    """Per-call login options."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    auto_login: bool = True  # Issue an access token as part of the login
    email_optional: bool = False  # Allow accounts without an email
    ttl: int | None = Field(default=None, gt=0)  # Requested token lifetime (seconds)
    profile_to_account: Optional[ProfileToAccount] = None  # Replaces the default mapper
    create_access_token: Optional[CreateAccessToken] = None  # Replaces the token issuer


class LoginRequest(BaseModel):
    """A provider's login assertion, already verified by the caller."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    provider: str  # e.g. "facebook", "google", "facebook-token"
    auth_scheme: AuthScheme
    profile: ProviderProfile
    credentials: Credentials
    options: LoginOptions = LoginOptions()


class LoginResponse(BaseModel):
    """Login response.

    ``warnings`` carries non-fatal failures (profile enrichment) that did not
    stop the login.

    On a first login for a provider, the identity link is found or created by
    external ID alone. If another provider already holds a link with the same
    external ID, that link is returned as-is, so ``identity.provider`` and
    ``identity.account_id`` may differ from the request and from
    ``account.id``. Callers must not assume ``identity.account_id == account.id``.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    account: Account
    identity: ExternalIdentity
    token: AccessToken | None = None
    created_account: bool = False
    created_identity: bool = False
    warnings: list[MergeFailure] = []


class LoginUseCase(BaseUseCase):
    """Use case for logging in with a third-party provider.

    Links the provider account to a local account, creating the link and,
    when needed, the account itself.
    """

    def __init__(
        self,
        identity_service: ExternalIdentityService,
        account_service: AccountService,
        profile_mapper: ProfileMapper,
        token_service: TokenService,
    ) -> None:
        """Initialize login use case.

        Args:
            identity_service: External identity domain service
            account_service: Account domain service
            profile_mapper: Default profile to account mapping
            token_service: Access token domain service
        """
        self.identity_service = identity_service
        self.account_service = account_service
        self.profile_mapper = profile_mapper
        self.token_service = token_service

    async def login(
        self,
        provider: str,
        auth_scheme: AuthScheme | str,
        profile: ProviderProfile | dict[str, Any],
        credentials: Credentials | dict[str, Any],
        options: LoginOptions | None = None,
    ) -> LoginResponse:
        """Log in with a provider assertion given as plain values.

        Raw profile and credentials dicts are validated here, at the adapter
        boundary, before anything is looked up.

        Raises:
            ValidationError: If the profile or credentials are malformed
        """
        try:
            scheme = AuthScheme(auth_scheme)
        except ValueError as e:
            raise ValidationError(f"Unsupported auth scheme: {auth_scheme}") from e

        if isinstance(profile, dict):
            try:
                profile = ProviderProfile.model_validate(profile)
            except PydanticValidationError as e:
                raise ValidationError(f"Invalid {provider} profile: {e}") from e

        request = LoginRequest(
            provider=provider,
            auth_scheme=scheme,
            profile=profile,
            credentials=parse_credentials(scheme, credentials),
            options=options or LoginOptions(),
        )
        return await self.execute(request)

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Execute federated login.

        Steps:
        1. Look up the identity by (provider, external ID)
        2. Existing identity: store the new profile/credentials, load its account
        3. New identity: map the profile, find-or-create the account, enrich
           it with provider data (best effort), find-or-create the identity
        4. Issue an access token when auto_login is set

        Args:
            request: Login request with the provider assertion

        Returns:
            Login response with account, identity and optional token

        Raises:
            ValidationError: If the profile has no ID or the credentials don't
                match the auth scheme
            LookupFailure: If the identity or owning account can't be read
            MissingEmailError: If the mapped account has no email and email
                is not optional
            CreateFailure: If the account or identity can't be created
            UpdateFailure: If an existing identity can't be refreshed
            TokenIssuanceFailure: If the requested token can't be issued
        """
        provider = request.provider
        profile = request.profile
        options = request.options
        credentials = parse_credentials(request.auth_scheme, request.credentials)

        external_id = profile.external_id
        if not external_id:
            raise ValidationError(f"{provider} profile has no id or openid")

        # Step 1: Look up the identity
        identity = await self.identity_service.find_identity(provider, external_id)

        with logfire.span(
            "login",
            provider=provider,
            external_id=external_id,
            is_new_identity=identity is None,
        ):
            warnings: list[MergeFailure] = []
            created_account = False
            created_identity = False

            if identity:
                # Step 2: Known identity - newest assertion wins
                identity = await self.identity_service.refresh_identity(
                    identity, profile, credentials
                )
                account = await self.account_service.get_owner(identity)
            else:
                # Step 3: First login for this provider account
                mapper = (
                    options.profile_to_account
                    or self.profile_mapper.map_profile_to_account
                )
                candidate = mapper(provider, profile, options)

                if not candidate.email and not options.email_optional:
                    logfire.warn(
                        "Login rejected - no email",
                        provider=provider,
                        external_id=external_id,
                    )
                    raise MissingEmailError(provider, external_id)

                account, created_account = await self.account_service.find_or_create(
                    candidate, provider, external_id
                )

                outcome = await self.account_service.enrich(
                    account, candidate, provider, external_id
                )
                if outcome.warning:
                    warnings.append(outcome.warning)

                # Link against the account as it was before enrichment
                identity, created_identity = await self.identity_service.link_identity(
                    provider,
                    request.auth_scheme,
                    external_id,
                    profile,
                    credentials,
                    account,
                )
                account = outcome.account

            # Step 4: Token
            token = None
            if options.auto_login:
                token = await self._issue_token(account, options, provider, external_id)

            logfire.info(
                "Federated login completed",
                provider=provider,
                account_id=str(account.id),
                created_account=created_account,
                created_identity=created_identity,
                token_issued=token is not None,
                warnings=len(warnings),
            )

            return LoginResponse(
                account=account,
                identity=identity,
                token=token,
                created_account=created_account,
                created_identity=created_identity,
                warnings=warnings,
            )

    async def _issue_token(
        self,
        account: Account,
        options: LoginOptions,
        provider: str,
        external_id: str,
    ) -> AccessToken:
        """Issue the access token, using the caller's issuer if one was given.

        Raises:
            TokenIssuanceFailure: If issuing fails
        """
        issuer = options.create_access_token or self.token_service.issue
        try:
            return await issuer(account, options.ttl)
        except Exception as e:
            logfire.error(
                "Access token issuance failed",
                provider=provider,
                account_id=str(account.id),
                error=str(e),
            )
            raise TokenIssuanceFailure(provider, external_id, str(e)) from e
