"""Domain layer DI providers."""

from dishka import Scope, provide

from federated.config import AuthSettings, LoginSettings
from federated.domain.repository import (
    AccessTokenRepository,
    AccountRepository,
    ExternalIdentityRepository,
)
from federated.domain.service import (
    AccountService,
    ExternalIdentityService,
    ProfileMapper,
    TokenService,
)
from federated.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each login gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_profile_mapper(self, login_settings: LoginSettings) -> ProfileMapper:
        """Provide the default profile to account mapper.

        APP-scoped so enrichers registered at startup apply to every login.
        """
        return ProfileMapper(login_settings=login_settings)

    @provide
    def get_account_service(
        self, account_repository: AccountRepository
    ) -> AccountService:
        """Provide account domain service."""
        return AccountService(account_repository=account_repository)

    @provide
    def get_identity_service(
        self, identity_repository: ExternalIdentityRepository
    ) -> ExternalIdentityService:
        """Provide external identity domain service."""
        return ExternalIdentityService(identity_repository=identity_repository)

    @provide
    def get_token_service(
        self,
        access_token_repository: AccessTokenRepository,
        auth_settings: AuthSettings,
    ) -> TokenService:
        """Provide access token domain service."""
        return TokenService(
            access_token_repository=access_token_repository,
            auth_settings=auth_settings,
        )
