"""Application layer DI providers."""

from dishka import Scope, provide

from federated.application.usecase.auth import LoginUseCase
from federated.domain.service import (
    AccountService,
    ExternalIdentityService,
    ProfileMapper,
    TokenService,
)
from federated.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self,
        identity_service: ExternalIdentityService,
        account_service: AccountService,
        profile_mapper: ProfileMapper,
        token_service: TokenService,
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(
            identity_service=identity_service,
            account_service=account_service,
            profile_mapper=profile_mapper,
            token_service=token_service,
        )
