"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container

from federated.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build production container (all prod implementations).

    Settings are loaded from environment variables automatically.

    Returns:
        Configured DI container with production providers

    Example:
        container = create_container()
        async with container() as request:
            use_case = await request.get(LoginUseCase)
            response = await use_case.login(provider, auth_scheme, profile, credentials)
    """
    # Get provider instances - all are instantiated without arguments
    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*provider_instances)
