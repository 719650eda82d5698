"""Unit tests for provider selection and container wiring."""

from federated.util.di import (
    PersistenceProvider,
    ProdConfigProvider,
    ProdPersistenceProvider,
    get_provider,
)
from federated.util.di.container import create_container
from tests.di import MockPersistenceProvider


class TestGetProvider:
    """Tests for get_provider()."""

    def test_concrete_provider_is_used_as_is(self):
        assert get_provider(ProdConfigProvider) is ProdConfigProvider

    def test_production_persistence(self):
        assert get_provider(PersistenceProvider) is ProdPersistenceProvider

    def test_mock_persistence(self):
        assert get_provider(PersistenceProvider, use_mock=True) is MockPersistenceProvider


class TestCreateContainer:
    def test_production_graph_is_complete(self):
        """Every dependency of the production providers can be resolved."""
        container = create_container()

        assert container is not None
