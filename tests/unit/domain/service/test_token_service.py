"""Unit tests for TokenService."""

from uuid import uuid4

import pytest

from federated.config import AuthSettings
from federated.domain.model import Account
from federated.domain.service import TokenService
from federated.domain.value import AccountId
from federated.persistence.repository.inmemory import InMemoryAccessTokenRepository
from federated.util.jwt import JWTError


@pytest.fixture
def auth_settings() -> AuthSettings:
    return AuthSettings(jwt_secret="test-secret")


@pytest.fixture
def account() -> Account:
    return Account(id=AccountId(uuid4()), username="facebook.123", password="hash")


class TestResolveTtl:
    """Tests for TokenService.resolve_ttl()."""

    def test_default_ttl_is_one_year(self, auth_settings):
        service = TokenService(InMemoryAccessTokenRepository(), auth_settings)

        assert service.resolve_ttl() == 31536000

    def test_requested_ttl_is_kept(self, auth_settings):
        service = TokenService(InMemoryAccessTokenRepository(), auth_settings)

        assert service.resolve_ttl(3600) == 3600

    def test_requested_ttl_is_capped(self, auth_settings):
        """No token outlives the configured maximum."""
        service = TokenService(InMemoryAccessTokenRepository(), auth_settings)

        assert service.resolve_ttl(10**9) == 31556926


class TestIssue:
    """Tests for TokenService.issue() and verify()."""

    @pytest.mark.asyncio
    async def test_issue_stores_token(self, auth_settings, account):
        """Issued tokens are persisted and tied to the account."""
        # Arrange
        repo = InMemoryAccessTokenRepository()
        service = TokenService(repo, auth_settings)

        # Act
        token = await service.issue(account, ttl=3600)

        # Assert
        assert token.account_id == account.id
        assert token.ttl == 3600
        assert await repo.find_by_id(token.id) == token

    @pytest.mark.asyncio
    async def test_issued_token_verifies(self, auth_settings, account):
        """The token string is a signed token naming the account."""
        service = TokenService(InMemoryAccessTokenRepository(), auth_settings)

        token = await service.issue(account)
        payload = service.verify(token.id)

        assert payload.account_id == str(account.id)

    @pytest.mark.asyncio
    async def test_tokens_are_unique(self, auth_settings, account):
        """Two tokens for the same account never collide."""
        service = TokenService(InMemoryAccessTokenRepository(), auth_settings)

        first = await service.issue(account)
        second = await service.issue(account)

        assert first.id != second.id

    def test_verify_rejects_foreign_token(self, auth_settings):
        """Tokens signed with another key are rejected."""
        service = TokenService(InMemoryAccessTokenRepository(), auth_settings)

        with pytest.raises(JWTError):
            service.verify("not-a-token")
