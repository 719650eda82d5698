"""Unit tests for ExternalIdentityService."""

from uuid import uuid4

import pytest

from federated.domain.error import LookupFailure, UpdateFailure
from federated.domain.model import Account
from federated.domain.service import ExternalIdentityService
from federated.domain.value import AccountId, AuthScheme
from federated.persistence.repository.inmemory import (
    InMemoryExternalIdentityRepository,
)
from tests.conftest import make_credentials, make_facebook_profile


class BrokenIdentityRepository(InMemoryExternalIdentityRepository):
    """Identity store whose reads and updates fail."""

    async def find_by_provider(self, provider, external_id):
        raise RuntimeError("connection reset")

    async def update(self, identity):
        raise RuntimeError("connection reset")


def make_account() -> Account:
    return Account(id=AccountId(uuid4()), username="facebook.123", password="hash")


class TestLinkIdentity:
    """Tests for ExternalIdentityService.link_identity()."""

    @pytest.mark.asyncio
    async def test_link_creates_identity(self):
        """First link stores the profile and credentials."""
        # Arrange
        service = ExternalIdentityService(InMemoryExternalIdentityRepository())
        account = make_account()
        profile = make_facebook_profile("123")

        # Act
        identity, created = await service.link_identity(
            "facebook", AuthScheme.OAUTH2, "123", profile, make_credentials(), account
        )

        # Assert
        assert created is True
        assert identity.account_id == account.id
        assert identity.provider == "facebook"
        assert identity.external_id == "123"
        assert identity.profile == profile
        assert identity.created_at == identity.modified_at

    @pytest.mark.asyncio
    async def test_link_returns_existing_identity_unchanged(self):
        """An existing link is never re-pointed to another account."""
        # Arrange
        service = ExternalIdentityService(InMemoryExternalIdentityRepository())
        first_account = make_account()
        second_account = make_account()
        profile = make_facebook_profile("123")
        original, _ = await service.link_identity(
            "facebook", AuthScheme.OAUTH2, "123", profile, make_credentials(), first_account
        )

        # Act
        identity, created = await service.link_identity(
            "facebook",
            AuthScheme.OAUTH2,
            "123",
            profile,
            make_credentials("access-2"),
            second_account,
        )

        # Assert
        assert created is False
        assert identity.id == original.id
        assert identity.account_id == first_account.id
        assert identity.credentials.access_token == "access-1"

    @pytest.mark.asyncio
    async def test_link_matches_on_external_id_only(self):
        """The find-or-create lookup ignores the provider name."""
        # Arrange
        service = ExternalIdentityService(InMemoryExternalIdentityRepository())
        account = make_account()
        original, _ = await service.link_identity(
            "facebook",
            AuthScheme.OAUTH2,
            "123",
            make_facebook_profile("123"),
            make_credentials(),
            account,
        )

        # Act
        identity, created = await service.link_identity(
            "facebook-token",
            AuthScheme.OAUTH2,
            "123",
            make_facebook_profile("123"),
            make_credentials(),
            make_account(),
        )

        # Assert
        assert created is False
        assert identity.id == original.id
        assert identity.provider == "facebook"


class TestFindAndRefresh:
    """Tests for find_identity() and refresh_identity()."""

    @pytest.mark.asyncio
    async def test_find_identity_not_found(self):
        """Unknown provider accounts return None."""
        service = ExternalIdentityService(InMemoryExternalIdentityRepository())

        assert await service.find_identity("facebook", "123") is None

    @pytest.mark.asyncio
    async def test_find_identity_failure(self):
        """Store errors during lookup become LookupFailure."""
        service = ExternalIdentityService(BrokenIdentityRepository())

        with pytest.raises(LookupFailure) as exc_info:
            await service.find_identity("facebook", "123")

        assert exc_info.value.provider == "facebook"
        assert exc_info.value.external_id == "123"

    @pytest.mark.asyncio
    async def test_refresh_overwrites_profile_and_credentials(self):
        """The latest login's profile and credentials win."""
        # Arrange
        repo = InMemoryExternalIdentityRepository()
        service = ExternalIdentityService(repo)
        identity, _ = await service.link_identity(
            "facebook",
            AuthScheme.OAUTH2,
            "123",
            make_facebook_profile("123", "a@x.com"),
            make_credentials("access-1"),
            make_account(),
        )
        new_profile = make_facebook_profile("123", "new@x.com")

        # Act
        refreshed = await service.refresh_identity(
            identity, new_profile, make_credentials("access-2")
        )

        # Assert
        assert refreshed.id == identity.id
        assert refreshed.credentials.access_token == "access-2"
        assert refreshed.profile.primary_email == "new@x.com"
        assert refreshed.modified_at >= identity.modified_at
        assert refreshed.created_at == identity.created_at
        stored = await repo.find_by_provider("facebook", "123")
        assert stored.credentials.access_token == "access-2"

    @pytest.mark.asyncio
    async def test_refresh_failure(self):
        """Store errors during refresh become UpdateFailure."""
        # Arrange
        repo = BrokenIdentityRepository()
        service = ExternalIdentityService(repo)
        identity, _ = await service.link_identity(
            "facebook",
            AuthScheme.OAUTH2,
            "123",
            make_facebook_profile("123"),
            make_credentials(),
            make_account(),
        )

        # Act & Assert
        with pytest.raises(UpdateFailure):
            await service.refresh_identity(
                identity, make_facebook_profile("123"), make_credentials("access-2")
            )

    @pytest.mark.asyncio
    async def test_identities_for_account(self):
        """All identities of an account are listed."""
        # Arrange
        service = ExternalIdentityService(InMemoryExternalIdentityRepository())
        account = make_account()
        await service.link_identity(
            "facebook",
            AuthScheme.OAUTH2,
            "123",
            make_facebook_profile("123"),
            make_credentials(),
            account,
        )
        await service.link_identity(
            "google",
            AuthScheme.OAUTH2,
            "g-1",
            make_facebook_profile("g-1"),
            make_credentials(),
            account,
        )

        # Act
        identities = await service.get_identities_for_account(account.id)

        # Assert
        assert [i.provider for i in identities] == ["facebook", "google"]
