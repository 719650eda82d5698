"""Unit tests for ProviderProfile."""

from federated.domain.value import ProviderProfile


class TestProviderProfile:
    """Tests for ProviderProfile parsing and derived fields."""

    def test_numeric_id_is_stored_as_string(self):
        """Providers that send numeric IDs get string external IDs."""
        profile = ProviderProfile.model_validate({"id": 123, "provider": "facebook"})

        assert profile.id == "123"
        assert profile.external_id == "123"

    def test_external_id_falls_back_to_openid(self):
        """OpenID profiles without an id use the openid identifier."""
        profile = ProviderProfile.model_validate(
            {"openid": "https://openid.example.com/alice"}
        )

        assert profile.external_id == "https://openid.example.com/alice"

    def test_external_id_missing(self):
        """A profile with neither id nor openid has no external ID."""
        profile = ProviderProfile.model_validate({"username": "alice"})

        assert profile.external_id is None

    def test_handle_prefers_username(self):
        """Handle is the username when the provider sends one."""
        with_username = ProviderProfile(id="1", username="alice")
        without_username = ProviderProfile(id="1")

        assert with_username.handle == "alice"
        assert without_username.handle == "1"

    def test_primary_email_is_first_email(self):
        """The first listed email is the primary one."""
        profile = ProviderProfile.model_validate(
            {
                "id": "1",
                "emails": [{"value": "first@x.com"}, {"value": "second@x.com"}],
            }
        )

        assert profile.primary_email == "first@x.com"

    def test_primary_email_none_without_emails(self):
        """No emails means no primary email."""
        assert ProviderProfile(id="1").primary_email is None

    def test_payload_keeps_provider_layout(self):
        """Serialized profiles use the provider's keys and keep extra fields."""
        profile = ProviderProfile.model_validate(
            {
                "id": "1",
                "displayName": "A B",
                "_json": {"id": "1", "locale": "pt_BR"},
                "name": {"givenName": "A", "familyName": "B"},
            }
        )

        payload = profile.to_payload()

        assert payload["displayName"] == "A B"
        assert payload["_json"] == {"id": "1", "locale": "pt_BR"}
        assert payload["name"] == {"givenName": "A", "familyName": "B"}
        assert "openid" not in payload
