"""Test configuration and helpers."""

from typing import Any

from federated.domain.value import OAuth2Credentials, ProviderProfile


def make_facebook_profile(
    user_id: str = "123",
    email: str | None = "a@x.com",
    **raw: Any,
) -> ProviderProfile:
    """Build a Facebook profile the way the Facebook strategy reports it.

    Args:
        user_id: Facebook user ID
        email: First profile email, or None for a profile without emails
        **raw: Extra fields for the raw Graph payload (``_json``)

    Returns:
        Provider profile
    """
    graph = {"id": user_id, "first_name": "A", "last_name": "B", **raw}
    payload: dict[str, Any] = {
        "id": user_id,
        "provider": "facebook",
        "displayName": "A B",
        "_json": graph,
    }
    if email:
        payload["emails"] = [{"value": email}]
    return ProviderProfile.model_validate(payload)


def make_credentials(access_token: str = "access-1") -> OAuth2Credentials:
    """OAuth 2.0 credentials as a provider adapter would hand them over."""
    return OAuth2Credentials(access_token=access_token, refresh_token="refresh-1")
