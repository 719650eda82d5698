"""Provider credentials.

The shape of the credentials depends on the auth scheme used for the login:

- oauth: token, token_secret
- oauth2: access_token, refresh_token
- openid: openid
- openid-connect: access_token, refresh_token, profile
"""

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from federated.domain.error import ValidationError
from federated.domain.value.common import PayloadObject


class AuthScheme(str, Enum):
    """Authentication scheme a provider used to assert the identity."""

    OAUTH = "oauth"
    OAUTH2 = "oauth2"
    OPENID = "openid"
    OPENID_CONNECT = "openid-connect"


class OAuth1Credentials(PayloadObject):
    """OAuth 1.0a token pair."""

    scheme: Literal["oauth"] = "oauth"
    token: str
    token_secret: str


class OAuth2Credentials(PayloadObject):
    """OAuth 2.0 bearer tokens."""

    scheme: Literal["oauth2"] = "oauth2"
    access_token: str
    refresh_token: str | None = None


class OpenIdCredentials(PayloadObject):
    """OpenID 2.0 claimed identifier."""

    scheme: Literal["openid"] = "openid"
    openid: str


class OpenIdConnectCredentials(PayloadObject):
    """OpenID Connect tokens plus the userinfo profile."""

    scheme: Literal["openid-connect"] = "openid-connect"
    access_token: str
    refresh_token: str | None = None
    profile: dict[str, Any] | None = None


Credentials = Annotated[
    Union[
        OAuth1Credentials,
        OAuth2Credentials,
        OpenIdCredentials,
        OpenIdConnectCredentials,
    ],
    Field(discriminator="scheme"),
]

_credentials_adapter: TypeAdapter[Credentials] = TypeAdapter(Credentials)


def parse_credentials(
    auth_scheme: AuthScheme | str, payload: "Credentials | dict[str, Any]"
) -> Credentials:
    """Validate a credentials payload for the given auth scheme.

    Args:
        auth_scheme: Scheme the provider adapter used
        payload: Raw credentials dict or already-parsed credentials

    Returns:
        Credentials of the matching scheme

    Raises:
        ValidationError: If the payload is malformed or belongs to another scheme
    """
    try:
        scheme = AuthScheme(auth_scheme)
    except ValueError as e:
        raise ValidationError(f"Unsupported auth scheme: {auth_scheme}") from e

    if isinstance(payload, dict):
        try:
            credentials = _credentials_adapter.validate_python(
                {"scheme": scheme.value, **payload}
            )
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid {scheme.value} credentials: {e}") from e
    else:
        credentials = payload

    if credentials.scheme != scheme:
        raise ValidationError(
            f"Credentials are for {credentials.scheme}, "
            f"but the login used {scheme.value}"
        )
    return credentials


def dump_credentials(credentials: Credentials) -> dict[str, Any]:
    """Serialize credentials for storage."""
    return credentials.model_dump(mode="json")


def load_credentials(data: dict[str, Any]) -> Credentials:
    """Rebuild stored credentials."""
    return _credentials_adapter.validate_python(data)
