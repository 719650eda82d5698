"""Mappers for converting between database rows and domain models.

Domain models are immutable Pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM.
"""

from typing import Any, Dict
from uuid import UUID

from federated.domain.model import AccessToken, Account, ExternalIdentity
from federated.domain.value import (
    AccountId,
    AuthScheme,
    ExternalIdentityId,
    ProviderProfile,
)
from federated.domain.value.credentials import dump_credentials, load_credentials

# Columns the account update path may write
ACCOUNT_UPDATE_COLUMNS = frozenset(
    {
        "username",
        "email",
        "name",
        "gender",
        "prefered_language",
        "avatar_url",
        "external_refs",
        "created_at",
        "updated_at",
    }
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_account(row: Dict[str, Any]) -> Account:
    """Convert database row to Account domain model.

    Args:
        row: Database row as dict

    Returns:
        Account domain model
    """
    return Account(
        id=AccountId(_uuid(row["id"])),
        username=row.get("username"),
        email=row.get("email"),
        password=row["password"],
        name=row.get("name"),
        gender=row.get("gender"),
        prefered_language=row.get("prefered_language"),
        avatar_url=row.get("avatar_url"),
        external_refs=row.get("external_refs") or {},
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def account_to_dict(account: Account) -> Dict[str, Any]:
    """Convert Account domain model to database dict.

    Args:
        account: Account domain model

    Returns:
        Dict suitable for database insertion
    """
    return {
        "id": account.id,
        "username": account.username,
        "email": account.email,
        "password": account.password,
        "name": account.name,
        "gender": account.gender,
        "prefered_language": account.prefered_language,
        "avatar_url": account.avatar_url,
        "external_refs": dict(account.external_refs),
        "created_at": account.created_at,
        "updated_at": account.updated_at,
    }


def account_changes_to_dict(changes: Dict[str, Any]) -> Dict[str, Any]:
    """Filter account changes down to writable columns.

    ``id`` and ``password`` are never part of an update.
    """
    return {key: value for key, value in changes.items() if key in ACCOUNT_UPDATE_COLUMNS}


def row_to_external_identity(row: Dict[str, Any]) -> ExternalIdentity:
    """Convert database row to ExternalIdentity domain model.

    Args:
        row: Database row as dict

    Returns:
        ExternalIdentity domain model
    """
    return ExternalIdentity(
        id=ExternalIdentityId(_uuid(row["id"])),
        account_id=AccountId(_uuid(row["account_id"])),
        provider=row["provider"],
        auth_scheme=AuthScheme(row["auth_scheme"]),
        external_id=row["external_id"],
        profile=ProviderProfile.model_validate(row["profile"]),
        credentials=load_credentials(row["credentials"]),
        created_at=row["created_at"],
        modified_at=row["modified_at"],
    )


def external_identity_to_dict(identity: ExternalIdentity) -> Dict[str, Any]:
    """Convert ExternalIdentity domain model to database dict.

    Args:
        identity: ExternalIdentity domain model

    Returns:
        Dict suitable for database insertion
    """
    return {
        "id": identity.id,
        "account_id": identity.account_id,
        "provider": identity.provider,
        "auth_scheme": identity.auth_scheme.value,
        "external_id": identity.external_id,
        "profile": identity.profile.to_payload(),
        "credentials": dump_credentials(identity.credentials),
        "created_at": identity.created_at,
        "modified_at": identity.modified_at,
    }


def row_to_access_token(row: Dict[str, Any]) -> AccessToken:
    """Convert database row to AccessToken domain model."""
    return AccessToken(
        id=row["id"],
        account_id=AccountId(_uuid(row["account_id"])),
        ttl=row["ttl"],
        created_at=row["created_at"],
    )


def access_token_to_dict(token: AccessToken) -> Dict[str, Any]:
    """Convert AccessToken domain model to database dict."""
    return {
        "id": token.id,
        "account_id": token.account_id,
        "ttl": token.ttl,
        "created_at": token.created_at,
    }
