"""Strongly typed identifiers for federated login entities.

Using NewType keeps account and identity IDs from being mixed up.
"""

from typing import NewType
from uuid import UUID

AccountId = NewType("AccountId", UUID)
ExternalIdentityId = NewType("ExternalIdentityId", UUID)
