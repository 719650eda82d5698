"""PostgreSQL implementation of AccessToken repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from federated.domain.model import AccessToken
from federated.domain.repository import AccessTokenRepository
from federated.persistence.mappers import access_token_to_dict, row_to_access_token
from federated.persistence.tables import access_tokens_table


class PostgresAccessTokenRepository(AccessTokenRepository):
    """PostgreSQL implementation of AccessTokenRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, token: AccessToken) -> AccessToken:
        stmt = access_tokens_table.insert().values(**access_token_to_dict(token))
        await self.session.execute(stmt)
        await self.session.flush()
        return token

    async def find_by_id(self, token_id: str) -> Optional[AccessToken]:
        stmt = select(access_tokens_table).where(access_tokens_table.c.id == token_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_access_token(dict(row)) if row else None
