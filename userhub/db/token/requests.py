from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from userhub.db.token.models import AccessToken


async def create_access_token(
        session: AsyncSession,
        user_id: int,
        token_hash: str,
        name: str = "main",
) -> AccessToken:
    access_token = AccessToken(
        user_id=user_id,
        name=name,
        token=token_hash,
    )
    session.add(access_token)
    await session.flush()
    await session.refresh(access_token)
    return access_token


async def get_token_by_id(session: AsyncSession, token_id: int) -> AccessToken | None:
    stmt = select(AccessToken).where(AccessToken.id == token_id)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def get_token_by_hash(session: AsyncSession, token_hash: str) -> AccessToken | None:
    stmt = select(AccessToken).where(AccessToken.token == token_hash)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def touch_token(session: AsyncSession, access_token: AccessToken) -> AccessToken:
    access_token.last_used_at = datetime.now()
    session.add(access_token)
    await session.commit()
    return access_token


async def delete_token(session: AsyncSession, access_token: AccessToken):
    await session.delete(access_token)
    await session.flush()
