from typing import Sequence

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from userhub.db.user.models import User


async def get_user_by_id(session: AsyncSession, user_id: int) -> User | None:
    stmt = select(User).where(User.id == user_id)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    stmt = select(User).where(User.email == email)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def count_users(session: AsyncSession) -> int:
    stmt = select(func.count()).select_from(User)
    result = await session.execute(stmt)
    return result.scalar_one()


async def get_users_page(session: AsyncSession, offset: int, limit: int) -> Sequence[User]:
    """Страница пользователей, новые первыми"""
    stmt = select(User).order_by(User.id.desc()).offset(offset).limit(limit)
    result = await session.execute(stmt)
    return result.scalars().all()


async def create_user(
        session: AsyncSession,
        name: str,
        email: str,
        password_hash: str,
) -> User:
    user = User(
        name=name,
        email=email,
        password=password_hash,
    )
    session.add(user)
    await session.flush()
    await session.refresh(user)
    return user


async def update_user(
        session: AsyncSession,
        user: User,
        *,
        name: str | None = None,
        email: str | None = None,
        password_hash: str | None = None,
) -> User:
    if name is not None:
        user.name = name
    if email is not None:
        user.email = email
    if password_hash is not None:
        user.password = password_hash
    session.add(user)
    await session.flush()
    await session.refresh(user)
    return user


async def delete_user(session: AsyncSession, user: User):
    await session.delete(user)
    await session.flush()
