import logging

from sqlalchemy.ext.asyncio import AsyncSession

from userhub.db.user import requests as user_requests
from userhub.db.user.models import User
from userhub.models.response_model import PaginationMeta, last_page_for
from userhub.services.auth import ensure_email_available
from userhub.services.errors import NotFoundError
from userhub.services.security import hash_password
from userhub.services.transaction import atomic

logger = logging.getLogger(__name__)


async def get_user_or_404(db: AsyncSession, user_id: int) -> User:
    user = await user_requests.get_user_by_id(db, user_id)
    if user is None:
        raise NotFoundError()
    return user


async def list_users(db: AsyncSession, page: int, per_page: int) -> dict:
    """
    Страница пользователей по убыванию id.

    Номер страницы за пределами last_page прижимается к last_page,
    и в meta.current_page возвращается уже прижатое значение.
    """
    total = await user_requests.count_users(db)
    page = min(page, last_page_for(total, per_page))
    users = await user_requests.get_users_page(db, (page - 1) * per_page, per_page)
    meta = PaginationMeta.build(page, per_page, total, len(users))
    return {"data": list(users), "meta": meta}


async def create_user(db: AsyncSession, name: str, email: str, password: str) -> User:
    await ensure_email_available(db, email)
    user = await user_requests.create_user(db, name, email, hash_password(password))
    await db.commit()
    logger.info(f"User {email} created")
    return user


async def update_user(db: AsyncSession, user_id: int, fields: dict) -> User:
    """Частичное обновление; пароль, если передан, хешируется заново"""
    user = await get_user_or_404(db, user_id)

    email = fields.get("email")
    if email is not None:
        await ensure_email_available(db, email, user_id=user.id)

    password = fields.get("password")
    password_hash = hash_password(password) if password is not None else None

    async with atomic(db, "Failed to update user."):
        user = await user_requests.update_user(
            db,
            user,
            name=fields.get("name"),
            email=email,
            password_hash=password_hash,
        )

    logger.info(f"User {user.id} updated")
    return user


async def delete_user(db: AsyncSession, user_id: int):
    """Удаление пользователя; его токены удаляются каскадом в БД"""
    user = await get_user_or_404(db, user_id)

    async with atomic(db, "Failed to delete user."):
        await user_requests.delete_user(db, user)

    logger.info(f"User {user_id} deleted")
