import logging

from sqlalchemy.ext.asyncio import AsyncSession

from userhub.db.token.requests import create_access_token, delete_token
from userhub.db.user.models import User
from userhub.db.user.requests import get_user_by_email, create_user
from userhub.middleware.auth import AuthContext
from userhub.services.errors import AuthenticationError, ValidationError
from userhub.services.security import (
    hash_password,
    verify_password,
    generate_token_secret,
    hash_token,
    format_plain_token,
)
from userhub.services.transaction import atomic

logger = logging.getLogger(__name__)

EMAIL_TAKEN_MESSAGE = "The email has already been taken."


async def _issue_token(db: AsyncSession, user: User) -> str:
    """Создать токен и вернуть его открытое значение"""
    secret = generate_token_secret()
    access_token = await create_access_token(db, user.id, hash_token(secret))
    return format_plain_token(access_token.id, secret)


async def ensure_email_available(db: AsyncSession, email: str, user_id: int | None = None):
    existing_user = await get_user_by_email(db, email)
    if existing_user and existing_user.id != user_id:
        raise ValidationError.for_field("email", EMAIL_TAKEN_MESSAGE)


async def signup(db: AsyncSession, name: str, email: str, password: str) -> dict:
    """Регистрация: пользователь и первый токен в одной транзакции"""
    await ensure_email_available(db, email)
    password_hash = hash_password(password)

    async with atomic(db, "Failed to create user."):
        user = await create_user(db, name, email, password_hash)
        token = await _issue_token(db, user)

    logger.info(f"User {email} registered")
    return {"user": user, "token": token}


async def login(db: AsyncSession, email: str, password: str) -> dict:
    """Вход: новый токен, старые токены остаются рабочими"""
    user = await get_user_by_email(db, email)
    # Одинаковое сообщение для неизвестного email и неверного пароля
    if not user or not verify_password(password, user.password):
        logger.info(f"Failed login for {email}")
        raise AuthenticationError()

    async with atomic(db, "Failed to login."):
        token = await _issue_token(db, user)

    logger.info(f"User {email} logged in")
    return {"user": user, "token": token}


async def logout(db: AsyncSession, ctx: AuthContext):
    """Удалить только токен текущего запроса"""
    async with atomic(db, "Failed to logout."):
        await delete_token(db, ctx.token)

    logger.info(f"User {ctx.user.email} logged out")
