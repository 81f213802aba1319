from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

import logging

from userhub.db.database import get_db
from userhub.db.token.models import AccessToken
from userhub.db.token.requests import get_token_by_id, get_token_by_hash, touch_token
from userhub.db.user.models import User
from userhub.db.user.requests import get_user_by_id
from userhub.services.errors import UnauthenticatedError
from userhub.services.security import parse_plain_token, hash_token, tokens_match

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


@dataclass
class AuthContext:
    """Аутентифицированный запрос: пользователь и токен, которым он вошёл"""
    user: User
    token: AccessToken


async def _resolve_token(db: AsyncSession, plain_token: str) -> AccessToken | None:
    token_id, secret = parse_plain_token(plain_token)
    if token_id is None:
        return await get_token_by_hash(db, hash_token(secret))

    access_token = await get_token_by_id(db, token_id)
    if access_token is None or not tokens_match(secret, access_token.token):
        return None
    return access_token


async def get_auth_context(
        request: Request,
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
        db: AsyncSession = Depends(get_db)
) -> AuthContext:
    """Найти токен из заголовка Authorization и его владельца"""

    if not credentials or not credentials.credentials:
        raise UnauthenticatedError()

    access_token = await _resolve_token(db, credentials.credentials)
    if access_token is None:
        logger.warning("Unknown or revoked access token")
        raise UnauthenticatedError()

    user = await get_user_by_id(db, access_token.user_id)
    if user is None:
        raise UnauthenticatedError()

    await touch_token(db, access_token)

    request.state.user = user
    return AuthContext(user=user, token=access_token)
