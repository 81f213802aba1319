import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from userhub.db.database import get_db
from userhub.middleware.auth import AuthContext, get_auth_context
from userhub.models.request_model import SignupRequest, LoginRequest
from userhub.models.response_model import AuthResponse
from userhub.services import auth

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class AuthRouter:
    def __init__(self, router: APIRouter):
        self.router = router
        self._register_routes()

    def _register_routes(self):
        self.router.post(
            "/signup",
            response_model=AuthResponse,
            status_code=status.HTTP_201_CREATED,
        )(self.signup)
        self.router.post("/login", response_model=AuthResponse)(self.login)
        self.router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)(self.logout)

    @staticmethod
    async def signup(
            payload: SignupRequest,
            db: AsyncSession = Depends(get_db),
    ):
        """Регистрация нового пользователя"""
        return await auth.signup(db, payload.name, payload.email, payload.password)

    @staticmethod
    async def login(
            payload: LoginRequest,
            db: AsyncSession = Depends(get_db),
    ):
        """Вход по email и паролю"""
        return await auth.login(db, payload.email, payload.password)

    @staticmethod
    async def logout(
            ctx: AuthContext = Depends(get_auth_context),
            db: AsyncSession = Depends(get_db),
    ):
        """Выход: отзывается только токен этого запроса"""
        await auth.logout(db, ctx)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
