from fastapi import APIRouter, Depends

from userhub.middleware.auth import AuthContext, get_auth_context
from userhub.models.response_model import UserResponse


class UtilsRouter:
    def __init__(self, router: APIRouter):
        self.router = router
        self._register_routes()

    def _register_routes(self):
        self.router.get("/health")(self.health)
        self.router.get("/user", response_model=UserResponse)(self.get_me)

    @staticmethod
    async def health():
        """Проверка здоровья"""
        return {"status": "ok"}

    @staticmethod
    async def get_me(ctx: AuthContext = Depends(get_auth_context)):
        """Текущий пользователь"""
        return ctx.user
