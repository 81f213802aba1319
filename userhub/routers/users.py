from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from userhub.config.config import get_settings
from userhub.db.database import get_db
from userhub.middleware.auth import AuthContext, get_auth_context
from userhub.models.request_model import StoreUserRequest, UpdateUserRequest
from userhub.models.response_model import PaginatedUsersResponse, UserResponse, MessageResponse
from userhub.services import users

settings = get_settings()


class UsersRouter:
    def __init__(self, router: APIRouter):
        self.router = router
        self._register_routes()

    def _register_routes(self):
        self.router.get("/users", response_model=PaginatedUsersResponse)(self.index)
        self.router.post(
            "/users",
            response_model=UserResponse,
            status_code=status.HTTP_201_CREATED,
        )(self.store)
        self.router.get("/users/{user_id}")(self.show)
        self.router.put("/users/{user_id}", response_model=MessageResponse)(self.update)
        self.router.patch("/users/{user_id}", response_model=MessageResponse)(self.update)
        self.router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)(self.destroy)

    @staticmethod
    async def index(
            page: int = Query(1, ge=1),
            per_page: int = Query(settings.USERS_PER_PAGE, ge=1, le=settings.USERS_MAX_PER_PAGE),
            _: AuthContext = Depends(get_auth_context),
            db: AsyncSession = Depends(get_db),
    ):
        """Список пользователей с пагинацией"""
        return await users.list_users(db, page, per_page)

    @staticmethod
    async def store(
            payload: StoreUserRequest,
            _: AuthContext = Depends(get_auth_context),
            db: AsyncSession = Depends(get_db),
    ):
        """Создать пользователя"""
        return await users.create_user(db, payload.name, payload.email, payload.password)

    @staticmethod
    async def show(
            user_id: int,
            _: AuthContext = Depends(get_auth_context),
            db: AsyncSession = Depends(get_db),
    ):
        # Маршрут объявлен, но тела ответа нет
        await users.get_user_or_404(db, user_id)
        return Response(status_code=status.HTTP_200_OK)

    @staticmethod
    async def update(
            user_id: int,
            payload: UpdateUserRequest,
            _: AuthContext = Depends(get_auth_context),
            db: AsyncSession = Depends(get_db),
    ):
        """Частично обновить пользователя"""
        await users.update_user(db, user_id, payload.model_dump(exclude_none=True))
        return {"message": "User updated successfully."}

    @staticmethod
    async def destroy(
            user_id: int,
            _: AuthContext = Depends(get_auth_context),
            db: AsyncSession = Depends(get_db),
    ):
        """Удалить пользователя"""
        await users.delete_user(db, user_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
