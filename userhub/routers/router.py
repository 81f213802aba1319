from fastapi import APIRouter
from userhub.routers.auth import AuthRouter
from userhub.routers.users import UsersRouter
from userhub.routers.utils import UtilsRouter

router = APIRouter()

AuthRouter(router)
UsersRouter(router)
UtilsRouter(router)
