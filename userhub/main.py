import logging

import uvicorn
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from userhub.config.config import get_settings
from userhub.db.base import Base
from userhub.db.database import engine
from userhub.db.token.models import AccessToken  # noqa: F401
from userhub.db.user.models import User  # noqa: F401
from userhub.middleware.logging import LoggingMiddleware
from userhub.routers.router import router
from userhub.services.errors import AppError, ValidationError

settings = get_settings()
logger = logging.getLogger(__name__)


async def init_models():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@asynccontextmanager
async def lifespan(_: FastAPI):
    await init_models()  # создаём таблицы асинхронно
    yield


async def app_error_handler(_: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(_: Request, exc: RequestValidationError):
    """Ошибки pydantic в формате {"message", "errors": {поле: [сообщения]}}"""
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        loc = [str(part) for part in error["loc"] if part not in ("body", "query", "path")]
        field = ".".join(loc) or "body"
        message = error["msg"].removeprefix("Value error, ")
        errors.setdefault(field, []).append(message)

    first_message = next(iter(errors.values()))[0] if errors else None
    return JSONResponse(
        status_code=ValidationError.status_code,
        content=ValidationError(first_message, errors).to_dict(),
    )


async def unhandled_error_handler(_: Request, exc: Exception):
    logger.error(f"Unhandled error {type(exc).__name__}: {exc}")
    return JSONResponse(status_code=500, content={"message": "Server Error"})


def get_application():
    application = FastAPI(
        title="UserHub API",
        description="User management API: authentication and user CRUD",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    application.include_router(router)
    application.add_exception_handler(AppError, app_error_handler)
    application.add_exception_handler(RequestValidationError, request_validation_handler)
    application.add_exception_handler(Exception, unhandled_error_handler)
    application.add_middleware(LoggingMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return application


app = get_application()

if __name__ == "__main__":
    uvicorn.run(
        "userhub.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
