import logging
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

from userhub.services.errors import AppError, InternalError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def atomic(session: AsyncSession, failure_message: str):
    """
    Выполнить изменения одной транзакцией.

    Коммит при нормальном выходе; при любой ошибке откат.
    Ошибки приложения пробрасываются как есть, всё остальное
    превращается в InternalError с failure_message.
    """
    try:
        yield session
        await session.commit()
    except AppError:
        await session.rollback()
        raise
    except Exception as e:
        await session.rollback()
        logger.error(f"{failure_message} {type(e).__name__}: {e}")
        raise InternalError(failure_message) from e
