import json
import logging
import time
import traceback
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

class JsonFormatter(logging.Formatter):
    def format(self, record):
        log_obj = {
            'level': record.levelname,
            'time': self.formatTime(record, '%Y-%m-%d %H:%M:%S'),
        }
        if isinstance(record.msg, dict):
            log_obj.update(record.msg)
        else:
            log_obj['message'] = record.getMessage()
        return json.dumps(log_obj, ensure_ascii=False, default=str)


logger = logging.getLogger('userhub.access')
logger.setLevel(logging.INFO)
logger.propagate = False
handler = logging.StreamHandler()
handler.setFormatter(JsonFormatter())
logger.addHandler(handler)


def client_ip(request: Request) -> str:
    forwarded = request.headers.get('X-Forwarded-For', '').split(',')[0].strip()
    if request.headers.get('X-Real-IP'):
        return request.headers['X-Real-IP']
    if forwarded:
        return forwarded
    return request.client.host if request.client else ''


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable):
        start = time.perf_counter()

        try:
            response = await call_next(request)
            end = time.perf_counter()
            self.log(request, response, start, end)
            return response
        except Exception as e:
            end = time.perf_counter()
            self.log_exception(request, e, start, end)
            raise

    @staticmethod
    def request_data(request: Request, start: float, end: float) -> dict:
        # Пользователя кладёт в request.state зависимость get_auth_context
        user = getattr(request.state, 'user', None)
        return {
            'user_id': getattr(user, 'id', None),
            'user_email': getattr(user, 'email', '') if user else '',
            'user_ip': client_ip(request),
            'request_method': request.method,
            'request_url': str(request.url),
            'request_path': request.url.path,
            'request_duration_ms': round((end - start) * 1000, 2),
        }

    @classmethod
    def log(cls, request: Request, response: Response, start: float, end: float):
        log_data = {'http_code': response.status_code, **cls.request_data(request, start, end)}

        status_code = response.status_code
        if status_code >= 500:
            logger.error(msg=log_data)
        elif status_code >= 400:
            logger.warning(msg=log_data)
        else:
            logger.info(msg=log_data)

    @classmethod
    def log_exception(cls, request: Request, exception: Exception, start: float, end: float):
        log_data = {
            'http_code': 500,
            **cls.request_data(request, start, end),
            'exception': str(exception),
            'exception_type': type(exception).__name__,
            'traceback': traceback.format_exc(),
        }
        logger.error(msg=log_data)
