import hashlib
import hmac
import secrets

import bcrypt

from userhub.config.config import get_settings

settings = get_settings()

TOKEN_SECRET_LENGTH = 40


def hash_password(password: str) -> str:
    """bcrypt с солью; cost задаётся BCRYPT_ROUNDS"""
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # битый хеш в БД
        return False


def generate_token_secret() -> str:
    return secrets.token_urlsafe(TOKEN_SECRET_LENGTH)[:TOKEN_SECRET_LENGTH]


def hash_token(secret: str) -> str:
    return hashlib.sha256(secret.encode("utf-8")).hexdigest()


def tokens_match(secret: str, token_hash: str) -> bool:
    return hmac.compare_digest(hash_token(secret), token_hash)


def format_plain_token(token_id: int, secret: str) -> str:
    """Токен для клиента: "<id>|<secret>", показывается один раз"""
    return f"{token_id}|{secret}"


def parse_plain_token(plain_token: str) -> tuple[int | None, str]:
    token_id, sep, secret = plain_token.partition("|")
    if not sep:
        return None, plain_token
    try:
        return int(token_id), secret
    except ValueError:
        return None, plain_token
