from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from datetime import datetime
from userhub.db.base import Base


class AccessToken(Base):
    """Токен доступа, выданный при регистрации или входе"""
    __tablename__ = "personal_access_tokens"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    name = Column(String(255), nullable=False, default="main")
    # Храним только sha256 от секрета
    token = Column(String(64), unique=True, nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    last_used_at = Column(DateTime, nullable=True)
