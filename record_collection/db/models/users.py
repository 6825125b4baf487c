from sqlalchemy import Column, Integer, String, DateTime
from .base import Base, now_utc

USER_TYPE_REGULAR = 0
USER_TYPE_ADMIN = 1


class User(Base):
    __tablename__ = 'users'
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    # 0 = regular user, 1 = admin
    type = Column(Integer, nullable=False, default=USER_TYPE_REGULAR)
    api_token = Column(String(80), nullable=True, unique=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    @property
    def is_admin(self) -> bool:
        return self.type == USER_TYPE_ADMIN
