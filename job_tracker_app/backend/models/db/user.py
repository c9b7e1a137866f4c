import uuid

from sqlalchemy import Column, DateTime, String
from .database import Base, utcnow


def generate_id() -> str:
    return uuid.uuid4().hex


class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, index=True, default=generate_id)
    username = Column(String(30), unique=True, index=True, nullable=False)
    password_hash = Column(String(60), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
