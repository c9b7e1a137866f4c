from sqlalchemy import Column, DateTime, ForeignKey, String
from .database import Base, utcnow


class Session(Base):
    """Server-side session record. ``id`` is the HMAC digest of the cookie value."""
    __tablename__ = "sessions"

    id = Column(String(64), primary_key=True)
    user_id = Column(String(32), ForeignKey("users.id"), index=True, nullable=False)
    username = Column(String(30), nullable=False)
    expires_at = Column(DateTime, index=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
