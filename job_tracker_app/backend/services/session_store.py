"""
Server-side session store backed by the ``sessions`` table.

The client only ever holds the opaque token; rows are keyed by its HMAC
digest (see ``security.session_key``).
"""
import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..config.settings import get_settings
from ..errors import InternalError
from ..models.db import session as session_model
from ..models.db.database import utcnow
from ..security import generate_session_token, session_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionContext:
    """Request-scoped identity resolved from the session cookie."""
    session_id: str
    user_id: str
    username: str


def create_session(db: Session, user_id: str, username: str) -> str:
    """Persist a new session and return the raw token for the cookie."""
    settings = get_settings()
    token = generate_session_token()
    db_session = session_model.Session(
        id=session_key(token),
        user_id=user_id,
        username=username,
        expires_at=utcnow() + timedelta(days=settings.session_ttl_days),
    )
    db.add(db_session)
    db.commit()
    return token


def get_session(db: Session, token: Optional[str]) -> Optional[SessionContext]:
    """Resolve a cookie token to a live session, dropping it if expired."""
    if not token:
        return None
    key = session_key(token)
    db_session = db.query(session_model.Session).filter(session_model.Session.id == key).first()
    if db_session is None:
        return None
    if db_session.expires_at <= utcnow():
        logger.info("Session for user %s expired", db_session.user_id)
        db.delete(db_session)
        db.commit()
        return None
    return SessionContext(session_id=key, user_id=db_session.user_id, username=db_session.username)


def destroy_session(db: Session, session_id: str) -> None:
    try:
        db.query(session_model.Session).filter(session_model.Session.id == session_id).delete(
            synchronize_session=False
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Failed to destroy session: %s", str(e))
        raise InternalError("Could not log out") from e


def purge_expired_sessions(db: Session) -> int:
    """Remove every expired session row; returns how many were removed."""
    removed = db.query(session_model.Session).filter(
        session_model.Session.expires_at <= utcnow()
    ).delete(synchronize_session=False)
    db.commit()
    if removed:
        logger.info("Purged %d expired sessions", removed)
    return removed
