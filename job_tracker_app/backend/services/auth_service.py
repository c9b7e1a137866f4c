import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import schemas
from ..errors import Conflict, Unauthorized
from ..models.db import crud
from ..security import get_password_hash, verify_password
from .session_store import SessionContext, destroy_session

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


def register(db: Session, user: schemas.UserCreate):
    """
    Create a new account. Username length and password length are
    enforced by ``schemas.UserCreate``.
    """
    if crud.get_user_by_username(db, username=user.username):
        logger.info("Registration rejected, username taken: %s", user.username)
        raise Conflict("Username already exists")

    password_hash = get_password_hash(user.password)
    try:
        db_user = crud.create_user(db, username=user.username, password_hash=password_hash)
    except IntegrityError:
        # Lost a race with a concurrent registration of the same name
        db.rollback()
        raise Conflict("Username already exists")

    logger.info("Registered user %s", db_user.id)
    return db_user


def login(db: Session, credentials: schemas.UserLogin):
    """Check credentials; unknown user and wrong password fail identically."""
    db_user = crud.get_user_by_username(db, username=credentials.username)
    if db_user is None or not verify_password(credentials.password, db_user.password_hash):
        logger.info("Failed login attempt for username %s", credentials.username)
        raise Unauthorized(INVALID_CREDENTIALS)
    logger.info("User %s logged in", db_user.id)
    return db_user


def logout(db: Session, context: SessionContext) -> None:
    destroy_session(db, context.session_id)
    logger.info("User %s logged out", context.user_id)


def me(context: SessionContext) -> schemas.User:
    return schemas.User(id=context.user_id, username=context.username)
