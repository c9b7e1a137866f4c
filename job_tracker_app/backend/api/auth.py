from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from .. import schemas
from ..config.settings import get_settings
from ..errors import Unauthorized
from ..models.db.database import get_db
from ..services import auth_service, session_store
from ..services.session_store import SessionContext

router = APIRouter()


def set_session_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.is_production(),
    )


def clear_session_cookie(response: Response) -> None:
    settings = get_settings()
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        samesite="lax",
        secure=settings.is_production(),
    )


def get_session_token(request: Request) -> Optional[str]:
    return request.cookies.get(get_settings().session_cookie_name)


def get_current_session(
    db: Session = Depends(get_db),
    token: Optional[str] = Depends(get_session_token),
) -> SessionContext:
    """Gate for protected routes: resolves the cookie or fails with 401."""
    context = session_store.get_session(db, token)
    if context is None:
        raise Unauthorized()
    return context


@router.post("/register", response_model=schemas.AuthResponse, status_code=status.HTTP_201_CREATED)
def register(user: schemas.UserCreate, response: Response, db: Session = Depends(get_db)):
    new_user = auth_service.register(db, user)
    token = session_store.create_session(db, user_id=new_user.id, username=new_user.username)
    set_session_cookie(response, token)
    return {"message": "User registered successfully", "user": schemas.User.model_validate(new_user)}


@router.post("/login", response_model=schemas.AuthResponse)
def login(credentials: schemas.UserLogin, response: Response, db: Session = Depends(get_db)):
    user = auth_service.login(db, credentials)
    token = session_store.create_session(db, user_id=user.id, username=user.username)
    set_session_cookie(response, token)
    return {"message": "Login successful", "user": schemas.User.model_validate(user)}


@router.post("/logout", response_model=schemas.MessageResponse)
def logout(
    response: Response,
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_current_session),
):
    auth_service.logout(db, context)
    clear_session_cookie(response)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=schemas.MeResponse)
def me(context: SessionContext = Depends(get_current_session)):
    """Identity comes from the session payload, not the users table."""
    return {"user": auth_service.me(context)}
