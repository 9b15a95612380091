from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from taskboard.core.database import AppContext, get_context, get_db
from taskboard.schemas.user_schema import AuthResponse, LoginRequest, RegisterRequest
from taskboard.services import auth_service

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", response_model=AuthResponse)
def register_user(
    payload: RegisterRequest,
    db: Session = Depends(get_db),
    ctx: AppContext = Depends(get_context),
):
    return auth_service.register(db, ctx.tokens, payload.email, payload.password, payload.name)


@router.post("/login", response_model=AuthResponse)
def login_user(
    credentials: LoginRequest,
    db: Session = Depends(get_db),
    ctx: AppContext = Depends(get_context),
):
    return auth_service.login(db, ctx.tokens, credentials.email, credentials.password)
