import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskboard.core.database import store_operation
from taskboard.core.errors import DuplicateError, InvalidCredentials, ValidationError
from taskboard.core.security import TokenIssuer, hash_password, verify_password
from taskboard.models.user import User
from taskboard.schemas.user_schema import AuthResponse, UserOut

logger = logging.getLogger(__name__)


def _auth_response(user: User, tokens: TokenIssuer) -> AuthResponse:
    token = tokens.issue(user.id, user.email, user.name)
    return AuthResponse(token=token, user=UserOut.model_validate(user))


def register(db: Session, tokens: TokenIssuer, email: str | None, password: str | None,
             name: str | None) -> AuthResponse:
    if not email or not password or not name or not name.strip():
        raise ValidationError("All fields are required")

    with store_operation(db, "Failed to create user"):
        existing_user = db.query(User).filter(User.email == email).first()
        if existing_user:
            raise DuplicateError("Email already exists")

        user = User(email=email, password=hash_password(password), name=name.strip())
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email.
            db.rollback()
            raise DuplicateError("Email already exists")
        db.refresh(user)

    logger.info("Registered user id=%s", user.id)
    return _auth_response(user, tokens)


def login(db: Session, tokens: TokenIssuer, email: str | None, password: str | None) -> AuthResponse:
    if not email or not password:
        raise ValidationError("Email and password are required")

    with store_operation(db, "Server error"):
        user = db.query(User).filter(User.email == email).first()

    # Same error for unknown email and wrong password.
    if not user or not verify_password(password, user.password):
        logger.info("Rejected login attempt")
        raise InvalidCredentials()

    return _auth_response(user, tokens)
